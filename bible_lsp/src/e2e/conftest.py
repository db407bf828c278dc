import json
from pathlib import Path
import pytest
from scripture import Engine, corpus_from_dict

# (id, name, abbreviations, verses per chapter); verse text is "<name> <c>:<v>"
BOOKS = [
    (1, "Genesis", ["Gen", "Gn"], [31, 25, 24]),
    (43, "John", ["Jn", "Jhn"], [51, 25, 36]),
    (45, "Romans", ["Rom"], [32, 29]),
    (49, "Ephesians", ["Eph", "Ephes"], [23, 22, 21, 32, 33, 24]),
    (62, "1 John", ["1 Jn", "1Jn"], [10, 29, 24, 21, 21]),
]


def bible_dict() -> dict:
    return {
        "translation": {"name": "Test Version", "language": "English", "abbreviation": "TST"},
        "bible": [
            {
                "id": book_id,
                "book": name,
                "abbreviations": abbrs,
                "content": [
                    [f"{name} {c}:{v}" for v in range(1, n + 1)]
                    for c, n in enumerate(counts, start=1)
                ],
            }
            for book_id, name, abbrs, counts in BOOKS
        ],
    }


def _seed(tmp: Path) -> str:
    path = tmp / "tst.json"
    path.write_text(json.dumps(bible_dict()), encoding="utf-8")
    return str(path)


@pytest.fixture
def corpus():
    return corpus_from_dict(bible_dict())


@pytest.fixture
def bible_json(tmp_path: Path) -> str:
    return _seed(tmp_path)


@pytest.fixture
def engine(bible_json: str):
    eng = Engine()
    eng.load(bible_json, store_dsn="memory://")
    try:
        yield eng
    finally:
        eng.shutdown()


@pytest.fixture
def bible_data() -> dict:
    return bible_dict()
