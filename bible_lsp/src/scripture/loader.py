from __future__ import annotations
import json
import logging
import os
from typing import Any, Dict, List, Tuple

from .corpus import Corpus, Translation

log = logging.getLogger(__name__)


def _require(obj: Dict[str, Any], key: str, kind: type, where: str) -> Any:
    try:
        value = obj[key]
    except (KeyError, TypeError):
        raise ValueError(f"{where}: missing {key!r}") from None
    if not isinstance(value, kind):
        raise ValueError(f"{where}: {key!r} should be {kind.__name__}")
    return value


def corpus_from_dict(data: Dict[str, Any]) -> Corpus:
    """
    Build a Corpus from the decoded JSON document:

        {"translation": {"name", "language", "abbreviation"},
         "bible": [{"id", "book", "abbreviations", "content": [[verse, ...], ...]}]}
    """
    tr = _require(data, "translation", dict, "bible json")
    translation = Translation(
        name=_require(tr, "name", str, "translation"),
        language=_require(tr, "language", str, "translation"),
        abbreviation=_require(tr, "abbreviation", str, "translation"),
    )

    abbreviations: Dict[str, int] = {}
    names: Dict[int, str] = {}
    counts: Dict[int, Tuple[int, ...]] = {}
    contents: Dict[int, Tuple[Tuple[str, ...], ...]] = {}

    for i, book in enumerate(_require(data, "bible", list, "bible json")):
        where = f"bible[{i}]"
        book_id = _require(book, "id", int, where)
        name = _require(book, "book", str, where)
        if book_id < 1 or book_id in names:
            raise ValueError(f"{where}: bad or duplicate book id {book_id}")

        chapters: List[Tuple[str, ...]] = []
        for c, verses in enumerate(_require(book, "content", list, where), start=1):
            if not isinstance(verses, list) or not all(isinstance(v, str) for v in verses):
                raise ValueError(f"{where} ({name}) chapter {c}: verses should be a list of strings")
            chapters.append(tuple(verses))

        names[book_id] = name
        # stored the way get_book_id() looks them up: lowercase, no trailing '.'
        abbreviations[name.lower().rstrip(".")] = book_id
        for abbr in _require(book, "abbreviations", list, where):
            abbreviations[str(abbr).lower().rstrip(".")] = book_id
        counts[book_id] = tuple(len(v) for v in chapters)
        contents[book_id] = tuple(chapters)

    return Corpus(
        translation=translation,
        abbreviation_to_book_id=abbreviations,
        book_id_to_name=names,
        chapter_verse_counts=counts,
        contents=contents,
    )


def load_corpus(path: str) -> Corpus:
    """Read a Bible JSON file. Raises FileNotFoundError / ValueError."""
    if not os.path.exists(path):
        raise FileNotFoundError(path)
    log.info("Loading Bible from %s", path)
    with open(path, "r", encoding="utf-8") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as exc:
            raise ValueError(f"{path}: Bible JSON file improperly formatted ({exc})") from exc
    corpus = corpus_from_dict(data)
    log.info("Loaded %s: %d books", corpus.translation.abbreviation, len(corpus.book_id_to_name))
    return corpus
