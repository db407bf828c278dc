import copy
import json
from pathlib import Path
import pytest
from scripture.loader import corpus_from_dict, load_corpus
from scripture.scanner import find_book_references


@pytest.mark.e2e
def test_load_from_file(bible_json: str):
    corpus = load_corpus(bible_json)
    assert corpus.translation.abbreviation == "TST"
    assert corpus.translation.language == "English"
    assert corpus.get_book_id("ephes") == 49


@pytest.mark.e2e
def test_missing_file(tmp_path: Path):
    with pytest.raises(FileNotFoundError):
        load_corpus(str(tmp_path / "nope.json"))


@pytest.mark.e2e
def test_malformed_json(tmp_path: Path):
    bad = tmp_path / "bad.json"
    bad.write_text("{not json", encoding="utf-8")
    with pytest.raises(ValueError):
        load_corpus(str(bad))


@pytest.mark.e2e
def test_missing_fields_and_bad_ids(bible_data: dict):
    data = copy.deepcopy(bible_data)
    del data["translation"]
    with pytest.raises(ValueError):
        corpus_from_dict(data)

    data = copy.deepcopy(bible_data)
    data["bible"][1]["id"] = data["bible"][0]["id"]
    with pytest.raises(ValueError):
        corpus_from_dict(data)

    data = copy.deepcopy(bible_data)
    data["bible"][0]["content"][0] = "not a list"
    with pytest.raises(ValueError):
        corpus_from_dict(data)


@pytest.mark.e2e
def test_round_trips_through_json_text(tmp_path: Path, bible_data: dict):
    path = tmp_path / "b.json"
    path.write_text(json.dumps(bible_data, ensure_ascii=False), encoding="utf-8")
    assert load_corpus(str(path)).get_verse_text(62, 5, 21) == "1 John 5:21"


@pytest.mark.e2e
def test_abbreviations_with_periods_are_matched(bible_data: dict):
    data = copy.deepcopy(bible_data)
    data["bible"][3]["abbreviations"] = ["Eph.", "Ephes."]
    corpus = corpus_from_dict(data)
    assert corpus.get_book_id("Eph.") == 49
    refs = find_book_references(corpus, "see Eph. 1:1")
    assert [r.book_id for r in refs] == [49]
