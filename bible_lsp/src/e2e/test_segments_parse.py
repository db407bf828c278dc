import pytest
from scripture.segments import parse_segments
from scripture.models import BookRange, ChapterRange, ChapterVerse, SegmentSequence


def _seq(*segs):
    return SegmentSequence(tuple(segs))


@pytest.mark.e2e
def test_single_number_is_verse_of_chapter_one():
    assert parse_segments("1") == _seq(ChapterVerse(chapter=1, verse=1))


@pytest.mark.e2e
def test_range_in_one_chapter():
    assert parse_segments("1:2-3") == _seq(ChapterRange(chapter=1, start_verse=2, end_verse=3))


@pytest.mark.e2e
def test_range_across_chapters():
    assert parse_segments("1:2-3:4") == _seq(BookRange(start_chapter=1, start_verse=2, end_chapter=3, end_verse=4))


@pytest.mark.e2e
def test_bare_verse_inherits_previous_ending_chapter():
    assert parse_segments("1:1-4,5-7,2:2-3:4,6") == _seq(
        ChapterRange(1, 1, 4),
        ChapterRange(1, 5, 7),
        BookRange(2, 2, 3, 4),
        ChapterVerse(3, 6),
    )


@pytest.mark.e2e
def test_verse_to_chapter_verse_range_starts_in_running_chapter():
    assert parse_segments("1:5,7-2:3") == _seq(ChapterVerse(1, 5), BookRange(1, 7, 2, 3))


@pytest.mark.e2e
def test_en_dash_semicolon_and_spaces():
    assert parse_segments("1:1–4") == _seq(ChapterRange(1, 1, 4))
    assert parse_segments("1:1;2:3") == _seq(ChapterVerse(1, 1), ChapterVerse(2, 3))
    assert parse_segments(" 1:1 - 4, 6") == _seq(ChapterRange(1, 1, 4), ChapterVerse(1, 6))


@pytest.mark.e2e
def test_trailing_operator_is_ignored():
    assert parse_segments("1:2-") == _seq(ChapterVerse(1, 2))
    assert parse_segments("1:2,") == _seq(ChapterVerse(1, 2))


@pytest.mark.e2e
def test_malformed_input_is_rejected():
    with pytest.raises(ValueError):
        parse_segments("")
    with pytest.raises(ValueError):
        parse_segments("1:2-3:4-5")


@pytest.mark.e2e
def test_label_round_trip():
    parsed = parse_segments("1:1-4,5-7,2:2-3:4,6")
    label = parsed.label()
    assert label == "1:1-4,5-7; 2:2-3:4,6"
    assert parse_segments(label) == parsed


@pytest.mark.e2e
def test_label_joins_chapter_changes_with_semicolon():
    assert parse_segments("3:1,4:2").label() == "3:1; 4:2"
    assert parse_segments("3:1,4").label() == "3:1,4"
    assert SegmentSequence().label() == ""


@pytest.mark.e2e
@pytest.mark.parametrize("text, label", [
    ("1:5,7-2:3", "1:5; 7-2:3"),
    ("1:1;2:3-5", "1:1; 2:3-5"),
    ("1:2-3:4,6", "1:2-3:4,6"),
    ("2:2-3:4,6-8", "2:2-3:4,6-8"),
])
def test_label_round_trip_shapes(text, label):
    parsed = parse_segments(text)
    assert parsed.label() == label
    assert parse_segments(label) == parsed
