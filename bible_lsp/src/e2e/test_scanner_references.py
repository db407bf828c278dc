import pytest
from scripture.scanner import find_book_references
from scripture.models import ChapterRange, ChapterVerse, Position, SegmentSequence, Span


@pytest.mark.e2e
def test_grammatical_comma_is_not_absorbed(corpus):
    refs = find_book_references(corpus, "I read Ephesians 4:28, and it changed how I thought about money")
    assert len(refs) == 1
    ref = refs[0]
    assert ref.book_id == 49
    assert ref.segments == SegmentSequence((ChapterVerse(4, 28),))
    assert ref.span == Span(start=Position(0, 7), end=Position(0, 21))


@pytest.mark.e2e
def test_plain_mentions_are_skipped(corpus):
    assert find_book_references(corpus, "I like Ephesians.") == []
    refs = find_book_references(corpus, "John wrote 1 John 1:9")
    assert [r.book_id for r in refs] == [62]


@pytest.mark.e2e
def test_abbreviation_with_period(corpus):
    refs = find_book_references(corpus, "eph. 1:3-5")
    assert len(refs) == 1
    assert refs[0].book_id == 49
    assert refs[0].segments == SegmentSequence((ChapterRange(1, 3, 5),))
    assert refs[0].span == Span(Position(0, 0), Position(0, 10))


@pytest.mark.e2e
def test_positions_ignore_carriage_returns(corpus):
    refs = find_book_references(corpus, "first line\r\nsee John 3:16 today")
    assert len(refs) == 1
    assert refs[0].span == Span(Position(1, 4), Position(1, 13))


@pytest.mark.e2e
def test_many_references_in_document_order(corpus):
    text = "Gen 1:1 and Rom 2:3-4; also 1 Jn 2:1\nEph 1:1\nEph 2:2"
    refs = find_book_references(corpus, text)
    assert [r.book_id for r in refs] == [1, 45, 62, 49, 49]
    assert refs[1].segments == SegmentSequence((ChapterRange(2, 3, 4),))
    assert refs[3].span.start == Position(1, 0)
    assert refs[4].span.start == Position(2, 0)


@pytest.mark.e2e
def test_out_of_range_reference_is_still_recognized(corpus):
    # bounds are checked when text is looked up, not while scanning
    refs = find_book_references(corpus, "Eph 99:1")
    assert len(refs) == 1
    assert refs[0].segments == SegmentSequence((ChapterVerse(99, 1),))
