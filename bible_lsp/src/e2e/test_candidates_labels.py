import pytest
from scripture.candidates import generate
from scripture.formatting import candidate_label, candidate_preview, sort_text
from scripture.models import (
    BookNameCandidate, BooksOnly, ChapterCandidate, ChapterRange, ChapterVerse, ChaptersOnly,
    ChaptersOrVerses, EndingOperator, SegmentSequence, VerseCandidate, VersesOnly,
)

ONE_TWO = SegmentSequence((ChapterVerse(1, 2),))


@pytest.mark.e2e
def test_books_in_canonical_order_and_stable(corpus):
    first = generate(BooksOnly(), corpus)
    assert first == [BookNameCandidate(b) for b in (1, 43, 45, 49, 62)]
    assert generate(BooksOnly(), corpus) == first


@pytest.mark.e2e
def test_chapters_only(corpus):
    assert generate(ChaptersOnly(49), corpus) == [ChapterCandidate(49, c) for c in range(1, 7)]


@pytest.mark.e2e
def test_verses_only(corpus):
    out = generate(VersesOnly(49, 1), corpus)
    assert len(out) == 23
    assert [c.verse for c in out] == list(range(1, 24))
    assert all(c.ending_operator is EndingOperator.CHAPTER_COLON for c in out)
    assert generate(VersesOnly(49, 99), corpus) == []


@pytest.mark.e2e
def test_chapters_or_verses_lists_verses_first(corpus):
    state = ChaptersOrVerses(49, 1, 2, ONE_TWO, EndingOperator.THROUGH)
    out = generate(state, corpus)
    assert len(out) == 21 + 5
    assert out[0] == VerseCandidate(49, 1, 3, ONE_TWO, EndingOperator.THROUGH)
    assert out[20].verse == 23
    assert out[21:] == [ChapterCandidate(49, c) for c in range(2, 7)]


@pytest.mark.e2e
def test_chapters_or_verses_edges(corpus):
    # last verse typed: only later chapters remain
    state = ChaptersOrVerses(49, 1, 23, ONE_TWO, EndingOperator.BREAK)
    assert generate(state, corpus) == [ChapterCandidate(49, c) for c in range(2, 7)]
    # no trusted verse: the whole chapter is offered
    state = ChaptersOrVerses(49, 3, None, ONE_TWO, EndingOperator.CHAPTER_COLON)
    assert [c.verse for c in generate(state, corpus)[:21]] == list(range(1, 22))
    # chapter past the end of the book
    state = ChaptersOrVerses(49, 99, 1, ONE_TWO, EndingOperator.BREAK)
    assert generate(state, corpus) == []


@pytest.mark.e2e
def test_unknown_state_is_a_bug(corpus):
    with pytest.raises(TypeError):
        generate(object(), corpus)


@pytest.mark.e2e
def test_labels_replay_the_ending_operator(corpus):
    assert candidate_label(BookNameCandidate(49), corpus) == "Ephesians"
    assert candidate_label(ChapterCandidate(49, 3), corpus) == "Ephesians 3"
    assert candidate_label(VerseCandidate(49, 1, 4), corpus) == "Ephesians 1:4"
    assert candidate_label(VerseCandidate(49, 1, 5, ONE_TWO, EndingOperator.THROUGH), corpus) == "Ephesians 1:2-5"
    assert candidate_label(VerseCandidate(49, 2, 3, ONE_TWO, EndingOperator.THROUGH), corpus) == "Ephesians 1:2-2:3"
    ranged = SegmentSequence((ChapterRange(1, 2, 5),))
    assert candidate_label(VerseCandidate(49, 1, 7, ranged, EndingOperator.BREAK), corpus) == "Ephesians 1:2-5,7"
    assert candidate_label(VerseCandidate(49, 3, 1, ONE_TWO, EndingOperator.CHAPTER_COLON), corpus) == "Ephesians 1:2; 3:1"
    # mid-number: the bare verse, segments untouched
    assert candidate_label(VerseCandidate(49, 1, 4, ONE_TWO, EndingOperator.NONE), corpus) == "4"


@pytest.mark.e2e
def test_previews(corpus):
    assert candidate_preview(BookNameCandidate(49), corpus) == "### Ephesians"
    assert candidate_preview(VerseCandidate(49, 1, 4), corpus) == "### Ephesians 1:4\n\n[1:4] Ephesians 1:4"
    assert candidate_preview(VerseCandidate(49, 1, 3, ONE_TWO, EndingOperator.THROUGH), corpus) == (
        "### Ephesians 1:2-3\n\n[1:2] Ephesians 1:2\n[1:3] Ephesians 1:3"
    )
    chapter = candidate_preview(ChapterCandidate(45, 2), corpus)
    assert chapter.startswith("### Romans 2\n\n[2:1] Romans 2:1\n")
    assert len(chapter.splitlines()) == 2 + 29


@pytest.mark.e2e
def test_sort_text_keeps_generator_order():
    keys = [sort_text(i) for i in range(120)]
    assert keys[0] == "0000" and keys[12] == "0012"
    assert sorted(keys) == keys
