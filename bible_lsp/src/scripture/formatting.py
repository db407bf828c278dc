"""Text shown to the user: labels, markdown previews, action texts."""
from __future__ import annotations
from typing import List, Optional

from .config import SORT_KEY_WIDTH
from .corpus import Corpus
from .models import (
    BookNameCandidate, BookRange, BookReference, Candidate, ChapterCandidate, ChapterRange,
    ChapterVerse, DefinitionTarget, EndingOperator, SegmentSequence, VerseCandidate,
)


def book_name(corpus: Corpus, book_id: int) -> str:
    name = corpus.get_book_name(book_id)
    if name is None:
        raise KeyError(f"unknown book id {book_id}")
    return name


def verse_line(chapter: int, verse: int, text: str) -> str:
    return f"[{chapter}:{verse}] {text}"


def format_segments_content(corpus: Corpus, book_id: int, segments: SegmentSequence) -> str:
    """
    One `[c:v] text` line per verse, a blank line between segments:

        [1:1] Paul, an apostle of Christ Jesus by the will of God, ...
        [1:2] Grace to you and peace from God our Father ...

        [1:5] he predestined us for adoption ...
    """
    blocks: List[str] = []
    for seg in segments:
        lines = [
            verse_line(c, v, text)
            for c, v, text in corpus.iter_range(
                book_id, seg.starting_chapter, seg.starting_verse, seg.ending_chapter, seg.ending_verse
            )
        ]
        blocks.append("\n".join(lines))
    return "\n\n".join(blocks)


# ---------- references ----------

def reference_label(corpus: Corpus, ref: BookReference) -> str:
    """`Ephesians 1:1-4,5-7; 2:2-3:4,6`"""
    return f"{book_name(corpus, ref.book_id)} {ref.segments.label()}"


def reference_content(corpus: Corpus, ref: BookReference) -> str:
    return format_segments_content(corpus, ref.book_id, ref.segments)


def hover_markdown(corpus: Corpus, ref: BookReference) -> str:
    return f"### {reference_label(corpus, ref)}\n\n{reference_content(corpus, ref)}"


def insert_text(corpus: Corpus, ref: BookReference) -> str:
    # leading newline so inserting at the end of the last line still works
    return f"\n{reference_content(corpus, ref)}"


def replace_text(corpus: Corpus, ref: BookReference) -> str:
    content = reference_content(corpus, ref).replace("\n\n", "\n").replace("\n", " ")
    return f"> {content} - {reference_label(corpus, ref)}"


def diagnostic_message(corpus: Corpus, ref: BookReference) -> Optional[str]:
    """Text of the first verse referenced, None if it does not exist."""
    first = ref.segments[0] if len(ref.segments) else None
    if first is None:
        return None
    return corpus.get_verse_text(ref.book_id, first.starting_chapter, first.starting_verse)


def definition_target(corpus: Corpus, ref: BookReference) -> Optional[DefinitionTarget]:
    """
    The whole book as one markdown document, and the line where the first
    referenced verse sits in it. None if that verse does not exist.
    """
    name = book_name(corpus, ref.book_id)
    last_chapter = corpus.get_book_chapter_count(ref.book_id) or 0
    last_verse = corpus.get_chapter_verse_count(ref.book_id, last_chapter) or 0
    whole_book = SegmentSequence((BookRange(1, 1, last_chapter, last_verse),))
    contents = f"### {name}\n\n{format_segments_content(corpus, ref.book_id, whole_book)}"

    if not len(ref.segments):
        return None
    first = ref.segments[0]
    idx = contents.find(f"[{first.starting_chapter}:{first.starting_verse}]")
    if idx < 0:
        return None
    return DefinitionTarget(book_name=name, contents=contents, line=contents.count("\n", 0, idx))


# ---------- completion candidates ----------

def resulting_segments(candidate: VerseCandidate) -> SegmentSequence:
    """
    The segments the reference will hold once this verse is accepted.

    `-` turns the last segment into a range ending at the verse, `,` `;` and
    `:` add the verse as a new segment, a trailing number changes nothing.
    """
    segments = candidate.segments
    op = candidate.ending_operator
    chapter, verse = candidate.chapter, candidate.verse
    if op is EndingOperator.NONE:
        return segments
    if op in (EndingOperator.BREAK, EndingOperator.CHAPTER_COLON):
        return segments.appended(ChapterVerse(chapter=chapter, verse=verse))
    if op is EndingOperator.THROUGH:
        last = segments.last()
        if last is None:
            return segments.appended(ChapterVerse(chapter=chapter, verse=verse))
        # the last segment was the start of the range being typed
        if last.starting_chapter == chapter:
            rng = ChapterRange(chapter=chapter, start_verse=last.starting_verse, end_verse=verse)
        else:
            rng = BookRange(
                start_chapter=last.starting_chapter, start_verse=last.starting_verse,
                end_chapter=chapter, end_verse=verse,
            )
        return segments.with_last_replaced(rng)
    raise TypeError(f"unknown ending operator {op!r}")


def candidate_kind(candidate: Candidate) -> str:
    if isinstance(candidate, BookNameCandidate):
        return "book"
    if isinstance(candidate, ChapterCandidate):
        return "chapter"
    if isinstance(candidate, VerseCandidate):
        return "verse"
    raise TypeError(f"unknown candidate {candidate!r}")


def candidate_label(candidate: Candidate, corpus: Corpus) -> str:
    name = book_name(corpus, candidate.book_id)
    if isinstance(candidate, BookNameCandidate):
        return name
    if isinstance(candidate, ChapterCandidate):
        return f"{name} {candidate.chapter}"
    if isinstance(candidate, VerseCandidate):
        if candidate.ending_operator is EndingOperator.NONE:
            # the user is mid-number; offer the number, the editor does the rest
            return str(candidate.verse)
        return f"{name} {resulting_segments(candidate).label()}"
    raise TypeError(f"unknown candidate {candidate!r}")


def candidate_preview(candidate: Candidate, corpus: Corpus) -> str:
    name = book_name(corpus, candidate.book_id)
    if isinstance(candidate, BookNameCandidate):
        return f"### {name}"
    if isinstance(candidate, ChapterCandidate):
        chapter = SegmentSequence((ChapterRange(
            chapter=candidate.chapter, start_verse=1,
            end_verse=corpus.get_chapter_verse_count(candidate.book_id, candidate.chapter) or 0,
        ),))
        content = format_segments_content(corpus, candidate.book_id, chapter)
        return f"### {name} {candidate.chapter}\n\n{content}"
    if isinstance(candidate, VerseCandidate):
        if candidate.ending_operator is EndingOperator.NONE:
            segments = SegmentSequence((ChapterVerse(candidate.chapter, candidate.verse),))
        else:
            segments = resulting_segments(candidate)
        content = format_segments_content(corpus, candidate.book_id, segments)
        return f"### {name} {segments.label()}\n\n{content}"
    raise TypeError(f"unknown candidate {candidate!r}")


def sort_text(index: int) -> str:
    """`0000`, `0001`, ... so alphabetical order == generator order."""
    return f"{index:0{SORT_KEY_WIDTH}d}"
