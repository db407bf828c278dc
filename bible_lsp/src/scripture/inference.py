from __future__ import annotations
from typing import Optional, Tuple

from .config import EN_DASH
from .corpus import Corpus
from .models import (
    AutocompleteState, BooksOnly, ChaptersOnly, ChaptersOrVerses, EndingOperator, VersesOnly,
)
from .normalize import (
    AT_LEAST_ONE_SEGMENT, CHAPTER, DANGLING_CHAPTER, INCOMPLETE_SEGMENT_START, POST_BOOK_SEGMENT,
    SEGMENT_CHARACTERS, VERSE, ending_character,
)
from .segments import parse_segments


def ending_operator(run: str) -> EndingOperator:
    last = ending_character(run)
    if last == ":":
        return EndingOperator.CHAPTER_COLON
    if last in (",", ";"):
        return EndingOperator.BREAK
    if last in ("-", EN_DASH):
        return EndingOperator.THROUGH
    return EndingOperator.NONE


def last_chapter_and_verse(run: str) -> Tuple[int, Optional[int]]:
    """
    Chapter from the last `n:` (or trailing `n`), verse from the last `n`
    not followed by ':'.

    Both patterns match a number touching the end of the run, so when the two
    last matches start at the same place only the chapter is kept. A verse
    that comes before the last chapter belongs to an older chapter and is
    dropped too. Callers make sure the run holds a `ch:v`.
    """
    chapter_m = None
    for chapter_m in CHAPTER.finditer(run):
        pass
    verse_m = None
    for verse_m in VERSE.finditer(run):
        pass
    if chapter_m is None:
        raise ValueError(f"no chapter in {run!r}")
    chapter = int(chapter_m.group(1))
    if verse_m is None or verse_m.start() <= chapter_m.start():
        return chapter, None
    return chapter, int(verse_m.group(1))


def infer_state(corpus: Corpus, text_before_cursor: str) -> AutocompleteState:
    """
    Work out what the user is typing from the text left of the cursor.

    The digits touching the cursor are never used to narrow suggestions:
    the editor already filters against what is typed, and the user may still
    add digits. Given `Ephesians 1:1` there is no point in offering only
    `1:1` and `1:10..19`.
    """
    book_m = corpus.last_book_match(text_before_cursor)
    if book_m is None:
        return BooksOnly()
    book_id = corpus.get_book_id(book_m.group())
    if book_id is None:
        raise KeyError(f"{book_m.group()!r} matched the book pattern but is not a known book")

    tail = text_before_cursor[book_m.end():]
    # name just finished, or finished and a space typed: chapter comes next
    if tail == "" or tail == " ":
        return ChaptersOnly(book_id=book_id)

    run_m = SEGMENT_CHARACTERS.match(tail)
    if run_m is None:
        return ChaptersOnly(book_id=book_id)
    # the period of an abbreviation like `eph.` is not reference text
    run = run_m.group().lstrip(".")

    # `1` or `1:` - no full segment yet, and the parser needs one
    incomplete = INCOMPLETE_SEGMENT_START.match(run)
    if incomplete is not None:
        if incomplete.group(2):
            return VersesOnly(book_id=book_id, chapter=int(incomplete.group(1)))
        # no colon: still typing the chapter
        return ChaptersOnly(book_id=book_id)

    # `1,2` or `1-2` with no `ch:v` anywhere: treat as still choosing a chapter
    if AT_LEAST_ONE_SEGMENT.search(run) is None:
        return ChaptersOnly(book_id=book_id)

    operator = ending_operator(run)
    body = run
    if operator is EndingOperator.CHAPTER_COLON:
        # `1:2,3:` - chapter 3 has no verse yet, it is not a verse of chapter 1
        body = DANGLING_CHAPTER.sub("", body)
    complete = POST_BOOK_SEGMENT.match(body)
    if complete is None:
        return ChaptersOnly(book_id=book_id)

    chapter, verse = last_chapter_and_verse(run)
    return ChaptersOrVerses(
        book_id=book_id,
        chapter=chapter,
        verse=verse,
        segments=parse_segments(complete.group()),
        ending_operator=operator,
    )
