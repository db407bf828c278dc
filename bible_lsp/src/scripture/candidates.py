from __future__ import annotations
from functools import lru_cache
from typing import List, Tuple

from .corpus import Corpus
from .models import (
    AutocompleteState, BookNameCandidate, BooksOnly, Candidate, ChapterCandidate,
    ChaptersOnly, ChaptersOrVerses, EndingOperator, VerseCandidate, VersesOnly,
)


@lru_cache(maxsize=4)
def _all_books(book_ids: Tuple[int, ...]) -> Tuple[BookNameCandidate, ...]:
    return tuple(BookNameCandidate(book_id=b) for b in book_ids)


def suggest_all_books(corpus: Corpus) -> List[Candidate]:
    return list(_all_books(corpus.book_ids()))


def generate(state: AutocompleteState, corpus: Corpus) -> List[Candidate]:
    """
    Turn a state into concrete suggestions, in the order they should be shown.

    ChaptersOrVerses lists the rest of the current chapter's verses before the
    following chapters, since carrying on in the chapter is the likelier next
    step. Chapters or verses that do not exist yield nothing.
    """
    if isinstance(state, BooksOnly):
        return suggest_all_books(corpus)

    if isinstance(state, ChaptersOnly):
        chapters = corpus.get_all_chapters(state.book_id)
        if chapters is None:
            return []
        return [ChapterCandidate(book_id=state.book_id, chapter=c) for c in chapters]

    if isinstance(state, VersesOnly):
        verses = corpus.get_all_verses(state.book_id, state.chapter)
        if verses is None:
            # `Ephesians 99:` - nothing to offer, nothing to complain about
            return []
        return [
            VerseCandidate(
                book_id=state.book_id,
                chapter=state.chapter,
                verse=v,
                ending_operator=EndingOperator.CHAPTER_COLON,
            )
            for v in verses
        ]

    if isinstance(state, ChaptersOrVerses):
        verses = corpus.get_remaining_verses(state.book_id, state.chapter, state.verse or 0)
        chapters = corpus.get_remaining_chapters(state.book_id, state.chapter)
        if verses is None or chapters is None:
            return []
        out: List[Candidate] = [
            VerseCandidate(
                book_id=state.book_id,
                chapter=state.chapter,
                verse=v,
                segments=state.segments,
                ending_operator=state.ending_operator,
            )
            for v in verses
        ]
        out.extend(ChapterCandidate(book_id=state.book_id, chapter=c) for c in chapters)
        return out

    raise TypeError(f"unknown autocomplete state {state!r}")
