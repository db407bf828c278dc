from __future__ import annotations
import bisect
from typing import List

from .corpus import Corpus
from .models import BookReference, Position, Span
from .normalize import POST_BOOK_SEGMENT, strip_carriage_returns
from .segments import parse_segments


def newline_offsets(text: str) -> List[int]:
    """Sorted offsets of every '\\n' in text."""
    return [i for i, ch in enumerate(text) if ch == "\n"]


def offset_to_position(newlines: List[int], offset: int) -> Position:
    # number of newlines strictly before offset == 0-based line
    line = bisect.bisect_left(newlines, offset)
    line_start = newlines[line - 1] + 1 if line else 0
    return Position(line=line, character=offset - line_start)


def find_book_references(corpus: Corpus, document: str) -> List[BookReference]:
    """
    Find every `Book ch:v...` reference in a document, in document order.

    Each book-name match owns the text up to the next match. Only reference
    text touching the name counts; a bare mention ("I like Ephesians.") is
    skipped.
    """
    text = strip_carriage_returns(document)
    newlines = newline_offsets(text)

    matches = list(corpus.iter_book_matches(text))
    refs: List[BookReference] = []
    for i, m in enumerate(matches):
        window_end = matches[i + 1].start() if i + 1 < len(matches) else len(text)
        seg = POST_BOOK_SEGMENT.match(text, m.end(), window_end)
        if seg is None:
            continue
        book_id = corpus.get_book_id(m.group())
        if book_id is None:
            raise KeyError(f"{m.group()!r} matched the book pattern but is not a known book")
        span = Span(
            start=offset_to_position(newlines, m.start()),
            end=offset_to_position(newlines, seg.end()),
        )
        refs.append(BookReference(book_id=book_id, span=span, segments=parse_segments(seg.group())))
    return refs
