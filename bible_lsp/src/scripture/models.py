# src/scripture/models.py
"""
Data models for the scripture reference engine.

This module defines small, focused data containers:

- Segment variants (ChapterVerse, ChapterRange, BookRange) and the ordered
  SegmentSequence that a reference like `1:1-4,5-7,2:2-3:4,6` parses into.
- BookReference: a book id plus its segments, anchored to a span of text.
- AutocompleteState variants: what the user is in the middle of typing.
- Candidate variants: one concrete completion suggestion each.
- Result rows handed to callers (CompletionData, ReferenceData, Hover, ...).

These classes carry no corpus lookups; everything that needs book names or
verse text lives in formatting.py so the models stay trivially comparable.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, List, Optional, Tuple, Union


# ---------- segments ----------

@dataclass(frozen=True, slots=True)
class ChapterVerse:
    """A single verse, e.g. `1:2` in `John 1:2`."""
    chapter: int
    verse: int

    @property
    def starting_chapter(self) -> int:
        return self.chapter

    @property
    def ending_chapter(self) -> int:
        return self.chapter

    @property
    def starting_verse(self) -> int:
        return self.verse

    @property
    def ending_verse(self) -> int:
        return self.verse


@dataclass(frozen=True, slots=True)
class ChapterRange:
    """A verse range inside one chapter, e.g. `1:2-3` in `John 1:2-3`."""
    chapter: int
    start_verse: int
    end_verse: int

    @property
    def starting_chapter(self) -> int:
        return self.chapter

    @property
    def ending_chapter(self) -> int:
        return self.chapter

    @property
    def starting_verse(self) -> int:
        return self.start_verse

    @property
    def ending_verse(self) -> int:
        return self.end_verse


@dataclass(frozen=True, slots=True)
class BookRange:
    """A range crossing chapters, e.g. `1:2-3:4` in `John 1:2-3:4`."""
    start_chapter: int
    start_verse: int
    end_chapter: int
    end_verse: int

    @property
    def starting_chapter(self) -> int:
        return self.start_chapter

    @property
    def ending_chapter(self) -> int:
        return self.end_chapter

    @property
    def starting_verse(self) -> int:
        return self.start_verse

    @property
    def ending_verse(self) -> int:
        return self.end_verse


Segment = Union[ChapterVerse, ChapterRange, BookRange]


@dataclass(frozen=True, slots=True)
class SegmentSequence:
    """
    Ordered segments of one reference, in the order they were written.

    `Ephesians 1:1-4,5-7,2:2-3:4,6` holds:
        ChapterRange(1, 1, 4), ChapterRange(1, 5, 7),
        BookRange(2, 2, 3, 4), ChapterVerse(3, 6)
    """
    items: Tuple[Segment, ...] = ()

    def __iter__(self) -> Iterator[Segment]:
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)

    def __getitem__(self, i: int) -> Segment:
        return self.items[i]

    def last(self) -> Optional[Segment]:
        return self.items[-1] if self.items else None

    def appended(self, seg: Segment) -> "SegmentSequence":
        return SegmentSequence(self.items + (seg,))

    def with_last_replaced(self, seg: Segment) -> "SegmentSequence":
        return SegmentSequence(self.items[:-1] + (seg,))

    def label(self) -> str:
        """
        Render back to reference text, e.g. `1:1-4,5-7; 2:2-3:4,6`.

        A segment that starts in the chapter the previous one ended in drops
        its chapter number. Segments ending in the same chapter as the previous
        one are joined with ',' and a chapter change is joined with '; '.
        """
        previous: Optional[int] = None
        parts: List[str] = []
        for seg in self.items:
            same = previous is not None and previous == seg.starting_chapter
            if isinstance(seg, ChapterVerse):
                text = f"{seg.verse}" if same else f"{seg.chapter}:{seg.verse}"
            elif isinstance(seg, ChapterRange):
                text = (f"{seg.start_verse}-{seg.end_verse}" if same
                        else f"{seg.chapter}:{seg.start_verse}-{seg.end_verse}")
            elif isinstance(seg, BookRange):
                text = (f"{seg.start_verse}-{seg.end_chapter}:{seg.end_verse}" if same
                        else f"{seg.start_chapter}:{seg.start_verse}-{seg.end_chapter}:{seg.end_verse}")
            else:
                raise TypeError(f"unknown segment {seg!r}")
            if previous is not None:
                parts.append("," if previous == seg.ending_chapter else "; ")
            parts.append(text)
            previous = seg.ending_chapter
        return "".join(parts)


# ---------- positions & references ----------

@dataclass(frozen=True, slots=True)
class Position:
    line: int        # 0-based
    character: int   # 0-based column in the line


@dataclass(frozen=True, slots=True)
class Span:
    start: Position
    end: Position

    def contains(self, pos: Position) -> bool:
        # references never cross lines, so a line + column check is enough
        return (self.start.line == pos.line
                and self.start.character <= pos.character <= self.end.character)


@dataclass(frozen=True, slots=True)
class BookReference:
    """One recognized reference: book id, where it sits, what it points at."""
    book_id: int
    span: Span
    segments: SegmentSequence


# ---------- autocompletion ----------

class EndingOperator(Enum):
    """The trailing punctuation of partially typed reference text."""
    NONE = "none"                    # ends with a number
    CHAPTER_COLON = "chapter_colon"  # ':'
    BREAK = "break"                  # ',' or ';'
    THROUGH = "through"              # '-' or en-dash


@dataclass(frozen=True, slots=True)
class BooksOnly:
    pass


@dataclass(frozen=True, slots=True)
class ChaptersOnly:
    book_id: int


@dataclass(frozen=True, slots=True)
class VersesOnly:
    book_id: int
    chapter: int


@dataclass(frozen=True, slots=True)
class ChaptersOrVerses:
    """
    Everything past the first complete `chapter:verse`.

    `verse` is the last verse already typed, NOT what the user is typing now;
    given `Ephesians 1:2-` it means "suggest verses 3.. and chapters 2..".
    It is None when no verse can be trusted after the last chapter.
    """
    book_id: int
    chapter: int
    verse: Optional[int]
    segments: SegmentSequence
    ending_operator: EndingOperator


AutocompleteState = Union[BooksOnly, ChaptersOnly, VersesOnly, ChaptersOrVerses]


@dataclass(frozen=True, slots=True)
class BookNameCandidate:
    book_id: int


@dataclass(frozen=True, slots=True)
class ChapterCandidate:
    book_id: int
    chapter: int


@dataclass(frozen=True, slots=True)
class VerseCandidate:
    book_id: int
    chapter: int
    verse: int
    segments: SegmentSequence = field(default_factory=SegmentSequence)
    ending_operator: EndingOperator = EndingOperator.CHAPTER_COLON


Candidate = Union[BookNameCandidate, ChapterCandidate, VerseCandidate]


# ---------- result rows ----------

@dataclass(frozen=True, slots=True)
class CompletionData:
    """
    The row returned by Engine.complete().

    Attributes
    ----------
    label : str
        Text shown in the completion menu and inserted on accept.
    documentation : str
        Markdown preview of the book, chapter, or verses.
    sort_text : str
        Zero-padded ordinal; keeps the generator order through client sorting.
    kind : str
        "book", "chapter" or "verse".
    replace_from : Optional[int]
        Column on the cursor line where `label` starts replacing text (the
        start of the book name). None lets the editor replace the word under
        the cursor, which is what a bare verse number wants.
    """
    label: str
    documentation: str
    sort_text: str
    kind: str
    replace_from: Optional[int] = None


@dataclass(frozen=True, slots=True)
class ReferenceData:
    label: str
    book_id: int
    span: Span
    segments: SegmentSequence
    content: str


@dataclass(frozen=True, slots=True)
class Hover:
    contents: str
    span: Optional[Span] = None


@dataclass(frozen=True, slots=True)
class Diagnostic:
    span: Span
    message: str
    severity: str = "information"


@dataclass(frozen=True, slots=True)
class DefinitionTarget:
    """Whole-book markdown plus the 0-based line of the referenced verse."""
    book_name: str
    contents: str
    line: int


@dataclass(frozen=True, slots=True)
class CodeAction:
    title: str
    kind: str                    # "insert" | "replace"
    line: int
    start_character: int         # columns on `line`; an insert has start == end == len(line)
    end_character: int           # a replace runs 0..len(line)
    new_text: str


@dataclass(frozen=True, slots=True)
class DocumentSymbol:
    name: str
    span: Span
