from __future__ import annotations
import logging
import re
import threading
from dataclasses import dataclass, field
from typing import Dict, Iterable, Iterator, List, Optional, Tuple

log = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Translation:
    name: str
    language: str
    abbreviation: str


@dataclass(slots=True)
class Corpus:
    """
    The in-memory Bible: names, bounds, and verse text. Read-only once built.

    Attributes
    ----------
    translation : Translation
        Identifies the dataset; the compiled book pattern is keyed by its
        abbreviation.
    abbreviation_to_book_id : Dict[str, int]
        Lowercase book names and abbreviations -> 1-based book id.
    book_id_to_name : Dict[int, str]
        Book id -> display name.
    chapter_verse_counts : Dict[int, Tuple[int, ...]]
        Book id -> verse count of each chapter (index 0 is chapter 1).
    contents : Dict[int, Tuple[Tuple[str, ...], ...]]
        Book id -> chapter -> verse text, same shape as the counts.
    """
    translation: Translation
    abbreviation_to_book_id: Dict[str, int]
    book_id_to_name: Dict[int, str]
    chapter_verse_counts: Dict[int, Tuple[int, ...]]
    contents: Dict[int, Tuple[Tuple[str, ...], ...]]
    _pattern: Optional[Tuple[str, re.Pattern]] = field(default=None, init=False, repr=False, compare=False)
    _pattern_lock: threading.Lock = field(default_factory=threading.Lock, init=False, repr=False, compare=False)
    _book_ids: Tuple[int, ...] = field(default=(), init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        for book_id in self.book_id_to_name:
            counts = self.chapter_verse_counts.get(book_id)
            chapters = self.contents.get(book_id)
            if counts is None or chapters is None:
                raise ValueError(f"book {book_id} has no chapters")
            if tuple(len(verses) for verses in chapters) != tuple(counts):
                raise ValueError(f"book {book_id}: verse counts do not match contents")
        self._book_ids = tuple(sorted(self.book_id_to_name))

    # ------------- names -------------

    def get_book_id(self, book: str) -> Optional[int]:
        return self.abbreviation_to_book_id.get(book.lower().rstrip("."))

    def get_book_name(self, book_id: int) -> Optional[str]:
        return self.book_id_to_name.get(book_id)

    def book_ids(self) -> Tuple[int, ...]:
        """Every book id in canonical order."""
        return self._book_ids

    # ------------- bounds -------------

    def is_valid_book_chapter(self, book_id: int, chapter: int) -> bool:
        return self.get_chapter_verse_count(book_id, chapter) is not None

    def is_valid_reference(self, book_id: int, chapter: int, verse: int) -> bool:
        count = self.get_chapter_verse_count(book_id, chapter)
        return count is not None and 1 <= verse <= count

    def get_book_chapter_count(self, book_id: int) -> Optional[int]:
        counts = self.chapter_verse_counts.get(book_id)
        return None if counts is None else len(counts)

    def get_chapter_verse_count(self, book_id: int, chapter: int) -> Optional[int]:
        counts = self.chapter_verse_counts.get(book_id)
        if counts is None or not 1 <= chapter <= len(counts):
            return None
        return counts[chapter - 1]

    def get_remaining_chapters(self, book_id: int, chapter: int) -> Optional[range]:
        """Chapters after `chapter` (not including it)."""
        count = self.get_book_chapter_count(book_id)
        return None if count is None else range(chapter + 1, count + 1)

    def get_all_chapters(self, book_id: int) -> Optional[range]:
        return self.get_remaining_chapters(book_id, 0)

    def get_remaining_verses(self, book_id: int, chapter: int, verse: int) -> Optional[range]:
        """Verses after `verse` in the chapter (not including it)."""
        count = self.get_chapter_verse_count(book_id, chapter)
        return None if count is None else range(verse + 1, count + 1)

    def get_all_verses(self, book_id: int, chapter: int) -> Optional[range]:
        return self.get_remaining_verses(book_id, chapter, 0)

    # ------------- text -------------

    def get_verse_text(self, book_id: int, chapter: int, verse: int) -> Optional[str]:
        if not self.is_valid_reference(book_id, chapter, verse):
            return None
        return self.contents[book_id][chapter - 1][verse - 1]

    def iter_range(self, book_id: int, start_chapter: int, start_verse: int,
                   end_chapter: int, end_verse: int) -> Iterator[Tuple[int, int, str]]:
        """
        Yield (chapter, verse, text) from start to end inclusive, running
        through whole chapters in between. Verses that do not exist are skipped.

        Both loops stop at the book's real bounds, so `1:1-20000000` costs
        no more than the verses the book holds.
        """
        last_chapter = min(end_chapter, self.get_book_chapter_count(book_id) or 0)
        for chapter in range(max(start_chapter, 1), last_chapter + 1):
            count = self.chapter_verse_counts[book_id][chapter - 1]
            first = max(start_verse if chapter == start_chapter else 1, 1)
            last = min(end_verse if chapter == end_chapter else count, count)
            verses = self.contents[book_id][chapter - 1]
            for verse in range(first, last + 1):
                yield chapter, verse, verses[verse - 1]

    def get_range_contents(self, book_id: int, start_chapter: int, start_verse: int,
                           end_chapter: int, end_verse: int) -> List[str]:
        return [text for _, _, text in self.iter_range(book_id, start_chapter, start_verse, end_chapter, end_verse)]

    # ------------- matching -------------

    def book_pattern(self) -> re.Pattern:
        """
        One case-insensitive pattern for every book name and abbreviation.

        Matches `eph` or `Eph.` for Ephesians but not the `1:1-4` after it.
        The trailing period is allowed here and stripped by get_book_id().
        """
        code = self.translation.abbreviation
        cached = self._pattern
        if cached is not None and cached[0] == code:
            return cached[1]
        with self._pattern_lock:
            cached = self._pattern
            if cached is None or cached[0] != code:
                # longest first so `1 john` wins over `john` at the same spot
                names = sorted(self.abbreviation_to_book_id, key=lambda s: (-len(s), s))
                alts = "|".join(re.escape(n) for n in names)
                pattern = re.compile(rf"\b(?:{alts})\b\.?", re.IGNORECASE)
                log.info("Compiled book pattern for %s (%d names)", code, len(names))
                cached = (code, pattern)
                self._pattern = cached
            return cached[1]

    def last_book_match(self, text: str) -> Optional[re.Match]:
        last = None
        for last in self.book_pattern().finditer(text):
            pass
        return last

    def iter_book_matches(self, text: str) -> Iterable[re.Match]:
        return self.book_pattern().finditer(text)
