from __future__ import annotations
import re
from typing import List

from .config import EN_DASH

# /* ~~~ reference text right after a book name ~~~ */
# Use with .match() (anchored at pos), must start with a full `ch:v` and must
# END on a digit, so the grammatical comma in "Ephesians 4:28, and it
# changed..." is left alone. Each ','/';' piece is `n`, `ch:v`, or a range of
# those; a piece with two dashes or two colons stops the match before it.
_PIECE = rf"\d+(?::\d+)?(?: *[\-{EN_DASH}] *\d+(?::\d+)?)?"
POST_BOOK_SEGMENT = re.compile(
    rf" *\d+:\d+(?: *[\-{EN_DASH}] *\d+(?::\d+)?)?(?: *[,;] *{_PIECE})*"
)

# `3:` at the end of the run: a chapter whose verse is not typed yet
DANGLING_CHAPTER = re.compile(r"\d+ *: *$")

# a run of anything that can appear in reference text (the period is the
# tail of an abbreviation like `eph.`)
SEGMENT_CHARACTERS = re.compile(rf"\.?[ \d,:;\-{EN_DASH}]+")

# chapter typed, maybe followed by its colon, nothing else
INCOMPLETE_SEGMENT_START = re.compile(r"^ *(\d+)(:)? *$")

AT_LEAST_ONE_SEGMENT = re.compile(r"\d+:\d+")

# last match of each is the current chapter / the last verse typed
CHAPTER = re.compile(r"(\d+)(:|$)")
VERSE = re.compile(r"(\d+)([^:]|$)")

_NON_SEGMENT_CHARACTERS = re.compile(r"[^\d,:;-]+")
_TRAILING_NON_DIGITS = re.compile(r"\D+$")
_SEGMENT_SPLITTERS = re.compile(r"[,;]")


def normalize_segment_text(text: str) -> str:
    """
    Reduce reference text to `[0-9,;:-]` ending on a digit.

    " 1:1–4, 5-7; 2:2-3:4,6." -> "1:1-4,5-7;2:2-3:4,6"
    """
    text = text.replace(EN_DASH, "-")
    text = _NON_SEGMENT_CHARACTERS.sub("", text)
    return _TRAILING_NON_DIGITS.sub("", text)


def split_ranges(normalized: str) -> List[str]:
    """Split at ',' or ';' (both are in use, neither means anything more)."""
    return _SEGMENT_SPLITTERS.split(normalized)


def strip_carriage_returns(text: str) -> str:
    """Editors count columns without '\\r', so offsets are taken without it."""
    return text.replace("\r", "")


def ending_character(run: str) -> str:
    stripped = run.strip()
    return stripped[-1] if stripped else ""
