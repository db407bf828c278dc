from __future__ import annotations
from typing import List

from .models import BookRange, ChapterRange, ChapterVerse, Segment, SegmentSequence
from .normalize import normalize_segment_text, split_ranges

_DIGITS_ONLY_MSG = "segment text should only hold digits here, got {!r} in {!r}"


def _number(digits: str, source: str) -> int:
    # str.isdigit() accepts superscripts that int() rejects
    if not digits.isdecimal():
        raise ValueError(_DIGITS_ONLY_MSG.format(digits, source))
    return int(digits)


def parse_segments(segment_input: str) -> SegmentSequence:
    """
    Parse the `1:1-4,5-7,2:2-3:4,6` in `Ephesians 1:1-4,5-7,2:2-3:4,6`.

    Only call this once the text holds at least one complete `chapter:verse`
    (see normalize.AT_LEAST_ONE_SEGMENT); `"1"` or `"1:"` come out as
    ChapterVerse(1, 1) which is not what the user meant.

    A bare verse uses the chapter of the segment before it, so the `6` in
    `2:2-3:4,6` is verse 6 of chapter 3.
    """
    text = normalize_segment_text(segment_input)

    chapter = 1
    segments: List[Segment] = []
    for rng in split_ranges(text):
        left, dash, right = rng.partition("-")
        if dash:
            l_ch, l_colon, l_v = left.partition(":")
            r_ch, r_colon, r_v = right.partition(":")
            if l_colon and r_colon:
                # `ch1:v1-ch2:v2`
                chapter = _number(r_ch, text)
                segments.append(BookRange(
                    start_chapter=_number(l_ch, text),
                    start_verse=_number(l_v, text),
                    end_chapter=chapter,
                    end_verse=_number(r_v, text),
                ))
            elif l_colon:
                # `ch1:v1-v2`
                chapter = _number(l_ch, text)
                segments.append(ChapterRange(
                    chapter=chapter,
                    start_verse=_number(l_v, text),
                    end_verse=_number(right, text),
                ))
            elif r_colon:
                # `v1-ch2:v2`
                start_chapter = chapter
                chapter = _number(r_ch, text)
                segments.append(BookRange(
                    start_chapter=start_chapter,
                    start_verse=_number(left, text),
                    end_chapter=chapter,
                    end_verse=_number(r_v, text),
                ))
            else:
                # `v1-v2`
                segments.append(ChapterRange(
                    chapter=chapter,
                    start_verse=_number(left, text),
                    end_verse=_number(right, text),
                ))
        else:
            ch, colon, v = rng.partition(":")
            if colon:
                chapter = _number(ch, text)
                segments.append(ChapterVerse(chapter=chapter, verse=_number(v, text)))
            else:
                segments.append(ChapterVerse(chapter=chapter, verse=_number(rng, text)))
    return SegmentSequence(tuple(segments))
