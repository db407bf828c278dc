from __future__ import annotations
import os

# default corpus file (override with --bible)
BIBLE_JSON: str = os.environ.get("SCRIPTURE_BIBLE_JSON", "esv.json")

# progress logging (set SCRIPTURE_VERBOSE=1 to enable)
VERBOSE: bool = os.environ.get("SCRIPTURE_VERBOSE") == "1"

# the non-ASCII dash people paste in from word processors
EN_DASH: str = "–"

# sort_text is a zero-padded ordinal so clients that re-sort keep our order
SORT_KEY_WIDTH: int = 4

# characters that should make an editor ask for completions again
TRIGGER_CHARACTERS = [",", ";", "-", ":", " "]

# joins several references shown in one hover
HOVER_SEPARATOR: str = "\n\n---\n"

# /* ~~~ HTTP frontend ~~~ */
HOST: str = "127.0.0.1"
PORT: int = 8000
