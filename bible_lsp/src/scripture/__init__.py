"""Scripture reference engine: recognize, preview and autocomplete `Book ch:v` references."""
from __future__ import annotations

from .corpus import Corpus, Translation
from .engine import Engine
from .inference import infer_state
from .candidates import generate
from .loader import corpus_from_dict, load_corpus
from .scanner import find_book_references
from .segments import parse_segments

__all__ = [
    "Corpus",
    "Translation",
    "Engine",
    "infer_state",
    "generate",
    "corpus_from_dict",
    "load_corpus",
    "find_book_references",
    "parse_segments",
]
