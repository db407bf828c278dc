# src/scripture/documents.py
from __future__ import annotations
import threading
from typing import Dict, Iterator, Protocol

from .normalize import strip_carriage_returns


class DocumentNotFound(KeyError):
    """No open document under this uri."""


class DocumentStore(Protocol):
    # Create / Update
    def open(self, uri: str, text: str) -> None: ...
    def change(self, uri: str, text: str) -> None: ...
    # Read
    def text(self, uri: str) -> str: ...
    def line(self, uri: str, line_no: int) -> str: ...
    def text_before_cursor(self, uri: str, line_no: int, character: int) -> str: ...
    def uris(self) -> Iterator[str]: ...
    def count(self) -> int: ...
    # Delete
    def close(self, uri: str) -> None: ...
    # lifecycle
    def clear(self) -> None: ...


class MemoryDocumentStore(DocumentStore):
    """
    Full-text document sync kept in a dict.

    Readers get the `str` itself, which is immutable, so a scan never sees an
    edit that lands halfway through it.
    """
    def __init__(self) -> None:
        self._docs: Dict[str, str] = {}
        self._lock = threading.Lock()

    # C / U
    def open(self, uri: str, text: str) -> None:
        with self._lock:
            self._docs[uri] = text

    def change(self, uri: str, text: str) -> None:
        # full sync: every change carries the whole document
        with self._lock:
            self._docs[uri] = text

    # R
    def text(self, uri: str) -> str:
        with self._lock:
            try:
                return self._docs[uri]
            except KeyError:
                raise DocumentNotFound(uri) from None

    def line(self, uri: str, line_no: int) -> str:
        """The line without its EOL; "" past the last line."""
        lines = strip_carriage_returns(self.text(uri)).split("\n")
        if 0 <= line_no < len(lines):
            return lines[line_no]
        return ""

    def text_before_cursor(self, uri: str, line_no: int, character: int) -> str:
        # clients send columns past the end of the line; clamp them
        line = self.line(uri, line_no)
        return line[:max(0, min(character, len(line)))]

    def uris(self) -> Iterator[str]:
        with self._lock:
            return iter(list(self._docs))

    def count(self) -> int:
        with self._lock:
            return len(self._docs)

    # D
    def close(self, uri: str) -> None:
        with self._lock:
            self._docs.pop(uri, None)

    def clear(self) -> None:
        with self._lock:
            self._docs.clear()


def make_store(dsn: str = "memory://") -> DocumentStore:
    if dsn.startswith("memory://"):
        return MemoryDocumentStore()
    raise ValueError(f"Unsupported document store DSN: {dsn}")
