# scripture/engine.py
from __future__ import annotations

import os
import logging
from typing import List, Optional

from . import config as CFG
from .candidates import generate
from .corpus import Corpus
from .documents import DocumentStore, make_store
from .formatting import (
    candidate_kind, candidate_label, candidate_preview, definition_target, diagnostic_message,
    hover_markdown, insert_text, reference_content, reference_label, replace_text, sort_text,
)
from .inference import infer_state
from .loader import load_corpus
from .models import (
    BookReference, CodeAction, CompletionData, DefinitionTarget, Diagnostic, DocumentSymbol,
    EndingOperator, Hover, Position, ReferenceData, VerseCandidate,
)
from .scanner import find_book_references

log = logging.getLogger(__name__)


class Engine:
    """
    Thin orchestration layer that glues together:
      - the Corpus (names, bounds, verse text),
      - open documents via a DocumentStore,
      - scanning, state inference, candidate generation and formatting.

    Public API (used by CLI/Flask/GUI):
      * load(bible_json | corpus=...): read the Bible, attach a document store
      * complete(text_before_cursor) / complete_at(uri, line, character)
      * references(text)
      * open/change/close_document(uri, ...)
      * hover, diagnostics, definition, code_actions, symbols
      * shutdown()
    """

    # ------------- lifecycle -------------

    def __init__(self) -> None:
        self.corpus: Optional[Corpus] = None
        self._store: Optional[DocumentStore] = None

    # /* ~~~ Load the Bible and wire up the document store ~~~ */
    def load(
        self,
        bible_json: Optional[str] = None,
        *,
        corpus: Optional[Corpus] = None,      # already built (tests, GUI reloads)
        store_dsn: Optional[str] = None,      # "memory://"
        verbose: bool = False,
    ) -> None:
        if verbose:
            logging.basicConfig(level=logging.INFO)
            os.environ["SCRIPTURE_VERBOSE"] = "1"

        if corpus is None:
            path = bible_json or CFG.BIBLE_JSON
            corpus = load_corpus(path)  # fatal on a bad file: nothing works without it

        dsn = store_dsn or "memory://"
        log.info("Initializing document store: %s", dsn)
        store = make_store(dsn)

        # build the book pattern now rather than on the first request
        corpus.book_pattern()

        self.corpus = corpus
        self._store = store
        log.info("Engine load() complete: translation=%s books=%d",
                 corpus.translation.abbreviation, len(corpus.book_ids()))

    # /* ~~~ Drop documents and the corpus ~~~ */
    def shutdown(self) -> None:
        try:
            if self._store:
                self._store.clear()
        finally:
            self._store = None
            self.corpus = None
            log.info("Engine shutdown complete")

    # ------------- documents -------------

    def open_document(self, uri: str, text: str) -> None:
        self._documents().open(uri, text)

    def change_document(self, uri: str, text: str) -> None:
        self._documents().change(uri, text)

    def close_document(self, uri: str) -> None:
        self._documents().close(uri)

    # ------------- completion -------------

    # /* ~~~ Suggest books, chapters or verses for the text left of the cursor ~~~ */
    def complete(self, text_before_cursor: str) -> List[CompletionData]:
        corpus = self._corpus()
        state = infer_state(corpus, text_before_cursor)
        candidates = generate(state, corpus)
        log.debug("complete(%r): %s -> %d candidates", text_before_cursor, type(state).__name__, len(candidates))

        book_m = corpus.last_book_match(text_before_cursor)
        replace_from = book_m.start() if book_m is not None else None
        rows: List[CompletionData] = []
        for i, cand in enumerate(candidates):
            bare = isinstance(cand, VerseCandidate) and cand.ending_operator is EndingOperator.NONE
            rows.append(CompletionData(
                label=candidate_label(cand, corpus),
                documentation=candidate_preview(cand, corpus),
                sort_text=sort_text(i),
                kind=candidate_kind(cand),
                replace_from=None if bare else replace_from,
            ))
        return rows

    def complete_at(self, uri: str, line: int, character: int) -> List[CompletionData]:
        return self.complete(self._documents().text_before_cursor(uri, line, character))

    # ------------- references -------------

    def references(self, text: str) -> List[ReferenceData]:
        corpus = self._corpus()
        return [
            ReferenceData(
                label=reference_label(corpus, ref),
                book_id=ref.book_id,
                span=ref.span,
                segments=ref.segments,
                content=reference_content(corpus, ref),
            )
            for ref in find_book_references(corpus, text)
        ]

    def _references_on_line(self, uri: str, line: int) -> List[BookReference]:
        refs = find_book_references(self._corpus(), self._documents().text(uri))
        return [r for r in refs if r.span.start.line == line]

    # /* ~~~ Hover: every reference on the cursor line ~~~ */
    def hover(self, uri: str, line: int, character: int) -> Optional[Hover]:
        corpus = self._corpus()
        refs = self._references_on_line(uri, line)
        if not refs:
            return None
        if len(refs) == 1:
            return Hover(contents=hover_markdown(corpus, refs[0]), span=refs[0].span)
        # TODO: narrow to the reference under `character` once clients send ranged hovers
        return Hover(contents=CFG.HOVER_SEPARATOR.join(hover_markdown(corpus, r) for r in refs))

    def diagnostics(self, uri: str) -> List[Diagnostic]:
        corpus = self._corpus()
        out: List[Diagnostic] = []
        for ref in find_book_references(corpus, self._documents().text(uri)):
            message = diagnostic_message(corpus, ref)
            if message is None:
                continue
            out.append(Diagnostic(span=ref.span, message=message))
        return out

    def definition(self, uri: str, line: int, character: int) -> Optional[DefinitionTarget]:
        pos = Position(line=line, character=character)
        for ref in self._references_on_line(uri, line):
            if ref.span.contains(pos):
                return definition_target(self._corpus(), ref)
        return None

    def code_actions(self, uri: str, line: int) -> List[CodeAction]:
        corpus = self._corpus()
        actions: List[CodeAction] = []
        refs = self._references_on_line(uri, line)
        end = len(self._documents().line(uri, line)) if refs else 0
        for ref in refs:
            label = reference_label(corpus, ref)
            actions.append(CodeAction(
                title=f"Insert {label}", kind="insert", line=line,
                start_character=end, end_character=end, new_text=insert_text(corpus, ref),
            ))
            actions.append(CodeAction(
                title=f"Replace {label}", kind="replace", line=line,
                start_character=0, end_character=end, new_text=replace_text(corpus, ref),
            ))
        return actions

    def symbols(self, uri: str) -> List[DocumentSymbol]:
        corpus = self._corpus()
        return [
            DocumentSymbol(name=reference_label(corpus, ref), span=ref.span)
            for ref in find_book_references(corpus, self._documents().text(uri))
        ]

    # ------------- internals -------------

    def _corpus(self) -> Corpus:
        if self.corpus is None:
            raise RuntimeError("Engine not initialized. Call load() first.")
        return self.corpus

    def _documents(self) -> DocumentStore:
        if self._store is None:
            raise RuntimeError("Engine not initialized. Call load() first.")
        return self._store
