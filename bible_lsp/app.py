# app.py
# CustomTkinter GUI for the scripture reference engine (dark theme).
# - Load a Bible JSON file on a background thread (keeps UI responsive).
# - Live completion of the typed reference with debounce.
# - Scratch pad whose references are listed with their verse text.

from __future__ import annotations
import threading
from typing import Optional

import tkinter.filedialog as fd
import tkinter.messagebox as mb
import customtkinter as ctk

# Project imports (ensure PYTHONPATH=src or an installed package)
from scripture import Engine, load_corpus
from scripture.models import CompletionData


# -------------------- small helpers --------------------

def shorten_path(p: str, max_chars: int = 60) -> str:
    """Shorten long paths neatly for labels."""
    if len(p) <= max_chars:
        return p
    keep = max_chars // 2 - 3
    return p[:keep] + "..." + p[-keep:]


# -------------------- main app --------------------

class ScriptureApp(ctk.CTk):
    """Dark-themed GUI that loads a Bible JSON and queries the engine."""

    MAX_ROWS = 40

    def __init__(self) -> None:
        super().__init__()

        ctk.set_appearance_mode("dark")
        ctk.set_default_color_theme("blue")

        self.title("Scripture References")
        self.geometry("900x720")
        self.minsize(820, 600)

        # State
        self._engine = Engine()
        self._loaded: bool = False
        self._loading_thread: Optional[threading.Thread] = None
        self._complete_after_id: Optional[str] = None
        self._scan_after_id: Optional[str] = None

        self.font_title = ctk.CTkFont(size=18, weight="bold")
        self.font_label = ctk.CTkFont(size=13)
        self.font_mono = ctk.CTkFont(family="Cascadia Mono, Menlo, Consolas, Courier New", size=13)

        self.grid_columnconfigure(0, weight=1)
        self.grid_rowconfigure(3, weight=1)  # suggestions
        self.grid_rowconfigure(4, weight=1)  # scratch pad
        self.grid_rowconfigure(5, weight=0)  # log

        self._build_header()
        self._build_source_bar()
        self._build_query()
        self._build_results()
        self._build_scratch()
        self._build_log()

        self._set_status("Ready")
        self.protocol("WM_DELETE_WINDOW", self._on_close)

    # --------- UI sections ---------

    def _build_header(self) -> None:
        header = ctk.CTkFrame(self, corner_radius=10)
        header.grid(row=0, column=0, sticky="ew", padx=12, pady=(12, 6))
        header.grid_columnconfigure(0, weight=1)

        title = ctk.CTkLabel(header, text="Scripture References", font=self.font_title)
        title.grid(row=0, column=0, sticky="w", padx=12, pady=10)

    def _build_source_bar(self) -> None:
        bar = ctk.CTkFrame(self, corner_radius=10)
        bar.grid(row=1, column=0, sticky="ew", padx=12, pady=6)
        bar.grid_columnconfigure(1, weight=1)

        btn = ctk.CTkButton(bar, text="Open Bible JSON", command=self._choose_bible)
        btn.grid(row=0, column=0, padx=(12, 6), pady=10)

        self.lbl_source = ctk.CTkLabel(bar, text="No Bible loaded", anchor="w", font=self.font_label)
        self.lbl_source.grid(row=0, column=1, sticky="ew", padx=(6, 6), pady=10)

        self.progress = ctk.CTkProgressBar(bar, mode="indeterminate", determinate_speed=1.2)
        self.progress.grid(row=0, column=2, sticky="e", padx=(0, 6), pady=10)

        self.lbl_status = ctk.CTkLabel(bar, text="Status: —", anchor="e")
        self.lbl_status.grid(row=0, column=3, sticky="e", padx=12, pady=10)

    def _build_query(self) -> None:
        box = ctk.CTkFrame(self, corner_radius=10)
        box.grid(row=2, column=0, sticky="ew", padx=12, pady=(6, 6))
        box.grid_columnconfigure(1, weight=1)

        ctk.CTkLabel(box, text="Reference:", font=self.font_label).grid(
            row=0, column=0, sticky="w", padx=12, pady=10
        )

        self.entry_query = ctk.CTkEntry(box, placeholder_text="Ephesians 1:2-")
        self.entry_query.grid(row=0, column=1, sticky="ew", padx=(6, 12), pady=10)
        self.entry_query.bind("<KeyRelease>", self._on_query_changed)

    def _build_results(self) -> None:
        frame = ctk.CTkFrame(self, corner_radius=10)
        frame.grid(row=3, column=0, sticky="nsew", padx=12, pady=(6, 6))
        frame.grid_columnconfigure(0, weight=1)
        frame.grid_rowconfigure(1, weight=1)

        ctk.CTkLabel(frame, text="Suggestions", font=self.font_label).grid(
            row=0, column=0, sticky="w", padx=12, pady=(10, 2)
        )

        self.txt_results = ctk.CTkTextbox(frame, wrap="word", font=self.font_mono)
        self.txt_results.grid(row=1, column=0, sticky="nsew", padx=12, pady=(0, 12))
        self.txt_results.configure(state="disabled")
        self._set_results("(load a Bible and start typing a book name)")

    def _build_scratch(self) -> None:
        frame = ctk.CTkFrame(self, corner_radius=10)
        frame.grid(row=4, column=0, sticky="nsew", padx=12, pady=(6, 6))
        frame.grid_columnconfigure((0, 1), weight=1)
        frame.grid_rowconfigure(1, weight=1)

        ctk.CTkLabel(frame, text="Text", font=self.font_label).grid(
            row=0, column=0, sticky="w", padx=12, pady=(10, 2)
        )
        ctk.CTkLabel(frame, text="References found", font=self.font_label).grid(
            row=0, column=1, sticky="w", padx=12, pady=(10, 2)
        )

        self.txt_scratch = ctk.CTkTextbox(frame, wrap="word", font=self.font_mono)
        self.txt_scratch.grid(row=1, column=0, sticky="nsew", padx=(12, 6), pady=(0, 12))
        self.txt_scratch.bind("<KeyRelease>", self._on_scratch_changed)

        self.txt_refs = ctk.CTkTextbox(frame, wrap="word", font=self.font_mono)
        self.txt_refs.grid(row=1, column=1, sticky="nsew", padx=(6, 12), pady=(0, 12))
        self.txt_refs.configure(state="disabled")

    def _build_log(self) -> None:
        frame = ctk.CTkFrame(self, corner_radius=10)
        frame.grid(row=5, column=0, sticky="nsew", padx=12, pady=(6, 12))
        frame.grid_columnconfigure(0, weight=1)

        ctk.CTkLabel(frame, text="Event log", font=self.font_label).grid(
            row=0, column=0, sticky="w", padx=12, pady=(10, 2)
        )

        self.txt_log = ctk.CTkTextbox(frame, height=90, wrap="word", font=ctk.CTkFont(size=12))
        self.txt_log.grid(row=1, column=0, sticky="nsew", padx=12, pady=(0, 12))
        self._log("GUI ready. Open a Bible JSON file to begin.")

    # --------- loading (threaded) ---------

    def _choose_bible(self) -> None:
        path = fd.askopenfilename(
            title="Choose Bible JSON",
            filetypes=[("JSON files", "*.json"), ("All files", "*.*")]
        )
        if not path:
            return
        self._start_loading(path)

    def _start_loading(self, path: str) -> None:
        if self._loading_thread and self._loading_thread.is_alive():
            mb.showinfo("Loading", "A Bible is already loading. Please wait.")
            return

        self.lbl_source.configure(text=shorten_path(path))
        self._set_status("Loading…")
        self.progress.start()
        self._loaded = False

        self._loading_thread = threading.Thread(target=self._load_worker, args=(path,), daemon=True)
        self._loading_thread.start()

    def _load_worker(self, path: str) -> None:
        # parse off the UI thread, hand the result back through after()
        try:
            corpus = load_corpus(path)
        except (OSError, ValueError) as exc:
            self.after(0, lambda: self._on_load_error(exc))
            return
        self.after(0, lambda: self._on_load_ok(corpus))

    def _on_load_ok(self, corpus) -> None:
        self.progress.stop()
        self._engine.load(corpus=corpus)
        self._loaded = True
        tr = corpus.translation
        self._set_status(f"{tr.abbreviation}: {len(corpus.book_ids())} books")
        self._log(f"Loaded {tr.name} ({tr.language}).")
        self.entry_query.focus_set()

    def _on_load_error(self, exc: Exception) -> None:
        self.progress.stop()
        self._set_status("Error while loading.")
        self._log(f"ERROR: {exc!r}")
        mb.showerror("Load error", "Failed to load the Bible.\nSee event log for details.")

    # --------- completion ---------

    def _on_query_changed(self, _ev=None) -> None:
        if self._complete_after_id is not None:
            self.after_cancel(self._complete_after_id)
        self._complete_after_id = self.after(160, self._do_complete)

    def _do_complete(self) -> None:
        self._complete_after_id = None
        if not self._loaded:
            self._set_results("error: please load a Bible before typing.")
            return
        # trailing spaces are significant, do not strip
        rows = self._engine.complete(self.entry_query.get())
        if not rows:
            self._set_results("(no suggestions)")
            return
        lines = [self._fmt(r) for r in rows[:self.MAX_ROWS]]
        if len(rows) > self.MAX_ROWS:
            lines.append(f"... {len(rows) - self.MAX_ROWS} more")
        self._set_results("\n".join(lines))

    @staticmethod
    def _fmt(r: CompletionData) -> str:
        return f"{r.sort_text} | {r.kind:<7} | {r.label}"

    # --------- scanning ---------

    def _on_scratch_changed(self, _ev=None) -> None:
        if self._scan_after_id is not None:
            self.after_cancel(self._scan_after_id)
        self._scan_after_id = self.after(250, self._do_scan)

    def _do_scan(self) -> None:
        self._scan_after_id = None
        if not self._loaded:
            return
        refs = self._engine.references(self.txt_scratch.get("0.0", "end"))
        blocks = [f"{r.label}  (line {r.span.start.line + 1})\n{r.content}" for r in refs]
        self._set_text(self.txt_refs, "\n\n".join(blocks))

    # --------- misc UI helpers ---------

    def _set_status(self, text: str) -> None:
        self.lbl_status.configure(text=f"Status: {text}")

    def _set_results(self, text: str) -> None:
        self._set_text(self.txt_results, text)

    @staticmethod
    def _set_text(box: ctk.CTkTextbox, text: str) -> None:
        box.configure(state="normal")
        box.delete("0.0", "end")
        if text:
            box.insert("end", text)
        box.configure(state="disabled")

    def _log(self, msg: str) -> None:
        self.txt_log.insert("end", msg + "\n")
        self.txt_log.see("end")

    # --------- lifecycle ---------

    def _on_close(self) -> None:
        self._engine.shutdown()
        self.destroy()


if __name__ == "__main__":
    app = ScriptureApp()
    app.mainloop()
