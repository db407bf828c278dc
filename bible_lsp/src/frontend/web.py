from __future__ import annotations
import argparse
import logging
from dataclasses import asdict
from typing import Any, Optional

from flask import Flask, request, jsonify, Response
from scripture.documents import DocumentNotFound
from scripture.engine import Engine
from scripture import config as CFG

log = logging.getLogger(__name__)

app = Flask(__name__)
_engine: Engine | None = None


def _eng() -> Engine:
    if _engine is None:
        raise RuntimeError("Engine not initialized. Start the server with --bible.")
    return _engine


def _rows(rows) -> Any:
    return [asdict(r) for r in rows]


def _one(row) -> Any:
    return None if row is None else asdict(row)


def _int_arg(name: str) -> int:
    value = request.args.get(name, None, type=int)
    if value is None:
        raise ValueError(f"query parameter {name!r} must be an integer")
    return value


def _str_arg(name: str) -> str:
    value = request.args.get(name, "", type=str)
    if not value:
        raise ValueError(f"query parameter {name!r} is required")
    return value


# ---------- errors ----------
# only unknown documents are 404; any other KeyError is a bug and stays a 500
@app.errorhandler(DocumentNotFound)
def _not_found(exc: DocumentNotFound):
    return jsonify({"error": f"not found: {exc.args[0] if exc.args else ''}"}), 404


@app.errorhandler(ValueError)
def _bad_request(exc: ValueError):
    return jsonify({"error": str(exc)}), 400


@app.errorhandler(RuntimeError)
def _not_ready(exc: RuntimeError):
    return jsonify({"error": str(exc)}), 409


# ---------- API ----------
@app.get("/api/health")
def api_health():
    translation: Optional[str] = None
    if _engine is not None and _engine.corpus is not None:
        translation = _engine.corpus.translation.abbreviation
    return jsonify({"ok": True, "translation": translation, "trigger_characters": CFG.TRIGGER_CHARACTERS})


@app.get("/api/complete")
def api_complete():
    # trailing spaces matter here ("Ephesians " asks for chapters)
    q = request.args.get("q", "", type=str)
    return jsonify(_rows(_eng().complete(q)))


@app.post("/api/references")
def api_references():
    body = request.get_json(silent=True) or {}
    text = body.get("text")
    if not isinstance(text, str):
        raise ValueError("JSON body must hold a string 'text'")
    return jsonify(_rows(_eng().references(text)))


@app.put("/api/documents")
def api_document_put():
    body = request.get_json(silent=True) or {}
    uri, text = body.get("uri"), body.get("text")
    if not isinstance(uri, str) or not uri or not isinstance(text, str):
        raise ValueError("JSON body must hold string 'uri' and 'text'")
    _eng().change_document(uri, text)
    return jsonify({"ok": True, "uri": uri})


@app.delete("/api/documents")
def api_document_delete():
    uri = _str_arg("uri")
    _eng().close_document(uri)
    return jsonify({"ok": True, "uri": uri})


@app.get("/api/documents/complete")
def api_document_complete():
    return jsonify(_rows(_eng().complete_at(_str_arg("uri"), _int_arg("line"), _int_arg("character"))))


@app.get("/api/documents/hover")
def api_document_hover():
    return jsonify(_one(_eng().hover(_str_arg("uri"), _int_arg("line"), _int_arg("character"))))


@app.get("/api/documents/diagnostics")
def api_document_diagnostics():
    return jsonify(_rows(_eng().diagnostics(_str_arg("uri"))))


@app.get("/api/documents/definition")
def api_document_definition():
    return jsonify(_one(_eng().definition(_str_arg("uri"), _int_arg("line"), _int_arg("character"))))


@app.get("/api/documents/code-actions")
def api_document_code_actions():
    return jsonify(_rows(_eng().code_actions(_str_arg("uri"), _int_arg("line"))))


@app.get("/api/documents/symbols")
def api_document_symbols():
    return jsonify(_rows(_eng().symbols(_str_arg("uri"))))


# ---------- UI ----------
@app.get("/")
def home():
    # One page: completion box on top, reference scanner below. No external deps.
    html = r"""
<!doctype html>
<html lang="en">
<head>
<meta charset="utf-8" />
<meta name="viewport" content="width=device-width,initial-scale=1" />
<title>Scripture references • Flask UI</title>
<style>
:root{
  --bg:#0b0f14;
  --panel:#0f141b;
  --ink:#cfd8e3;
  --muted:#8a94a6;
  --accent:#6ee7ff;
  --border:#1c2530;
}
*{box-sizing:border-box}
body{
  margin:0; background:var(--bg); color:var(--ink);
  font:16px/1.45 system-ui,-apple-system,Segoe UI,Roboto,Ubuntu,"Helvetica Neue",Arial;
}
.container{ max-width:980px; margin:24px auto; padding:0 16px; }
.card{
  background:var(--panel); border:1px solid var(--border);
  border-radius:16px; padding:18px; margin-bottom:18px;
}
h1{ font-size:20px; margin:0 0 8px 0 }
input,textarea{
  width:100%; padding:12px 14px; border-radius:12px; border:1px solid var(--border);
  background:#0b1117; color:var(--ink); outline:none; font-size:16px;
}
input:focus,textarea:focus{ border-color:var(--accent) }
.meta{ color:var(--muted); font-size:13px; margin-top:6px }
.row{
  display:grid; grid-template-columns:3rem 5rem 1fr; gap:10px;
  padding:10px 14px; border-top:1px solid var(--border);
}
.row:hover{ background:#0d131a }
.small{ color:var(--muted) }
pre{ white-space:pre-wrap; margin:6px 0 0 0; color:var(--muted); font-size:13px }
.empty{ padding:24px; text-align:center; color:var(--muted) }
</style>
</head>
<body>
  <div class="container">
    <div class="card">
      <h1>Autocomplete</h1>
      <input id="q" type="text" placeholder="Ephesians 1:2-" autocomplete="off" autofocus />
      <div class="meta" id="stats">Ready.</div>
      <div id="out" class="empty">Start typing a book name.</div>
    </div>
    <div class="card">
      <h1>References</h1>
      <textarea id="doc" rows="5" placeholder="I read Ephesians 4:28, and it changed how I thought about money"></textarea>
      <div id="refs" class="empty">Paste some text.</div>
    </div>
  </div>

<script>
const $ = (sel) => document.querySelector(sel);
const q = $("#q"), out = $("#out"), stats = $("#stats"), doc = $("#doc"), refs = $("#refs");
const esc = (s) => String(s).replace(/[&<>]/g, (c) => ({"&":"&amp;","<":"&lt;",">":"&gt;"}[c]));

let t1, t2;
async function complete(){
  const t0 = performance.now();
  const resp = await fetch(`/api/complete?q=${encodeURIComponent(q.value)}`);
  const data = await resp.json();
  if(!resp.ok){ stats.textContent = `Error: ${data.error ?? resp.status}`; return; }
  stats.textContent = `Suggestions: ${data.length} • ~${Math.max(1, Math.round(performance.now() - t0))} ms`;
  out.className = data.length ? "" : "empty";
  out.innerHTML = data.length ? data.slice(0, 50).map((r) => `
    <div class="row">
      <div class="small">${esc(r.sort_text)}</div>
      <div class="small">${esc(r.kind)}</div>
      <div>${esc(r.label)}<pre>${esc(r.documentation)}</pre></div>
    </div>`).join("") : "No suggestions.";
}
async function scan(){
  const resp = await fetch("/api/references", {
    method: "POST", headers: {"Content-Type": "application/json"},
    body: JSON.stringify({text: doc.value}),
  });
  const data = await resp.json();
  refs.className = (resp.ok && data.length) ? "" : "empty";
  refs.innerHTML = !resp.ok ? esc(data.error ?? resp.status) : data.length ? data.map((r, i) => `
    <div class="row">
      <div class="small">${i + 1}</div>
      <div class="small">${r.span.start.line}:${r.span.start.character}</div>
      <div>${esc(r.label)}<pre>${esc(r.content)}</pre></div>
    </div>`).join("") : "No references.";
}
q.addEventListener("input", () => { clearTimeout(t1); t1 = setTimeout(complete, 150); });
doc.addEventListener("input", () => { clearTimeout(t2); t2 = setTimeout(scan, 250); });
</script>
</body>
</html>
"""
    return Response(html, mimetype="text/html")


def main(argv=None) -> int:
    ap = argparse.ArgumentParser(description="Run Flask UI on top of Engine")
    ap.add_argument("--bible", default=CFG.BIBLE_JSON, help="Bible JSON file")
    ap.add_argument("--host", default=CFG.HOST)
    ap.add_argument("--port", type=int, default=CFG.PORT)
    ap.add_argument("--verbose", action="store_true", default=CFG.VERBOSE)
    args = ap.parse_args(argv)

    global _engine
    _engine = Engine()
    _engine.load(args.bible, verbose=args.verbose)

    try:
        log.info("Serving on http://%s:%d", args.host, args.port)
        app.run(host=args.host, port=args.port, debug=args.verbose)
    finally:
        _engine.shutdown()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
