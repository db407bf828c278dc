from urllib.parse import quote
import pytest
from scripture.engine import Engine
from frontend.web import app as flask_app


@pytest.fixture
def client(engine: Engine):
    import frontend.web as webmod
    webmod._engine = engine
    try:
        yield flask_app.test_client()
    finally:
        webmod._engine = None


@pytest.mark.e2e
def test_health(client):
    r = client.get("/api/health")
    assert r.status_code == 200
    data = r.get_json()
    assert data["ok"] is True and data["translation"] == "TST"
    assert ":" in data["trigger_characters"]


@pytest.mark.e2e
def test_complete_api_json(client):
    rv = client.get(f"/api/complete?q={quote('Ephesians 1:')}")
    assert rv.status_code == 200
    data = rv.get_json()
    assert isinstance(data, list) and len(data) == 23
    first = data[0]
    for key in ("label", "documentation", "sort_text", "kind", "replace_from"):
        assert key in first
    assert first["label"] == "Ephesians 1:1"

    # the trailing space is what asks for chapters
    chapters = client.get(f"/api/complete?q={quote('Ephesians ')}").get_json()
    assert [r["label"] for r in chapters] == [f"Ephesians {c}" for c in range(1, 7)]


@pytest.mark.e2e
def test_references_api(client):
    rv = client.post("/api/references", json={"text": "I read Ephesians 4:28, and it changed"})
    assert rv.status_code == 200
    data = rv.get_json()
    assert len(data) == 1
    assert data[0]["label"] == "Ephesians 4:28"
    assert data[0]["span"]["start"] == {"line": 0, "character": 7}
    assert data[0]["content"] == "[4:28] Ephesians 4:28"

    assert client.post("/api/references", json={"nope": 1}).status_code == 400


@pytest.mark.e2e
def test_document_endpoints(client):
    uri = "file:///a.md"
    assert client.put("/api/documents", json={"uri": uri, "text": "See John 3:16"}).status_code == 200
    q = f"uri={quote(uri)}"

    hover = client.get(f"/api/documents/hover?{q}&line=0&character=5").get_json()
    assert hover["contents"].startswith("### John 3:16")

    diags = client.get(f"/api/documents/diagnostics?{q}").get_json()
    assert [d["message"] for d in diags] == ["John 3:16"]

    target = client.get(f"/api/documents/definition?{q}&line=0&character=5").get_json()
    assert target["book_name"] == "John"

    actions = client.get(f"/api/documents/code-actions?{q}&line=0").get_json()
    assert [a["kind"] for a in actions] == ["insert", "replace"]

    symbols = client.get(f"/api/documents/symbols?{q}").get_json()
    assert [s["name"] for s in symbols] == ["John 3:16"]

    rows = client.get(f"/api/documents/complete?{q}&line=0&character=9").get_json()
    assert [r["label"] for r in rows] == ["John 1", "John 2", "John 3"]

    assert client.delete(f"/api/documents?{q}").status_code == 200
    assert client.get(f"/api/documents/symbols?{q}").status_code == 404


@pytest.mark.e2e
def test_bad_parameters(client):
    r = client.get("/api/documents/hover?uri=x&line=abc&character=1")
    assert r.status_code == 400
    assert "error" in r.get_json()
    assert client.get("/api/documents/symbols").status_code == 400


@pytest.mark.e2e
def test_not_loaded_is_conflict():
    import frontend.web as webmod
    webmod._engine = None
    client = flask_app.test_client()
    assert client.get("/api/complete?q=John").status_code == 409
    assert client.get("/api/health").get_json()["translation"] is None


@pytest.mark.e2e
def test_frontend_home_page_renders(client):
    r = client.get("/")
    assert r.status_code == 200
    html = r.data.decode("utf-8", errors="ignore").lower()
    assert "autocomplete" in html and "/api/references" in html


@pytest.mark.e2e
def test_only_unknown_documents_are_not_found(client, engine: Engine, monkeypatch):
    r = client.get("/api/documents/diagnostics?uri=file:///never-opened.md")
    assert r.status_code == 404
    assert "never-opened" in r.get_json()["error"]

    def broken(text):
        raise KeyError("'Xyz' matched the book pattern but is not a known book")

    monkeypatch.setattr(engine, "references", broken)
    assert client.post("/api/references", json={"text": "Xyz 1:1"}).status_code == 500
