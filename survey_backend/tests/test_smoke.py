from survey_backend.db import get_conn


def test_health_and_version(client):
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json() == {"ok": True}

    v = client.get("/version")
    assert v.status_code == 200
    assert v.json().get("app") == "survey-backend"


def test_default_questions_seeded_on_first_boot(client):
    r = client.get("/api/questions")
    assert r.status_code == 200
    items = r.json()
    assert [q["text"] for q in items] == [
        "Route 1: Red Wall",
        "Route 2: Blue Corner",
        "Route 3: Yellow Overhang",
        "Route 4: Green Slab",
        "Route 5: Black Crack",
    ]
    assert [q["position"] for q in items] == [0, 1, 2, 3, 4]
    assert set(items[0]) == {"id", "text", "position"}


def test_question_list_is_stable_without_writes(client):
    first = client.get("/api/questions").json()
    second = client.get("/api/questions").json()
    assert first == second


def test_tables_created(client):
    with get_conn() as conn:
        names = {r["name"] for r in conn.execute("SELECT name FROM sqlite_master WHERE type='table'")}
    assert {"questions", "responses", "answers", "admin", "operation_log"} <= names


def test_cors_preflight_allows_authorization_header(client):
    r = client.options(
        "/api/questions",
        headers={
            "Origin": "http://example.test",
            "Access-Control-Request-Method": "POST",
            "Access-Control-Request-Headers": "Authorization, Content-Type",
        },
    )
    assert r.status_code == 200
    assert r.headers["access-control-allow-origin"] == "*"


def test_startup_uses_db_path_resolved_at_boot(tmp_path, tmp_db_path, monkeypatch):
    from fastapi.testclient import TestClient
    from survey_backend.api import create_app

    app = create_app()
    other = tmp_path / "moved" / "other.db"
    monkeypatch.setenv("DB_PATH", str(other))
    with TestClient(app) as c:
        assert c.get("/api/questions").status_code == 200
    # schema, seed data and reads all went to the same file
    assert other.exists()
    with get_conn(str(other)) as conn:
        assert conn.execute("SELECT COUNT(1) AS n FROM questions").fetchone()["n"] == 5
