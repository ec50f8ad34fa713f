from __future__ import annotations

from survey_backend.db import get_conn


def test_create_question_appends_after_max_position(client, auth):
    res = client.post("/api/questions", json={"text": "  Route 6: Purple Roof  "}, headers=auth)
    assert res.status_code == 200
    body = res.json()
    # seeded positions are 0..4
    assert body["text"] == "Route 6: Purple Roof"
    assert body["position"] == 5
    assert isinstance(body["id"], int)

    items = client.get("/api/questions").json()
    assert items[-1] == body


def test_create_question_on_empty_table_starts_at_one(client, auth):
    with get_conn() as conn:
        conn.execute("DELETE FROM questions")
    res = client.post("/api/questions", json={"text": "Only"}, headers=auth)
    assert res.status_code == 200
    assert res.json()["position"] == 1


def test_create_question_position_uses_max_not_count(client, auth):
    with get_conn() as conn:
        conn.execute("UPDATE questions SET position = 40 WHERE position = 2")
    res = client.post("/api/questions", json={"text": "After gap"}, headers=auth)
    assert res.json()["position"] == 41


def test_create_question_requires_text(client, auth):
    for payload in ({}, {"text": ""}, {"text": "   "}, {"text": None}):
        res = client.post("/api/questions", json=payload, headers=auth)
        assert res.status_code == 400, payload
        assert res.json() == {"error": "text is required"}


def test_question_writes_require_admin(client):
    assert client.post("/api/questions", json={"text": "x"}).status_code == 401
    assert client.put("/api/questions/1", json={"text": "x"}).status_code == 401
    res = client.delete("/api/questions/1")
    assert res.status_code == 401
    assert res.json() == {"error": "Unauthorized"}
    # nothing changed
    assert len(client.get("/api/questions").json()) == 5


def test_update_question_text(client, auth):
    qid = client.get("/api/questions").json()[0]["id"]
    res = client.put(f"/api/questions/{qid}", json={"text": " Renamed "}, headers=auth)
    assert res.status_code == 200
    assert res.json() == {"ok": True}
    first = client.get("/api/questions").json()[0]
    assert first["id"] == qid
    assert first["text"] == "Renamed"
    assert first["position"] == 0


def test_update_question_rejects_blank_text(client, auth):
    res = client.put("/api/questions/1", json={"text": " "}, headers=auth)
    assert res.status_code == 400
    assert res.json()["error"] == "text is required"


def test_update_and_delete_unknown_id_are_noops(client, auth):
    assert client.put("/api/questions/9999", json={"text": "ghost"}, headers=auth).json() == {"ok": True}
    assert client.delete("/api/questions/9999", headers=auth).json() == {"ok": True}
    assert len(client.get("/api/questions").json()) == 5


def test_non_integer_id_is_a_validation_error(client, auth):
    res = client.delete("/api/questions/abc", headers=auth)
    assert res.status_code == 400
    assert "error" in res.json()


def test_delete_question_keeps_orphan_answers(client, auth):
    qid = client.get("/api/questions").json()[0]["id"]
    sub = client.post("/api/responses", json={"name": "Ana", "answers": {str(qid): "topp"}})
    assert sub.status_code == 200

    res = client.delete(f"/api/questions/{qid}", headers=auth)
    assert res.status_code == 200
    assert qid not in [q["id"] for q in client.get("/api/questions").json()]

    with get_conn() as conn:
        n = conn.execute("SELECT COUNT(1) AS n FROM answers WHERE question_id=?", (qid,)).fetchone()["n"]
    assert n == 1


def test_question_ids_outside_integer_range_are_validation_errors(client, auth):
    big = "99999999999999999999"
    res = client.put(f"/api/questions/{big}", json={"text": "x"}, headers=auth)
    assert res.status_code == 400
    assert "error" in res.json()
    res = client.delete(f"/api/questions/{big}", headers=auth)
    assert res.status_code == 400
    # largest representable id is still a normal no-op
    assert client.delete(f"/api/questions/{2 ** 63 - 1}", headers=auth).json() == {"ok": True}
    assert len(client.get("/api/questions").json()) == 5


def test_create_question_malformed_json_body(client, auth):
    res = client.post(
        "/api/questions",
        content="{bad",
        headers={**auth, "Content-Type": "application/json"},
    )
    assert res.status_code == 400
    assert "error" in res.json()
