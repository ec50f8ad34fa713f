from __future__ import annotations

from sqlite3 import Connection

from ..db import run, fetch_all, fetch_one, insert


def ensure_schema(conn: Connection):
    conn.execute(
        """
        CREATE TABLE IF NOT EXISTS responses (
            id           INTEGER PRIMARY KEY AUTOINCREMENT,
            name         TEXT NOT NULL,
            score        INTEGER NOT NULL DEFAULT 0,
            submitted_at TEXT NOT NULL DEFAULT (datetime('now'))
        )
        """
    )


def insert_response(conn: Connection, name: str, score: int) -> int:
    return insert(conn, "INSERT INTO responses(name, score) VALUES(?, ?)", (name, score))


def list_newest_first(conn: Connection) -> list[dict]:
    return fetch_all(
        conn,
        "SELECT id, name, score, submitted_at FROM responses ORDER BY submitted_at DESC, id DESC",
    )


def top_by_score(conn: Connection, limit: int) -> list[dict]:
    return fetch_all(
        conn,
        "SELECT id, name, score, submitted_at FROM responses ORDER BY score DESC, id ASC LIMIT ?",
        (limit,),
    )


def count_all(conn: Connection) -> int:
    return int(fetch_one(conn, "SELECT COUNT(1) AS n FROM responses")["n"])


def delete(conn: Connection, response_id: int) -> None:
    run(conn, "DELETE FROM responses WHERE id=?", (response_id,))
