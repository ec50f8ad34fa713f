from __future__ import annotations

from sqlite3 import Connection

from ..db import run, fetch_all, fetch_one, insert


def ensure_schema(conn: Connection):
    conn.execute(
        """
        CREATE TABLE IF NOT EXISTS questions (
            id         INTEGER PRIMARY KEY AUTOINCREMENT,
            text       TEXT NOT NULL,
            position   INTEGER NOT NULL DEFAULT 0,
            created_at TEXT NOT NULL DEFAULT (datetime('now'))
        )
        """
    )


def count_all(conn: Connection) -> int:
    return int(fetch_one(conn, "SELECT COUNT(1) AS n FROM questions")["n"])


def max_position(conn: Connection) -> int:
    row = fetch_one(conn, "SELECT COALESCE(MAX(position), 0) AS m FROM questions")
    return int(row["m"])


def list_ordered(conn: Connection) -> list[dict]:
    return fetch_all(conn, "SELECT id, text, position FROM questions ORDER BY position ASC, id ASC")


def get_one(conn: Connection, question_id: int) -> dict | None:
    return fetch_one(conn, "SELECT id, text, position FROM questions WHERE id=?", (question_id,))


def insert_question(conn: Connection, text: str, position: int) -> int:
    return insert(conn, "INSERT INTO questions(text, position) VALUES(?, ?)", (text, position))


def update_text(conn: Connection, question_id: int, text: str) -> None:
    run(conn, "UPDATE questions SET text=? WHERE id=?", (text, question_id))


def delete(conn: Connection, question_id: int) -> None:
    run(conn, "DELETE FROM questions WHERE id=?", (question_id,))
