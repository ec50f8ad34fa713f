from __future__ import annotations

from sqlite3 import Connection
from typing import Iterable

from ..db import run, fetch_all


def ensure_schema(conn: Connection):
    # question_id 不加外键：删除题目后答案保留（孤儿行）
    conn.execute(
        """
        CREATE TABLE IF NOT EXISTS answers (
            id          INTEGER PRIMARY KEY AUTOINCREMENT,
            response_id INTEGER NOT NULL,
            question_id INTEGER NOT NULL,
            value       TEXT
        )
        """
    )
    conn.execute("CREATE INDEX IF NOT EXISTS idx_answers_response ON answers(response_id)")
    conn.execute("CREATE INDEX IF NOT EXISTS idx_answers_question ON answers(question_id)")


def insert_many(conn: Connection, response_id: int, rows: Iterable[tuple[int, str | None]]) -> None:
    conn.executemany(
        "INSERT INTO answers(response_id, question_id, value) VALUES(?, ?, ?)",
        [(response_id, qid, value) for qid, value in rows],
    )


def list_all(conn: Connection) -> list[dict]:
    return fetch_all(conn, "SELECT response_id, question_id, value FROM answers ORDER BY id ASC")


def list_for_response(conn: Connection, response_id: int) -> list[dict]:
    return fetch_all(
        conn,
        "SELECT question_id, value FROM answers WHERE response_id=? ORDER BY id ASC",
        (response_id,),
    )


def delete_for_response(conn: Connection, response_id: int) -> None:
    run(conn, "DELETE FROM answers WHERE response_id=?", (response_id,))


def value_counts_by_question(conn: Connection) -> list[dict]:
    """Per question_id: count of each non-null value."""
    return fetch_all(
        conn,
        "SELECT question_id, value, COUNT(1) AS n FROM answers "
        "WHERE value IS NOT NULL GROUP BY question_id, value",
    )
