from __future__ import annotations

from sqlite3 import Connection

from ..db import run, fetch_one


def ensure_schema(conn: Connection):
    conn.execute(
        """
        CREATE TABLE IF NOT EXISTS admin (
            id            INTEGER PRIMARY KEY CHECK (id = 1),
            password_hash TEXT NOT NULL
        )
        """
    )


def get_password_hash(conn: Connection) -> str | None:
    row = fetch_one(conn, "SELECT password_hash FROM admin WHERE id=1")
    return None if row is None else row["password_hash"]


def insert_if_absent(conn: Connection, password_hash: str) -> None:
    run(conn, "INSERT OR IGNORE INTO admin(id, password_hash) VALUES(1, ?)", (password_hash,))


def upsert_password_hash(conn: Connection, password_hash: str) -> None:
    run(
        conn,
        "INSERT INTO admin(id, password_hash) VALUES(1, ?) "
        "ON CONFLICT(id) DO UPDATE SET password_hash=excluded.password_hash",
        (password_hash,),
    )
