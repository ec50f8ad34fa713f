from __future__ import annotations

# survey_backend/db.py
import sqlite3
from contextlib import contextmanager
from typing import Any, Iterator, Sequence

from .config import get_db_path


@contextmanager
def get_conn(db_path: str | None = None) -> Iterator[sqlite3.Connection]:
    """
    获取 SQLite 连接。优先使用显式传入的 db_path，否则走 get_db_path()。
    autocommit 模式：事务外的每条语句执行完即落盘；需要原子写入时显式 BEGIN/commit。
    """
    path = db_path or get_db_path()
    conn = sqlite3.connect(
        path,
        check_same_thread=False,
        isolation_level=None,
    )
    try:
        conn.row_factory = sqlite3.Row
        yield conn
    finally:
        conn.close()


# ---------------- data access helpers ----------------
# Callers pass already validated values; these only bind parameters.

def run(conn: sqlite3.Connection, sql: str, params: Sequence[Any] | dict = ()) -> None:
    conn.execute(sql, params)


def fetch_all(conn: sqlite3.Connection, sql: str, params: Sequence[Any] | dict = ()) -> list[dict]:
    return [dict(r) for r in conn.execute(sql, params).fetchall()]


def fetch_one(conn: sqlite3.Connection, sql: str, params: Sequence[Any] | dict = ()) -> dict | None:
    rows = fetch_all(conn, sql, params)
    return rows[0] if rows else None


def insert(conn: sqlite3.Connection, sql: str, params: Sequence[Any] | dict = ()) -> int:
    cur = conn.execute(sql, params)
    return int(cur.lastrowid)


@contextmanager
def transaction(conn: sqlite3.Connection, immediate: bool = False) -> Iterator[sqlite3.Connection]:
    """Group several writes into one commit; rolls back if the block raises.

    immediate=True takes the write lock up front, for read-then-write sequences.
    """
    conn.execute("BEGIN IMMEDIATE" if immediate else "BEGIN")
    try:
        yield conn
    except BaseException:
        conn.rollback()
        raise
    conn.commit()
