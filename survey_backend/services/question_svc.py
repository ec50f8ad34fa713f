from __future__ import annotations

# survey_backend/services/question_svc.py
import logging

from ..db import get_conn, transaction
from ..logs import LogContext
from ..repository import question_repo
from .utils import require_text

logger = logging.getLogger(__name__)

DEFAULT_QUESTIONS = [
    "Route 1: Red Wall",
    "Route 2: Blue Corner",
    "Route 3: Yellow Overhang",
    "Route 4: Green Slab",
    "Route 5: Black Crack",
]


def seed_default_questions() -> int:
    """题库为空时写入默认题目（position 从 0 开始），返回写入条数。"""
    with get_conn() as conn, transaction(conn, immediate=True):
        if question_repo.count_all(conn) > 0:
            return 0
        for i, text in enumerate(DEFAULT_QUESTIONS):
            question_repo.insert_question(conn, text, i)
    logger.info("seeded %d default questions", len(DEFAULT_QUESTIONS))
    return len(DEFAULT_QUESTIONS)


def list_questions() -> list[dict]:
    with get_conn() as conn:
        return question_repo.list_ordered(conn)


def create_question(text, log: LogContext) -> dict:
    clean = require_text(text, "text")
    with get_conn() as conn, transaction(conn, immediate=True):
        pos = question_repo.max_position(conn) + 1
        new_id = question_repo.insert_question(conn, clean, pos)
    out = {"id": new_id, "text": clean, "position": pos}
    log.set_entity("question", new_id)
    log.set_after(out)
    return out


def update_question(question_id: int, text, log: LogContext) -> None:
    """Update text by id. An unknown id is a silent no-op."""
    clean = require_text(text, "text")
    with get_conn() as conn:
        before = question_repo.get_one(conn, question_id)
        question_repo.update_text(conn, question_id, clean)
    log.set_entity("question", question_id)
    log.set_before(before)
    log.set_after(None if before is None else {**before, "text": clean})


def delete_question(question_id: int, log: LogContext) -> None:
    # answers 不级联删除
    with get_conn() as conn:
        before = question_repo.get_one(conn, question_id)
        question_repo.delete(conn, question_id)
    log.set_entity("question", question_id)
    log.set_before(before)
