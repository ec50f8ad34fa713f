from __future__ import annotations

# survey_backend/services/response_svc.py
import logging
from typing import Any

from ..db import get_conn, transaction
from ..errors import ValidationError
from ..logs import LogContext
from ..repository import response_repo, answer_repo
from .utils import require_text, parse_id_key

logger = logging.getLogger(__name__)

# 可接受的答案取值及得分；其他取值一律存 NULL、计 0 分
ANSWER_POINTS = {
    "topp": 2,
    "flash": 3,
}

LEADERBOARD_SIZE = 5


def normalize_value(value: Any) -> str | None:
    if isinstance(value, str) and value in ANSWER_POINTS:
        return value
    return None


def compute_score(values) -> int:
    """Sum of points over all submitted values, unknown values count 0."""
    total = 0
    for v in values:
        v = normalize_value(v)
        if v is not None:
            total += ANSWER_POINTS[v]
    return total


def _parse_answers(answers: Any) -> list[tuple[int, str | None]]:
    if not isinstance(answers, dict):
        raise ValidationError("answers is required")
    rows = []
    for key, value in answers.items():
        qid = parse_id_key(key)
        if qid is None:
            raise ValidationError(f"invalid question id: {key}")
        rows.append((qid, normalize_value(value)))
    return rows


def submit_response(name: Any, answers: Any) -> dict:
    clean_name = require_text(name, "name")
    rows = _parse_answers(answers)
    score = compute_score(answers.values())
    # response 与 answers 同一事务写入
    with get_conn() as conn, transaction(conn):
        response_id = response_repo.insert_response(conn, clean_name, score)
        answer_repo.insert_many(conn, response_id, rows)
    logger.info("response %s stored: %d answers, score=%d", response_id, len(rows), score)
    return {"id": response_id, "score": score}


def list_responses() -> list[dict]:
    with get_conn() as conn:
        responses = response_repo.list_newest_first(conn)
        answer_rows = answer_repo.list_all(conn)
    by_response: dict[int, dict[str, str | None]] = {}
    for r in answer_rows:
        by_response.setdefault(r["response_id"], {})[str(r["question_id"])] = r["value"]
    return [{**r, "answers": by_response.get(r["id"], {})} for r in responses]


def leaderboard(limit: int = LEADERBOARD_SIZE) -> list[dict]:
    with get_conn() as conn:
        return response_repo.top_by_score(conn, limit)


def delete_response(response_id: int, log: LogContext) -> None:
    """Remove the answers first, then the response. Unknown id is a no-op."""
    with get_conn() as conn, transaction(conn):
        answers = answer_repo.list_for_response(conn, response_id)
        answer_repo.delete_for_response(conn, response_id)
        response_repo.delete(conn, response_id)
    log.set_entity("response", response_id)
    log.set_before({"answers": len(answers)})
