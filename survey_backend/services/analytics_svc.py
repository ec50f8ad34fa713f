from __future__ import annotations

# survey_backend/services/analytics_svc.py
from ..db import get_conn
from ..repository import question_repo, response_repo, answer_repo


def compute_analytics() -> dict:
    """
    每道题统计 topp/flash 次数及有效作答总数（value 非空），外加总提交数。
    题目按 position 顺序输出；已删除题目的孤儿答案不出现在结果中。
    """
    with get_conn() as conn:
        questions = question_repo.list_ordered(conn)
        counts = answer_repo.value_counts_by_question(conn)
        total_responses = response_repo.count_all(conn)

    per_q: dict[int, dict[str, int]] = {}
    for r in counts:
        per_q.setdefault(r["question_id"], {})[r["value"]] = int(r["n"])

    stats = []
    for q in questions:
        c = per_q.get(q["id"], {})
        stats.append({
            "id": q["id"],
            "text": q["text"],
            "yes": c.get("topp", 0),
            "no": c.get("flash", 0),
            "total": sum(c.values()),
        })
    return {"questions": stats, "totalResponses": total_responses}
