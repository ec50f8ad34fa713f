from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Path
from pydantic import BaseModel

from ..errors import ValidationError
from ..logs import LogContext
from ..security import require_admin
from ..services.utils import SQLITE_INT_MIN, SQLITE_INT_MAX
from ..services.question_svc import list_questions, create_question, update_question, delete_question

router = APIRouter()


class QuestionBody(BaseModel):
    text: str | None = None


@router.get("/api/questions")
def api_questions_list():
    return list_questions()


@router.post("/api/questions", dependencies=[Depends(require_admin)])
def api_question_create(body: QuestionBody):
    log = LogContext("QUESTION_CREATE")
    log.set_payload(body.model_dump())
    try:
        out = create_question(body.text, log)
        log.write("OK")
        return out
    except ValidationError as ve:
        log.write("ERROR", str(ve))
        raise HTTPException(status_code=400, detail=str(ve))


@router.put("/api/questions/{question_id}", dependencies=[Depends(require_admin)])
def api_question_update(body: QuestionBody, question_id: int = Path(..., ge=SQLITE_INT_MIN, le=SQLITE_INT_MAX)):
    log = LogContext("QUESTION_UPDATE")
    log.set_payload(body.model_dump())
    try:
        update_question(question_id, body.text, log)
        log.write("OK")
        return {"ok": True}
    except ValidationError as ve:
        log.write("ERROR", str(ve))
        raise HTTPException(status_code=400, detail=str(ve))


@router.delete("/api/questions/{question_id}", dependencies=[Depends(require_admin)])
def api_question_delete(question_id: int = Path(..., ge=SQLITE_INT_MIN, le=SQLITE_INT_MAX)):
    log = LogContext("QUESTION_DELETE")
    delete_question(question_id, log)
    log.write("OK")
    return {"ok": True}
