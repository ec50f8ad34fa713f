from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Path
from pydantic import BaseModel

from ..errors import ValidationError
from ..logs import LogContext
from ..security import require_admin
from ..services.utils import SQLITE_INT_MIN, SQLITE_INT_MAX
from ..services.response_svc import (
    submit_response,
    list_responses,
    leaderboard,
    delete_response,
)

router = APIRouter()


class ResponseSubmit(BaseModel):
    name: str | None = None
    answers: Any = None


@router.post("/api/responses")
def api_response_submit(body: ResponseSubmit):
    try:
        return submit_response(body.name, body.answers)
    except ValidationError as ve:
        raise HTTPException(status_code=400, detail=str(ve))


@router.get("/api/responses", dependencies=[Depends(require_admin)])
def api_responses_list():
    return list_responses()


@router.delete("/api/responses/{response_id}", dependencies=[Depends(require_admin)])
def api_response_delete(response_id: int = Path(..., ge=SQLITE_INT_MIN, le=SQLITE_INT_MAX)):
    log = LogContext("RESPONSE_DELETE")
    delete_response(response_id, log)
    log.write("OK")
    return {"ok": True}


@router.get("/api/leaderboard")
def api_leaderboard():
    return leaderboard()
