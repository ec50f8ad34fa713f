from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from ..errors import AuthError, ConfigError
from ..logs import LogContext
from ..security import SessionStore, get_session_store, require_admin
from ..services.admin_svc import login, logout

router = APIRouter()


class LoginBody(BaseModel):
    password: str | None = None


@router.post("/api/admin/login")
def api_admin_login(body: LoginBody, sessions: SessionStore = Depends(get_session_store)):
    log = LogContext("ADMIN_LOGIN")
    try:
        token = login(body.password, sessions, log)
        log.write("OK")
        return {"token": token}
    except AuthError as e:
        log.write("ERROR", str(e))
        raise HTTPException(status_code=401, detail=str(e))
    except ConfigError as e:
        log.write("ERROR", str(e))
        raise HTTPException(status_code=500, detail=str(e))


@router.post("/api/admin/logout")
def api_admin_logout(
    token: str = Depends(require_admin),
    sessions: SessionStore = Depends(get_session_store),
):
    log = LogContext("ADMIN_LOGOUT")
    logout(token, sessions, log)
    log.write("OK")
    return {"ok": True}
