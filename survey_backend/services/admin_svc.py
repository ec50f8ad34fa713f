from __future__ import annotations

# survey_backend/services/admin_svc.py
import logging

from ..db import get_conn
from ..errors import AuthError, ConfigError
from ..logs import LogContext
from ..repository import admin_repo
from ..security import SessionStore, hash_password, verify_password

logger = logging.getLogger(__name__)


def seed_admin(default_password: str, rounds: int) -> bool:
    """Insert the admin row from the configured password if none exists yet."""
    with get_conn() as conn:
        if admin_repo.get_password_hash(conn) is not None:
            return False
        admin_repo.insert_if_absent(conn, hash_password(default_password, rounds))
    logger.info("admin credential seeded from configuration")
    return True


def login(password, sessions: SessionStore, log: LogContext) -> str:
    with get_conn() as conn:
        stored = admin_repo.get_password_hash(conn)
    if stored is None:
        raise ConfigError("Admin not configured")
    if not isinstance(password, str) or not verify_password(password, stored):
        raise AuthError("Invalid password")
    token = sessions.issue()
    log.set_entity("session", None)
    log.set_after({"active_sessions": len(sessions)})
    return token


def logout(token: str, sessions: SessionStore, log: LogContext) -> None:
    sessions.revoke(token)
    log.set_entity("session", None)
    log.set_after({"active_sessions": len(sessions)})


def reset_password(new_password: str, rounds: int, log: LogContext) -> None:
    """覆盖 admin 密码哈希（不存在则创建）。已签发的会话令牌不受影响。"""
    with get_conn() as conn:
        existed = admin_repo.get_password_hash(conn) is not None
        admin_repo.upsert_password_hash(conn, hash_password(new_password, rounds))
    log.set_entity("admin", 1)
    log.set_before({"existed": existed})
