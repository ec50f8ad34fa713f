"""
Admin authentication: bcrypt password hashing and in-memory session tokens.

Login checks the plaintext password against the bcrypt hash stored in the
``admin`` table and mints an opaque random token.  Tokens live in a
``SessionStore`` owned by the application (``app.state.sessions``) and
expire after ``session_ttl_seconds``.  Nothing is persisted, so a restart
logs every admin out.
"""
from __future__ import annotations

import secrets
import threading
import time
from typing import Callable

import bcrypt
from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

# bcrypt only looks at the first 72 bytes and newer releases refuse longer input
BCRYPT_MAX_BYTES = 72


def hash_password(password: str, rounds: int = 12) -> str:
    raw = password.encode("utf-8")
    if not raw:
        raise ValueError("password must not be empty")
    if len(raw) > BCRYPT_MAX_BYTES:
        raise ValueError(f"password longer than {BCRYPT_MAX_BYTES} bytes")
    return bcrypt.hashpw(raw, bcrypt.gensalt(rounds=rounds)).decode("ascii")


def verify_password(plain_password: str, password_hash: str) -> bool:
    raw = plain_password.encode("utf-8")
    if not raw or len(raw) > BCRYPT_MAX_BYTES:
        return False
    try:
        return bcrypt.checkpw(raw, password_hash.encode("ascii"))
    except ValueError:
        # malformed stored hash
        return False


class SessionStore:
    """Process-local set of admin tokens, each with an absolute expiry.

    Expired tokens are dropped when looked up and whenever a new token is
    issued, so the map holds at most the tokens of one TTL window.
    """

    def __init__(self, ttl_seconds: int = 86400, clock: Callable[[], float] = time.monotonic):
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._expires: dict[str, float] = {}
        self._lock = threading.Lock()

    def issue(self) -> str:
        token = secrets.token_hex(32)
        now = self._clock()
        with self._lock:
            dead = [t for t, exp in self._expires.items() if now >= exp]
            for t in dead:
                del self._expires[t]
            self._expires[token] = now + self.ttl_seconds
        return token

    def is_valid(self, token: str | None) -> bool:
        if not token:
            return False
        with self._lock:
            exp = self._expires.get(token)
            if exp is None:
                return False
            if self._clock() >= exp:
                del self._expires[token]
                return False
            return True

    def revoke(self, token: str) -> bool:
        with self._lock:
            return self._expires.pop(token, None) is not None

    def __len__(self) -> int:
        with self._lock:
            return len(self._expires)


_bearer = HTTPBearer(auto_error=False)


def get_session_store(request: Request) -> SessionStore:
    return request.app.state.sessions


def require_admin(
    credentials: HTTPAuthorizationCredentials | None = Depends(_bearer),
    sessions: SessionStore = Depends(get_session_store),
) -> str:
    """FastAPI dependency guarding admin routes; returns the presented token."""
    token = credentials.credentials if credentials else None
    if not sessions.is_valid(token):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized")
    return token
