from __future__ import annotations

# survey_backend/services/utils.py
import re

from ..errors import ValidationError

# SQLite INTEGER 是有符号 64 位
SQLITE_INT_MIN = -(2 ** 63)
SQLITE_INT_MAX = 2 ** 63 - 1

_INT_KEY = re.compile(r"0|-?[1-9][0-9]*")


def require_text(value, field: str) -> str:
    """Trimmed non-empty string or ValidationError('<field> is required')."""
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{field} is required")
    return value.strip()


def parse_id_key(key) -> int | None:
    """Plain decimal string within SQLite's integer range, else None.

    ASCII digits only, no whitespace, "+", "_" or leading zeros, so one id
    has exactly one spelling.
    """
    if not isinstance(key, str) or not _INT_KEY.fullmatch(key):
        return None
    n = int(key)
    if not SQLITE_INT_MIN <= n <= SQLITE_INT_MAX:
        return None
    return n
