from __future__ import annotations


class ValidationError(ValueError):
    """Missing or malformed client input (400)."""


class AuthError(Exception):
    """Bad credentials or a missing/expired session token (401)."""


class ConfigError(Exception):
    """Server side setup problem, e.g. the admin row is absent (500)."""
