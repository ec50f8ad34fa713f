from __future__ import annotations

# survey_backend/config.py
import os
from dataclasses import dataclass

import yaml

# 配置读取顺序：
# 1) 环境变量（最高优先级）
# 2) 项目根目录 config.yaml
# 3) 代码内默认值
_PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))

DEFAULTS = {
    "port": "3001",
    "allowed_origin": "*",
    "admin_password": "admin123",
    "session_ttl_seconds": "86400",
    "bcrypt_rounds": "12",
    "log_level": "INFO",
}

_ENV_KEYS = {
    "port": "PORT",
    "allowed_origin": "ALLOWED_ORIGIN",
    "db_path": "DB_PATH",
    "admin_password": "ADMIN_PASSWORD",
    "session_ttl_seconds": "SESSION_TTL_SECONDS",
    "bcrypt_rounds": "BCRYPT_ROUNDS",
    "log_level": "LOG_LEVEL",
}


@dataclass(frozen=True)
class Settings:
    port: int
    allowed_origin: str
    db_path: str
    admin_password: str
    session_ttl_seconds: int
    bcrypt_rounds: int
    log_level: str


def _read_config_yaml() -> dict:
    cfg_path = os.environ.get("SURVEY_CONFIG") or os.path.join(_PROJECT_ROOT, "config.yaml")
    if not os.path.exists(cfg_path):
        return {}
    with open(cfg_path, "r", encoding="utf-8") as f:
        cfg = yaml.safe_load(f) or {}
    if not isinstance(cfg, dict):
        raise ValueError(f"config file {cfg_path} must contain a mapping")
    return {k: str(v).strip() for k, v in cfg.items() if k in _ENV_KEYS and v is not None}


def _lookup(key: str, cfg: dict) -> str | None:
    v = os.environ.get(_ENV_KEYS[key])
    if v is not None and v.strip():
        return v.strip()
    if cfg.get(key):
        return cfg[key]
    return DEFAULTS.get(key)


def get_db_path() -> str:
    path = _lookup("db_path", _read_config_yaml()) or os.path.join(_PROJECT_ROOT, "survey.db")
    # 确保目录存在
    dirn = os.path.dirname(path) or "."
    os.makedirs(dirn, exist_ok=True)
    return path


def get_settings() -> Settings:
    """Read settings fresh on every call; env changes take effect immediately."""
    cfg = _read_config_yaml()
    return Settings(
        port=int(_lookup("port", cfg)),
        allowed_origin=_lookup("allowed_origin", cfg),
        db_path=get_db_path(),
        admin_password=_lookup("admin_password", cfg),
        session_ttl_seconds=int(_lookup("session_ttl_seconds", cfg)),
        bcrypt_rounds=int(_lookup("bcrypt_rounds", cfg)),
        log_level=_lookup("log_level", cfg).upper(),
    )
