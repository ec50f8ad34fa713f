from __future__ import annotations

# survey_backend/services/bootstrap_svc.py
import logging

from ..config import Settings
from ..db import get_conn
from ..logs import ensure_log_schema
from ..repository import question_repo, response_repo, answer_repo, admin_repo
from .admin_svc import seed_admin
from .question_svc import seed_default_questions

logger = logging.getLogger(__name__)


def ensure_schema():
    with get_conn() as conn:
        question_repo.ensure_schema(conn)
        response_repo.ensure_schema(conn)
        answer_repo.ensure_schema(conn)
        admin_repo.ensure_schema(conn)
    ensure_log_schema()


def init_db(settings: Settings):
    """Create tables if missing, then seed admin and default questions.

    Any failure here propagates: the server must not start half initialised.
    """
    logger.info("initialising database at %s", settings.db_path)
    ensure_schema()
    seed_admin(settings.admin_password, settings.bcrypt_rounds)
    seed_default_questions()
