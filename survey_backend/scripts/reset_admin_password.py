"""
Overwrite the stored admin password hash.

Creates the admin row when it is missing. Sessions already issued by a
running server stay valid until they expire or the server restarts.

Usage:
  python -m survey_backend.scripts.reset_admin_password --password NEWPASS
"""
from __future__ import annotations

import argparse
import getpass

from survey_backend.config import get_settings
from survey_backend.logs import LogContext
from survey_backend.services.bootstrap_svc import ensure_schema
from survey_backend.services.admin_svc import reset_password


def main(argv=None):
    ap = argparse.ArgumentParser(description=__doc__, formatter_class=argparse.RawDescriptionHelpFormatter)
    ap.add_argument("--password", help="new admin password; prompted for when omitted")
    args = ap.parse_args(argv)

    password = args.password or getpass.getpass("New admin password: ")
    if not password:
        ap.error("password must not be empty")

    settings = get_settings()
    ensure_schema()
    log = LogContext("ADMIN_PASSWORD_RESET", user="cli")
    try:
        reset_password(password, settings.bcrypt_rounds, log)
    except ValueError as e:
        log.write("ERROR", str(e))
        ap.error(str(e))
    log.write("OK")
    print({"message": "ok", "db_path": settings.db_path})


if __name__ == "__main__":
    main()
