import sys
import pytest
from pathlib import Path

# Ensure project root on sys.path
_THIS_DIR = Path(__file__).resolve().parent
_PROJECT_ROOT = _THIS_DIR.parent.parent
if str(_PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(_PROJECT_ROOT))

ADMIN_PASSWORD = "s3cret-pass"


@pytest.fixture()
def tmp_db_path(tmp_path, monkeypatch):
    path = tmp_path / "survey_test.db"
    # Point the backend to a fresh temp DB per test; never read a real config.yaml
    monkeypatch.setenv("DB_PATH", str(path))
    monkeypatch.setenv("SURVEY_CONFIG", str(tmp_path / "absent.yaml"))
    monkeypatch.setenv("ADMIN_PASSWORD", ADMIN_PASSWORD)
    monkeypatch.setenv("BCRYPT_ROUNDS", "4")
    return str(path)


@pytest.fixture()
def app(tmp_db_path):
    from survey_backend.api import create_app
    return create_app()


@pytest.fixture()
def client(app):
    # Context manager runs startup hooks: schema + seeding
    from fastapi.testclient import TestClient
    with TestClient(app) as c:
        yield c


@pytest.fixture()
def auth(client):
    r = client.post("/api/admin/login", json={"password": ADMIN_PASSWORD})
    assert r.status_code == 200, r.text
    return {"Authorization": f"Bearer {r.json()['token']}"}
