import sys
import pytest
from pathlib import Path

# Ensure project root on sys.path
_THIS_DIR = Path(__file__).resolve().parent
_PROJECT_ROOT = _THIS_DIR.parent.parent
if str(_PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(_PROJECT_ROOT))


@pytest.fixture(autouse=True)
def _isolated_config(tmp_path, monkeypatch):
    # Never pick up a developer's config.yaml or users.db
    monkeypatch.setenv("PAGER_CONFIG", str(tmp_path / "no-config.yaml"))
    monkeypatch.delenv("PAGER_PORT", raising=False)
    monkeypatch.delenv("PAGER_LOG_LEVEL", raising=False)


@pytest.fixture()
def tmp_db_path(tmp_path, monkeypatch):
    path = tmp_path / "users_test.db"
    monkeypatch.setenv("PAGER_DB_PATH", str(path))
    return str(path)


@pytest.fixture()
def store(tmp_db_path):
    from pager.services.user_svc import UserStore
    s = UserStore.create(tmp_db_path)
    yield s
    s.close()


@pytest.fixture()
def client(tmp_db_path):
    # Import app after DB path is set so the startup hook opens the temp DB
    from pager.api import app
    from fastapi.testclient import TestClient
    with TestClient(app) as c:
        yield c


def make_user(name, age, country, degree=None, status=None, site=None):
    from pager.domain.models import User
    return User(id=None, name=name, age=age, country=country, degree=degree, status=status, site=site)


@pytest.fixture()
def seeded_store(store):
    store.insert(make_user("Alice", 30, "France", "MSc", "active", "alice.example"))
    store.insert(make_user("Bob", 25, "Spain", "BSc", "inactive", "bob.example"))
    store.insert(make_user("Chen", 41, "China", "PhD", "Active", None))
    store.insert(make_user("Dana", 25, "france", None, "pending", None))
    return store
