"""Pytest shared fixtures."""
import pathlib
import sys
from unittest.mock import MagicMock

# Add project root to Python path
ROOT = pathlib.Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import pytest

from userapi.config import AppConfig
from userapi.core import audit
from userapi.core.models import Role, User
from userapi.core.store import InMemoryUserStore, StoreNotFoundError, UserStore
from userapi.core.user_service import UserService
from userapi.flask_app import create_app

BASE_PATH = "/chronograf/v1"


# ─────────────────────────────────────────────────────────────────────────────
# Audit isolation
# ─────────────────────────────────────────────────────────────────────────────
@pytest.fixture(autouse=True)
def _isolated_audit_dir(monkeypatch, tmp_path):
    """Keep audit events of every test inside its tmp_path."""
    audit_dir = tmp_path / "audit"
    monkeypatch.setattr(audit, "AUDIT_LOG_DIR", audit_dir)
    monkeypatch.setattr(audit, "AUDIT_LOG_FILE", audit_dir / "user-events.jsonl")
    monkeypatch.setattr(audit, "AUDIT_SIGNING_KEY", "")
    monkeypatch.setenv("AUDIT_LOG_SIGNING_KEY", "test-signing-key-for-audit-trail")
    return audit_dir


# ─────────────────────────────────────────────────────────────────────────────
# Stores and service
# ─────────────────────────────────────────────────────────────────────────────
@pytest.fixture
def mock_store():
    """UserStore double; configure return values/side effects per test."""
    store = MagicMock(spec=UserStore)
    store.get.side_effect = StoreNotFoundError("user not found")
    store.all.return_value = []
    return store


@pytest.fixture
def service(mock_store):
    return UserService(mock_store, base_path=BASE_PATH)


@pytest.fixture
def memory_store():
    return InMemoryUserStore(id_start=1337)


@pytest.fixture
def billysteve():
    return User(id=1337, name="billysteve", provider="Google", scheme="OAuth2", roles=[Role("Viewer")])


# ─────────────────────────────────────────────────────────────────────────────
# Flask Test Client
# ─────────────────────────────────────────────────────────────────────────────
@pytest.fixture
def app_config(tmp_path):
    return AppConfig(
        api_base_path=BASE_PATH,
        json_max_size_bytes=4096,
        audit_log_dir=str(tmp_path / "audit"),
    )


@pytest.fixture
def flask_app(app_config, memory_store):
    flask_app = create_app(app_config, store=memory_store)
    flask_app.config.update(TESTING=True)
    return flask_app


@pytest.fixture
def client(flask_app):
    with flask_app.test_client() as client:
        yield client


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests (requires running stack)"
    )
