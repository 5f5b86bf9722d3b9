import pytest

from userapi.config import settings
from userapi.config.settings import load_settings

ENV_VARS = [
    "DEMO_MODE",
    "API_BASE_PATH",
    "USER_STORE_BACKEND",
    "USER_STORE_URL",
    "USER_STORE_TOKEN",
    "USER_STORE_TIMEOUT",
    "USER_STORE_ID_START",
    "JSON_MAX_SIZE_BYTES",
    "LOG_LEVEL",
    "AUDIT_LOG_DIR",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    for var in ENV_VARS:
        monkeypatch.delenv(var, raising=False)
    monkeypatch.delenv("AUDIT_LOG_SIGNING_KEY", raising=False)
    # No /run/secrets during tests
    monkeypatch.setattr(settings, "Path", lambda value: tmp_path / "no-secrets", raising=False)


def test_defaults():
    cfg = load_settings()
    assert cfg.demo_mode is False
    assert cfg.api_base_path == "/api/v1"
    assert cfg.user_store_backend == "memory"
    assert cfg.user_store_id_start == 1
    assert cfg.json_max_size_bytes == 65536
    assert cfg.log_level == "INFO"


def test_base_path_is_normalized(monkeypatch):
    monkeypatch.setenv("API_BASE_PATH", "chronograf/v1/")
    assert load_settings().api_base_path == "/chronograf/v1"


def test_http_backend_requires_url(monkeypatch):
    monkeypatch.setenv("USER_STORE_BACKEND", "http")
    with pytest.raises(RuntimeError, match="USER_STORE_URL"):
        load_settings()


def test_http_backend_demo_default_url(monkeypatch):
    monkeypatch.setenv("USER_STORE_BACKEND", "http")
    monkeypatch.setenv("DEMO_MODE", "true")
    cfg = load_settings()
    assert cfg.user_store_url == "http://127.0.0.1:8081"
    assert cfg.audit_log_signing_key


def test_unknown_backend(monkeypatch):
    monkeypatch.setenv("USER_STORE_BACKEND", "postgres")
    with pytest.raises(RuntimeError, match="USER_STORE_BACKEND"):
        load_settings()


@pytest.mark.parametrize("var", ["USER_STORE_ID_START", "JSON_MAX_SIZE_BYTES", "USER_STORE_TIMEOUT"])
def test_non_numeric_values(monkeypatch, var):
    monkeypatch.setenv(var, "lots")
    with pytest.raises(RuntimeError, match=var):
        load_settings()


def test_invalid_log_level(monkeypatch):
    monkeypatch.setenv("LOG_LEVEL", "chatty")
    with pytest.raises(RuntimeError, match="LOG_LEVEL"):
        load_settings()


def test_store_token_from_env(monkeypatch):
    monkeypatch.setenv("USER_STORE_TOKEN", "tok")
    assert load_settings().user_store_token == "tok"


def test_load_secret_from_file_reads_disk(monkeypatch, tmp_path):
    secrets_dir = tmp_path / "run_secrets"
    secrets_dir.mkdir()
    (secrets_dir / "user_store_token").write_text("from-file\n", encoding="utf-8")

    monkeypatch.setattr(settings, "Path", lambda value: secrets_dir, raising=False)
    monkeypatch.setenv("USER_STORE_TOKEN", "from-env")

    assert settings._load_secret_from_file("user_store_token", "USER_STORE_TOKEN") == "from-file"
