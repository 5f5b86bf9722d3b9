"""Settings loader with environment variable and Docker secrets integration."""
from __future__ import annotations
import logging
import os
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

STORE_BACKENDS = ("memory", "http")


def _load_secret_from_file(secret_name: str, env_var: str | None = None) -> str | None:
    """
    Load secret from /run/secrets (Docker secrets pattern).

    Priority:
    1. /run/secrets/{secret_name} (Docker secrets mount)
    2. Environment variable (fallback)

    Args:
        secret_name: Name of the secret file in /run/secrets
        env_var: Optional environment variable name to check as fallback

    Returns:
        Secret value or None if not found
    """
    secret_file = Path("/run/secrets") / secret_name

    if secret_file.exists() and secret_file.is_file():
        try:
            secret_value = secret_file.read_text().strip()
            if secret_value:
                logger.info("Loaded %s from /run/secrets", secret_name)
                return secret_value
        except OSError as e:
            logger.warning("Failed to read /run/secrets/%s: %s", secret_name, e)

    if env_var:
        secret_value = os.getenv(env_var)
        if secret_value:
            return secret_value

    return None


def _get_bool(var_name: str, default: bool = False) -> bool:
    return os.environ.get(var_name, str(default)).strip().lower() == "true"


def _get_int(var_name: str, default: int) -> int:
    raw = os.environ.get(var_name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        raise RuntimeError(f"Environment variable {var_name} must be an integer, got {raw!r}.")


def _get_float(var_name: str, default: float) -> float:
    raw = os.environ.get(var_name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError:
        raise RuntimeError(f"Environment variable {var_name} must be a number, got {raw!r}.")


@dataclass
class AppConfig:
    """Application configuration container."""
    # Mode
    demo_mode: bool = False

    # API
    api_base_path: str = "/api/v1"
    json_max_size_bytes: int = 65536

    # User store
    user_store_backend: str = "memory"
    user_store_url: str = ""
    user_store_token: str = ""
    user_store_timeout: float = 5.0
    user_store_id_start: int = 1

    # Logging / audit
    log_level: str = "INFO"
    audit_log_dir: str = ".runtime/audit"
    audit_log_signing_key: str = ""


def load_settings() -> AppConfig:
    """Load application settings from environment and /run/secrets."""
    demo_mode = _get_bool("DEMO_MODE")

    api_base_path = "/" + os.environ.get("API_BASE_PATH", "/api/v1").strip().strip("/")
    if api_base_path == "/":
        api_base_path = ""

    user_store_backend = os.environ.get("USER_STORE_BACKEND", "memory").strip().lower()
    if user_store_backend not in STORE_BACKENDS:
        raise RuntimeError(
            f"USER_STORE_BACKEND must be one of {', '.join(STORE_BACKENDS)}, got {user_store_backend!r}."
        )

    user_store_url = os.environ.get("USER_STORE_URL", "").strip()
    if user_store_backend == "http" and not user_store_url:
        if not demo_mode:
            raise RuntimeError("USER_STORE_URL is required when USER_STORE_BACKEND=http.")
        user_store_url = "http://127.0.0.1:8081"
        logger.info("[demo-mode] Using default USER_STORE_URL=%s", user_store_url)

    user_store_token = _load_secret_from_file("user_store_token", "USER_STORE_TOKEN") or ""

    audit_log_signing_key = _load_secret_from_file("audit_log_signing_key", "AUDIT_LOG_SIGNING_KEY") or ""
    if audit_log_signing_key:
        os.environ["AUDIT_LOG_SIGNING_KEY"] = audit_log_signing_key
    elif demo_mode:
        audit_log_signing_key = "demo-audit-signing-key-change-in-production"
        os.environ["AUDIT_LOG_SIGNING_KEY"] = audit_log_signing_key
        logger.warning("[demo-mode] Using demo AUDIT_LOG_SIGNING_KEY")

    log_level = os.environ.get("LOG_LEVEL", "INFO").strip().upper()
    if not isinstance(logging.getLevelName(log_level), int):
        raise RuntimeError(f"LOG_LEVEL {log_level!r} is not a valid logging level.")

    cfg = AppConfig(
        demo_mode=demo_mode,
        api_base_path=api_base_path,
        json_max_size_bytes=_get_int("JSON_MAX_SIZE_BYTES", 65536),
        user_store_backend=user_store_backend,
        user_store_url=user_store_url,
        user_store_token=user_store_token,
        user_store_timeout=_get_float("USER_STORE_TIMEOUT", 5.0),
        user_store_id_start=_get_int("USER_STORE_ID_START", 1),
        log_level=log_level,
        audit_log_dir=os.environ.get("AUDIT_LOG_DIR", ".runtime/audit"),
        audit_log_signing_key=audit_log_signing_key,
    )

    mode_label = "DEMO" if demo_mode else "PRODUCTION"
    logger.info("Mode=%s; base_path=%s; store=%s", mode_label, cfg.api_base_path, cfg.user_store_backend)
    return cfg
