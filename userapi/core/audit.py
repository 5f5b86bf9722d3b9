"""Audit logging for user mutations (create, update, delete)."""

from __future__ import annotations
import datetime
import hashlib
import hmac
import json
import logging
import os
from pathlib import Path
from typing import Any, Literal

AUDIT_LOG_DIR = Path(os.environ.get("AUDIT_LOG_DIR", ".runtime/audit"))
AUDIT_LOG_FILE = AUDIT_LOG_DIR / "user-events.jsonl"
AUDIT_SIGNING_KEY = ""

logger = logging.getLogger(__name__)

EventType = Literal["user_create", "user_update", "user_delete"]


def configure(log_dir: str | Path, signing_key: str | None = None) -> None:
    """Point the audit trail at ``log_dir`` and optionally set its signing key.

    An empty ``signing_key`` falls back to ``AUDIT_LOG_SIGNING_KEY`` from the
    environment.
    """
    global AUDIT_LOG_DIR, AUDIT_LOG_FILE, AUDIT_SIGNING_KEY
    AUDIT_LOG_DIR = Path(log_dir)
    AUDIT_LOG_FILE = AUDIT_LOG_DIR / "user-events.jsonl"
    AUDIT_SIGNING_KEY = (signing_key or "").strip()


def _get_signing_key() -> bytes:
    """Get the configured audit signing key, else the environment one (read lazily)."""
    if AUDIT_SIGNING_KEY:
        return AUDIT_SIGNING_KEY.encode("utf-8")
    return os.environ.get("AUDIT_LOG_SIGNING_KEY", "").strip().encode("utf-8")


def _ensure_audit_dir() -> None:
    """Create audit directory with restricted permissions."""
    AUDIT_LOG_DIR.mkdir(parents=True, exist_ok=True)
    AUDIT_LOG_DIR.chmod(0o700)


def _sign_event(event: dict[str, Any]) -> str:
    """Generate HMAC-SHA256 signature for audit event."""
    signing_key = _get_signing_key()
    if not signing_key:
        return ""
    canonical = json.dumps(event, sort_keys=True, separators=(",", ":"))
    return hmac.new(signing_key, canonical.encode("utf-8"), hashlib.sha256).hexdigest()


def log_user_event(
    event_type: EventType,
    user_id: int | str | None,
    *,
    operator: str = "api",
    details: dict[str, Any] | None = None,
    success: bool = True,
) -> None:
    """Append a user event to the audit trail with timestamp and signature.

    Args:
        event_type: Mutation performed
        user_id: Id of the affected user
        operator: Who performed the operation
        details: Additional context (name, roles, correlation id)
        success: Whether the operation succeeded
    """
    _ensure_audit_dir()

    event = {
        "timestamp": datetime.datetime.now(datetime.timezone.utc).isoformat(),
        "event_type": event_type,
        "user_id": None if user_id is None else str(user_id),
        "operator": operator,
        "success": success,
        "details": details or {},
    }

    signature = _sign_event(event)
    if signature:
        event["signature"] = signature

    with AUDIT_LOG_FILE.open("a", encoding="utf-8") as f:
        f.write(json.dumps(event, ensure_ascii=False) + "\n")

    AUDIT_LOG_FILE.chmod(0o600)


def safe_log_user_event(
    event_type: EventType,
    user_id: int | str | None,
    *,
    operator: str = "api",
    details: dict[str, Any] | None = None,
    success: bool = True,
) -> bool:
    """Log a user event, reporting audit failures instead of raising.

    Returns:
        True if the event was written, False otherwise
    """
    try:
        log_user_event(event_type, user_id, operator=operator, details=details, success=success)
        return True
    except OSError as exc:
        logger.warning("Failed to write %s audit event for user %s: %s", event_type, user_id, exc)
        return False


def verify_audit_log() -> tuple[int, int]:
    """Verify all signatures in the audit log.

    Returns:
        Tuple of (total_events, valid_signatures)
    """
    if not AUDIT_LOG_FILE.exists():
        return 0, 0

    total = 0
    valid = 0

    with AUDIT_LOG_FILE.open("r", encoding="utf-8") as f:
        for line in f:
            if not line.strip():
                continue
            total += 1
            try:
                event = json.loads(line)
            except json.JSONDecodeError:
                continue
            stored_sig = event.pop("signature", "")
            if stored_sig and hmac.compare_digest(stored_sig, _sign_event(event)):
                valid += 1

    return total, valid
