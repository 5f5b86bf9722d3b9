"""Health check endpoints."""
import logging

from flask import Blueprint, current_app

from userapi.core.models import RequestContext
from userapi.core.store import StoreError

bp = Blueprint("health", __name__)

logger = logging.getLogger(__name__)


@bp.route("/health")
def health_check():
    """Basic health check endpoint."""
    return ("ok", 200, {"Content-Type": "text/plain"})


@bp.route("/ready")
def readiness_check():
    """Readiness check: the user store must answer a listing."""
    store = current_app.config["USER_STORE"]
    try:
        store.all(RequestContext(correlation_id="readiness"))
    except StoreError as exc:
        logger.warning("Readiness check failed: %s", exc)
        return ("store unavailable", 503, {"Content-Type": "text/plain"})
    return ("ready", 200, {"Content-Type": "text/plain"})
