"""User resource endpoints.

Thin HTTP layer over UserService: extracts the ``id`` path parameter and the
JSON body, serializes the returned shapes, and maps UserApiError to status
codes.

    GET    /users         list (sorted by id)
    POST   /users         create (201 + Location)
    GET    /users/<id>    fetch
    PATCH  /users/<id>    partial update
    DELETE /users/<id>    delete (204)
"""

from __future__ import annotations
import logging
from flask import Blueprint, request, jsonify, current_app
from werkzeug.exceptions import BadRequest

from userapi.core.errors import MalformedRequestError, UserApiError
from userapi.core.user_service import UserService

bp = Blueprint("users", __name__)

logger = logging.getLogger(__name__)


def _service() -> UserService:
    return current_app.config["USER_SERVICE"]


def _correlation_id() -> str | None:
    return request.headers.get("X-Correlation-Id")


def _json_body():
    """Decode the request body regardless of Content-Type."""
    try:
        return request.get_json(force=True)
    except BadRequest:
        raise MalformedRequestError()


# ─────────────────────────────────────────────────────────────────────────────
# Error Handling
# ─────────────────────────────────────────────────────────────────────────────

@bp.errorhandler(UserApiError)
def handle_user_api_error(error: UserApiError):
    """Serialize UserApiError as ``{"code": ..., "message": ...}``."""
    logger.info("%s %s -> %s: %s", request.method, request.path, int(error.status), error.message)
    return jsonify(error.to_dict()), int(error.status)


@bp.after_request
def add_correlation_id(response):
    """Echo the correlation ID for tracing."""
    correlation_id = _correlation_id()
    if correlation_id:
        response.headers["X-Correlation-Id"] = correlation_id
    return response


# ─────────────────────────────────────────────────────────────────────────────
# User CRUD Operations
# ─────────────────────────────────────────────────────────────────────────────

@bp.route("/users", methods=["GET"])
def list_users():
    """List all users, ascending by id."""
    return jsonify(_service().list_users(_correlation_id())), 200


@bp.route("/users", methods=["POST"])
def create_user():
    """Create a user.

    Returns:
        201 Created with Location header and the user resource
    """
    user, location = _service().create_user(_json_body(), _correlation_id())
    response = jsonify(user)
    response.status_code = 201
    response.headers["Location"] = location
    return response


@bp.route("/users/<user_id>", methods=["GET"])
def get_user(user_id: str):
    """Retrieve one user by id."""
    return jsonify(_service().fetch_user(user_id, _correlation_id())), 200


@bp.route("/users/<user_id>", methods=["PATCH"])
def update_user(user_id: str):
    """Partially update a user."""
    user, location = _service().update_user(user_id, _json_body(), _correlation_id())
    response = jsonify(user)
    response.headers["Location"] = location
    return response, 200


@bp.route("/users/<user_id>", methods=["DELETE"])
def delete_user(user_id: str):
    """Delete a user.

    Returns:
        204 No Content
    """
    _service().delete_user(user_id, _correlation_id())
    return "", 204
