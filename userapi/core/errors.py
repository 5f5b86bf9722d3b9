"""API-visible error types for user operations.

Every failure surfaced by the user service is a ``UserApiError`` carrying the
HTTP status the transport layer should answer with and a human-readable
message. The blueprint converts them with ``to_dict()``.
"""
from __future__ import annotations
from http import HTTPStatus


class UserApiError(Exception):
    """User API error with HTTP status and message."""

    status: int = HTTPStatus.BAD_REQUEST

    def __init__(self, message: str, status: int | None = None):
        if status is not None:
            self.status = status
        self.message = message
        super().__init__(message)

    def to_dict(self) -> dict:
        """Convert to the JSON error body (``{"code": ..., "message": ...}``)."""
        return {"code": int(self.status), "message": self.message}


class MalformedRequestError(UserApiError):
    """Request body could not be decoded into a user request."""

    def __init__(self, message: str = "Unparsable JSON"):
        super().__init__(message)


class ValidationError(UserApiError):
    """Request body decoded but violates create/update rules."""

    status = HTTPStatus.UNPROCESSABLE_ENTITY


class MissingFieldError(ValidationError):
    """A field required on create is missing or empty."""

    def __init__(self, field: str):
        self.field = field
        super().__init__(f"{field.capitalize()} required on User request body")


class NoFieldsToUpdateError(ValidationError):
    """An update request carries nothing to change."""

    def __init__(self):
        super().__init__("No fields to update")


class InvalidRoleError(ValidationError):
    """A role name outside the role vocabulary was requested.

    Raised with 422 by request validation and with 400 by role explication.
    """

    def __init__(self, role: str, message: str, status: int | None = None):
        self.role = role
        super().__init__(message, status)


class UserNotFoundError(UserApiError):
    """The store could not locate the identified user."""

    status = HTTPStatus.NOT_FOUND


class StoreFailureError(UserApiError):
    """Any other store-layer failure (connectivity, constraint violation)."""
