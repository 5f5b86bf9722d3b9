"""Decoding and validation of user request payloads.

Optional fields are tri-state: ``ABSENT`` when the key was not sent (or sent
as ``null``), an empty value when sent empty, otherwise the value. An update
carrying ``"roles": []`` therefore clears the roles, while an update without
``roles`` leaves them alone.
"""
from __future__ import annotations
from dataclasses import dataclass
from http import HTTPStatus
from typing import Any, List, Union

from userapi.core.errors import (
    InvalidRoleError,
    MalformedRequestError,
    MissingFieldError,
    NoFieldsToUpdateError,
)
from userapi.core.roles import invalid_role_message, is_valid_role_name


class _Absent:
    """Marker for a field that was not sent."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "ABSENT"


ABSENT: Any = _Absent()

SCALAR_FIELDS = ("name", "provider", "scheme")


def is_present(value: Any) -> bool:
    """Return True if the field was sent, even as an empty value."""
    return value is not ABSENT


@dataclass
class UserRequest:
    """Partial user representation used for create and update."""
    name: Union[str, _Absent] = ABSENT
    provider: Union[str, _Absent] = ABSENT
    scheme: Union[str, _Absent] = ABSENT
    roles: Union[List[str], _Absent] = ABSENT

    @classmethod
    def from_payload(cls, payload: Any) -> "UserRequest":
        """Decode a JSON payload into a UserRequest.

        ``id`` must be a quoted decimal number when sent and is otherwise
        ignored; the path id is authoritative. Unknown keys are ignored.

        Raises:
            MalformedRequestError: If the payload is not an object or a field
                has the wrong JSON type
        """
        if not isinstance(payload, dict):
            raise MalformedRequestError()

        user_id = payload.get("id")
        if user_id is not None and not (
            isinstance(user_id, str) and user_id.isascii() and user_id.isdigit()
        ):
            raise MalformedRequestError()

        fields = {}
        for key in SCALAR_FIELDS:
            value = payload.get(key)
            if value is None:
                continue
            if not isinstance(value, str):
                raise MalformedRequestError()
            fields[key] = value

        roles = payload.get("roles")
        if roles is not None:
            if not isinstance(roles, list) or not all(isinstance(r, str) for r in roles):
                raise MalformedRequestError()
            fields["roles"] = list(roles)

        return cls(**fields)


def validate_roles(req: UserRequest) -> None:
    """Check every requested role name against the vocabulary."""
    if not req.roles:
        return
    for role in req.roles:
        if not is_valid_role_name(role):
            raise InvalidRoleError(role, invalid_role_message(role), HTTPStatus.UNPROCESSABLE_ENTITY)


def validate_for_create(req: UserRequest) -> None:
    """Validate a create request.

    ``name``, ``provider`` and ``scheme`` must be non-empty and are checked in
    that order; the first missing one is reported.

    Raises:
        MissingFieldError: On the first missing required field
        InvalidRoleError: If a role name is not in the vocabulary
    """
    for field in SCALAR_FIELDS:
        if not getattr(req, field):
            raise MissingFieldError(field)
    validate_roles(req)


def validate_for_update(req: UserRequest) -> None:
    """Validate an update request.

    Raises:
        NoFieldsToUpdateError: If no scalar field is non-empty and roles are absent
        InvalidRoleError: If a role name is not in the vocabulary
    """
    if not any(getattr(req, field) for field in SCALAR_FIELDS) and not is_present(req.roles):
        raise NoFieldsToUpdateError()
    validate_roles(req)
