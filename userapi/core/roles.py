"""Role vocabulary and role explication.

The vocabulary is closed: only ``Viewer``, ``Editor`` and ``Admin`` can be
requested through the API. ``SuperAdmin`` is named in the invalid-role
message but cannot be constructed here.

Usage:
    >>> [r.name for r in explicate_roles(["Viewer", "Admin"])]
    ['Viewer', 'Admin']
"""
from __future__ import annotations
from enum import Enum
from http import HTTPStatus
from typing import Iterable, List

from userapi.core.errors import InvalidRoleError
from userapi.core.models import Role


class RoleName(str, Enum):
    """Role names accepted on user requests."""
    VIEWER = "Viewer"
    EDITOR = "Editor"
    ADMIN = "Admin"


# Advertised in error messages only; not a member of RoleName
SUPER_ADMIN_ROLE_NAME = "SuperAdmin"

VALID_ROLE_NAMES = tuple(role.value for role in RoleName)

_ROLES_BY_NAME = {role.value: Role(name=role.value) for role in RoleName}


def invalid_role_message(name: str) -> str:
    """Build the error message for an unknown role, listing the valid names."""
    return (
        f"Unknown role {name}. Valid roles are 'Viewer', 'Editor', 'Admin', "
        f"and '{SUPER_ADMIN_ROLE_NAME}'"
    )


def is_valid_role_name(name: str) -> bool:
    """Return True iff ``name`` is one of Viewer, Editor, Admin."""
    return isinstance(name, str) and name in _ROLES_BY_NAME


def role_from_name(name: str) -> Role:
    """Resolve a role name to its Role record.

    Raises:
        InvalidRoleError: If the name is not in the vocabulary
    """
    if not is_valid_role_name(name):
        raise InvalidRoleError(name, invalid_role_message(name), HTTPStatus.BAD_REQUEST)
    return _ROLES_BY_NAME[name]


def explicate_roles(names: Iterable[str]) -> List[Role]:
    """Resolve role names into Role records, preserving input order.

    Args:
        names: Role names as submitted on the request

    Returns:
        One Role per name, in the same order (empty input gives empty list)

    Raises:
        InvalidRoleError: On the first unrecognized name
    """
    return [role_from_name(name) for name in names]
