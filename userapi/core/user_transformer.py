"""User record → API representation.

Usage:
    resource = UserTransformer.user_to_resource(user, base_path="/api/v1")
    collection = UserTransformer.users_to_collection(users, base_path="/api/v1")
"""
from __future__ import annotations
from typing import Any, Dict, Iterable

from userapi.core.models import User

DEFAULT_BASE_PATH = "/api/v1"


def collection_location(base_path: str = DEFAULT_BASE_PATH) -> str:
    """Return the self link of the users collection."""
    return f"{base_path.rstrip('/')}/users"


def user_location(user_id: int, base_path: str = DEFAULT_BASE_PATH) -> str:
    """Return the self link of one user."""
    return f"{collection_location(base_path)}/{user_id}"


class UserTransformer:
    """Builds response shapes for users and user collections."""

    @staticmethod
    def user_to_resource(user: User, base_path: str = DEFAULT_BASE_PATH) -> Dict[str, Any]:
        """Convert a user to its API representation.

        The id is rendered as a string to avoid precision loss in JSON clients.

        Example:
            >>> from userapi.core.models import Role
            >>> UserTransformer.user_to_resource(
            ...     User(id=1337, name="billysteve", provider="Google",
            ...          scheme="OAuth2", roles=[Role("Viewer")]))["links"]
            {'self': '/api/v1/users/1337'}
        """
        return {
            "id": str(user.id),
            "name": user.name,
            "provider": user.provider,
            "scheme": user.scheme,
            "roles": [role.name for role in user.roles],
            "links": {"self": user_location(user.id, base_path)},
        }

    @staticmethod
    def users_to_collection(users: Iterable[User], base_path: str = DEFAULT_BASE_PATH) -> Dict[str, Any]:
        """Convert users to the collection envelope, sorted ascending by id."""
        resources = [UserTransformer.user_to_resource(user, base_path) for user in users]
        resources.sort(key=lambda resource: int(resource["id"]))
        return {
            "users": resources,
            "links": {"self": collection_location(base_path)},
        }
