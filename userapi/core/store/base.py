"""User store capability consumed by the user service."""
from __future__ import annotations
from abc import ABC, abstractmethod
from typing import List

from userapi.core.models import RequestContext, User


class UserStore(ABC):
    """Backing store of record for users.

    Implementations raise ``StoreNotFoundError`` for unknown ids and
    ``StoreError`` for any other failure.
    """

    @abstractmethod
    def get(self, ctx: RequestContext, user_id: str) -> User:
        """Return the user with ``user_id`` (as received on the path)."""

    @abstractmethod
    def add(self, ctx: RequestContext, user: User) -> User:
        """Persist a new user and return it with its assigned id."""

    @abstractmethod
    def update(self, ctx: RequestContext, user: User) -> None:
        """Replace the stored user having ``user.id``."""

    @abstractmethod
    def delete(self, ctx: RequestContext, user: User) -> None:
        """Remove the stored user having ``user.id``."""

    @abstractmethod
    def all(self, ctx: RequestContext) -> List[User]:
        """Return every stored user, in no particular order."""
