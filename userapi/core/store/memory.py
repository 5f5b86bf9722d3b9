"""Thread-safe in-memory user store."""
from __future__ import annotations
import copy
import logging
import threading
from typing import Dict, List

from .base import UserStore
from .exceptions import StoreError, StoreNotFoundError
from userapi.core.models import RequestContext, User

logger = logging.getLogger(__name__)


class InMemoryUserStore(UserStore):
    """Keeps users in a dict keyed by id.

    Records are copied on the way in and out so callers never hold a
    reference to stored state.
    """

    def __init__(self, id_start: int = 1):
        self._users: Dict[int, User] = {}
        self._next_id = id_start
        self._lock = threading.RLock()

    @staticmethod
    def _parse_id(user_id) -> int:
        try:
            return int(user_id)
        except (TypeError, ValueError):
            raise StoreError(f"invalid user id '{user_id}'")

    def get(self, ctx: RequestContext, user_id: str) -> User:
        key = self._parse_id(user_id)
        with self._lock:
            user = self._users.get(key)
            if user is None:
                raise StoreNotFoundError(f"user {key} not found")
            return copy.deepcopy(user)

    def add(self, ctx: RequestContext, user: User) -> User:
        with self._lock:
            stored = copy.deepcopy(user)
            stored.id = self._next_id
            self._next_id += 1
            self._users[stored.id] = stored
            logger.debug("Stored user %s (correlation_id=%s)", stored.id, ctx.correlation_id)
            return copy.deepcopy(stored)

    def update(self, ctx: RequestContext, user: User) -> None:
        with self._lock:
            if user.id not in self._users:
                raise StoreNotFoundError(f"user {user.id} not found")
            self._users[user.id] = copy.deepcopy(user)

    def delete(self, ctx: RequestContext, user: User) -> None:
        with self._lock:
            if self._users.pop(user.id, None) is None:
                raise StoreNotFoundError(f"user {user.id} not found")

    def all(self, ctx: RequestContext) -> List[User]:
        with self._lock:
            return [copy.deepcopy(user) for user in self._users.values()]
