"""User store implementations.

Usage:
    from userapi.core.store import InMemoryUserStore, create_store
"""
from __future__ import annotations

from .base import UserStore
from .exceptions import StoreAPIError, StoreError, StoreNotFoundError
from .http import HttpUserStore
from .memory import InMemoryUserStore


def create_store(cfg) -> UserStore:
    """Build the store selected by ``cfg.user_store_backend``."""
    if cfg.user_store_backend == "http":
        return HttpUserStore(
            cfg.user_store_url,
            token=cfg.user_store_token or None,
            timeout=cfg.user_store_timeout,
        )
    return InMemoryUserStore(id_start=cfg.user_store_id_start)


__all__ = [
    "UserStore",
    "StoreError",
    "StoreNotFoundError",
    "StoreAPIError",
    "InMemoryUserStore",
    "HttpUserStore",
    "create_store",
]
