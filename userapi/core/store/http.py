"""User store backed by a remote REST service.

The remote service exposes ``/users`` and ``/users/<id>`` and speaks the same
JSON user shape as this API (``id`` may be a string or a number).
"""
from __future__ import annotations
import logging
from typing import Any, Dict, List, Optional

import requests

from .base import UserStore
from .exceptions import StoreAPIError, StoreError, StoreNotFoundError
from userapi.core.models import RequestContext, Role, User

REQUEST_TIMEOUT = 5

logger = logging.getLogger(__name__)


def user_from_json(data: Dict[str, Any]) -> User:
    """Convert a remote user document to a User.

    Raises:
        StoreError: If the document is not a JSON object or has a bad id or roles
    """
    if not isinstance(data, dict):
        raise StoreError("remote store returned an unexpected user payload")
    roles = data.get("roles") or []
    if not isinstance(roles, list) or not all(isinstance(name, str) for name in roles):
        raise StoreError(f"remote store returned invalid roles {data.get('roles')!r}")
    try:
        user_id = int(data["id"]) if data.get("id") is not None else None
    except (TypeError, ValueError):
        raise StoreError(f"remote store returned invalid id {data.get('id')!r}")
    return User(
        id=user_id,
        name=data.get("name") or "",
        provider=data.get("provider") or "",
        scheme=data.get("scheme") or "",
        roles=[Role(name=name) for name in roles],
    )


def user_to_json(user: User) -> Dict[str, Any]:
    """Convert a User to the remote user document."""
    doc = {
        "name": user.name,
        "provider": user.provider,
        "scheme": user.scheme,
        "roles": [role.name for role in user.roles],
    }
    if user.id is not None:
        doc["id"] = str(user.id)
    return doc


class HttpUserStore(UserStore):
    """HTTP client for a remote user store.

    Usage:
        store = HttpUserStore("http://users-db:8081", token="secret")
        users = store.all(RequestContext())
    """

    def __init__(self, base_url: str, token: Optional[str] = None, timeout: float = REQUEST_TIMEOUT):
        self.base_url = base_url.rstrip("/")
        self.token = token
        self.timeout = timeout

    def _headers(self, ctx: RequestContext) -> Dict[str, str]:
        headers = {"Accept": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        if ctx.correlation_id:
            headers["X-Correlation-Id"] = ctx.correlation_id
        return headers

    def _request(self, method: str, ctx: RequestContext, path: str, **kwargs) -> requests.Response:
        url = f"{self.base_url}{path}"
        try:
            resp = getattr(requests, method)(url, headers=self._headers(ctx), timeout=self.timeout, **kwargs)
        except requests.RequestException as exc:
            logger.warning("User store %s %s failed: %s", method.upper(), url, exc)
            raise StoreError(f"user store unreachable: {exc}") from exc
        self._handle_error(resp, url)
        return resp

    def _handle_error(self, resp: requests.Response, url: str) -> None:
        """Centralized error handling for HTTP responses.

        Raises:
            StoreNotFoundError: On 404
            StoreAPIError: On any other error status
        """
        if resp.status_code == 404:
            raise StoreNotFoundError(resp.text or f"{url} not found")
        if resp.status_code >= 400:
            raise StoreAPIError(resp.status_code, resp.text, url)

    @staticmethod
    def _json(resp: requests.Response) -> Any:
        try:
            return resp.json()
        except ValueError as exc:
            raise StoreError(f"remote store returned invalid JSON: {exc}") from exc

    @staticmethod
    def _user_path(user_id) -> str:
        # Only numeric ids reach the remote URL
        text = str(user_id)
        if not (text.isascii() and text.isdigit()):
            raise StoreError(f"invalid user id '{user_id}'")
        return f"/users/{int(text)}"

    def get(self, ctx: RequestContext, user_id: str) -> User:
        resp = self._request("get", ctx, self._user_path(user_id))
        return user_from_json(self._json(resp))

    def add(self, ctx: RequestContext, user: User) -> User:
        resp = self._request("post", ctx, "/users", json=user_to_json(user))
        return user_from_json(self._json(resp))

    def update(self, ctx: RequestContext, user: User) -> None:
        self._request("put", ctx, self._user_path(user.id), json=user_to_json(user))

    def delete(self, ctx: RequestContext, user: User) -> None:
        self._request("delete", ctx, self._user_path(user.id))

    def all(self, ctx: RequestContext) -> List[User]:
        resp = self._request("get", ctx, "/users")
        body = self._json(resp)
        # Accept either a bare list or the collection envelope
        if isinstance(body, dict):
            body = body.get("users", [])
        if not isinstance(body, list):
            raise StoreError("remote store returned an unexpected users payload")
        return [user_from_json(item) for item in body]
