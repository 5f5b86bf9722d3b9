"""
User Service Layer — fetch, create, update, delete and list users.

Sits between the HTTP blueprint and the user store:

    /users (blueprint) ──> UserService ──> UserStore (memory | http)

Every operation either returns a response shape built by UserTransformer or
raises a UserApiError subclass carrying the status the transport should use.
Store failures are surfaced immediately; there is no retry.
"""

from __future__ import annotations
import logging
from http import HTTPStatus
from typing import Any, Dict, Optional, Tuple

from userapi.core import audit
from userapi.core.errors import (
    InvalidRoleError,
    StoreFailureError,
    UserApiError,
    UserNotFoundError,
)
from userapi.core.models import RequestContext, User
from userapi.core.roles import explicate_roles
from userapi.core.store import StoreError, StoreNotFoundError, UserStore
from userapi.core.user_transformer import DEFAULT_BASE_PATH, UserTransformer
from userapi.core.validators import (
    UserRequest,
    is_present,
    validate_for_create,
    validate_for_update,
)

logger = logging.getLogger(__name__)


class UserService:
    """Stateless controller for user resources.

    Args:
        store: Store of record
        base_path: API prefix used to build self links
    """

    def __init__(self, store: UserStore, base_path: str = DEFAULT_BASE_PATH):
        self.store = store
        self.base_path = base_path

    def _context(self, correlation_id: Optional[str]) -> RequestContext:
        return RequestContext(correlation_id=correlation_id)

    def _explicate(self, names) -> list:
        try:
            return explicate_roles(names)
        except InvalidRoleError as exc:
            logger.warning("Rejected role explication: %s", exc.message)
            raise

    # ─────────────────────────────────────────────────────────────────────────
    # Read operations
    # ─────────────────────────────────────────────────────────────────────────

    def fetch_user(self, user_id: str, correlation_id: Optional[str] = None) -> Dict[str, Any]:
        """Retrieve one user.

        A missing user is reported on the bad-request channel rather than as
        404, so both failures below carry status 400 and the store's message.

        Raises:
            UserNotFoundError: 400 if the store has no such user
            StoreFailureError: 400 on any other store failure
        """
        ctx = self._context(correlation_id)
        try:
            user = self.store.get(ctx, user_id)
        except StoreNotFoundError as exc:
            raise UserNotFoundError(str(exc), status=HTTPStatus.BAD_REQUEST)
        except StoreError as exc:
            raise StoreFailureError(str(exc))
        return UserTransformer.user_to_resource(user, self.base_path)

    def list_users(self, correlation_id: Optional[str] = None) -> Dict[str, Any]:
        """Retrieve all users as a collection sorted by id.

        Raises:
            StoreFailureError: 400 on store failure
        """
        ctx = self._context(correlation_id)
        try:
            users = self.store.all(ctx)
        except StoreError as exc:
            raise StoreFailureError(str(exc))
        return UserTransformer.users_to_collection(users, self.base_path)

    # ─────────────────────────────────────────────────────────────────────────
    # Mutations
    # ─────────────────────────────────────────────────────────────────────────

    def create_user(self, payload: Any, correlation_id: Optional[str] = None) -> Tuple[Dict[str, Any], str]:
        """Create a user from a decoded JSON payload.

        Returns:
            Tuple of (user response, created resource location)

        Raises:
            MalformedRequestError: 400 if the payload is not a user object
            ValidationError: 422 on missing fields or unknown roles
            InvalidRoleError: 400 if role explication fails
            StoreFailureError: 400 if the store rejects the user
        """
        req = UserRequest.from_payload(payload)
        try:
            validate_for_create(req)
        except UserApiError as exc:
            logger.warning("Rejected create request: %s", exc.message)
            raise

        roles = self._explicate(req.roles or [])
        user = User(name=req.name, provider=req.provider, scheme=req.scheme, roles=roles)

        ctx = self._context(correlation_id)
        try:
            created = self.store.add(ctx, user)
        except StoreError as exc:
            raise StoreFailureError(str(exc))

        logger.info("Created user %s (%s/%s)", created.id, created.provider, created.scheme)
        audit.safe_log_user_event(
            "user_create",
            created.id,
            details={
                "name": created.name,
                "roles": [role.name for role in created.roles],
                "correlation_id": correlation_id,
            },
        )

        response = UserTransformer.user_to_resource(created, self.base_path)
        return response, response["links"]["self"]

    def update_user(
        self, user_id: str, payload: Any, correlation_id: Optional[str] = None
    ) -> Tuple[Dict[str, Any], str]:
        """Apply a partial update to a user.

        Scalar fields overwrite stored values only when non-empty. ``roles``
        replaces the stored roles wholesale whenever it was sent, even empty.

        Returns:
            Tuple of (user response, resource location)

        Raises:
            MalformedRequestError: 400 if the payload is not a user object
            ValidationError: 422 if nothing to update or unknown roles
            UserNotFoundError: 404 if the user cannot be fetched
            InvalidRoleError: 400 if role explication fails
            StoreFailureError: 400 if the store rejects the update
        """
        req = UserRequest.from_payload(payload)
        try:
            validate_for_update(req)
        except UserApiError as exc:
            logger.warning("Rejected update request for user %s: %s", user_id, exc.message)
            raise

        ctx = self._context(correlation_id)
        try:
            user = self.store.get(ctx, user_id)
        except StoreError as exc:
            raise UserNotFoundError(str(exc))

        if req.name:
            user.name = req.name
        if req.provider:
            user.provider = req.provider
        if req.scheme:
            user.scheme = req.scheme
        if is_present(req.roles):
            user.roles = self._explicate(req.roles)

        try:
            self.store.update(ctx, user)
        except StoreError as exc:
            raise StoreFailureError(str(exc))

        logger.info("Updated user %s", user.id)
        audit.safe_log_user_event(
            "user_update",
            user.id,
            details={
                "fields": [f for f in ("name", "provider", "scheme") if getattr(req, f)]
                + (["roles"] if is_present(req.roles) else []),
                "correlation_id": correlation_id,
            },
        )

        response = UserTransformer.user_to_resource(user, self.base_path)
        return response, response["links"]["self"]

    def delete_user(self, user_id: str, correlation_id: Optional[str] = None) -> None:
        """Delete a user.

        Raises:
            UserNotFoundError: 404 if the user cannot be fetched; the store's
                delete is not attempted
            StoreFailureError: 400 if the store rejects the delete
        """
        ctx = self._context(correlation_id)
        try:
            user = self.store.get(ctx, user_id)
        except StoreError as exc:
            raise UserNotFoundError(str(exc))

        try:
            self.store.delete(ctx, user)
        except StoreError as exc:
            raise StoreFailureError(str(exc))

        logger.info("Deleted user %s", user.id)
        audit.safe_log_user_event(
            "user_delete",
            user.id,
            details={"correlation_id": correlation_id},
        )
