"""User store exceptions."""


class StoreError(Exception):
    """Base exception for all user store operations."""
    pass


class StoreNotFoundError(StoreError):
    """User lookup failed - no user with that id."""
    pass


class StoreAPIError(StoreError):
    """HTTP error from a remote user store.

    Attributes:
        status_code: HTTP status code
        message: Error message from response
        endpoint: API endpoint that failed
    """

    def __init__(self, status_code: int, message: str, endpoint: str):
        self.status_code = status_code
        self.message = message
        self.endpoint = endpoint
        super().__init__(f"[{status_code}] {endpoint}: {message}")
