"""Custom exception hierarchy for the coach data store client."""

from __future__ import annotations


class StoreError(Exception):
    """Base exception for all coach_store errors."""


class StoreConfigError(StoreError):
    """Store credentials are missing or the client could not be created."""


class StoreQueryError(StoreError):
    """A PostgREST query returned an error response.

    ``status_code`` is the HTTP status when known; ``error_code`` is the
    database or PostgREST error code carried in the response body.
    """

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        error_code: str | None = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.error_code = error_code


class StoreRateLimitError(StoreQueryError):
    """HTTP 429, too many requests."""

    def __init__(self, message: str = "Rate limited by the data store") -> None:
        super().__init__(message, status_code=429)
