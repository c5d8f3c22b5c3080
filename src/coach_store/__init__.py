"""Coaching backend client — all Supabase network I/O lives here."""

from coach_store.client import CoachStoreClient
from coach_store.connection import create_store_client
from coach_store.exceptions import (
    StoreConfigError,
    StoreError,
    StoreQueryError,
    StoreRateLimitError,
)

__all__ = [
    "CoachStoreClient",
    "StoreConfigError",
    "StoreError",
    "StoreQueryError",
    "StoreRateLimitError",
    "create_store_client",
]
