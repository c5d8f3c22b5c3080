"""Supabase connection helpers.

Wraps ``supabase.create_client`` with the coach_store error hierarchy.
"""

from __future__ import annotations

import logging

from supabase import Client, create_client

from coach_store.exceptions import StoreConfigError

logger = logging.getLogger(__name__)


def create_store_client(url: str | None, key: str | None) -> Client:
    """Create a Supabase client for the coaching backend.

    Parameters
    ----------
    url : str
        Project URL, e.g. ``https://<project>.supabase.co``.
    key : str
        Service-role or anon API key.

    Returns
    -------
    Client
        A ready-to-query supabase client.

    Raises
    ------
    StoreConfigError
        If either credential is missing or the client cannot be created.
    """
    if not url or not key:
        raise StoreConfigError(
            "Supabase credentials not configured; set SUPABASE_URL and SUPABASE_KEY"
        )
    try:
        client = create_client(url, key)
    except Exception as exc:
        raise StoreConfigError(f"Failed to create Supabase client: {exc}") from exc
    logger.info("Connected to Supabase project %s", url)
    return client
