"""
Supabase client initialization.

This module contains *only* the database connection setup and exposes
`get_supabase()` for other repository modules to import and use.

The client is created on first use so that importing a repository does not
require credentials (tests and scripts that never touch the database stay
importable). Credentials come from config.get_supabase_credentials().
"""

from __future__ import annotations

from functools import lru_cache

# The dependency is `supabase` (supabase-py). If your editor can't resolve it,
# install it in your environment: `pip install supabase`.
from supabase import Client, create_client  # type: ignore[import-not-found]

from config import get_supabase_credentials


@lru_cache(maxsize=1)
def get_supabase() -> Client:
    """Return the process-wide Supabase client, creating it on first call."""

    url, key = get_supabase_credentials()
    return create_client(url, key)


__all__ = ["get_supabase"]
