"""
Application settings and logging setup.

Settings are read from environment variables. A `.env` file in the project
root is loaded first so local development does not need exported variables.

Environment variables:
- SUPABASE_URL: Your Supabase project URL
- SUPABASE_KEY: Your Supabase API key (use a server-side key only on the backend)
- AVAILABILITY_CACHE_TTL_SECONDS: Availability cache lifetime (default 300)
- LOG_LEVEL: Root log level (default INFO)
- CORS_ALLOW_ORIGINS: Comma-separated origins allowed by the API (default *)
"""

from __future__ import annotations

import logging
import os
import sys
from pathlib import Path
from typing import List

from dotenv import load_dotenv

env_path = Path(__file__).parent / ".env"
load_dotenv(dotenv_path=env_path)

LOG_FORMAT = "%(asctime)s [%(levelname)-8s] %(name)s - %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def get_supabase_credentials() -> tuple[str, str]:
    """
    Return (SUPABASE_URL, SUPABASE_KEY).

    Raises:
        RuntimeError: If either variable is missing
    """

    url = os.getenv("SUPABASE_URL")
    key = os.getenv("SUPABASE_KEY")

    if not url:
        raise RuntimeError(
            "Missing environment variable: SUPABASE_URL. "
            "Set SUPABASE_URL to your Supabase project URL."
        )
    if not key:
        raise RuntimeError(
            "Missing environment variable: SUPABASE_KEY. "
            "Set SUPABASE_KEY to your Supabase API key."
        )
    return url, key


def get_availability_cache_ttl_seconds() -> float:
    raw = os.getenv("AVAILABILITY_CACHE_TTL_SECONDS", "300")
    try:
        ttl = float(raw)
    except ValueError:
        raise RuntimeError(f"AVAILABILITY_CACHE_TTL_SECONDS must be a number, got {raw!r}") from None
    if ttl <= 0:
        raise RuntimeError("AVAILABILITY_CACHE_TTL_SECONDS must be > 0")
    return ttl


def get_cors_allow_origins() -> List[str]:
    raw = os.getenv("CORS_ALLOW_ORIGINS", "*")
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


def setup_logging(level: str | int | None = None) -> None:
    """
    Configure root logging with a single console handler.

    Safe to call more than once; an existing handler installed by this
    function is replaced rather than duplicated.
    """

    if level is None:
        level = os.getenv("LOG_LEVEL", "INFO").upper()

    root = logging.getLogger()
    root.setLevel(level)

    for handler in list(root.handlers):
        if getattr(handler, "_printfarm_handler", False):
            root.removeHandler(handler)

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT))
    handler._printfarm_handler = True  # type: ignore[attr-defined]
    root.addHandler(handler)


__all__ = [
    "get_availability_cache_ttl_seconds",
    "get_cors_allow_origins",
    "get_supabase_credentials",
    "setup_logging",
]
