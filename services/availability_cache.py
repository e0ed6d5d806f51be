"""
Time-boxed cache for product availability lookups.

Entries are keyed by (product_id, quantity) and expire a fixed TTL after
insertion; reads never extend an entry's life. Timestamps come from a
monotonic clock so wall-clock adjustments cannot resurrect or expire entries.

The cache performs no locking. Two callers missing the same key at the same
time may both compute the value; the last put wins.
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Callable, Dict, Optional, Tuple

from domain.availability import AvailabilityResult, ProductId

DEFAULT_TTL_SECONDS: float = 5 * 60

CacheKey = Tuple[ProductId, int]


@dataclass(frozen=True, slots=True)
class CacheEntry:
    value: AvailabilityResult
    inserted_at: float


class AvailabilityCache:
    """In-process TTL map of (product_id, quantity) -> AvailabilityResult."""

    def __init__(
        self,
        ttl_seconds: float = DEFAULT_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if ttl_seconds <= 0:
            raise ValueError("ttl_seconds must be > 0")
        self._ttl = ttl_seconds
        self._clock = clock
        self._entries: Dict[CacheKey, CacheEntry] = {}

    @property
    def ttl_seconds(self) -> float:
        return self._ttl

    def __len__(self) -> int:
        return len(self._entries)

    def get(self, product_id: ProductId, quantity: int) -> Optional[AvailabilityResult]:
        """Return the cached result, or None if absent or expired (expired entries are evicted)."""

        key = (product_id, quantity)
        entry = self._entries.get(key)
        if entry is None:
            return None
        if self._clock() - entry.inserted_at >= self._ttl:
            del self._entries[key]
            return None
        return entry.value

    def put(self, product_id: ProductId, quantity: int, value: AvailabilityResult) -> None:
        self._entries[(product_id, quantity)] = CacheEntry(value=value, inserted_at=self._clock())

    def invalidate(self, product_id: ProductId) -> int:
        """Drop every entry for a product, whatever the quantity. Returns the number removed."""

        keys = [key for key in self._entries if key[0] == product_id]
        for key in keys:
            del self._entries[key]
        return len(keys)

    def invalidate_all(self) -> int:
        removed = len(self._entries)
        self._entries.clear()
        return removed


__all__ = [
    "AvailabilityCache",
    "CacheEntry",
    "DEFAULT_TTL_SECONDS",
]
