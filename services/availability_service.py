"""
Product availability service.

Answers "how many units of this product can we promise?" by combining
finished-goods stock with active print jobs, memoized in an AvailabilityCache.

Failure policy:
- Invalid input (product_id, quantity) raises immediately and is never cached.
- If the stock, job or product lookup fails, the zero-valued AvailabilityResult is
  returned with degraded=True instead of propagating the error. Degraded
  results are not cached, so the next call retries the lookups.
- A product with no stock row is treated as zero stock; a product with no
  catalog row simply has no name or sku.

Callers must invalidate a product after any change to its stock or jobs.
"""

from __future__ import annotations

import logging
from typing import Callable, List, Optional

from config import get_availability_cache_ttl_seconds
from domain.availability import (
    AvailabilityResult,
    ProductId,
    ProductionCommitment,
    StockSnapshot,
    compute_availability,
    estimate_earliest_completion,
    validate_product_id,
    validate_requested_quantity,
)
from domain.product import Product
from domain.time import utc_now
from repositories import print_job_repository, product_repository, product_stock_repository
from services.availability_cache import AvailabilityCache

logger = logging.getLogger(__name__)

StockLookup = Callable[[ProductId], Optional[StockSnapshot]]
CommitmentLookup = Callable[[ProductId], List[ProductionCommitment]]
ProductLookup = Callable[[ProductId], Optional[Product]]


def fetch_stock(product_id: ProductId) -> Optional[StockSnapshot]:
    return product_stock_repository.get_stock_snapshot(product_id)


def fetch_commitments(product_id: ProductId) -> List[ProductionCommitment]:
    """Active jobs for the product as commitments, oldest first."""

    now = utc_now()
    jobs = print_job_repository.get_active_jobs_for_product(product_id)
    return [job.to_commitment(now) for job in jobs]


def fetch_product(product_id: ProductId) -> Optional[Product]:
    return product_repository.get_product(product_id)


class AvailabilityService:
    """
    Cached availability lookups for finished goods.

    Lookups are injectable so tests (and alternative storage) can supply
    their own data sources. Without a product_lookup, results carry no
    product name or sku.
    """

    def __init__(
        self,
        stock_lookup: StockLookup = fetch_stock,
        commitment_lookup: CommitmentLookup = fetch_commitments,
        cache: Optional[AvailabilityCache] = None,
        product_lookup: Optional[ProductLookup] = None,
    ) -> None:
        self._stock_lookup = stock_lookup
        self._commitment_lookup = commitment_lookup
        self._product_lookup = product_lookup
        self.cache = cache if cache is not None else AvailabilityCache()

    def get_product_availability(self, product_id: ProductId, quantity: int) -> AvailabilityResult:
        """
        Availability of `product_id` for a request of `quantity` units.

        Raises:
            ValueError: If product_id is missing/invalid
            InvalidQuantityError: If quantity is not a positive integer

        Example:
            result = service.get_product_availability(12, 5)
            status = classify_fulfillment(result, 5)
        """

        product_id = validate_product_id(product_id)
        quantity = validate_requested_quantity(quantity)

        cached = self.cache.get(product_id, quantity)
        if cached is not None:
            return cached

        try:
            stock = self._stock_lookup(product_id) or StockSnapshot.empty(product_id)
            commitments = list(self._commitment_lookup(product_id))
            product = self._product_lookup(product_id) if self._product_lookup else None
        except Exception as e:
            logger.warning(
                f"Availability lookup failed for product {product_id}; returning degraded result",
                extra={"product_id": product_id, "quantity": quantity, "error": str(e)},
            )
            return AvailabilityResult.unknown()

        result = compute_availability(stock, commitments).with_earliest_completion(
            estimate_earliest_completion(stock.available_stock, commitments, quantity)
        )
        if product is not None:
            result = result.with_product(product.product_name, product.sku)
        self.cache.put(product_id, quantity, result)
        return result

    def invalidate_product(self, product_id: ProductId) -> int:
        removed = self.cache.invalidate(product_id)
        logger.debug(
            "Invalidated availability cache for product",
            extra={"product_id": product_id, "entries_removed": removed},
        )
        return removed

    def invalidate_all(self) -> int:
        return self.cache.invalidate_all()


_service: Optional[AvailabilityService] = None


def get_availability_service() -> AvailabilityService:
    """Process-wide AvailabilityService (and therefore a single shared cache)."""

    global _service
    if _service is None:
        _service = AvailabilityService(
            cache=AvailabilityCache(ttl_seconds=get_availability_cache_ttl_seconds()),
            product_lookup=fetch_product,
        )
    return _service


def get_product_availability(product_id: ProductId, quantity: int) -> AvailabilityResult:
    return get_availability_service().get_product_availability(product_id, quantity)


def invalidate_product(product_id: ProductId) -> int:
    return get_availability_service().invalidate_product(product_id)


def invalidate_all() -> int:
    return get_availability_service().invalidate_all()


__all__ = [
    "AvailabilityService",
    "fetch_commitments",
    "fetch_product",
    "fetch_stock",
    "get_availability_service",
    "get_product_availability",
    "invalidate_all",
    "invalidate_product",
]
