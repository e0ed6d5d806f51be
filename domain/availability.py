"""
Domain: Finished-goods availability.

Contract excerpts implemented here:
- Only Pending and Printing print jobs count as production commitments.
- in_production = sum(quantity) over active commitments for the product.
- total_available = available_stock + in_production
- has_production_in_progress is TRUE iff in_production > 0.
- A requested quantity is:
  - available      iff available_stock >= quantity
  - in_production  iff not available but total_available >= quantity
  - out_of_stock   iff total_available < quantity
- An unknown product is treated as zero stock with no commitments.

This module contains only pure domain entities/value objects: no I/O, no database, no frameworks.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime, timedelta
from enum import Enum
from typing import Iterable, Optional, Tuple

from .time import require_utc_timestamp, utc_now

ProductId = int


class InvalidQuantityError(ValueError):
    """Raised when a requested quantity is not a positive integer."""


class JobStatus(str, Enum):
    PENDING = "Pending"
    PRINTING = "Printing"
    COMPLETED = "Completed"
    FAILED = "Failed"
    CANCELLED = "Cancelled"

    @property
    def is_active(self) -> bool:
        """Active jobs contribute future stock."""
        return self in (JobStatus.PENDING, JobStatus.PRINTING)


ACTIVE_JOB_STATUSES: tuple[JobStatus, ...] = (JobStatus.PENDING, JobStatus.PRINTING)


class FulfillmentStatus(str, Enum):
    AVAILABLE = "available"
    IN_PRODUCTION = "in_production"
    OUT_OF_STOCK = "out_of_stock"


def validate_requested_quantity(quantity: object) -> int:
    """
    Validate a requested quantity and return it as an int.

    Raises:
        InvalidQuantityError: If quantity is not an integer (bools and floats
            included) or is less than 1
    """

    if isinstance(quantity, bool) or not isinstance(quantity, int):
        raise InvalidQuantityError(f"quantity must be an integer, got {quantity!r}")
    if quantity < 1:
        raise InvalidQuantityError(f"quantity must be >= 1, got {quantity}")
    return quantity


def validate_product_id(product_id: object) -> ProductId:
    """
    Validate a product id.

    Raises:
        ValueError: If product_id is missing or not a positive integer
    """

    if product_id is None:
        raise ValueError("product_id is required")
    if isinstance(product_id, bool) or not isinstance(product_id, int) or product_id < 1:
        raise ValueError(f"product_id must be a positive integer, got {product_id!r}")
    return product_id


@dataclass(frozen=True, slots=True)
class StockSnapshot:
    """Quantity of a finished good physically on hand."""

    product_id: ProductId
    available_stock: int

    def __post_init__(self) -> None:
        if self.available_stock < 0:
            raise ValueError("available_stock must be >= 0")

    @staticmethod
    def empty(product_id: ProductId) -> "StockSnapshot":
        return StockSnapshot(product_id=product_id, available_stock=0)


@dataclass(frozen=True, slots=True)
class ProductionCommitment:
    """
    An outstanding print job contributing future stock.

    Commitments with a non-active status are accepted but ignored by
    compute_availability.
    """

    product_id: ProductId
    quantity: int
    status: JobStatus
    job_id: Optional[int] = None
    printer_name: Optional[str] = None
    started_at: Optional[datetime] = None
    estimated_completion: Optional[datetime] = None

    def __post_init__(self) -> None:
        if self.quantity <= 0:
            raise ValueError("quantity must be > 0")
        if self.started_at is not None:
            require_utc_timestamp("started_at", self.started_at)
        if self.estimated_completion is not None:
            require_utc_timestamp("estimated_completion", self.estimated_completion)

    @staticmethod
    def from_job_timing(
        *,
        product_id: ProductId,
        quantity: int,
        status: JobStatus,
        estimated_print_hours: float,
        started_at: Optional[datetime] = None,
        job_id: Optional[int] = None,
        printer_name: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> "ProductionCommitment":
        """
        Build a commitment whose estimated completion is start + print hours.

        Jobs that have not started yet are estimated from `now`.
        """

        start = started_at if started_at is not None else (now or utc_now())
        return ProductionCommitment(
            product_id=product_id,
            quantity=quantity,
            status=status,
            job_id=job_id,
            printer_name=printer_name,
            started_at=started_at,
            estimated_completion=start + timedelta(hours=estimated_print_hours),
        )


@dataclass(frozen=True, slots=True)
class AvailabilityResult:
    """
    Computed availability for one product.

    degraded is TRUE when the lookups failed and this is the zero-valued
    fallback; the zeros then mean "unknown", not "confirmed out of stock".

    production_jobs lists the active commitments behind in_production, oldest
    first. product_name and sku are None when the catalog row is unknown.
    """

    available_stock: int
    in_production: int
    total_available: int
    has_production_in_progress: bool
    degraded: bool = False
    earliest_completion: Optional[datetime] = None
    production_jobs: Tuple[ProductionCommitment, ...] = ()
    product_name: Optional[str] = None
    sku: Optional[str] = None

    def __post_init__(self) -> None:
        if self.available_stock < 0 or self.in_production < 0:
            raise ValueError("available_stock and in_production must be >= 0")
        if self.total_available != self.available_stock + self.in_production:
            raise ValueError("total_available must equal available_stock + in_production")
        if self.has_production_in_progress != (self.in_production > 0):
            raise ValueError("has_production_in_progress must reflect in_production > 0")

    @staticmethod
    def unknown() -> "AvailabilityResult":
        """Zero-valued result returned when availability could not be determined."""

        return AvailabilityResult(
            available_stock=0,
            in_production=0,
            total_available=0,
            has_production_in_progress=False,
            degraded=True,
        )

    def with_earliest_completion(self, earliest: Optional[datetime]) -> "AvailabilityResult":
        return replace(self, earliest_completion=earliest)

    def with_product(self, product_name: Optional[str], sku: Optional[str] = None) -> "AvailabilityResult":
        return replace(self, product_name=product_name, sku=sku)


def active_commitments(commitments: Iterable[ProductionCommitment]) -> list[ProductionCommitment]:
    return [c for c in commitments if c.status.is_active]


def compute_availability(
    stock: StockSnapshot,
    commitments: Iterable[ProductionCommitment],
) -> AvailabilityResult:
    """
    Combine on-hand stock with active production commitments.

    Pure and idempotent: identical inputs always yield an equal result.
    """

    active = tuple(active_commitments(commitments))
    in_production = sum(c.quantity for c in active)
    return AvailabilityResult(
        available_stock=stock.available_stock,
        in_production=in_production,
        total_available=stock.available_stock + in_production,
        has_production_in_progress=in_production > 0,
        production_jobs=active,
    )


def classify_fulfillment(result: AvailabilityResult, quantity: int) -> FulfillmentStatus:
    """Classify whether `quantity` can be fulfilled now, from production, or not at all."""

    quantity = validate_requested_quantity(quantity)
    if result.available_stock >= quantity:
        return FulfillmentStatus.AVAILABLE
    if result.total_available >= quantity:
        return FulfillmentStatus.IN_PRODUCTION
    return FulfillmentStatus.OUT_OF_STOCK


def estimate_earliest_completion(
    available_stock: int,
    commitments: Iterable[ProductionCommitment],
    quantity: int,
) -> Optional[datetime]:
    """
    Estimated completion of the first job that brings cumulative supply up to `quantity`.

    Commitments are walked in the order given (callers pass them oldest first).
    Returns None when stock alone already covers the request, or when active
    production cannot cover it.
    """

    if available_stock >= quantity:
        return None

    cumulative = available_stock
    for commitment in active_commitments(commitments):
        cumulative += commitment.quantity
        if cumulative >= quantity:
            return commitment.estimated_completion
    return None


__all__ = [
    "ACTIVE_JOB_STATUSES",
    "AvailabilityResult",
    "FulfillmentStatus",
    "InvalidQuantityError",
    "JobStatus",
    "ProductId",
    "ProductionCommitment",
    "StockSnapshot",
    "active_commitments",
    "classify_fulfillment",
    "compute_availability",
    "estimate_earliest_completion",
    "validate_product_id",
    "validate_requested_quantity",
]
