"""
Print job scheduling service.

Handles:
- Planning a job: printer recommendation, material check, product availability
- Scheduling a job: persist it, bump the printer's queue, invalidate availability
- Job status changes: completion adds finished goods to stock
- Overdue monitoring of printing jobs
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional

from domain.availability import (
    AvailabilityResult,
    FulfillmentStatus,
    JobStatus,
    ProductId,
    classify_fulfillment,
    validate_product_id,
    validate_requested_quantity,
)
from domain.materials import MaterialCheck, check_material_availability, has_insufficient_materials
from domain.notification import overdue_job_notification
from domain.print_job import OverdueJob, PrintJob, find_overdue_job
from domain.printer import PrinterState, rank_printers
from domain.product import Product
from domain.time import utc_now
from repositories import (
    notification_repository,
    print_job_repository,
    printer_repository,
    product_repository,
    product_stock_repository,
)
from services.availability_service import AvailabilityService, get_availability_service

logger = logging.getLogger(__name__)


class ProductNotFoundError(Exception):
    """Raised when a job references a product that does not exist."""

    def __init__(self, product_id: ProductId):
        self.product_id = product_id
        super().__init__(f"Product not found: {product_id}")


class JobNotFoundError(Exception):
    """Raised when a print job id does not exist."""

    def __init__(self, job_id: int):
        self.job_id = job_id
        super().__init__(f"Print job not found: {job_id}")


class SchedulingError(Exception):
    """Raised when a job cannot be scheduled (no printer, insufficient materials)."""

    def __init__(self, reasons: List[str]):
        self.reasons = reasons
        super().__init__("Cannot schedule print job: " + "; ".join(reasons))


@dataclass(frozen=True, slots=True)
class JobPlan:
    """
    Everything the scheduler needs to decide on a new job.

    recommended_printer is None when every printer is in Maintenance or Offline.
    """

    product: Product
    quantity: int
    recommended_printer: Optional[PrinterState]
    alternative_printers: List[PrinterState]
    material_checks: List[MaterialCheck]
    availability: AvailabilityResult
    fulfillment: FulfillmentStatus
    estimated_hours: float
    blocking_reasons: List[str] = field(default_factory=list)

    @property
    def can_schedule(self) -> bool:
        return not self.blocking_reasons


def _blocking_reasons(
    recommended: Optional[PrinterState],
    material_checks: List[MaterialCheck],
) -> List[str]:
    reasons: List[str] = []
    if recommended is None:
        reasons.append("No printer available: all printers are in maintenance or offline")
    if has_insufficient_materials(material_checks):
        names = ", ".join(c.material for c in material_checks if not c.is_sufficient)
        reasons.append(f"Insufficient materials: {names}")
    return reasons


def plan_print_job(
    product_id: ProductId,
    quantity: int,
    availability_service: Optional[AvailabilityService] = None,
) -> JobPlan:
    """
    Build a JobPlan for producing `quantity` units of a product.

    Raises:
        ValueError: If product_id or quantity is invalid
        ProductNotFoundError: If the product does not exist

    Example:
        plan = plan_print_job(product_id=4, quantity=10)
        if plan.can_schedule:
            schedule_print_job(4, 10)
    """

    product_id = validate_product_id(product_id)
    quantity = validate_requested_quantity(quantity)

    product = product_repository.get_product(product_id)
    if product is None:
        raise ProductNotFoundError(product_id)

    ranked = rank_printers(printer_repository.list_printers())
    recommended = ranked[0] if ranked else None

    material_checks = check_material_availability(
        product.required_materials,
        product.weight_grams,
        quantity,
        product_repository.list_material_stock(),
    )

    service = availability_service or get_availability_service()
    availability = service.get_product_availability(product_id, quantity)

    return JobPlan(
        product=product,
        quantity=quantity,
        recommended_printer=recommended,
        alternative_printers=ranked[1:],
        material_checks=material_checks,
        availability=availability,
        fulfillment=classify_fulfillment(availability, quantity),
        estimated_hours=product.estimated_job_hours(quantity),
        blocking_reasons=_blocking_reasons(recommended, material_checks),
    )


def schedule_print_job(
    product_id: ProductId,
    quantity: int,
    printer_id: Optional[int] = None,
    availability_service: Optional[AvailabilityService] = None,
) -> int:
    """
    Plan and persist a new Pending job.

    The recommended printer is used unless printer_id names another
    schedulable printer.

    Returns:
        The new job id

    Raises:
        SchedulingError: If the plan is blocked or printer_id is not schedulable
    """

    service = availability_service or get_availability_service()
    plan = plan_print_job(product_id, quantity, availability_service=service)
    if not plan.can_schedule:
        raise SchedulingError(plan.blocking_reasons)

    printer = plan.recommended_printer
    if printer_id is not None:
        candidates = [plan.recommended_printer, *plan.alternative_printers]
        printer = next((p for p in candidates if p is not None and p.id == printer_id), None)
    if printer is None:
        raise SchedulingError([f"Printer {printer_id} is not available for scheduling"])

    job_id = print_job_repository.create_print_job(
        product_id=plan.product.id,
        printer_id=printer.id,
        quantity=plan.quantity,
        estimated_print_hours=plan.estimated_hours,
    )
    printer_repository.increment_job_queue(printer.id)
    service.invalidate_product(plan.product.id)

    logger.info(
        f"Scheduled print job {job_id} on printer {printer.name!r}",
        extra={"job_id": job_id, "product_id": plan.product.id, "printer_id": printer.id, "quantity": plan.quantity},
    )
    return job_id


def update_job_status(
    job_id: int,
    status: JobStatus,
    now: Optional[datetime] = None,
    availability_service: Optional[AvailabilityService] = None,
) -> PrintJob:
    """
    Move a job to a new status.

    - Printing stamps started_at (if not already started).
    - Completed stamps completed_at and adds the job's units to finished goods,
      both only on the first transition into Completed.
    - The product's availability cache entries are always invalidated.

    Raises:
        JobNotFoundError: If the job does not exist
    """

    job = print_job_repository.get_print_job(job_id)
    if job is None:
        raise JobNotFoundError(job_id)

    now = now or utc_now()
    started_at = now if status is JobStatus.PRINTING and job.started_at is None else None
    completed_at = now if status is JobStatus.COMPLETED and job.status is not JobStatus.COMPLETED else None

    print_job_repository.update_print_job_status(job_id, status, started_at=started_at, completed_at=completed_at)

    if status is JobStatus.COMPLETED and job.status is not JobStatus.COMPLETED:
        try:
            product_stock_repository.add_finished_goods(job.product_id, job.quantity)
        except Exception:
            logger.exception(
                f"Failed to add finished goods for completed job {job_id}",
                extra={"job_id": job_id, "product_id": job.product_id, "quantity": job.quantity},
            )

    (availability_service or get_availability_service()).invalidate_product(job.product_id)

    updated = print_job_repository.get_print_job(job_id)
    if updated is None:
        raise JobNotFoundError(job_id)
    return updated


def check_overdue_jobs(now: Optional[datetime] = None) -> List[OverdueJob]:
    """Printing jobs that have run more than the grace period past their estimate."""

    now = now or utc_now()
    overdue: List[OverdueJob] = []
    for job in print_job_repository.list_printing_jobs():
        result = find_overdue_job(job, now)
        if result is not None:
            overdue.append(result)
    return overdue


def notify_overdue_jobs(user_id: int, overdue: List[OverdueJob]) -> int:
    """Record a notification per overdue job. Returns the number recorded."""

    recorded = 0
    for item in overdue:
        notification = overdue_job_notification(user_id, item.job_id, item.product_name, item.overdue_minutes)
        try:
            notification_repository.create_notification(notification)
        except Exception:
            logger.exception(
                f"Failed to record overdue notification for job {item.job_id}",
                extra={"job_id": item.job_id},
            )
            continue
        recorded += 1
    return recorded


__all__ = [
    "JobNotFoundError",
    "JobPlan",
    "ProductNotFoundError",
    "SchedulingError",
    "check_overdue_jobs",
    "notify_overdue_jobs",
    "plan_print_job",
    "schedule_print_job",
    "update_job_status",
]
