"""
Print job repository (persistence).

This module provides *only* persistence operations for the PrintJob domain
entity. Overdue detection and availability arithmetic live in the domain.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, List, Mapping, Optional

from domain.availability import ACTIVE_JOB_STATUSES, JobStatus, ProductId
from domain.print_job import PrintJob
from repositories.client import get_supabase
from repositories.serialization import parse_optional_utc_datetime, raise_on_error, to_iso_utc

# Supabase table name for print jobs.
# Keep this aligned with your database schema.
_PRINT_JOBS_TABLE: str = "print_jobs"

_JOB_COLUMNS: str = "*, printers(printer_name), products(product_name)"


def _row_to_print_job(row: Mapping[str, Any]) -> PrintJob:
    """Convert a Supabase row (with embedded printer/product names) into a PrintJob."""

    printer = row.get("printers") or {}
    product = row.get("products") or {}
    return PrintJob(
        id=int(row["id"]),
        product_id=int(row["product_id"]),
        printer_id=int(row["printer_id"]),
        quantity=int(row["quantity"]),
        status=JobStatus(str(row["status"])),
        estimated_print_hours=float(row.get("estimated_print_time") or 0),
        started_at=parse_optional_utc_datetime(row.get("started_at")),
        completed_at=parse_optional_utc_datetime(row.get("completed_at")),
        created_at=parse_optional_utc_datetime(row.get("created_at")),
        product_name=product.get("product_name"),
        printer_name=printer.get("printer_name"),
    )


def get_active_jobs_for_product(product_id: ProductId) -> List[PrintJob]:
    """
    Fetch Pending and Printing jobs for a product, oldest first.
    """

    response = (
        get_supabase()
        .table(_PRINT_JOBS_TABLE)
        .select(_JOB_COLUMNS)
        .eq("product_id", product_id)
        .in_("status", [s.value for s in ACTIVE_JOB_STATUSES])
        .order("created_at")
        .execute()
    )
    rows = raise_on_error(response, "fetch active print jobs")
    return [_row_to_print_job(row) for row in rows]


def list_printing_jobs() -> List[PrintJob]:
    """Fetch every job currently in Printing status that has a start time."""

    response = (
        get_supabase()
        .table(_PRINT_JOBS_TABLE)
        .select(_JOB_COLUMNS)
        .eq("status", JobStatus.PRINTING.value)
        .execute()
    )
    rows = raise_on_error(response, "fetch printing jobs")
    return [_row_to_print_job(row) for row in rows if row.get("started_at")]


def get_print_job(job_id: int) -> Optional[PrintJob]:
    response = (
        get_supabase()
        .table(_PRINT_JOBS_TABLE)
        .select(_JOB_COLUMNS)
        .eq("id", job_id)
        .limit(1)
        .execute()
    )
    rows = raise_on_error(response, "fetch print job")
    return _row_to_print_job(rows[0]) if rows else None


def create_print_job(
    product_id: ProductId,
    printer_id: int,
    quantity: int,
    estimated_print_hours: float,
    status: JobStatus = JobStatus.PENDING,
) -> int:
    """
    Insert a new print job.

    Returns:
    - The new job id
    """

    payload: dict[str, Any] = {
        "product_id": product_id,
        "printer_id": printer_id,
        "quantity": quantity,
        "estimated_print_time": estimated_print_hours,
        "status": status.value,
    }
    response = get_supabase().table(_PRINT_JOBS_TABLE).insert(payload).execute()
    rows = raise_on_error(response, "create print job")
    if not rows:
        raise RuntimeError("Failed to create print job: no row returned")
    return int(rows[0]["id"])


def update_print_job_status(
    job_id: int,
    status: JobStatus,
    started_at: Optional[datetime] = None,
    completed_at: Optional[datetime] = None,
) -> None:
    """
    Update a job's status (and optionally its start/completion timestamps).

    Raises:
    - ValueError if the job does not exist
    """

    payload: dict[str, Any] = {"status": status.value}
    if started_at is not None:
        payload["started_at"] = to_iso_utc(started_at)
    if completed_at is not None:
        payload["completed_at"] = to_iso_utc(completed_at)

    response = (
        get_supabase()
        .table(_PRINT_JOBS_TABLE)
        .update(payload)
        .eq("id", job_id)
        .execute()
    )
    rows = raise_on_error(response, "update print job")
    if not rows:
        raise ValueError(f"Print job not found: {job_id}")


__all__ = [
    "create_print_job",
    "get_active_jobs_for_product",
    "get_print_job",
    "list_printing_jobs",
    "update_print_job_status",
]
