"""
Printer repository (persistence).

Reads the printer fleet and maintains each printer's job queue counter.
Maintenance and recommendation rules live in the domain.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Any, List, Mapping, Optional

from domain.printer import PrinterState, PrinterStatus
from domain.time import utc_today
from repositories.client import get_supabase
from repositories.serialization import parse_date, raise_on_error

logger = logging.getLogger(__name__)

# Supabase table name for printers.
# Keep this aligned with your database schema.
_PRINTERS_TABLE: str = "printers"


def _row_to_printer(row: Mapping[str, Any], *, today: Optional[date] = None) -> PrinterState:
    """
    Convert a Supabase row into a PrinterState.

    A missing last_maintenance_date is read as "serviced today", matching
    how new printers are registered.
    """

    last_maintenance = row.get("last_maintenance_date")
    return PrinterState(
        id=int(row["id"]),
        status=PrinterStatus(str(row.get("status") or PrinterStatus.IDLE.value)),
        job_queue_length=max(int(row.get("job_queue") or 0), 0),
        hours_printed=max(float(row.get("hours_printed") or 0), 0.0),
        last_maintenance_date=parse_date(last_maintenance) if last_maintenance else (today or utc_today()),
        name=str(row.get("printer_name") or ""),
        model=row.get("model"),
    )


def list_printers() -> List[PrinterState]:
    """Fetch all printers, newest first."""

    response = (
        get_supabase()
        .table(_PRINTERS_TABLE)
        .select("*")
        .order("created_at", desc=True)
        .execute()
    )
    rows = raise_on_error(response, "fetch printers")
    return [_row_to_printer(row) for row in rows]


def get_printer(printer_id: int) -> Optional[PrinterState]:
    response = (
        get_supabase()
        .table(_PRINTERS_TABLE)
        .select("*")
        .eq("id", printer_id)
        .limit(1)
        .execute()
    )
    rows = raise_on_error(response, "fetch printer")
    return _row_to_printer(rows[0]) if rows else None


_QUEUE_UPDATE_ATTEMPTS: int = 5


def increment_job_queue(printer_id: int) -> int:
    """
    Add one job to a printer's queue counter.

    The query builder has no `job_queue = job_queue + 1`, so the counter is
    compare-and-set: the UPDATE only matches while job_queue still holds the
    value just read, and is retried when another writer got there first.

    Returns:
    - The new queue length

    Raises:
    - ValueError if the printer does not exist
    - RuntimeError if the counter keeps changing under concurrent writers
    """

    client = get_supabase()
    for _ in range(_QUEUE_UPDATE_ATTEMPTS):
        response = (
            client.table(_PRINTERS_TABLE)
            .select("id, job_queue")
            .eq("id", printer_id)
            .limit(1)
            .execute()
        )
        rows = raise_on_error(response, "fetch printer job queue")
        if not rows:
            raise ValueError(f"Printer not found: {printer_id}")

        current = rows[0].get("job_queue")
        new_length = max(int(current or 0), 0) + 1
        query = client.table(_PRINTERS_TABLE).update({"job_queue": new_length}).eq("id", printer_id)
        query = query.is_("job_queue", "null") if current is None else query.eq("job_queue", current)
        updated = raise_on_error(query.execute(), "update printer job queue")
        if updated:
            return new_length

        logger.info(
            "Printer job queue changed concurrently; retrying",
            extra={"printer_id": printer_id, "job_queue": current},
        )

    raise RuntimeError(f"Failed to update printer job queue: {printer_id} kept changing")


__all__ = [
    "get_printer",
    "increment_job_queue",
    "list_printers",
]
