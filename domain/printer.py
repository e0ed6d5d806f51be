"""
Domain: Printer fleet state and printer recommendation.

Contract excerpts implemented here:
- Printers in Maintenance or Offline status are never recommended.
- Idle printers rank before all others; within and across that partition
  printers rank by ascending job queue length.
- Ties keep their input order (stable sort, no secondary key).
- An empty candidate set yields no recommendation (None), which is not an error.

This module contains only pure domain logic: no I/O, no database, no frameworks.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Iterable, List, Optional

from .maintenance import MaintenanceAssessment, assess_maintenance


class PrinterStatus(str, Enum):
    IDLE = "Idle"
    PRINTING = "Printing"
    MAINTENANCE = "Maintenance"
    OFFLINE = "Offline"


UNSCHEDULABLE_STATUSES: frozenset[PrinterStatus] = frozenset(
    {PrinterStatus.MAINTENANCE, PrinterStatus.OFFLINE}
)


@dataclass(frozen=True, slots=True)
class PrinterState:
    """
    Read-only view of a printer supplied by the printer repository.
    """

    id: int
    status: PrinterStatus
    job_queue_length: int
    hours_printed: float
    last_maintenance_date: date
    name: str = ""
    model: Optional[str] = None

    def __post_init__(self) -> None:
        if self.job_queue_length < 0:
            raise ValueError("job_queue_length must be >= 0")
        if self.hours_printed < 0:
            raise ValueError("hours_printed must be >= 0")

    @property
    def is_schedulable(self) -> bool:
        return self.status not in UNSCHEDULABLE_STATUSES

    def maintenance(self, today: Optional[date] = None) -> MaintenanceAssessment:
        return assess_maintenance(self.last_maintenance_date, self.hours_printed, today=today)


def _rank_key(printer: PrinterState) -> tuple[bool, int]:
    return (printer.status is not PrinterStatus.IDLE, printer.job_queue_length)


def rank_printers(printers: Iterable[PrinterState]) -> List[PrinterState]:
    """Schedulable printers, best candidate first."""

    return sorted((p for p in printers if p.is_schedulable), key=_rank_key)


def recommend_printer(printers: Iterable[PrinterState]) -> Optional[PrinterState]:
    """
    Pick the best printer for a new job.

    Returns None when every printer is in Maintenance or Offline; callers must
    treat that as "cannot schedule automatically".

    Example:
        recommend_printer([printing_q2, idle_q5, idle_q1])
        # -> idle_q1
    """

    ranked = rank_printers(printers)
    return ranked[0] if ranked else None


__all__ = [
    "PrinterState",
    "PrinterStatus",
    "UNSCHEDULABLE_STATUSES",
    "rank_printers",
    "recommend_printer",
]
