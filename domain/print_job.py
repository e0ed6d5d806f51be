"""
Domain: Print jobs and the overdue-job monitor.

Contract excerpts implemented here:
- A printing job is expected to end at started_at + estimated_print_hours.
- A job is overdue once now exceeds the expected end by more than a
  5-minute grace period.
- Only Printing jobs with a start time and a positive estimate are monitored.

All timestamps must be passed explicitly and must be UTC.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional

from .availability import JobStatus, ProductId, ProductionCommitment
from .time import require_utc_timestamp

OVERDUE_GRACE_PERIOD: timedelta = timedelta(minutes=5)


@dataclass(frozen=True, slots=True)
class PrintJob:
    id: int
    product_id: ProductId
    printer_id: int
    quantity: int
    status: JobStatus
    estimated_print_hours: float = 0.0
    started_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    product_name: Optional[str] = None
    printer_name: Optional[str] = None

    def __post_init__(self) -> None:
        if self.quantity <= 0:
            raise ValueError("quantity must be > 0")
        for name in ("started_at", "completed_at", "created_at"):
            value = getattr(self, name)
            if value is not None:
                require_utc_timestamp(name, value)

    @property
    def estimated_end(self) -> Optional[datetime]:
        if self.started_at is None or self.estimated_print_hours <= 0:
            return None
        return self.started_at + timedelta(hours=self.estimated_print_hours)

    def to_commitment(self, now: Optional[datetime] = None) -> ProductionCommitment:
        """Production commitment this job represents for availability purposes."""

        return ProductionCommitment.from_job_timing(
            product_id=self.product_id,
            quantity=self.quantity,
            status=self.status,
            estimated_print_hours=self.estimated_print_hours,
            started_at=self.started_at,
            job_id=self.id,
            printer_name=self.printer_name,
            now=now,
        )


@dataclass(frozen=True, slots=True)
class OverdueJob:
    job_id: int
    product_name: str
    estimated_end: datetime
    overdue_minutes: int


def find_overdue_job(
    job: PrintJob,
    now: datetime,
    grace: timedelta = OVERDUE_GRACE_PERIOD,
) -> Optional[OverdueJob]:
    """
    Return an OverdueJob when a printing job has run past its estimate plus grace.

    Non-printing jobs and jobs without timing information are never overdue.
    """

    require_utc_timestamp("now", now)

    if job.status is not JobStatus.PRINTING:
        return None
    end = job.estimated_end
    if end is None:
        return None
    if now <= end + grace:
        return None

    return OverdueJob(
        job_id=job.id,
        product_name=job.product_name or "Unknown Product",
        estimated_end=end,
        overdue_minutes=round((now - end) / timedelta(minutes=1)),
    )


__all__ = [
    "OVERDUE_GRACE_PERIOD",
    "OverdueJob",
    "PrintJob",
    "find_overdue_job",
]
