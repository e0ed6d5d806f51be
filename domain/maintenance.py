"""
Domain: Printer maintenance assessment.

Contract excerpts implemented here:
- Days since maintenance are whole calendar days:
  days_since_maintenance = floor(today - last_maintenance_date)
- A printer needs maintenance every 30 days or 500 printed hours,
  whichever comes first.
- A printer is overdue at 1.5x the day threshold (45 days) or
  1.2x the hour threshold (600 hours).
- Overdue always implies needs maintenance.

A maintenance date in the future yields days_since_maintenance = 0.

This module contains only pure domain logic: no I/O, no database, no frameworks.
Every caller (API routes, maintenance sweep, scripts) uses these thresholds.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from typing import Optional

from .time import as_calendar_date, utc_today

MAINTENANCE_INTERVAL_DAYS: int = 30
RECOMMENDED_MAINTENANCE_HOURS: int = 500
OVERDUE_DAYS_FACTOR: float = 1.5
OVERDUE_HOURS_FACTOR: float = 1.2

OVERDUE_DAYS: float = MAINTENANCE_INTERVAL_DAYS * OVERDUE_DAYS_FACTOR
OVERDUE_HOURS: float = RECOMMENDED_MAINTENANCE_HOURS * OVERDUE_HOURS_FACTOR


class MaintenanceStatus(str, Enum):
    OK = "ok"
    DUE = "due"
    OVERDUE = "overdue"


@dataclass(frozen=True, slots=True)
class MaintenanceAssessment:
    """
    Result of assessing a single printer.

    recommended_maintenance_hours is informational and always 500.
    """

    needs_maintenance: bool
    is_overdue: bool
    days_since_maintenance: int
    recommended_maintenance_hours: int = RECOMMENDED_MAINTENANCE_HOURS

    def __post_init__(self) -> None:
        if self.is_overdue and not self.needs_maintenance:
            raise ValueError("is_overdue requires needs_maintenance")

    @property
    def status(self) -> MaintenanceStatus:
        if self.is_overdue:
            return MaintenanceStatus.OVERDUE
        if self.needs_maintenance:
            return MaintenanceStatus.DUE
        return MaintenanceStatus.OK

    @property
    def notification_type(self) -> Optional[str]:
        """Notification type recorded for this assessment, or None when no notice is needed."""

        if self.is_overdue:
            return "maintenance_overdue"
        if self.needs_maintenance:
            return "maintenance_due"
        return None


def days_since(last_maintenance_date: date | datetime, today: date | datetime) -> int:
    """Whole days between the two dates, clamped at 0 for future maintenance dates."""

    delta = as_calendar_date(today) - as_calendar_date(last_maintenance_date)
    return max(delta.days, 0)


def assess_maintenance(
    last_maintenance_date: date | datetime,
    hours_printed: float,
    today: date | datetime | None = None,
) -> MaintenanceAssessment:
    """
    Decide whether a printer needs (or is overdue for) maintenance.

    Args:
        last_maintenance_date: Date the printer was last serviced
        hours_printed: Cumulative hours printed
        today: Reference date (default: current UTC date)

    Raises:
        ValueError: If hours_printed is negative or not a finite number

    Example:
        assess_maintenance(date(2025, 1, 1), 120, today=date(2025, 2, 5))
        # MaintenanceAssessment(needs_maintenance=True, is_overdue=False, days_since_maintenance=35)
    """

    if isinstance(hours_printed, bool) or not isinstance(hours_printed, (int, float)):
        raise ValueError("hours_printed must be a number")
    if math.isnan(hours_printed) or math.isinf(hours_printed) or hours_printed < 0:
        raise ValueError("hours_printed must be a finite number >= 0")

    days = days_since(last_maintenance_date, today if today is not None else utc_today())

    needs_maintenance = days >= MAINTENANCE_INTERVAL_DAYS or hours_printed >= RECOMMENDED_MAINTENANCE_HOURS
    is_overdue = days >= OVERDUE_DAYS or hours_printed >= OVERDUE_HOURS

    return MaintenanceAssessment(
        needs_maintenance=needs_maintenance,
        is_overdue=is_overdue,
        days_since_maintenance=days,
    )


__all__ = [
    "MAINTENANCE_INTERVAL_DAYS",
    "RECOMMENDED_MAINTENANCE_HOURS",
    "OVERDUE_DAYS",
    "OVERDUE_HOURS",
    "MaintenanceAssessment",
    "MaintenanceStatus",
    "assess_maintenance",
    "days_since",
]
