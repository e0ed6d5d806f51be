"""
Maintenance sweep over the printer fleet.

Assesses every printer with domain.maintenance and records an in-app
notification for each printer that is due or overdue.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Iterable, List, Optional

from domain.maintenance import MaintenanceStatus
from domain.notification import printer_maintenance_notification
from domain.printer import PrinterState
from repositories import notification_repository

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class MaintenanceNotice:
    printer_id: int
    printer_name: str
    status: MaintenanceStatus  # DUE or OVERDUE
    days_since_maintenance: int
    hours_printed: float
    notification_type: str


def sweep_printers(printers: Iterable[PrinterState], today: Optional[date] = None) -> List[MaintenanceNotice]:
    """
    Return a notice for every printer that needs maintenance, in input order.

    Printers that are fine produce nothing.
    """

    notices: List[MaintenanceNotice] = []
    for printer in printers:
        assessment = printer.maintenance(today=today)
        notification_type = assessment.notification_type
        if notification_type is None:
            continue
        notices.append(MaintenanceNotice(
            printer_id=printer.id,
            printer_name=printer.name,
            status=assessment.status,
            days_since_maintenance=assessment.days_since_maintenance,
            hours_printed=printer.hours_printed,
            notification_type=notification_type,
        ))
    return notices


def record_maintenance_notices(user_id: int, notices: Iterable[MaintenanceNotice]) -> List[MaintenanceNotice]:
    """
    Persist one notification per notice.

    A notice that fails to persist is logged and left out of the returned list;
    the remaining notices are still recorded.
    """

    recorded: List[MaintenanceNotice] = []
    for notice in notices:
        notification = printer_maintenance_notification(user_id, notice.printer_name, notice.notification_type)
        try:
            notification_repository.create_notification(notification)
        except Exception:
            logger.exception(
                f"Failed to record maintenance notification for printer {notice.printer_name!r}",
                extra={"printer_id": notice.printer_id, "notification_type": notice.notification_type},
            )
            continue
        recorded.append(notice)
    return recorded


__all__ = [
    "MaintenanceNotice",
    "record_maintenance_notices",
    "sweep_printers",
]
