"""
Domain: In-app notifications raised by the maintenance sweep and job monitor.

Only the notification *content* is built here; persisting it is the job of
repositories.notification_repository. Delivery (email, push) is not handled.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping


class NotificationLevel(str, Enum):
    INFO = "info"
    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"


@dataclass(frozen=True, slots=True)
class Notification:
    user_id: int
    title: str
    message: str
    level: NotificationLevel = NotificationLevel.INFO
    data: Mapping[str, Any] = field(default_factory=dict)


def printer_maintenance_notification(user_id: int, printer_name: str, action: str) -> Notification:
    """
    Build the notice for a printer that is due or overdue for maintenance.

    action is "maintenance_due" or "maintenance_overdue".
    """

    if action == "maintenance_overdue":
        return Notification(
            user_id=user_id,
            title="Printer Maintenance Overdue",
            message=f'Printer "{printer_name}" is overdue for maintenance!',
            level=NotificationLevel.ERROR,
            data={"printerName": printer_name, "action": action},
        )
    if action == "maintenance_due":
        return Notification(
            user_id=user_id,
            title="Printer Maintenance Due",
            message=f'Printer "{printer_name}" is due for maintenance.',
            level=NotificationLevel.WARNING,
            data={"printerName": printer_name, "action": action},
        )
    raise ValueError(f"Unsupported printer notification action: {action!r}")


def overdue_job_notification(user_id: int, job_id: int, product_name: str, overdue_minutes: int) -> Notification:
    return Notification(
        user_id=user_id,
        title="Print Job Overdue",
        message=f'Print job {job_id} for "{product_name}" is {overdue_minutes} minutes past its estimated completion.',
        level=NotificationLevel.WARNING,
        data={"jobId": job_id, "productName": product_name, "action": "overdue"},
    )


__all__ = [
    "Notification",
    "NotificationLevel",
    "overdue_job_notification",
    "printer_maintenance_notification",
]
