"""
Notification repository (persistence).

Stores in-app notifications. Delivery beyond the notifications table is out of scope.
"""

from __future__ import annotations

import json
from typing import Any

from domain.notification import Notification
from repositories.client import get_supabase
from repositories.serialization import raise_on_error

_NOTIFICATIONS_TABLE: str = "notifications"


def create_notification(notification: Notification) -> int:
    """
    Insert a notification row.

    Returns:
    - The new notification id
    """

    payload: dict[str, Any] = {
        "user_id": notification.user_id,
        "title": notification.title,
        "message": notification.message,
        "type": notification.level.value,
        "read": False,
        "data": json.dumps(dict(notification.data)) if notification.data else None,
    }
    response = get_supabase().table(_NOTIFICATIONS_TABLE).insert(payload).execute()
    rows = raise_on_error(response, "create notification")
    if not rows:
        raise RuntimeError("Failed to create notification: no row returned")
    return int(rows[0]["id"])


__all__ = ["create_notification"]
