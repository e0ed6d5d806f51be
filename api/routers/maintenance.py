"""
Maintenance API Endpoints.

Endpoint for sweeping the printer fleet and recording maintenance notifications.
"""

import logging

from fastapi import APIRouter, HTTPException, Query

from api.models import MaintenanceNoticeResponse, MaintenanceSweepResponse
from repositories import printer_repository
from services.maintenance_service import record_maintenance_notices, sweep_printers

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "/maintenance/notifications",
    response_model=MaintenanceSweepResponse,
    summary="Create Maintenance Notifications",
    description="Assess every printer and record a notification for each one due or overdue for maintenance."
)
def create_maintenance_notifications(
    user_id: int = Query(1, ge=1, description="User who receives the notifications"),
):
    """
    Run the maintenance sweep.

    A printer needs maintenance every 30 days or 500 printed hours, and is
    overdue at 45 days or 600 hours.
    """
    try:
        notices = sweep_printers(printer_repository.list_printers())
        recorded = record_maintenance_notices(user_id, notices)

        return MaintenanceSweepResponse(
            success=True,
            notifications=[
                MaintenanceNoticeResponse(
                    printer_name=n.printer_name,
                    status=n.status.value,
                    days_since_maintenance=n.days_since_maintenance,
                    hours_printed=n.hours_printed,
                )
                for n in recorded
            ],
            message=f"Created {len(recorded)} maintenance notifications",
        )

    except Exception as e:
        logger.exception("Maintenance sweep failed")
        raise HTTPException(
            status_code=500,
            detail=f"Failed to create maintenance notifications: {str(e)}"
        )
