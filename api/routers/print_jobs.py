"""
Print Job API Endpoints.

Endpoints for planning and scheduling print jobs, changing job status, and
monitoring printing jobs that have run past their estimate.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query

from api.models import (
    AvailabilityResponse,
    JobCreatedResponse,
    JobMonitorResponse,
    JobPlanRequest,
    JobPlanResponse,
    JobStatusUpdateRequest,
    MaterialCheckResponse,
    OverdueJobResponse,
    PrinterResponse,
    PrintJobResponse,
)
from domain.availability import JobStatus
from services.availability_service import AvailabilityService, get_availability_service
from services.scheduling_service import (
    JobNotFoundError,
    ProductNotFoundError,
    SchedulingError,
    check_overdue_jobs,
    notify_overdue_jobs,
    plan_print_job,
    schedule_print_job,
    update_job_status,
)

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "/print-jobs/plan",
    response_model=JobPlanResponse,
    summary="Plan Print Job",
    description="Recommend a printer, check materials and product availability for a prospective job."
)
def plan_job(
    request: JobPlanRequest,
    service: AvailabilityService = Depends(get_availability_service),
):
    """
    Plan a print job without persisting anything.

    `can_schedule` is false when no printer can take work or when any
    required material is Low, Out or Not Found; `blocking_reasons` says why.
    """
    try:
        plan = plan_print_job(request.product_id, request.quantity, availability_service=service)

        return JobPlanResponse(
            product_id=plan.product.id,
            product_name=plan.product.product_name,
            quantity=plan.quantity,
            estimated_hours=plan.estimated_hours,
            recommended_printer=(
                PrinterResponse.from_printer(plan.recommended_printer)
                if plan.recommended_printer else None
            ),
            alternative_printers=[
                PrinterResponse.from_printer(p, with_maintenance=False) for p in plan.alternative_printers
            ],
            materials=[MaterialCheckResponse.from_check(c) for c in plan.material_checks],
            availability=AvailabilityResponse.from_result(
                plan.product.id, plan.quantity, plan.availability, plan.fulfillment
            ),
            can_schedule=plan.can_schedule,
            blocking_reasons=plan.blocking_reasons,
        )

    except ProductNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.exception("Print job planning failed")
        raise HTTPException(
            status_code=500,
            detail=f"Failed to plan print job: {str(e)}"
        )


@router.post(
    "/print-jobs",
    response_model=JobCreatedResponse,
    status_code=201,
    summary="Schedule Print Job",
    description="Create a Pending print job on the recommended (or given) printer."
)
def create_job(
    request: JobPlanRequest,
    service: AvailabilityService = Depends(get_availability_service),
):
    try:
        job_id = schedule_print_job(
            request.product_id,
            request.quantity,
            printer_id=request.printer_id,
            availability_service=service,
        )
        return JobCreatedResponse(
            success=True,
            job_id=job_id,
            message=f"Print job {job_id} has been added to the queue.",
        )

    except ProductNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except SchedulingError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.exception("Print job scheduling failed")
        raise HTTPException(
            status_code=500,
            detail=f"Failed to schedule print job: {str(e)}"
        )


@router.patch(
    "/print-jobs/{job_id}/status",
    response_model=PrintJobResponse,
    summary="Update Print Job Status",
    description="Move a job to a new status. Completing a job adds its units to finished goods."
)
def update_status(
    job_id: int,
    request: JobStatusUpdateRequest,
    service: AvailabilityService = Depends(get_availability_service),
):
    try:
        try:
            status = JobStatus(request.status)
        except ValueError:
            raise HTTPException(
                status_code=400,
                detail=f"Invalid status. Must be one of {[s.value for s in JobStatus]}, got '{request.status}'"
            )

        job = update_job_status(job_id, status, availability_service=service)
        return PrintJobResponse.from_job(job)

    except HTTPException:
        raise
    except JobNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except Exception as e:
        logger.exception("Print job status update failed")
        raise HTTPException(
            status_code=500,
            detail=f"Failed to update print job: {str(e)}"
        )


@router.post(
    "/print-jobs/monitor",
    response_model=JobMonitorResponse,
    summary="Monitor Printing Jobs",
    description="Find printing jobs running more than 5 minutes past their estimated end and notify."
)
def monitor_jobs(
    user_id: int = Query(1, ge=1, description="User who receives the notifications"),
):
    try:
        overdue = check_overdue_jobs()
        notify_overdue_jobs(user_id, overdue)

        return JobMonitorResponse(
            success=True,
            notifications=[OverdueJobResponse.from_overdue(item) for item in overdue],
            message=f"Found {len(overdue)} overdue jobs",
        )

    except Exception as e:
        logger.exception("Print job monitoring failed")
        raise HTTPException(
            status_code=500,
            detail=f"Failed to monitor print jobs: {str(e)}"
        )
