"""
Printer API Endpoints.

Endpoints for listing the printer fleet with maintenance status and for
recommending a printer for the next job.
"""

import logging
from typing import Optional

from fastapi import APIRouter, HTTPException, Query

from api.models import PrinterListResponse, PrinterRecommendationResponse, PrinterResponse
from domain.printer import PrinterStatus, rank_printers
from repositories import printer_repository

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get(
    "/printers",
    response_model=PrinterListResponse,
    summary="List Printers",
    description="List all printers with their maintenance assessment."
)
def list_printers(
    status: Optional[str] = Query(None, description="Filter by status ('Idle', 'Printing', 'Maintenance', 'Offline')"),
):
    """
    List printers, newest first.

    **Example usage:**
    - All printers: `GET /api/v1/printers`
    - Only idle printers: `GET /api/v1/printers?status=Idle`
    """
    try:
        status_filter = None
        if status:
            try:
                status_filter = PrinterStatus(status)
            except ValueError:
                raise HTTPException(
                    status_code=400,
                    detail=f"Invalid status. Must be one of {[s.value for s in PrinterStatus]}, got '{status}'"
                )

        printers = printer_repository.list_printers()
        if status_filter is not None:
            printers = [p for p in printers if p.status is status_filter]

        items = [PrinterResponse.from_printer(p) for p in printers]
        return PrinterListResponse(printers=items, total_count=len(items))

    except HTTPException:
        raise
    except Exception as e:
        logger.exception("Listing printers failed")
        raise HTTPException(
            status_code=500,
            detail=f"Failed to list printers: {str(e)}"
        )


@router.get(
    "/printers/recommendation",
    response_model=PrinterRecommendationResponse,
    summary="Recommend Printer",
    description="Pick the best printer for a new job: idle printers first, then shortest queue."
)
def recommend_printer():
    """
    Recommend a printer for the next job.

    Printers in Maintenance or Offline are never recommended. When no printer
    qualifies, `recommended` is null and `can_schedule` is false.
    """
    try:
        ranked = rank_printers(printer_repository.list_printers())
        recommended = ranked[0] if ranked else None

        return PrinterRecommendationResponse(
            recommended=PrinterResponse.from_printer(recommended) if recommended else None,
            alternatives=[PrinterResponse.from_printer(p, with_maintenance=False) for p in ranked[1:]],
            can_schedule=recommended is not None,
        )

    except Exception as e:
        logger.exception("Printer recommendation failed")
        raise HTTPException(
            status_code=500,
            detail=f"Failed to recommend printer: {str(e)}"
        )
