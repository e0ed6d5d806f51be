"""
Product Availability API Endpoints.

Endpoints for checking whether a product quantity can be fulfilled from
stock or in-progress production, and for invalidating cached answers.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException

from api.models import AvailabilityRequest, AvailabilityResponse, CacheInvalidationResponse
from domain.availability import classify_fulfillment
from services.availability_service import AvailabilityService, get_availability_service

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "/products/availability",
    response_model=AvailabilityResponse,
    summary="Check Product Availability",
    description="Check stock on hand plus in-progress production for a requested quantity."
)
def check_product_availability(
    request: AvailabilityRequest,
    service: AvailabilityService = Depends(get_availability_service),
):
    """
    Check availability of a product for a requested quantity.

    **Classification:**
    - `available`: stock on hand covers the request
    - `in_production`: stock plus Pending/Printing jobs covers the request
    - `out_of_stock`: even with production the request cannot be covered

    Results are cached for 5 minutes per (product, quantity). When the
    stock or job lookup fails, a zeroed result with `degraded: true` is
    returned; treat it as "unknown", not as confirmed zero stock.

    **Example request:**
    ```json
    {"product_id": 12, "quantity": 5}
    ```
    """
    try:
        result = service.get_product_availability(request.product_id, request.quantity)
        status = classify_fulfillment(result, request.quantity)
        return AvailabilityResponse.from_result(request.product_id, request.quantity, result, status)

    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.exception("Product availability check failed")
        raise HTTPException(
            status_code=500,
            detail=f"Failed to check availability: {str(e)}"
        )


@router.post(
    "/products/{product_id}/availability/invalidate",
    response_model=CacheInvalidationResponse,
    summary="Invalidate Product Availability",
    description="Drop cached availability for one product after a stock or production change."
)
def invalidate_product_availability(
    product_id: int,
    service: AvailabilityService = Depends(get_availability_service),
):
    return CacheInvalidationResponse(entries_removed=service.invalidate_product(product_id))


@router.post(
    "/products/availability/invalidate",
    response_model=CacheInvalidationResponse,
    summary="Invalidate All Availability",
    description="Drop every cached availability entry."
)
def invalidate_all_availability(
    service: AvailabilityService = Depends(get_availability_service),
):
    return CacheInvalidationResponse(entries_removed=service.invalidate_all())
