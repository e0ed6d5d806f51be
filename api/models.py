"""
API Request and Response Models.

Pydantic models for validating API requests and serializing responses.
"""

from datetime import date, datetime
from typing import List, Optional

from pydantic import BaseModel, Field, StrictInt

from domain.availability import AvailabilityResult, FulfillmentStatus, ProductionCommitment
from domain.maintenance import MaintenanceAssessment
from domain.materials import MaterialCheck
from domain.print_job import OverdueJob, PrintJob
from domain.printer import PrinterState


# ============================================================================
# Availability Models
# ============================================================================

class AvailabilityRequest(BaseModel):
    """Request to check whether a product quantity can be fulfilled."""
    product_id: StrictInt = Field(..., description="Product to check")
    quantity: StrictInt = Field(..., description="Requested number of units")

    class Config:
        json_schema_extra = {
            "example": {
                "product_id": 12,
                "quantity": 5
            }
        }


class ProductionJobResponse(BaseModel):
    """An active print job counted in `in_production`."""
    job_id: Optional[int] = None
    quantity: int
    status: str
    printer_name: Optional[str] = None
    estimated_completion: Optional[datetime] = None
    started_at: Optional[datetime] = None

    @staticmethod
    def from_commitment(commitment: ProductionCommitment) -> "ProductionJobResponse":
        return ProductionJobResponse(
            job_id=commitment.job_id,
            quantity=commitment.quantity,
            status=commitment.status.value,
            printer_name=commitment.printer_name,
            estimated_completion=commitment.estimated_completion,
            started_at=commitment.started_at,
        )


class AvailabilityResponse(BaseModel):
    """Availability of a product for a requested quantity."""
    product_id: int
    product_name: Optional[str] = None
    sku: Optional[str] = None
    requested_quantity: int
    available_stock: int
    in_production: int
    total_available: int
    has_production_in_progress: bool
    availability_status: FulfillmentStatus
    earliest_completion: Optional[datetime] = None
    production_jobs: List[ProductionJobResponse] = Field(default_factory=list)
    degraded: bool = False

    class Config:
        json_schema_extra = {
            "example": {
                "product_id": 12,
                "product_name": "Cable Clip",
                "sku": "CC-01",
                "requested_quantity": 5,
                "available_stock": 0,
                "in_production": 10,
                "total_available": 10,
                "has_production_in_progress": True,
                "availability_status": "in_production",
                "earliest_completion": "2025-01-01T18:00:00Z",
                "production_jobs": [
                    {
                        "job_id": 31,
                        "quantity": 10,
                        "status": "Printing",
                        "printer_name": "Prusa MK4 #2",
                        "estimated_completion": "2025-01-01T18:00:00Z",
                        "started_at": "2025-01-01T14:00:00Z"
                    }
                ],
                "degraded": False
            }
        }

    @staticmethod
    def from_result(
        product_id: int,
        quantity: int,
        result: AvailabilityResult,
        status: FulfillmentStatus,
    ) -> "AvailabilityResponse":
        return AvailabilityResponse(
            product_id=product_id,
            product_name=result.product_name,
            sku=result.sku,
            requested_quantity=quantity,
            available_stock=result.available_stock,
            in_production=result.in_production,
            total_available=result.total_available,
            has_production_in_progress=result.has_production_in_progress,
            availability_status=status,
            earliest_completion=result.earliest_completion,
            production_jobs=[ProductionJobResponse.from_commitment(c) for c in result.production_jobs],
            degraded=result.degraded,
        )


class CacheInvalidationResponse(BaseModel):
    """Number of cached availability entries removed."""
    entries_removed: int


# ============================================================================
# Printer Models
# ============================================================================

class MaintenanceAssessmentResponse(BaseModel):
    needs_maintenance: bool
    is_overdue: bool
    days_since_maintenance: int
    recommended_maintenance_hours: int
    status: str

    @staticmethod
    def from_assessment(assessment: MaintenanceAssessment) -> "MaintenanceAssessmentResponse":
        return MaintenanceAssessmentResponse(
            needs_maintenance=assessment.needs_maintenance,
            is_overdue=assessment.is_overdue,
            days_since_maintenance=assessment.days_since_maintenance,
            recommended_maintenance_hours=assessment.recommended_maintenance_hours,
            status=assessment.status.value,
        )


class PrinterResponse(BaseModel):
    """Single printer with its maintenance assessment."""
    id: int
    printer_name: str
    model: Optional[str] = None
    status: str
    job_queue: int
    hours_printed: float
    last_maintenance_date: date
    maintenance: Optional[MaintenanceAssessmentResponse] = None

    @staticmethod
    def from_printer(printer: PrinterState, with_maintenance: bool = True) -> "PrinterResponse":
        return PrinterResponse(
            id=printer.id,
            printer_name=printer.name,
            model=printer.model,
            status=printer.status.value,
            job_queue=printer.job_queue_length,
            hours_printed=printer.hours_printed,
            last_maintenance_date=printer.last_maintenance_date,
            maintenance=(
                MaintenanceAssessmentResponse.from_assessment(printer.maintenance())
                if with_maintenance else None
            ),
        )


class PrinterListResponse(BaseModel):
    printers: List[PrinterResponse]
    total_count: int


class PrinterRecommendationResponse(BaseModel):
    """Best printer for a new job, or null when none can take work."""
    recommended: Optional[PrinterResponse] = None
    alternatives: List[PrinterResponse]
    can_schedule: bool

    class Config:
        json_schema_extra = {
            "example": {
                "recommended": None,
                "alternatives": [],
                "can_schedule": False
            }
        }


# ============================================================================
# Maintenance Models
# ============================================================================

class MaintenanceNoticeResponse(BaseModel):
    printer_name: str
    status: str  # "due" or "overdue"
    days_since_maintenance: int
    hours_printed: float


class MaintenanceSweepResponse(BaseModel):
    success: bool
    notifications: List[MaintenanceNoticeResponse]
    message: str


# ============================================================================
# Print Job Models
# ============================================================================

class JobPlanRequest(BaseModel):
    """Request to plan (or schedule) a print job."""
    product_id: StrictInt
    quantity: StrictInt
    printer_id: Optional[StrictInt] = Field(None, description="Override the recommended printer")

    class Config:
        json_schema_extra = {
            "example": {
                "product_id": 4,
                "quantity": 10
            }
        }


class MaterialCheckResponse(BaseModel):
    material: str
    available: float
    required: float
    status: str

    @staticmethod
    def from_check(check: MaterialCheck) -> "MaterialCheckResponse":
        return MaterialCheckResponse(
            material=check.material,
            available=check.available,
            required=check.required,
            status=check.status.value,
        )


class JobPlanResponse(BaseModel):
    product_id: int
    product_name: str
    quantity: int
    estimated_hours: float
    recommended_printer: Optional[PrinterResponse] = None
    alternative_printers: List[PrinterResponse]
    materials: List[MaterialCheckResponse]
    availability: AvailabilityResponse
    can_schedule: bool
    blocking_reasons: List[str]


class JobCreatedResponse(BaseModel):
    success: bool
    job_id: int
    message: str


class JobStatusUpdateRequest(BaseModel):
    status: str = Field(..., description="Pending, Printing, Completed, Failed or Cancelled")


class PrintJobResponse(BaseModel):
    id: int
    product_id: int
    product_name: Optional[str] = None
    printer_id: int
    printer_name: Optional[str] = None
    quantity: int
    status: str
    estimated_print_hours: float
    started_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None
    created_at: Optional[datetime] = None

    @staticmethod
    def from_job(job: PrintJob) -> "PrintJobResponse":
        return PrintJobResponse(
            id=job.id,
            product_id=job.product_id,
            product_name=job.product_name,
            printer_id=job.printer_id,
            printer_name=job.printer_name,
            quantity=job.quantity,
            status=job.status.value,
            estimated_print_hours=job.estimated_print_hours,
            started_at=job.started_at,
            completed_at=job.completed_at,
            created_at=job.created_at,
        )


class OverdueJobResponse(BaseModel):
    job_id: int
    product_name: str
    estimated_end_time: datetime
    overdue_by_minutes: int

    @staticmethod
    def from_overdue(item: OverdueJob) -> "OverdueJobResponse":
        return OverdueJobResponse(
            job_id=item.job_id,
            product_name=item.product_name,
            estimated_end_time=item.estimated_end,
            overdue_by_minutes=item.overdue_minutes,
        )


class JobMonitorResponse(BaseModel):
    success: bool
    notifications: List[OverdueJobResponse]
    message: str


# ============================================================================
# Error Models
# ============================================================================

class ErrorResponse(BaseModel):
    """Standard error response."""
    error: str
    detail: Optional[str] = None
    status_code: int
