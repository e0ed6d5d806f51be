"""
Print Shop ERP API - Main Application.

FastAPI application with CORS enabled for frontend communication.
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api import __version__
from config import get_cors_allow_origins, setup_logging

setup_logging()

# Create FastAPI application
app = FastAPI(
    title="Print Shop ERP API",
    description="Availability, printer recommendation and maintenance rules for a 3D-printing shop",
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=get_cors_allow_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/health", tags=["Health"])
def health_check():
    """
    Health check endpoint.

    Returns the API status and version.
    """
    return {
        "status": "healthy",
        "version": __version__,
        "service": "print-shop-erp-api"
    }


@app.get("/", tags=["Root"])
def root():
    """
    Root endpoint with API information.
    """
    return {
        "message": "Print Shop ERP API",
        "version": __version__,
        "docs": "/docs",
        "health": "/health"
    }


# Import and include routers
from api.routers import availability, maintenance, print_jobs, printers

app.include_router(availability.router, prefix="/api/v1", tags=["Availability"])
app.include_router(printers.router, prefix="/api/v1", tags=["Printers"])
app.include_router(maintenance.router, prefix="/api/v1", tags=["Maintenance"])
app.include_router(print_jobs.router, prefix="/api/v1", tags=["Print Jobs"])
