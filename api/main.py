"""
Investment Offer Workflow API - Main Application.

FastAPI application exposing the inquiry and offer workflows, suitability
checks and read-only reference data.
"""

import logging
import os
from http import HTTPStatus

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from api import __version__
from api.models import ErrorResponse

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

# Create FastAPI application
app = FastAPI(
    title="Investment Offer Workflow API",
    description="REST API for client inquiries, investment offers and suitability checks",
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
)

# Configure CORS for the back-office frontend
app.add_middleware(
    CORSMiddleware,
    allow_origins=os.getenv("CORS_ORIGINS", "http://localhost:5173").split(","),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    logger.info("%s %s", request.method, request.url.path)
    return await call_next(request)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Render every HTTP error with the standard ErrorResponse body."""
    body = ErrorResponse(
        error=_reason_phrase(exc.status_code),
        detail=str(exc.detail) if exc.detail is not None else None,
        status_code=exc.status_code,
    )
    return JSONResponse(status_code=exc.status_code, content=body.model_dump())


def _reason_phrase(status_code: int) -> str:
    try:
        return HTTPStatus(status_code).phrase
    except ValueError:
        return "Error"


@app.get("/health", tags=["Health"])
def health_check():
    """
    Health check endpoint.

    Returns the API status and version.
    """
    return {
        "status": "healthy",
        "version": __version__,
        "service": "investment-offer-workflow-api"
    }


@app.get("/", tags=["Root"])
def root():
    """
    Root endpoint with API information.
    """
    return {
        "message": "Investment Offer Workflow API",
        "version": __version__,
        "docs": "/docs",
        "health": "/health"
    }


# Import and include routers
from api.routers import inquiries, offers, reference, suitability

app.include_router(inquiries.router, prefix="/api/v1", tags=["Inquiries"])
app.include_router(offers.router, prefix="/api/v1", tags=["Offers"])
app.include_router(suitability.router, prefix="/api/v1", tags=["Suitability"])
app.include_router(reference.router, prefix="/api/v1", tags=["Reference Data"])
