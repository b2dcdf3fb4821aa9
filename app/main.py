"""
FastAPI application factory.

Creates and configures the FastAPI application instance.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from app.core.config import settings
from app.core.exceptions import InvalidSnapshotError, RecoveryEngineError, WorkoutGenerationError
from app.core.logging_config import configure_logging
from app.api.v1.router import api_router

configure_logging()
logger = logging.getLogger(__name__)

app = FastAPI(
    title=settings.PROJECT_NAME,
    version=settings.VERSION,
    description="Recovery readiness, fatigue ranking and up-next workout matching.",
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json")

# Include API router
app.include_router(api_router, prefix="/api/v1")


_STATUS_BY_ERROR = {
    InvalidSnapshotError: 422,
    WorkoutGenerationError: status.HTTP_502_BAD_GATEWAY,
}


@app.exception_handler(RecoveryEngineError)
async def recovery_engine_error_handler(request: Request, exc: RecoveryEngineError):
    """Render engine errors as ``{"error", "message"}`` JSON bodies."""
    status_code = _STATUS_BY_ERROR.get(type(exc), status.HTTP_500_INTERNAL_SERVER_ERROR)
    logger.warning("%s on %s: %s", exc.code, request.url.path, exc.message)
    return JSONResponse(
        status_code=status_code,
        content={"error": exc.code, "message": exc.message},
    )


@app.get("/")
async def root():
    """Root endpoint - health check."""
    return {
        "message": "Recovery Engine API",
        "version": settings.VERSION,
        "status": "healthy"
    }


@app.get("/health")
async def health_check():
    """Health check endpoint for monitoring."""
    return {
        "status": "healthy",
        "service": "recovery-engine",
        "version": settings.VERSION
    }
