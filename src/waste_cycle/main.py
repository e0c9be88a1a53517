# src/waste_cycle/main.py
"""Main entry point for the waste-cycle backend."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import OperationalError, SQLAlchemyError

from waste_cycle.api.v1 import chat_router, listings_router, users_router
from waste_cycle.core.errors import ServiceError
from waste_cycle.core.settings import settings
from waste_cycle.db.session import create_tables

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

# Initialize FastAPI app
app = FastAPI(
    title="Waste Cycle API",
    description="Marketplace and chat backend for livestock waste and fertilizer trading",
    version=settings.app_version,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=settings.cors_allow_credentials,
    allow_methods=settings.cors_allow_methods,
    allow_headers=settings.cors_allow_headers,
)

# Add GZip middleware for compression
app.add_middleware(GZipMiddleware)

# Include API routers
app.include_router(chat_router, prefix="/api/v1")
app.include_router(listings_router, prefix="/api/v1")
app.include_router(users_router, prefix="/api/v1")


@app.exception_handler(ServiceError)
async def handle_service_error(request: Request, exc: ServiceError) -> JSONResponse:
    """Render service-layer failures with their error kind."""
    headers = None
    if exc.status_code == status.HTTP_401_UNAUTHORIZED:
        headers = {"WWW-Authenticate": "Bearer"}
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.message, "kind": exc.kind},
        headers=headers,
    )


@app.exception_handler(OperationalError)
async def handle_store_unavailable(request: Request, exc: OperationalError) -> JSONResponse:
    """Report transient store failures as retryable."""
    logger.warning("Store unavailable during %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"detail": "Data store temporarily unavailable", "kind": "StoreUnavailable"},
        headers={"Retry-After": str(settings.store_retry_after_seconds)},
    )


@app.exception_handler(SQLAlchemyError)
async def handle_store_error(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    """Report non-transient store failures."""
    logger.error(
        "Store error during %s %s", request.method, request.url.path, exc_info=exc
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Data store error", "kind": "StoreError"},
    )


@app.on_event("startup")
async def on_startup() -> None:
    if settings.create_tables_on_startup:
        create_tables()
        logger.info("Database tables ensured")


@app.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint to verify the service is running."""
    return {"status": "ok"}


@app.get("/")
async def root() -> dict[str, str]:
    """Root endpoint with basic information about the API."""
    return {
        "name": "Waste Cycle API",
        "version": settings.app_version,
        "docs": "/docs",
        "redoc": "/redoc",
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("waste_cycle.main:app", host="0.0.0.0", port=8000, reload=settings.debug)
