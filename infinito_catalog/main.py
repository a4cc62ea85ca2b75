"""Infinito Catalog main application module.

This module initializes the FastAPI application and configures
core middleware, routers, exception handlers and the bundled UI.
"""

from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncGenerator

import structlog
from fastapi import FastAPI, HTTPException, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from infinito_catalog.api.collections import router as collections_router
from infinito_catalog.api.dependencies import close_catalog_service
from infinito_catalog.api.health import router as health_router
from infinito_catalog.api.heartbeat import router as heartbeat_router
from infinito_catalog.api.middleware import setup_middleware
from infinito_catalog.catalog.taxonomy import all_collection_handles
from infinito_catalog.domain.exceptions import (
    CatalogError,
    EmptyCollectionError,
    NetworkError,
    RemoteFetchError,
    RenderError,
)
from infinito_catalog.infrastructure.config import settings

logger = structlog.get_logger()

STATIC_DIR = Path(__file__).resolve().parent / "static"


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Handle application startup and shutdown events.

    Args:
        app: The FastAPI application instance.

    Yields:
        None after startup, cleanup happens after yield.
    """
    logger.info(
        "Starting Infinito Catalog",
        version=settings.api_version,
        store=settings.store_base_url,
        known_collections=len(all_collection_handles()),
    )

    yield

    await close_catalog_service()
    logger.info("Shutting down Infinito Catalog")


app = FastAPI(
    title="Infinito Catalog",
    description="Printable product catalogs from the Infinito Piercing storefront",
    version=settings.api_version,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

# CORS middleware (must be added before custom middleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Setup custom middleware (request ID, error handling)
setup_middleware(app)

# Include routers
app.include_router(health_router, tags=["Health"])
app.include_router(collections_router)
app.include_router(heartbeat_router)


# ============================================================================
# Custom Exception Handlers
# ============================================================================


def catalog_error_status(exc: CatalogError) -> tuple[int, str]:
    """Map a catalog error to an HTTP status and error code.

    A collection missing upstream and an empty collection both surface as
    404, as the UI treats them alike.
    """
    if isinstance(exc, EmptyCollectionError):
        return status.HTTP_404_NOT_FOUND, "COLLECTION_EMPTY"
    if isinstance(exc, RemoteFetchError):
        if exc.is_not_found:
            return status.HTTP_404_NOT_FOUND, "COLLECTION_NOT_FOUND"
        return status.HTTP_502_BAD_GATEWAY, "STOREFRONT_ERROR"
    if isinstance(exc, NetworkError):
        return status.HTTP_502_BAD_GATEWAY, "STOREFRONT_UNREACHABLE"
    if isinstance(exc, RenderError):
        return status.HTTP_500_INTERNAL_SERVER_ERROR, "RENDER_ERROR"
    return status.HTTP_500_INTERNAL_SERVER_ERROR, "CATALOG_ERROR"


@app.exception_handler(CatalogError)
async def catalog_exception_handler(request: Request, exc: CatalogError) -> JSONResponse:
    """Handle catalog errors with consistent format."""
    request_id = getattr(request.state, "request_id", None)
    status_code, error_code = catalog_error_status(exc)

    logger.warning(
        "Catalog request failed",
        path=request.url.path,
        error_code=error_code,
        error=exc.message,
    )

    return JSONResponse(
        status_code=status_code,
        content={
            "error_code": error_code,
            "message": exc.message,
            "details": exc.details,
            "request_id": request_id,
        },
    )


@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    """Handle HTTP exceptions with consistent format."""
    request_id = getattr(request.state, "request_id", None)

    detail = exc.detail
    if isinstance(detail, dict):
        error_code = detail.get("error_code", "ERROR")
        message = detail.get("message", str(detail))
        details = detail.get("details", [])
    else:
        error_code = "ERROR"
        message = str(detail)
        details = []

    return JSONResponse(
        status_code=exc.status_code,
        content={
            "error_code": error_code,
            "message": message,
            "details": details,
            "request_id": request_id,
        },
    )


# Bundled UI (mounted last so API routes take precedence)
app.mount("/", StaticFiles(directory=str(STATIC_DIR), html=True), name="static")
