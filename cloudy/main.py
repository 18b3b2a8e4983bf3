# Copyright (c) 2025-2026 OptimNow. All Rights Reserved.
# Licensed under the Apache License, Version 2.0.
# See LICENSE file in the project root for full license information.

"""FastAPI application entry point for the Cloudy inventory server.

This module creates the FastAPI application, configures CORS and
correlation-ID middleware, maps request and initialization errors to
HTTP responses, and exposes the resource listing endpoint.
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from . import __version__
from .clients.regional_client_factory import ClientInitError
from .config import settings
from .middleware.cors_middleware import get_cors_config, parse_cors_origins
from .models import HealthStatus, ListResourcesRequest
from .services.inventory_service import InventoryService
from .utils.correlation import CorrelationIDMiddleware
from .utils.error_sanitization import sanitize_error_message
from .utils.input_validation import InputValidator, ValidationError

logger = logging.getLogger(__name__)

# Global instances
inventory_service: Optional[InventoryService] = None


def get_inventory_service() -> InventoryService:
    """Return the process-wide InventoryService, creating it on first use."""
    global inventory_service
    if inventory_service is None:
        inventory_service = InventoryService(settings())
    return inventory_service


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manage application lifecycle - startup and shutdown.

    The inventory service only holds read-only settings; AWS clients are
    built per request.
    """
    app_settings = settings()
    logger.info("Starting Cloudy AWS Resource Lister")

    get_inventory_service()
    logger.info(
        f"Cloudy v{__version__} started: anchor_region={app_settings.anchor_region}, "
        f"request_timeout={app_settings.request_timeout}s, port={app_settings.port}"
    )

    yield

    logger.info("Shutting down Cloudy AWS Resource Lister")


app = FastAPI(
    title="Cloudy AWS Resource Lister",
    description=(
        "Lists EC2 instances, S3 buckets, RDS instances, Lambda functions, "
        "ECS clusters and IAM users across AWS regions in parallel, with "
        "per-region partial-failure reporting."
    ),
    version=__version__,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    **get_cors_config(parse_cors_origins(settings().cors_allowed_origins)),
)
app.add_middleware(CorrelationIDMiddleware)


@app.exception_handler(RequestValidationError)
async def request_validation_exception_handler(request: Request, exc: RequestValidationError):
    """Report malformed request bodies as 400, like any other bad input."""
    problems = "; ".join(
        f"{'.'.join(str(part) for part in error.get('loc', ()))}: {error.get('msg', '')}"
        for error in exc.errors()
    )
    logger.info(f"Rejected request to {request.url.path}: {problems}")
    return JSONResponse(status_code=400, content={"error": problems or "invalid request"})


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """
    Global exception handler for unhandled errors.

    Logs the error and returns a structured error response.
    """
    logger.error(f"Unhandled exception: {str(exc)}", exc_info=True)

    return JSONResponse(
        status_code=500,
        content={
            "error": "Internal server error",
            "message": sanitize_error_message(exc),
        },
    )


@app.get("/health", response_model=HealthStatus)
async def health_check() -> HealthStatus:
    """Health check endpoint for monitoring server status."""
    return HealthStatus(status="healthy", version=__version__)


@app.get("/")
async def root():
    """Root endpoint with API information."""
    return {
        "name": "Cloudy AWS Resource Lister",
        "version": __version__,
        "health_check": "/health",
        "endpoints": {
            "list_resources": "POST /api/v1/resources",
        },
    }


@app.post("/api/v1/resources", response_model=None)
async def list_resources(
    request: ListResourcesRequest,
    service: InventoryService = Depends(get_inventory_service),
) -> JSONResponse:
    """
    List resources across the requested regions.

    Partial failures are reported per region in the response body; only
    bad input (400) and AWS client initialization failures (500) change
    the status code.
    """
    try:
        regions = InputValidator.validate_regions(
            request.regions, max_regions=service.settings.max_regions
        )
    except ValidationError as e:
        return JSONResponse(status_code=400, content={"error": e.message})

    try:
        report = await service.list_resources(regions)
    except ClientInitError as e:
        logger.error(f"Failed to initialize AWS client: {e}")
        return JSONResponse(
            status_code=500,
            content={"error": f"failed to initialize AWS client: {sanitize_error_message(e)}"},
        )

    return JSONResponse(status_code=200, content=report.model_dump(mode="json"))
