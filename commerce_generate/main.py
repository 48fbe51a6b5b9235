"""Commerce generate API application module.

This module initializes the FastAPI application and configures
middleware, routers, and startup/shutdown events.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

import structlog
from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse

from commerce_generate.api.generate import router as generate_router
from commerce_generate.api.health import router as health_router
from commerce_generate.api.middleware import setup_middleware
from commerce_generate.infrastructure.config import settings
from commerce_generate.infrastructure.database import create_tables
from commerce_generate.infrastructure.logging import configure_logging

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Handle application startup and shutdown events.

    Args:
        app: The FastAPI application instance.

    Yields:
        None after startup, cleanup happens after yield.
    """
    configure_logging(settings.log_level)
    logger.info(
        "Starting commerce generate API",
        version=settings.api_version,
        debug=settings.debug,
    )

    await create_tables()

    yield

    logger.info("Shutting down commerce generate API")


app = FastAPI(
    title="Commerce Generate API",
    description="Generate synthetic commerce products for development environments",
    version=settings.api_version,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

# Setup custom middleware (request ID, API key auth, error handling)
setup_middleware(app)

# Include routers
app.include_router(health_router, tags=["Health"])
app.include_router(generate_router)


# ============================================================================
# Custom Exception Handlers
# ============================================================================


@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    """Handle HTTP exceptions with consistent format."""
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
            "request_id": getattr(request.state, "request_id", None),
        },
    )


def serve() -> None:
    """Run the API with uvicorn."""
    import uvicorn

    uvicorn.run(
        "commerce_generate.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )
