"""FastAPI application factory and bootstrap helpers."""

from __future__ import annotations

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from src.api.routes import include_api_routes
from src.config import settings
from src.services.errors import CatalogError
from src.services.workers.product_generator import shutdown_product_generator

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Handle application startup and shutdown events."""
    logger.info(
        "Starting product catalog",
        extra={"environment": settings.ENVIRONMENT, "storage": settings.STORAGE_BACKEND},
    )

    yield

    # The generator loop is the only background task owned by the app
    await shutdown_product_generator()
    logger.info("Product catalog stopped")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""

    app = FastAPI(
        title="Product Catalog",
        description="Product catalog with live updates over WebSocket",
        version="1.0.0",
        lifespan=lifespan,
    )

    _configure_cors(app)
    _register_exception_handlers(app)
    include_api_routes(app)

    return app


def _configure_cors(app: FastAPI) -> None:
    """Allow broad access in non-production environments."""

    origins = settings.CORS_ALLOW_ORIGINS
    if settings.is_production and origins == ["*"]:
        return

    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )


def _register_exception_handlers(app: FastAPI) -> None:
    """Render service errors as ``{"error": message}`` bodies."""

    async def handle_catalog_error(request: Request, exc: CatalogError) -> JSONResponse:
        if exc.status_code >= 500:
            logger.error("Request %s failed: %s", request.url.path, exc.message)
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

    async def handle_request_validation_error(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        errors = exc.errors()
        first = errors[0] if errors else {}
        location = ".".join(str(part) for part in first.get("loc", ()))
        message = first.get("msg", "Invalid request")
        logger.debug("Rejected request to %s: %s", request.url.path, errors)
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": f"{location}: {message}" if location else message},
        )

    app.add_exception_handler(CatalogError, handle_catalog_error)
    app.add_exception_handler(RequestValidationError, handle_request_validation_error)
