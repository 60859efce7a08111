"""System-level routes such as health checks."""

from __future__ import annotations

import asyncio

from fastapi import APIRouter

from src.config import settings
from src.services.errors import StorageUnavailableError
from src.services.product_registry import StoreDependency

router = APIRouter(tags=["system"])


@router.get("/")
async def read_root() -> dict[str, str]:
    """Service banner used by smoke tests."""

    return {"service": "product-catalog", "status": "running"}


@router.get("/api/health")
async def health_check(store: StoreDependency) -> dict[str, str | int | None]:
    """Health check endpoint with a storage connectivity check."""

    try:
        product_count: int | None = await asyncio.to_thread(store.count)
        storage_status = "connected"
    except StorageUnavailableError:
        product_count = None
        storage_status = "unavailable"

    return {
        "status": "healthy",
        "storage": store.backend_name,
        "storage_status": storage_status,
        "products": product_count,
        "environment": settings.ENVIRONMENT,
    }
