"""Process-wide product store selection and FastAPI dependency."""

from __future__ import annotations

import logging
from typing import Annotated

from fastapi import Depends

from src.config import settings
from src.services.storage.base import ProductStore
from src.services.storage.memory_store import InMemoryProductStore, load_mock_products
from src.services.storage.sqlite_store import SqliteProductStore, create_sqlite_engine

logger = logging.getLogger(__name__)


def create_product_store() -> ProductStore:
    """Build the store configured by ``STORAGE_BACKEND``."""

    seed = load_mock_products() if settings.SEED_MOCK_DATA else []

    if settings.uses_sqlite:
        store = SqliteProductStore(create_sqlite_engine(settings.DATABASE_URL))
        if seed:
            store.seed(seed)
    else:
        store = InMemoryProductStore(seed)

    logger.info(
        "Product store ready",
        extra={"backend": store.backend_name, "seeded": len(seed)},
    )
    return store


_store = create_product_store()


def get_product_store() -> ProductStore:
    """FastAPI dependency factory."""

    return _store


StoreDependency = Annotated[ProductStore, Depends(get_product_store)]
