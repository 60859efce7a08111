"""Tests for the system endpoints and store selection."""

from concurrent.futures import ThreadPoolExecutor

import pytest

from src.config import settings
from src.services import product_registry
from src.services.live_updates import get_live_update_hub
from src.services.product_registry import get_product_store
from src.services.storage.memory_store import InMemoryProductStore
from src.services.storage.sqlite_store import SqliteProductStore
from src.services.workers.product_generator import get_product_generator


@pytest.mark.asyncio
async def test_root(client):
    response = await client.get("/")

    assert response.status_code == 200
    assert response.json()["status"] == "running"


@pytest.mark.asyncio
async def test_health_reports_storage(client):
    response = await client.get("/api/health")

    assert response.status_code == 200
    assert response.json() == {
        "status": "healthy",
        "storage": "memory",
        "storage_status": "connected",
        "products": 2,
        "environment": settings.ENVIRONMENT,
    }


def test_create_product_store_defaults_to_seeded_memory(monkeypatch):
    monkeypatch.setattr(settings, "STORAGE_BACKEND", "memory")
    monkeypatch.setattr(settings, "SEED_MOCK_DATA", True)

    store = product_registry.create_product_store()

    assert isinstance(store, InMemoryProductStore)
    assert store.count() == 8


def test_create_product_store_sqlite(monkeypatch, tmp_path):
    monkeypatch.setattr(settings, "STORAGE_BACKEND", "sqlite")
    monkeypatch.setattr(settings, "DATABASE_URL", f"sqlite:///{tmp_path}/catalog.db")
    monkeypatch.setattr(settings, "SEED_MOCK_DATA", False)

    store = product_registry.create_product_store()

    assert isinstance(store, SqliteProductStore)
    assert store.count() == 0


def test_service_singletons_are_shared_across_threads():
    def resolve(_):
        return get_product_store(), get_product_generator()

    with ThreadPoolExecutor(max_workers=4) as pool:
        resolved = list(pool.map(resolve, range(8)))

    assert len({id(store) for store, _ in resolved}) == 1
    assert len({id(generator) for _, generator in resolved}) == 1
    generator = resolved[0][1]
    assert generator.store is resolved[0][0]
    assert generator.hub is get_live_update_hub()
