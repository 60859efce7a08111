"""Pytest configuration and fixtures for the product catalog service."""

import random

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from src.models.product import Product
from src.services.live_updates import LiveUpdateHub, get_live_update_hub
from src.services.product_registry import get_product_store
from src.services.storage.file_storage import FileStorage, get_file_storage
from src.services.storage.memory_store import InMemoryProductStore
from src.services.workers.product_generator import (
    ProductGenerator,
    get_product_generator,
)


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: marks tests as unit tests")
    config.addinivalue_line("markers", "asyncio: marks tests as async tests")


def make_products() -> list[Product]:
    return [
        Product(
            id=1,
            name="Nike Air",
            price=120.0,
            image="/images/nike-air.jpg",
            description="Running shoe with visible air cushioning",
            category="Shoes",
        ),
        Product(
            id=2,
            name="Book A",
            price=15.0,
            image=None,
            description="A paperback novel",
            category="Books",
        ),
    ]


@pytest.fixture()
def reference_products():
    return make_products()


@pytest.fixture()
def store():
    """Fresh in-memory store holding the two reference products."""
    return InMemoryProductStore(make_products())


@pytest.fixture()
def hub():
    return LiveUpdateHub(queue_size=100)


@pytest_asyncio.fixture()
async def generator(store, hub):
    """Generator with a short tick so loop tests finish quickly."""
    worker = ProductGenerator(
        store=store,
        hub=hub,
        interval_seconds=0.01,
        rng=random.Random(42),
    )
    yield worker
    await worker.stop()


@pytest.fixture()
def file_storage(tmp_path):
    return FileStorage(tmp_path / "uploads", max_bytes=1024)


@pytest.fixture()
def override_services(store, hub, generator, file_storage):
    """Point the app's service dependencies at the per-test instances."""
    from src.main import app

    app.dependency_overrides[get_product_store] = lambda: store
    app.dependency_overrides[get_live_update_hub] = lambda: hub
    app.dependency_overrides[get_product_generator] = lambda: generator
    app.dependency_overrides[get_file_storage] = lambda: file_storage
    yield app
    app.dependency_overrides.pop(get_product_store, None)
    app.dependency_overrides.pop(get_live_update_hub, None)
    app.dependency_overrides.pop(get_product_generator, None)
    app.dependency_overrides.pop(get_file_storage, None)


@pytest_asyncio.fixture()
async def client(override_services):
    """Return an HTTPX async client pointing at the FastAPI app."""

    async with AsyncClient(
        transport=ASGITransport(app=override_services),
        base_url="http://testserver",
    ) as test_client:
        yield test_client
