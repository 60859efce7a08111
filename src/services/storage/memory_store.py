"""In-memory product store used by default and in tests."""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable
from pathlib import Path
from threading import RLock

from src.models.product import Product, ProductCreate
from src.services.errors import ProductNotFoundError
from src.services.storage.base import ProductFactory, ProductStore

logger = logging.getLogger(__name__)

MOCK_PRODUCTS_FILE_PATH = (
    Path(__file__).resolve().parent.parent.parent / "data" / "mock_products.json"
)


def load_mock_products(path: Path = MOCK_PRODUCTS_FILE_PATH) -> list[Product]:
    """Load the demo catalog shipped with the service."""

    raw = json.loads(path.read_text(encoding="utf-8"))
    return [Product(**item) for item in raw]


class InMemoryProductStore(ProductStore):
    """Product list guarded by a single lock."""

    backend_name = "memory"

    def __init__(self, products: Iterable[Product] = ()) -> None:
        self._lock = RLock()
        self._products: list[Product] = list(products)

    def list_products(self) -> list[Product]:
        with self._lock:
            return list(self._products)

    def get(self, product_id: int) -> Product:
        with self._lock:
            return self._products[self._index_of(product_id)]

    def create_from(self, factory: ProductFactory) -> Product:
        with self._lock:
            new_id = max((p.id for p in self._products), default=0) + 1
            product = Product.from_payload(new_id, factory(new_id))
            self._products.append(product)

        logger.info("Created product %s", product.id)
        logger.debug("Product payload: %s", product.model_dump_json())
        return product

    def update(self, product_id: int, payload: ProductCreate) -> Product:
        product = Product.from_payload(product_id, payload)
        with self._lock:
            self._products[self._index_of(product_id)] = product

        logger.info("Updated product %s", product_id)
        return product

    def delete(self, product_id: int) -> None:
        with self._lock:
            del self._products[self._index_of(product_id)]

        logger.info("Deleted product %s", product_id)

    def count(self) -> int:
        with self._lock:
            return len(self._products)

    def _index_of(self, product_id: int) -> int:
        for index, product in enumerate(self._products):
            if product.id == product_id:
                return index
        raise ProductNotFoundError(product_id)
