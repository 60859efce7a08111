"""Product store contract shared by the storage backends."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable

from src.models.product import Product, ProductCreate

ProductFactory = Callable[[int], ProductCreate]


class ProductStore(ABC):
    """Owns the canonical product collection.

    Every mutation runs under the store's exclusive lock. Reads return fresh
    lists of immutable products, so callers never share state with the store.
    """

    backend_name: str = "abstract"

    @abstractmethod
    def list_products(self) -> list[Product]:
        """Return a point-in-time snapshot of every product."""

    @abstractmethod
    def get(self, product_id: int) -> Product:
        """Return the product or raise ``ProductNotFoundError``."""

    @abstractmethod
    def create_from(self, factory: ProductFactory) -> Product:
        """Assign the next id, build the payload from it and store the product."""

    @abstractmethod
    def update(self, product_id: int, payload: ProductCreate) -> Product:
        """Replace every field except the id or raise ``ProductNotFoundError``."""

    @abstractmethod
    def delete(self, product_id: int) -> None:
        """Remove the product or raise ``ProductNotFoundError``."""

    def create(self, payload: ProductCreate) -> Product:
        return self.create_from(lambda _product_id: payload)

    def count(self) -> int:
        return len(self.list_products())
