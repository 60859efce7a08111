"""Background task that inserts synthetic products at a fixed interval."""

from __future__ import annotations

import asyncio
import contextlib
import logging
import random
from collections.abc import Sequence
from typing import Annotated

from fastapi import Depends

from src.config import settings
from src.models.product import Product, ProductCreate
from src.services.live_updates import LiveUpdateHub, get_live_update_hub
from src.services.product_registry import get_product_store
from src.services.storage.base import ProductStore
from src.services.workers.base import BaseWorker

logger = logging.getLogger(__name__)


class ProductGenerator(BaseWorker):
    """Creates a random product every tick while generation is enabled.

    At most one loop task exists at a time. Enabling while a loop is alive
    only clears the halt flag, so the running loop keeps going.
    """

    def __init__(
        self,
        *,
        store: ProductStore,
        hub: LiveUpdateHub,
        interval_seconds: float | None = None,
        categories: Sequence[str] | None = None,
        price_range: tuple[float, float] | None = None,
        rng: random.Random | None = None,
        worker_name: str | None = None,
    ) -> None:
        super().__init__(worker_name)
        self.store = store
        self.hub = hub
        self.interval_seconds = (
            settings.GENERATOR_INTERVAL_SECONDS
            if interval_seconds is None
            else interval_seconds
        )
        self.categories = tuple(categories or settings.GENERATED_CATEGORIES)
        self.price_range = price_range or (
            settings.GENERATED_PRICE_MIN,
            settings.GENERATED_PRICE_MAX,
        )
        self._rng = rng or random.Random()
        self._task: asyncio.Task[None] | None = None
        # Generation starts disabled
        self.shutdown()

    @property
    def is_generating(self) -> bool:
        return not self.is_shutdown_requested()

    @property
    def loop_running(self) -> bool:
        return self._task is not None and not self._task.done()

    def enable(self) -> bool:
        """Turn generation on, spawning the loop if none is alive."""

        self.resume()
        if self.loop_running:
            logger.debug("Generator loop already running, not spawning another")
        else:
            self._task = asyncio.create_task(
                self.run_forever(), name=f"{self.worker_name}-loop"
            )
        return self.is_generating

    def disable(self) -> bool:
        """Turn generation off; the loop exits at its next check."""

        self.shutdown()
        return self.is_generating

    def set_enabled(self, enabled: bool) -> bool:
        return self.enable() if enabled else self.disable()

    async def stop(self) -> None:
        """Disable generation and cancel the loop task."""

        self.shutdown()
        task, self._task = self._task, None
        if task is None or task.done():
            return
        task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await task

    async def run_forever(self) -> None:
        """Main generator loop."""

        logger.info(
            "Product generator started",
            extra={"worker": self.worker_name, "interval": self.interval_seconds},
        )
        try:
            while not self.is_shutdown_requested():
                try:
                    await self.generate_once()
                except Exception as exc:
                    logger.error("Failed to generate product: %s", exc, exc_info=True)
                await asyncio.sleep(self.interval_seconds)
        except asyncio.CancelledError:
            logger.info("Product generator %s cancelled", self.worker_name)
            raise

        logger.info("Product generator %s stopped", self.worker_name)

    async def generate_once(self) -> Product:
        """Insert one synthetic product and publish it to live subscribers."""

        # Store I/O runs off the event loop; publishing stays on it
        product = await asyncio.to_thread(self.store.create_from, self._build_payload)
        self.hub.publish(product)
        logger.info(
            "Generated product %s", product.id, extra={"category": product.category}
        )
        return product

    def _build_payload(self, product_id: int) -> ProductCreate:
        low, high = self.price_range
        return ProductCreate(
            name=f"Generated Product {product_id}",
            price=round(self._rng.uniform(low, high), 2),
            description=f"Automatically generated product number {product_id}",
            category=self._rng.choice(self.categories),
        )


_generator = ProductGenerator(store=get_product_store(), hub=get_live_update_hub())


def get_product_generator() -> ProductGenerator:
    """FastAPI dependency factory."""

    return _generator


async def shutdown_product_generator() -> None:
    await _generator.stop()


GeneratorDependency = Annotated[ProductGenerator, Depends(get_product_generator)]
