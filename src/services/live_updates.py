"""Fan-out of newly created products to live WebSocket subscribers."""

from __future__ import annotations

import asyncio
import itertools
import logging
from collections.abc import AsyncIterator
from threading import Lock
from typing import Annotated

from fastapi import Depends

from src.config import settings
from src.models.product import Product

logger = logging.getLogger(__name__)


_CLOSED = object()


class SubscriptionClosedError(Exception):
    """Raised by ``Subscription.get`` once the subscription is closed."""


class Subscription:
    """One subscriber's bounded delivery queue.

    Iterating yields products in publish order until the subscription is
    closed. When the queue is full the oldest unread product is dropped.
    Closing wakes a consumer blocked on the queue.
    """

    def __init__(self, hub: LiveUpdateHub, subscriber_id: int, maxsize: int) -> None:
        self.id = subscriber_id
        self.dropped = 0
        self._hub = hub
        self._queue: asyncio.Queue[Product | object] = asyncio.Queue(maxsize=maxsize)
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def pending(self) -> int:
        if self._closed:
            return 0
        return self._queue.qsize()

    def offer(self, product: Product) -> None:
        """Queue a product without blocking the publisher."""

        if self._closed:
            return
        if self._queue.full():
            self._queue.get_nowait()
            self.dropped += 1
            logger.debug(
                "Dropped oldest live update for slow subscriber",
                extra={"subscriber": self.id, "dropped": self.dropped},
            )
        self._queue.put_nowait(product)

    async def get(self) -> Product:
        if self._closed:
            raise SubscriptionClosedError(f"Subscription {self.id} is closed")
        item = await self._queue.get()
        if item is _CLOSED:
            # Leave the marker for any other waiter
            self._queue.put_nowait(_CLOSED)
            raise SubscriptionClosedError(f"Subscription {self.id} is closed")
        return item

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self._hub.unsubscribe(self)

        # Unread products are discarded; the marker releases blocked readers
        while not self._queue.empty():
            self._queue.get_nowait()
        self._queue.put_nowait(_CLOSED)

    def __aiter__(self) -> AsyncIterator[Product]:
        return self._iterate()

    async def _iterate(self) -> AsyncIterator[Product]:
        while True:
            try:
                product = await self.get()
            except SubscriptionClosedError:
                return
            yield product

    async def __aenter__(self) -> Subscription:
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        self.close()


class LiveUpdateHub:
    """Registry of independent subscriber queues."""

    def __init__(self, queue_size: int | None = None) -> None:
        if queue_size is None:
            queue_size = settings.LIVE_UPDATE_QUEUE_SIZE
        self._queue_size = queue_size
        self._lock = Lock()
        self._subscribers: dict[int, Subscription] = {}
        self._ids = itertools.count(1)

    @property
    def subscriber_count(self) -> int:
        with self._lock:
            return len(self._subscribers)

    def subscribe(self) -> Subscription:
        with self._lock:
            subscription = Subscription(self, next(self._ids), self._queue_size)
            self._subscribers[subscription.id] = subscription

        logger.info("Live update subscriber %s connected", subscription.id)
        return subscription

    def unsubscribe(self, subscription: Subscription) -> None:
        with self._lock:
            removed = self._subscribers.pop(subscription.id, None)

        if removed is not None:
            logger.info("Live update subscriber %s disconnected", subscription.id)

    def publish(self, product: Product) -> int:
        """Deliver the product to every current subscriber.

        Must be called from the event loop that owns the subscriber queues.
        Returns the number of subscribers the product was queued for.
        """

        with self._lock:
            subscribers = list(self._subscribers.values())

        for subscription in subscribers:
            subscription.offer(product)

        logger.debug(
            "Published product %s to %d subscribers", product.id, len(subscribers)
        )
        return len(subscribers)


_hub = LiveUpdateHub()


def get_live_update_hub() -> LiveUpdateHub:
    """FastAPI dependency factory."""

    return _hub


HubDependency = Annotated[LiveUpdateHub, Depends(get_live_update_hub)]
