"""WebSocket endpoint streaming newly created products."""

from __future__ import annotations

import asyncio
import logging
from functools import partial

from fastapi import APIRouter, WebSocket, WebSocketDisconnect, status

from src.config import settings
from src.services.errors import StorageUnavailableError
from src.services.live_updates import HubDependency, Subscription
from src.services.product_registry import StoreDependency

router = APIRouter(tags=["live"])
logger = logging.getLogger(__name__)

KEEPALIVE_PING = "ping"
KEEPALIVE_PONG = "pong"


async def _forward_updates(websocket: WebSocket, subscription: Subscription) -> None:
    async for product in subscription:
        await websocket.send_json(product.model_dump(mode="json"))


def _log_sender_result(subscription: Subscription, task: asyncio.Task[None]) -> None:
    if task.cancelled():
        return
    exc = task.exception()
    if exc is not None and not isinstance(exc, WebSocketDisconnect):
        logger.warning(
            "Live update connection closed with error: %s",
            exc,
            extra={"subscriber": subscription.id},
        )


async def _handle_inbound(websocket: WebSocket) -> None:
    """Answer keep-alive pings until the client disconnects."""

    while True:
        message = await websocket.receive()
        if message["type"] == "websocket.disconnect":
            return
        text = message.get("text")
        if text is not None and text.strip().lower() == KEEPALIVE_PING:
            await websocket.send_text(KEEPALIVE_PONG)


@router.websocket("/ws")
async def live_updates(
    websocket: WebSocket,
    store: StoreDependency,
    hub: HubDependency,
) -> None:
    await websocket.accept()
    # Subscribe before the snapshot so nothing created in between is missed
    subscription = hub.subscribe()
    sender: asyncio.Task[None] | None = None
    try:
        if settings.WS_SEND_INITIAL_SNAPSHOT:
            try:
                products = await asyncio.to_thread(store.list_products)
            except StorageUnavailableError:
                await websocket.close(code=status.WS_1011_INTERNAL_ERROR)
                return
            await websocket.send_json([p.model_dump(mode="json") for p in products])

        sender = asyncio.create_task(_forward_updates(websocket, subscription))
        sender.add_done_callback(partial(_log_sender_result, subscription))
        await _handle_inbound(websocket)
    finally:
        # Teardown never awaits; closing the subscription ends the sender loop
        subscription.close()
        if sender is not None:
            sender.cancel()
        logger.debug(
            "Live update connection finished",
            extra={"subscriber": subscription.id, "dropped": subscription.dropped},
        )
