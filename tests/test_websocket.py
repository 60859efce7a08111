"""Tests for the live update WebSocket endpoint."""

import pytest
from fastapi import WebSocketDisconnect, status
from fastapi.testclient import TestClient

from src.config import settings
from src.main import app
from src.services.errors import StorageUnavailableError
from src.services.live_updates import LiveUpdateHub, get_live_update_hub
from src.services.product_registry import get_product_store
from src.services.storage.memory_store import InMemoryProductStore

NEW_PRODUCT = {
    "name": "Streaming Speaker",
    "price": 79.0,
    "description": "Portable speaker with a long battery life",
    "category": "Electronics",
}


@pytest.fixture()
def ws_client(reference_products):
    store = InMemoryProductStore(reference_products)
    hub = LiveUpdateHub(queue_size=10)
    app.dependency_overrides[get_product_store] = lambda: store
    app.dependency_overrides[get_live_update_hub] = lambda: hub
    with TestClient(app) as test_client:
        yield test_client, hub
    app.dependency_overrides.pop(get_product_store, None)
    app.dependency_overrides.pop(get_live_update_hub, None)


def test_initial_snapshot_then_created_products(ws_client):
    client, _hub = ws_client

    with client.websocket_connect("/ws") as websocket:
        snapshot = websocket.receive_json()
        assert [p["id"] for p in snapshot] == [1, 2]

        first = client.post("/api/products", json=NEW_PRODUCT).json()
        second = client.post(
            "/api/products", json={**NEW_PRODUCT, "name": "Second Speaker"}
        ).json()

        assert websocket.receive_json() == first
        assert websocket.receive_json() == second


def test_second_subscriber_only_sees_later_products(ws_client):
    client, _hub = ws_client

    with client.websocket_connect("/ws") as early:
        early.receive_json()
        first = client.post("/api/products", json=NEW_PRODUCT).json()

        with client.websocket_connect("/ws") as late:
            late_snapshot = late.receive_json()
            second = client.post(
                "/api/products", json={**NEW_PRODUCT, "name": "Later"}
            ).json()

            assert first["id"] in [p["id"] for p in late_snapshot]
            assert late.receive_json() == second

        assert early.receive_json() == first
        assert early.receive_json() == second


def test_ping_is_answered_with_pong(ws_client):
    client, _hub = ws_client

    with client.websocket_connect("/ws") as websocket:
        websocket.receive_json()
        websocket.send_text("ping")

        assert websocket.receive_text() == "pong"


def test_disconnect_releases_subscription(ws_client):
    client, hub = ws_client

    with client.websocket_connect("/ws") as websocket:
        websocket.receive_json()
        assert hub.subscriber_count == 1

    # The server side finishes after the client context exits
    client.get("/api/health")
    assert hub.subscriber_count == 0


def test_snapshot_can_be_disabled(ws_client, monkeypatch):
    client, _hub = ws_client
    monkeypatch.setattr(settings, "WS_SEND_INITIAL_SNAPSHOT", False)

    with client.websocket_connect("/ws") as websocket:
        created = client.post("/api/products", json=NEW_PRODUCT).json()

        assert websocket.receive_json() == created


def test_consecutive_sessions_each_end_cleanly(ws_client):
    client, hub = ws_client

    for round_number in range(3):
        with client.websocket_connect("/ws") as websocket:
            websocket.receive_json()
            created = client.post(
                "/api/products", json={**NEW_PRODUCT, "name": f"Round {round_number}"}
            ).json()
            assert websocket.receive_json() == created

    client.get("/api/health")
    assert hub.subscriber_count == 0


def test_snapshot_failure_closes_with_internal_error(ws_client, monkeypatch):
    client, hub = ws_client
    store = app.dependency_overrides[get_product_store]()

    def broken_list():
        raise StorageUnavailableError()

    monkeypatch.setattr(store, "list_products", broken_list)

    with client.websocket_connect("/ws") as websocket:
        with pytest.raises(WebSocketDisconnect) as excinfo:
            websocket.receive_json()

    assert excinfo.value.code == status.WS_1011_INTERNAL_ERROR
    assert hub.subscriber_count == 0
