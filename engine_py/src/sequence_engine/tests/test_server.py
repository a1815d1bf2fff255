"""
Tests for the HTTP and WebSocket endpoints.
"""

import orjson
import pytest
from fastapi.testclient import TestClient

from sequence_engine.registry import RoomRegistry
from sequence_engine.ws import server


@pytest.fixture
def client(monkeypatch):
    monkeypatch.setattr(server, "registry", RoomRegistry(seed=5))
    with TestClient(server.app) as test_client:
        yield test_client


def _send(websocket, payload):
    websocket.send_text(orjson.dumps(payload).decode())


def _receive(websocket):
    return orjson.loads(websocket.receive_text())


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert data["rooms"] == 0


def test_root(client):
    assert client.get("/").json()["message"] == "Sequence Game API"


def test_create_room_over_websocket(client):
    with client.websocket_connect("/ws") as websocket:
        connected = _receive(websocket)
        assert connected["type"] == "connected"

        _send(websocket, {"type": "create_room", "name": "Ann"})

        created = _receive(websocket)
        assert created["type"] == "room_created"
        code = created["room_code"]

        full = _receive(websocket)
        assert full["type"] == "state_full"
        assert full["state"]["code"] == code
        assert full["state"]["host_id"] == connected["player_id"]
        assert full["state"]["phase"] == "lobby"

        rooms = client.get("/rooms").json()["rooms"]
        assert len(rooms) == 1
        room = rooms[0]
        assert room["code"] == code
        assert room["phase"] == "lobby"
        assert room["player_count"] == 1
        assert room["max_players"] == 12
        assert room["created_at"] > 0


def test_errors_go_to_sender_only(client):
    with client.websocket_connect("/ws") as host, client.websocket_connect("/ws") as guest:
        _receive(host)
        _receive(guest)

        _send(host, {"type": "create_room"})
        code = _receive(host)["room_code"]
        _receive(host)

        _send(guest, {"type": "join_room", "room_code": code})
        assert _receive(guest)["type"] == "joined_room"
        assert _receive(guest)["type"] == "state_full"
        # Host sees the new member as a state update
        update = _receive(host)
        assert update["type"] in ("state_full", "state_patch")

        _send(guest, {"type": "start_game"})
        error = _receive(guest)
        assert error["type"] == "error"
        assert error["code"] == "NOT_HOST"
        assert error["kind"] == "Forbidden"

        # The host was not told about it
        _send(host, {"type": "request_state"})
        reply = _receive(host)
        assert reply["type"] == "state_full"
        assert len(reply["state"]["players"]) == 2


def test_malformed_message(client):
    with client.websocket_connect("/ws") as websocket:
        _receive(websocket)
        _send(websocket, {"type": "teleport"})

        error = _receive(websocket)

        assert error["type"] == "error"
        assert error["code"] == "INVALID_EVENT"
        assert error["kind"] == "Invalid"
