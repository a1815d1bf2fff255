"""
FastAPI WebSocket server for the Sequence game.
"""

import logging
import uuid
from typing import Any, Dict, List, Optional

import orjson
from fastapi import FastAPI, WebSocket, WebSocketDisconnect
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from ..commands import parse_command
from ..diff import compute_diff, should_send_full_state
from ..errors import INVALID_EVENT, GameError
from ..models import RoomState
from ..registry import Outcome, RoomRegistry
from ..serialization import get_public_room_info, sanitize_state
from .events import (
    create_connected_event, create_error_event, create_game_event,
    create_room_event, create_state_full_event, create_state_patch_event
)

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

# FastAPI app
app = FastAPI(title="Sequence Game Engine", version="1.0.0")

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Configure appropriately for production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


class ConnectionManager:
    """Manages WebSocket connections and per-player state delivery."""

    def __init__(self):
        self.active_connections: Dict[str, WebSocket] = {}
        # Last state each player received, for diffing
        self.player_states: Dict[str, RoomState] = {}

    async def connect(self, websocket: WebSocket, player_id: str):
        # WebSocket is already accepted in the endpoint
        self.active_connections[player_id] = websocket
        logger.info(f"Player {player_id} connected")

    def disconnect(self, player_id: str):
        self.active_connections.pop(player_id, None)
        self.player_states.pop(player_id, None)
        logger.info(f"Player {player_id} disconnected")

    async def send(self, player_id: str, payload: Any):
        """Send an event model or dict to one player."""
        websocket = self.active_connections.get(player_id)
        if websocket is None:
            return
        if isinstance(payload, BaseModel):
            payload = payload.model_dump(mode="json")
        try:
            await websocket.send_text(orjson.dumps(payload).decode())
        except Exception as e:
            logger.error(f"Error sending to player {player_id}: {e}")
            self.disconnect(player_id)

    async def broadcast(self, player_ids: List[str], payload: Any):
        for player_id in player_ids:
            await self.send(player_id, payload)

    async def send_state(self, player_id: str, state: RoomState, force_full: bool = False):
        """Send a player the new state as a patch when possible, else in full."""
        old_state = self.player_states.get(player_id)

        if force_full or old_state is None or old_state.code != state.code:
            event = create_state_full_event(sanitize_state(state, player_id))
        else:
            ops = compute_diff(old_state, state, player_id)
            if should_send_full_state(ops):
                event = create_state_full_event(sanitize_state(state, player_id))
            else:
                event = create_state_patch_event(state.version, ops)

        await self.send(player_id, event)
        self.player_states[player_id] = state


manager = ConnectionManager()
registry = RoomRegistry()


@app.get("/")
async def root():
    return {"message": "Sequence Game API", "version": "1.0.0"}


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "rooms": len(registry.rooms),
        "connections": len(manager.active_connections)
    }


@app.get("/rooms")
async def list_rooms():
    """Public listing of live rooms."""
    return {"rooms": [get_public_room_info(room) for room in registry.rooms.values()]}


@app.websocket("/ws")
async def websocket_endpoint(websocket: WebSocket):
    """Main WebSocket endpoint."""
    player_id = uuid.uuid4().hex[:8]

    await websocket.accept()
    await manager.connect(websocket, player_id)
    await manager.send(player_id, create_connected_event(player_id))

    try:
        while True:
            raw_data = await websocket.receive_text()

            try:
                command = parse_command(orjson.loads(raw_data))
            except (ValueError, TypeError, AttributeError) as e:
                # Invalid event
                await manager.send(player_id, create_error_event(GameError(INVALID_EVENT, str(e))))
                continue

            await deliver(registry.apply(player_id, command))

    except WebSocketDisconnect:
        logger.info(f"WebSocket disconnected for player {player_id}")
    except Exception as e:
        logger.error(f"WebSocket error for player {player_id}: {e}")
    finally:
        manager.disconnect(player_id)
        outcome = registry.disconnect(player_id)
        if outcome is not None:
            await deliver(outcome)


async def deliver(outcome: Outcome):
    """Send an intent's results: errors privately, state to the whole room."""
    if not outcome.success:
        logger.info(f"Rejected intent from {outcome.player_id}: [{outcome.error.code}] {outcome.error.message}")
        await manager.send(outcome.player_id, create_error_event(outcome.error))
        return

    for event in outcome.private_events:
        await manager.send(outcome.player_id, create_room_event(event))

    if outcome.reply_state and outcome.state is not None:
        await manager.send_state(outcome.player_id, outcome.state, force_full=True)

    if outcome.broadcast and outcome.state is not None:
        await broadcast_state_update(outcome.state, outcome.members)

    for event in outcome.events:
        await manager.broadcast(outcome.members, create_game_event(outcome.room_code, event))


async def broadcast_state_update(state: RoomState, player_ids: Optional[List[str]] = None):
    """Broadcast state update to all players in a room."""
    for player_id in player_ids if player_ids is not None else list(state.players):
        await manager.send_state(player_id, state)
