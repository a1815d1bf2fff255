"""
WebSocket outbound event models.
"""

import time
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from ..errors import GameError


class OutboundEventType(str, Enum):
    """Outbound event types."""
    CONNECTED = "connected"
    ROOM_CREATED = "room_created"
    JOINED_ROOM = "joined_room"
    LEFT_ROOM = "left_room"
    STATE_FULL = "state_full"
    STATE_PATCH = "state_patch"
    GAME_STARTED = "game_started"
    GAME_OVER = "game_over"
    ERROR = "error"


class ConnectedEvent(BaseModel):
    """Sent once when the socket is accepted."""
    type: OutboundEventType = OutboundEventType.CONNECTED
    player_id: str
    timestamp: float


class RoomEvent(BaseModel):
    """Room membership confirmation (created, joined, left)."""
    type: OutboundEventType
    room_code: str
    timestamp: float


class StateFullEvent(BaseModel):
    """Full state event."""
    type: OutboundEventType = OutboundEventType.STATE_FULL
    state: Dict[str, Any]
    timestamp: float


class PatchOperation(BaseModel):
    """JSON Patch operation."""
    op: str = Field(..., pattern="^(replace|add|remove)$")
    path: str
    value: Optional[Any] = None


class StatePatchEvent(BaseModel):
    """State patch event."""
    type: OutboundEventType = OutboundEventType.STATE_PATCH
    version: int
    ops: List[PatchOperation]
    timestamp: float


class GameStartedEvent(BaseModel):
    type: OutboundEventType = OutboundEventType.GAME_STARTED
    room_code: str
    timestamp: float


class GameOverEvent(BaseModel):
    type: OutboundEventType = OutboundEventType.GAME_OVER
    room_code: str
    winner: str
    winner_names: List[str]
    timestamp: float


class ErrorEvent(BaseModel):
    """Error event, sent only to the player whose intent failed."""
    type: OutboundEventType = OutboundEventType.ERROR
    kind: str
    code: str
    message: str
    timestamp: float


ROOM_EVENT_TYPES = {
    "room_created": OutboundEventType.ROOM_CREATED,
    "joined_room": OutboundEventType.JOINED_ROOM,
    "left_room": OutboundEventType.LEFT_ROOM,
}


def create_connected_event(player_id: str) -> ConnectedEvent:
    return ConnectedEvent(player_id=player_id, timestamp=time.time())


def create_room_event(event: Dict[str, Any]) -> RoomEvent:
    """Create a membership event from an engine notification."""
    return RoomEvent(
        type=ROOM_EVENT_TYPES[event["type"]],
        room_code=event["room_code"],
        timestamp=time.time()
    )


def create_error_event(error: GameError) -> ErrorEvent:
    """Create an error event."""
    return ErrorEvent(
        kind=error.kind,
        code=error.code,
        message=error.message,
        timestamp=time.time()
    )


def create_state_full_event(state: Dict[str, Any]) -> StateFullEvent:
    """Create a full state event."""
    return StateFullEvent(
        state=state,
        timestamp=time.time()
    )


def create_state_patch_event(version: int, ops: List[Dict]) -> StatePatchEvent:
    """Create a state patch event."""
    patch_ops = [PatchOperation(**op) for op in ops]
    return StatePatchEvent(
        version=version,
        ops=patch_ops,
        timestamp=time.time()
    )


def create_game_event(room_code: str, event: Dict[str, Any]) -> BaseModel:
    """Create the room-wide event for an engine notification."""
    if event["type"] == OutboundEventType.GAME_OVER.value:
        return GameOverEvent(
            room_code=room_code,
            winner=event["winner"],
            winner_names=event["winner_names"],
            timestamp=time.time()
        )
    return GameStartedEvent(room_code=room_code, timestamp=time.time())
