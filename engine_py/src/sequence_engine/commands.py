"""
Intent (command) models accepted by the room registry.
"""

from enum import Enum
from typing import Any, Dict, Optional, Union

from pydantic import BaseModel, Field, ValidationError, field_validator

from .board import Team
from .constants import BOARD_SIZE


class CommandType(str, Enum):
    """Inbound intent types."""
    CREATE_ROOM = "create_room"
    JOIN_ROOM = "join_room"
    SET_TEAM = "set_team"
    TOGGLE_READY = "toggle_ready"
    START_GAME = "start_game"
    SUBMIT_MOVE = "submit_move"
    EXCHANGE_DEAD_CARD = "exchange_dead_card"
    LEAVE_ROOM = "leave_room"
    REQUEST_STATE = "request_state"


class BoardCell(BaseModel):
    row: int = Field(..., ge=0, lt=BOARD_SIZE)
    col: int = Field(..., ge=0, lt=BOARD_SIZE)

    def as_tuple(self):
        return (self.row, self.col)


class BaseCommand(BaseModel):
    """Base command model."""
    type: CommandType


class RoomCommand(BaseCommand):
    """Command scoped to the sender's current room."""
    room_code: Optional[str] = Field(default=None, min_length=1, max_length=12)

    @field_validator('room_code')
    @classmethod
    def normalize_room_code(cls, v):
        return v.strip().upper() if v else v


class CreateRoomCommand(BaseCommand):
    type: CommandType = CommandType.CREATE_ROOM
    name: str = Field(default="Host", min_length=1, max_length=30)


class JoinRoomCommand(BaseCommand):
    type: CommandType = CommandType.JOIN_ROOM
    room_code: str = Field(..., min_length=1, max_length=12)
    name: str = Field(default="Player", min_length=1, max_length=30)

    @field_validator('room_code')
    @classmethod
    def normalize_room_code(cls, v):
        return v.strip().upper()


class SetTeamCommand(RoomCommand):
    type: CommandType = CommandType.SET_TEAM
    team: Optional[Team] = None


class ToggleReadyCommand(RoomCommand):
    type: CommandType = CommandType.TOGGLE_READY


class StartGameCommand(RoomCommand):
    type: CommandType = CommandType.START_GAME
    seed: Optional[int] = Field(
        default=None,
        description="Fixed shuffle seed for reproducible games in tests; omit in play"
    )


class SubmitMoveCommand(RoomCommand):
    type: CommandType = CommandType.SUBMIT_MOVE
    hand_index: int = Field(..., ge=0)
    target: Optional[BoardCell] = None


class ExchangeDeadCardCommand(RoomCommand):
    type: CommandType = CommandType.EXCHANGE_DEAD_CARD
    hand_index: int = Field(..., ge=0)


class LeaveRoomCommand(RoomCommand):
    type: CommandType = CommandType.LEAVE_ROOM


class RequestStateCommand(RoomCommand):
    type: CommandType = CommandType.REQUEST_STATE


Command = Union[
    CreateRoomCommand,
    JoinRoomCommand,
    SetTeamCommand,
    ToggleReadyCommand,
    StartGameCommand,
    SubmitMoveCommand,
    ExchangeDeadCardCommand,
    LeaveRoomCommand,
    RequestStateCommand,
]

COMMAND_MODELS = {
    CommandType.CREATE_ROOM: CreateRoomCommand,
    CommandType.JOIN_ROOM: JoinRoomCommand,
    CommandType.SET_TEAM: SetTeamCommand,
    CommandType.TOGGLE_READY: ToggleReadyCommand,
    CommandType.START_GAME: StartGameCommand,
    CommandType.SUBMIT_MOVE: SubmitMoveCommand,
    CommandType.EXCHANGE_DEAD_CARD: ExchangeDeadCardCommand,
    CommandType.LEAVE_ROOM: LeaveRoomCommand,
    CommandType.REQUEST_STATE: RequestStateCommand,
}


def parse_command(data: Dict[str, Any]) -> Command:
    """
    Parse raw intent data into the matching command model.

    Args:
        data: Raw message from the transport

    Returns:
        Parsed command model

    Raises:
        ValueError: If the type is unknown or the payload is malformed
    """
    command_type = data.get("type")

    if not command_type:
        raise ValueError("Missing command type")

    try:
        command_type = CommandType(command_type)
    except ValueError:
        raise ValueError(f"Invalid command type: {command_type}")

    try:
        return COMMAND_MODELS[command_type](**data)
    except ValidationError as e:
        raise ValueError(f"Invalid command data: {e}")
