"""
Room registry: the owned table of live rooms and the single entry point for
player intents.
"""

import logging
import random
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from .commands import (
    Command, CommandType, CreateRoomCommand, ExchangeDeadCardCommand,
    JoinRoomCommand, LeaveRoomCommand, RoomCommand, SetTeamCommand, StartGameCommand,
    SubmitMoveCommand
)
from .constants import ROOM_CODE_ALPHABET, ROOM_CODE_LENGTH
from .engine import (
    EngineResult, create_room, exchange_dead_card, join_room, leave_room,
    set_team, start_game, submit_move, toggle_ready
)
from .errors import (
    ALREADY_IN_ROOM, INTERNAL_ERROR, PLAYER_NOT_FOUND, ROOM_NOT_FOUND, GameError
)
from .models import RoomState
from .rules import RuleConfig, default_rules

logger = logging.getLogger(__name__)


@dataclass
class Outcome:
    """
    What the transport has to do after an intent.

    On success ``members`` receive a fresh snapshot when ``broadcast`` is set,
    ``events`` go to every member and ``private_events`` only to the sender.
    On failure only ``error`` is set and goes to the sender.
    """
    player_id: str
    room_code: Optional[str] = None
    state: Optional[RoomState] = None
    members: List[str] = field(default_factory=list)
    broadcast: bool = False
    reply_state: bool = False
    events: List[dict] = field(default_factory=list)
    private_events: List[dict] = field(default_factory=list)
    error: Optional[GameError] = None

    @property
    def success(self) -> bool:
        return self.error is None


class RoomRegistry:
    """
    Owns every live room. Created empty; rooms are added on create and
    removed when their last player leaves.
    """

    def __init__(self, rule_config: Optional[RuleConfig] = None, seed: Optional[int] = None):
        self.rooms: Dict[str, RoomState] = {}
        self.player_rooms: Dict[str, str] = {}
        self.rule_config = rule_config or default_rules
        self.rng = random.Random(seed)
        self._handlers = {
            CommandType.CREATE_ROOM: self._create_room,
            CommandType.JOIN_ROOM: self._join_room,
            CommandType.SET_TEAM: self._set_team,
            CommandType.TOGGLE_READY: self._toggle_ready,
            CommandType.START_GAME: self._start_game,
            CommandType.SUBMIT_MOVE: self._submit_move,
            CommandType.EXCHANGE_DEAD_CARD: self._exchange_dead_card,
            CommandType.LEAVE_ROOM: self._leave_room,
            CommandType.REQUEST_STATE: self._request_state,
        }

    def get_room(self, code: str) -> Optional[RoomState]:
        return self.rooms.get(code)

    def room_of(self, player_id: str) -> Optional[RoomState]:
        code = self.player_rooms.get(player_id)
        return self.rooms.get(code) if code else None

    def generate_code(self) -> str:
        """Short uppercase code, unique among live rooms."""
        while True:
            code = ''.join(self.rng.choice(ROOM_CODE_ALPHABET) for _ in range(ROOM_CODE_LENGTH))
            if code not in self.rooms:
                return code

    def apply(self, player_id: str, command: Command) -> Outcome:
        """
        Handle one intent to completion.

        Rejections come back as an error outcome and leave every room as it
        was. An unexpected exception is logged and reported as an internal
        error; the room keeps its last committed state and other rooms are
        not touched.
        """
        handler = self._handlers[command.type]
        try:
            return handler(player_id, command)
        except GameError as e:
            return Outcome(player_id=player_id, error=e)
        except Exception:
            code = getattr(command, 'room_code', None) or self.player_rooms.get(player_id)
            logger.exception(f"Error handling {command.type.value} from {player_id} in room {code}")
            return Outcome(
                player_id=player_id,
                room_code=code,
                error=GameError(INTERNAL_ERROR, "Internal server error"),
            )

    def disconnect(self, player_id: str) -> Optional[Outcome]:
        """Drop a player whose connection closed. None if they were in no room."""
        if player_id not in self.player_rooms:
            return None
        return self.apply(player_id, LeaveRoomCommand())

    # Internal helpers

    def _resolve(self, player_id: str, command: RoomCommand) -> RoomState:
        code = self.player_rooms.get(player_id)
        if command.room_code and command.room_code not in self.rooms:
            raise GameError(ROOM_NOT_FOUND, f"Room {command.room_code} not found")
        if code is None or code not in self.rooms:
            raise GameError(PLAYER_NOT_FOUND, "Not in a room")
        if command.room_code and command.room_code != code:
            raise GameError(PLAYER_NOT_FOUND, f"Not in room {command.room_code}")
        return self.rooms[code]

    def _commit(self, player_id: str, result: EngineResult, **extra) -> Outcome:
        if not result.success:
            raise GameError(result.error_code, result.error_message)
        state = result.state
        self.rooms[state.code] = state
        return Outcome(
            player_id=player_id,
            room_code=state.code,
            state=state,
            members=list(state.players),
            broadcast=True,
            events=result.events,
            **extra
        )

    # Intent handlers

    def _create_room(self, player_id: str, command: CreateRoomCommand) -> Outcome:
        if player_id in self.player_rooms:
            raise GameError(ALREADY_IN_ROOM, f"Already in room {self.player_rooms[player_id]}")

        code = self.generate_code()
        room = create_room(code, self.rule_config, seed=self.rng.getrandbits(32))
        outcome = self._commit(
            player_id,
            join_room(room, player_id, command.name),
            private_events=[{"type": "room_created", "room_code": code}],
        )
        self.player_rooms[player_id] = code
        logger.info(f"Player {player_id} created room {code}")
        return outcome

    def _join_room(self, player_id: str, command: JoinRoomCommand) -> Outcome:
        room = self.rooms.get(command.room_code)
        if room is None:
            raise GameError(ROOM_NOT_FOUND, "Room not found")
        if player_id in self.player_rooms:
            raise GameError(ALREADY_IN_ROOM, f"Already in room {self.player_rooms[player_id]}")

        outcome = self._commit(
            player_id,
            join_room(room, player_id, command.name),
            private_events=[{"type": "joined_room", "room_code": room.code}],
        )
        self.player_rooms[player_id] = room.code
        logger.info(f"Player {player_id} joined room {room.code}")
        return outcome

    def _set_team(self, player_id: str, command: SetTeamCommand) -> Outcome:
        room = self._resolve(player_id, command)
        return self._commit(player_id, set_team(room, player_id, command.team))

    def _toggle_ready(self, player_id: str, command: RoomCommand) -> Outcome:
        room = self._resolve(player_id, command)
        return self._commit(player_id, toggle_ready(room, player_id))

    def _start_game(self, player_id: str, command: StartGameCommand) -> Outcome:
        room = self._resolve(player_id, command)
        return self._commit(player_id, start_game(room, player_id, command.seed))

    def _submit_move(self, player_id: str, command: SubmitMoveCommand) -> Outcome:
        room = self._resolve(player_id, command)
        target = command.target.as_tuple() if command.target else None
        return self._commit(player_id, submit_move(room, player_id, command.hand_index, target))

    def _exchange_dead_card(self, player_id: str, command: ExchangeDeadCardCommand) -> Outcome:
        room = self._resolve(player_id, command)
        return self._commit(player_id, exchange_dead_card(room, player_id, command.hand_index))

    def _leave_room(self, player_id: str, command: RoomCommand) -> Outcome:
        room = self._resolve(player_id, command)
        result = leave_room(room, player_id)
        if not result.success:
            raise GameError(result.error_code, result.error_message)

        del self.player_rooms[player_id]
        private_events = [{"type": "left_room", "room_code": room.code}]
        if not result.state.players:
            del self.rooms[room.code]
            logger.info(f"Room {room.code} closed, last player left")
            return Outcome(
                player_id=player_id,
                room_code=room.code,
                private_events=private_events,
            )
        return self._commit(player_id, result, private_events=private_events)

    def _request_state(self, player_id: str, command: RoomCommand) -> Outcome:
        room = self._resolve(player_id, command)
        return Outcome(
            player_id=player_id,
            room_code=room.code,
            state=room,
            reply_state=True,
        )
