"""Game engine: room lifecycle, turns, moves and win evaluation.

Every public function takes a room state and returns an ``EngineResult``.
The input state is never mutated; on success the result carries an updated
deep copy, on failure it carries the untouched input state and an error.
"""

import copy
import logging
import random
from typing import List, Optional

from .board import Board, Team
from .constants import (
    CARD_REMOVER, PHASE_FINISHED, PHASE_IN_PROGRESS, PHASE_LOBBY, Cell
)
from .errors import (
    ALREADY_IN_ROOM, GAME_IN_PROGRESS, PLAYER_NOT_FOUND, ROOM_FULL, TEAM_FULL
)
from .layout import new_layout_map
from .models import Player, RoomState
from .rules import RuleConfig, default_rules
from .scoring import has_won, sequence_points
from .sequences import find_new_sequences, record_sequence
from .shuffle import deal_hands, draw_card, new_deck
from .validate import validate_dead_card_exchange, validate_move, validate_start

logger = logging.getLogger(__name__)

EVENT_GAME_STARTED = "game_started"
EVENT_GAME_OVER = "game_over"


class EngineResult:
    """Outcome of an engine operation."""

    def __init__(
        self,
        success: bool,
        state: RoomState,
        error_code: Optional[str] = None,
        error_message: Optional[str] = None,
        events: Optional[List[dict]] = None
    ):
        self.success = success
        self.state = state
        self.error_code = error_code
        self.error_message = error_message
        self.events = events or []

    @classmethod
    def ok(cls, state: RoomState, events: Optional[List[dict]] = None) -> 'EngineResult':
        return cls(True, state, events=events)

    @classmethod
    def fail(cls, state: RoomState, error_code: str, error_message: str) -> 'EngineResult':
        logger.info(f"Room {state.code}: rejected [{error_code}] {error_message}")
        return cls(False, state, error_code=error_code, error_message=error_message)


def create_room(
    code: str,
    rule_config: Optional[RuleConfig] = None,
    seed: Optional[int] = None
) -> RoomState:
    """
    Create an empty room with its own board layout.

    The layout is generated once here and kept for every game played in
    the room.
    """
    rng = random.Random(seed)
    room = RoomState(
        code=code,
        rule_config=rule_config or default_rules,
        rng=rng,
    )
    room.layout = new_layout_map(rng)
    logger.info(f"Room {code} created")
    return room


def join_room(state: RoomState, player_id: str, name: str) -> EngineResult:
    """Add a player at the end of the turn order. The first player becomes host."""
    if player_id in state.players:
        return EngineResult.fail(state, ALREADY_IN_ROOM, "Already in room")
    if state.phase == PHASE_IN_PROGRESS:
        return EngineResult.fail(state, GAME_IN_PROGRESS, "Game already in progress")
    if len(state.players) >= state.rule_config.max_players:
        return EngineResult.fail(state, ROOM_FULL, "Room is full")

    new_state = copy.deepcopy(state)
    new_state.players[player_id] = Player(
        id=player_id,
        name=name or f"Player_{player_id[:4]}",
        seat=new_state.next_seat,
    )
    new_state.next_seat += 1
    if new_state.host_id is None:
        new_state.host_id = player_id
    new_state.log(f"{new_state.players[player_id].name} joined the room")
    new_state.increment_version()
    return EngineResult.ok(new_state)


def set_team(state: RoomState, player_id: str, team: Optional[Team]) -> EngineResult:
    """Choose a team color, or clear it with ``None`` to play on a personal color."""
    player = state.players.get(player_id)
    if player is None:
        return EngineResult.fail(state, PLAYER_NOT_FOUND, "Player not found")
    if state.phase == PHASE_IN_PROGRESS:
        return EngineResult.fail(state, GAME_IN_PROGRESS, "Cannot change teams during a game")
    if team is not None and player.team != team:
        if state.team_size(team) >= state.rule_config.max_team_size:
            return EngineResult.fail(state, TEAM_FULL, f"Team {team.value} is full")

    new_state = copy.deepcopy(state)
    new_state.players[player_id].team = team
    new_state.log(f"{player.name} is now on {team.value if team else 'no team'}")
    new_state.increment_version()
    return EngineResult.ok(new_state)


def toggle_ready(state: RoomState, player_id: str) -> EngineResult:
    player = state.players.get(player_id)
    if player is None:
        return EngineResult.fail(state, PLAYER_NOT_FOUND, "Player not found")
    if state.phase == PHASE_IN_PROGRESS:
        return EngineResult.fail(state, GAME_IN_PROGRESS, "Game already in progress")

    new_state = copy.deepcopy(state)
    new_state.players[player_id].ready = not player.ready
    new_state.increment_version()
    return EngineResult.ok(new_state)


def start_game(state: RoomState, player_id: str, seed: Optional[int] = None) -> EngineResult:
    """
    Start a new game in the room.

    Resets every game-scoped field (board, deck, discard pile, sequences,
    winner, turn), deals fresh hands and picks a random first player.
    The room layout is kept.
    """
    validation = validate_start(state, player_id)
    if not validation.valid:
        return EngineResult.fail(state, validation.error_code, validation.error_message)

    new_state = copy.deepcopy(state)
    if seed is not None:
        new_state.rng = random.Random(seed)

    new_state.board = Board()
    new_state.deck = new_deck(new_state.rng)
    new_state.discard = []
    new_state.sequences = []
    new_state.sequence_keys = set()
    new_state.winner = None
    new_state.last_move = None
    new_state.exchanged_this_turn = False
    new_state.game_log = []

    deal_hands(new_state)
    for player in new_state.players.values():
        player.ready = False

    new_state.turn_index = new_state.rng.randrange(len(new_state.players))
    new_state.phase = PHASE_IN_PROGRESS
    new_state.increment_version()

    starter = new_state.current_player()
    new_state.log(f"Game started! {starter.name} goes first")
    logger.info(
        f"Room {new_state.code}: game started with {len(new_state.players)} players, "
        f"{starter.name} first"
    )
    return EngineResult.ok(new_state, events=[{"type": EVENT_GAME_STARTED}])


def submit_move(
    state: RoomState,
    player_id: str,
    hand_index: int,
    target: Optional[Cell] = None
) -> EngineResult:
    """
    Play the card at ``hand_index`` on ``target``.

    Placing cards put a chip of the player's color on the board and may
    complete sequences; a one-eyed jack removes an opposing chip instead.
    The played card is discarded and a replacement drawn. The turn passes
    on unless the move wins the game.
    """
    validation = validate_move(state, player_id, hand_index, target)
    if not validation.valid:
        return EngineResult.fail(state, validation.error_code, validation.error_message)

    new_state = copy.deepcopy(state)
    player = new_state.players[player_id]
    color = player.color
    card_id = player.hand.pop(hand_index)
    cell = validation.target
    new_state.discard.append(card_id)

    if validation.card_class == CARD_REMOVER:
        new_state.board.remove(cell)
        new_state.log(f"{player.name} removed the chip at {cell} with {card_id}")
    else:
        new_state.board.place(cell, color)
        new_state.log(f"{player.name} played {card_id} on {cell}")

    replacement = draw_card(new_state)
    if replacement is not None:
        player.hand.append(replacement)

    recorded = []
    if validation.card_class != CARD_REMOVER:
        for sequence in find_new_sequences(new_state, cell, color):
            record_sequence(new_state, sequence)
            recorded.append(sequence)
            new_state.log(f"{player.name} completed a sequence of {sequence.length}")
            if has_won(new_state, color):
                new_state.winner = color
                break

    new_state.last_move = {
        "player_id": player_id,
        "card": card_id,
        "cell": list(cell),
        "action": "remove" if validation.card_class == CARD_REMOVER else "place",
        "sequences": len(recorded),
    }

    events = []
    if new_state.winner is not None:
        new_state.phase = PHASE_FINISHED
        winners = [p.name for p in new_state.players_with_color(color)]
        new_state.log(f"{', '.join(winners)} won the game!")
        logger.info(
            f"Room {new_state.code}: {color.key} wins with "
            f"{sequence_points(new_state, color)} sequence points"
        )
        events.append({"type": EVENT_GAME_OVER, "winner": color.key, "winner_names": winners})
    else:
        new_state.advance_turn()

    new_state.increment_version()
    return EngineResult.ok(new_state, events=events)


def exchange_dead_card(state: RoomState, player_id: str, hand_index: int) -> EngineResult:
    """Swap a dead card for a new one. The player keeps the turn."""
    validation = validate_dead_card_exchange(state, player_id, hand_index)
    if not validation.valid:
        return EngineResult.fail(state, validation.error_code, validation.error_message)

    new_state = copy.deepcopy(state)
    player = new_state.players[player_id]
    card_id = player.hand.pop(hand_index)
    new_state.discard.append(card_id)
    replacement = draw_card(new_state)
    if replacement is not None:
        player.hand.append(replacement)
    new_state.exchanged_this_turn = True
    new_state.log(f"{player.name} exchanged dead card {card_id}")
    new_state.increment_version()
    return EngineResult.ok(new_state)


def leave_room(state: RoomState, player_id: str) -> EngineResult:
    """
    Remove a player from the room (explicit leave or disconnect).

    The host role passes to the earliest remaining player. During a game the
    leaver's hand goes to the discard pile and their chips stay on the board;
    the player after them keeps their place in the turn order. When too few
    players remain the room drops back to the lobby.
    """
    if player_id not in state.players:
        return EngineResult.fail(state, PLAYER_NOT_FOUND, "Player not found")

    new_state = copy.deepcopy(state)
    leaving_index = list(new_state.players).index(player_id)
    player = new_state.players.pop(player_id)
    new_state.log(f"{player.name} left the room")

    if not new_state.players:
        new_state.host_id = None
        new_state.increment_version()
        return EngineResult.ok(new_state)

    if new_state.host_id == player_id:
        new_state.host_id = next(iter(new_state.players))
        logger.info(f"Room {new_state.code}: host transferred to {new_state.host_id}")

    if new_state.phase == PHASE_IN_PROGRESS:
        new_state.discard.extend(player.hand)
        if leaving_index < new_state.turn_index:
            new_state.turn_index -= 1
        elif leaving_index == new_state.turn_index:
            new_state.exchanged_this_turn = False
        new_state.turn_index %= len(new_state.players)

        if len(new_state.players) < new_state.rule_config.min_players:
            new_state.phase = PHASE_LOBBY
            new_state.log("Not enough players left, game stopped")
            logger.info(f"Room {new_state.code}: game stopped, not enough players")
    else:
        new_state.turn_index %= len(new_state.players)

    new_state.increment_version()
    return EngineResult.ok(new_state)
