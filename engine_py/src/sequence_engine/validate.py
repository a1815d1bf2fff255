"""
Move validation for card plays.
"""

from typing import Optional

from .constants import (
    CARD_POSITIONAL, CARD_REMOVER, CARD_WILD, PHASE_IN_PROGRESS, PHASE_LOBBY,
    PHASE_FINISHED, Cell, card_class, in_bounds, is_corner
)
from .errors import (
    CORNER_FORBIDDEN, EXCHANGE_USED, GAME_IN_PROGRESS, GAME_NOT_IN_PROGRESS,
    INVALID_CARD, INVALID_CELL, LOCKED, MISSING_TARGET, NO_TARGET, NOT_DEAD_CARD,
    NOT_ENOUGH_PLAYERS, NOT_HOST, NOT_YOUR_TURN, OCCUPIED, OWN_CHIP,
    PLAYERS_NOT_READY, PLAYER_NOT_FOUND, WRONG_CELL
)
from .models import Player, RoomState


class ValidationResult:
    """Result of move validation."""

    def __init__(
        self,
        valid: bool,
        error_code: Optional[str] = None,
        error_message: Optional[str] = None,
        card_id: Optional[str] = None,
        card_class: Optional[str] = None,
        target: Optional[Cell] = None
    ):
        self.valid = valid
        self.error_code = error_code
        self.error_message = error_message
        self.card_id = card_id
        self.card_class = card_class
        self.target = target

    @classmethod
    def success(
        cls,
        card_id: Optional[str] = None,
        card_class: Optional[str] = None,
        target: Optional[Cell] = None
    ) -> 'ValidationResult':
        """Create a successful validation result."""
        return cls(valid=True, card_id=card_id, card_class=card_class, target=target)

    @classmethod
    def error(cls, error_code: str, error_message: str) -> 'ValidationResult':
        """Create an error validation result."""
        return cls(valid=False, error_code=error_code, error_message=error_message)


def _check_turn(state: RoomState, player_id: str) -> Optional[ValidationResult]:
    if state.phase != PHASE_IN_PROGRESS:
        return ValidationResult.error(
            GAME_NOT_IN_PROGRESS,
            f"Game is not in progress (current: {state.phase})"
        )

    if player_id not in state.players:
        return ValidationResult.error(PLAYER_NOT_FOUND, "Player not found")

    current = state.current_player()
    if current is None or current.id != player_id:
        current_name = current.name if current else None
        return ValidationResult.error(
            NOT_YOUR_TURN,
            f"It's not your turn (current turn: {current_name})"
        )
    return None


def _card_at(player: Player, hand_index: int) -> Optional[str]:
    if 0 <= hand_index < len(player.hand):
        return player.hand[hand_index]
    return None


def is_dead_card(state: RoomState, card_id: str) -> bool:
    """A positional card is dead when both of its cells hold chips."""
    if card_class(card_id) != CARD_POSITIONAL:
        return False
    cells = state.layout.get(card_id, ())
    return bool(cells) and all(state.board.get(cell) is not None for cell in cells)


def validate_move(
    state: RoomState,
    player_id: str,
    hand_index: int,
    target: Optional[Cell]
) -> ValidationResult:
    """
    Validate a card play attempt.

    Args:
        state: Current room state
        player_id: ID of player attempting the play
        hand_index: Position of the card in the player's hand
        target: Board cell to place on or remove from

    Returns:
        ValidationResult with validation outcome
    """
    failure = _check_turn(state, player_id)
    if failure:
        return failure

    player = state.players[player_id]
    card_id = _card_at(player, hand_index)
    if card_id is None:
        return ValidationResult.error(INVALID_CARD, f"No card at hand position {hand_index}")

    kind = card_class(card_id)
    color = player.color

    if target is not None:
        target = (target[0], target[1])
        if not in_bounds(target):
            return ValidationResult.error(INVALID_CELL, f"Cell {target} is outside the board")

    if kind == CARD_REMOVER:
        # One-eyed jack: take an opposing, unlocked chip off the board
        if target is None or is_corner(target):
            return ValidationResult.error(NO_TARGET, "Select an opponent chip to remove")
        chip = state.board.get(target)
        if chip is None:
            return ValidationResult.error(NO_TARGET, "No chip at that position")
        if chip.color == color:
            return ValidationResult.error(OWN_CHIP, "Cannot remove your own chip")
        if chip.locked:
            return ValidationResult.error(LOCKED, "Cannot remove a chip from a completed sequence")
        return ValidationResult.success(card_id, kind, target)

    if target is None:
        return ValidationResult.error(MISSING_TARGET, "Select a cell to place a chip on")

    if kind == CARD_WILD:
        # Two-eyed jack: any empty non-corner cell
        if is_corner(target):
            return ValidationResult.error(CORNER_FORBIDDEN, "Corners are free spaces and cannot hold a chip")
        if state.board.get(target) is not None:
            return ValidationResult.error(OCCUPIED, "Cell already occupied")
        return ValidationResult.success(card_id, kind, target)

    if target not in state.layout.get(card_id, ()):
        return ValidationResult.error(WRONG_CELL, f"{card_id} does not match board position {target}")
    if state.board.get(target) is not None:
        return ValidationResult.error(OCCUPIED, "Cell already occupied")
    return ValidationResult.success(card_id, kind, target)


def validate_dead_card_exchange(state: RoomState, player_id: str, hand_index: int) -> ValidationResult:
    """Validate swapping a dead card for a fresh one before playing."""
    failure = _check_turn(state, player_id)
    if failure:
        return failure

    if not state.rule_config.allow_dead_card_exchange:
        return ValidationResult.error(NOT_DEAD_CARD, "Dead card exchange is disabled")

    if state.exchanged_this_turn:
        return ValidationResult.error(EXCHANGE_USED, "Only one dead card can be exchanged per turn")

    card_id = _card_at(state.players[player_id], hand_index)
    if card_id is None:
        return ValidationResult.error(INVALID_CARD, f"No card at hand position {hand_index}")

    if not is_dead_card(state, card_id):
        return ValidationResult.error(NOT_DEAD_CARD, f"{card_id} still has an open cell")

    return ValidationResult.success(card_id, CARD_POSITIONAL)


def validate_start(state: RoomState, player_id: str) -> ValidationResult:
    """Validate a host request to start (or restart) the game."""
    if player_id not in state.players:
        return ValidationResult.error(PLAYER_NOT_FOUND, "Player not found")

    if state.phase not in (PHASE_LOBBY, PHASE_FINISHED):
        return ValidationResult.error(GAME_IN_PROGRESS, "Game already in progress")

    if state.host_id != player_id:
        return ValidationResult.error(NOT_HOST, "Only the host can start the game")

    rules = state.rule_config
    if len(state.players) < rules.min_players:
        return ValidationResult.error(
            NOT_ENOUGH_PLAYERS,
            f"Need at least {rules.min_players} players"
        )

    if rules.require_ready:
        waiting = [
            player.name for player in state.players.values()
            if not player.ready and not (rules.host_always_ready and player.id == state.host_id)
        ]
        if waiting:
            return ValidationResult.error(
                PLAYERS_NOT_READY,
                f"Not all players ready: {', '.join(waiting)}"
            )

    return ValidationResult.success()
