# engine_py/src/sequence_engine/scoring.py

from typing import Dict

from .board import Color
from .models import RoomState


def sequence_points(state: RoomState, color: Color) -> int:
    """Total sequence points recorded for one color."""
    return sum(sequence.points for sequence in state.sequences if sequence.color == color)


def scores_by_color(state: RoomState) -> Dict[str, int]:
    """Sequence points per color key, for snapshots."""
    scores: Dict[str, int] = {}
    for sequence in state.sequences:
        key = sequence.color.key
        scores[key] = scores.get(key, 0) + sequence.points
    return scores


def win_threshold(state: RoomState) -> int:
    """
    Sequence points needed to win with the current number of players.

    Two or three players need two sequences; four or more need one.
    """
    return state.rule_config.get_win_threshold(len(state.players))


def has_won(state: RoomState, color: Color) -> bool:
    return sequence_points(state, color) >= win_threshold(state)
