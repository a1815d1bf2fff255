"""
State serialization and sanitization utilities.
"""

from typing import Any, Dict, List, Optional

from .constants import HAND_VISIBILITY_ALL
from .models import Player, RoomState, Sequence
from .scoring import scores_by_color, win_threshold

RECENT_LOG_LINES = 10


def sanitize_state(state: RoomState, viewer_id: Optional[str] = None) -> Dict[str, Any]:
    """
    Build the room snapshot sent to one viewer.

    Args:
        state: Room state to sanitize
        viewer_id: ID of the player viewing the state

    Returns:
        JSON-ready snapshot. Hands are included for every player when the
        rules say hands are visible to all, otherwise only the viewer's.
    """
    current = state.current_player()
    show_all_hands = state.rule_config.hand_visibility == HAND_VISIBILITY_ALL

    return {
        "code": state.code,
        "version": state.version,
        "phase": state.phase,
        "host_id": state.host_id,
        "players": [
            serialize_player(player, state, include_hand=show_all_hands or player.id == viewer_id)
            for player in state.player_order()
        ],
        "board": serialize_board(state),
        "turn_index": state.turn_index,
        "turn": current.id if current else None,
        "sequences": [serialize_sequence(sequence) for sequence in state.sequences],
        "scores": scores_by_color(state),
        "win_threshold": win_threshold(state) if state.players else None,
        "winner": state.winner.key if state.winner else None,
        "layout": serialize_layout(state),
        "deck_count": len(state.deck),
        "discard_count": len(state.discard),
        "last_move": state.last_move,
        "game_log": state.game_log[-RECENT_LOG_LINES:],
        "rules": _serialize_rule_config(state),
    }


def serialize_player(player: Player, state: RoomState, include_hand: bool = False) -> Dict[str, Any]:
    """Serialize one player; the hand is only added when allowed."""
    data = {
        "id": player.id,
        "name": player.name,
        "seat": player.seat,
        "team": player.team.value if player.team else None,
        "color": player.color.key,
        "ready": player.ready,
        "is_host": player.id == state.host_id,
        "hand_count": len(player.hand),
    }
    if include_hand:
        data["hand"] = player.hand.copy()
    return data


def serialize_board(state: RoomState) -> List[List[Optional[Dict[str, Any]]]]:
    return [
        [
            {"color": chip.color.key, "locked": chip.locked} if chip is not None else None
            for chip in row
        ]
        for row in state.board.grid
    ]


def serialize_sequence(sequence: Sequence) -> Dict[str, Any]:
    return {
        "cells": [list(cell) for cell in sequence.cells],
        "color": sequence.color.key,
        "length": sequence.length,
        "points": sequence.points,
    }


def serialize_layout(state: RoomState) -> Dict[str, List[List[int]]]:
    return {card_id: [list(cell) for cell in cells] for card_id, cells in state.layout.items()}


def _serialize_rule_config(state: RoomState) -> Dict[str, Any]:
    """Serialize rule configuration."""
    rules = state.rule_config
    return {
        "min_players": rules.min_players,
        "max_players": rules.max_players,
        "max_team_size": rules.max_team_size,
        "require_ready": rules.require_ready,
        "host_always_ready": rules.host_always_ready,
        "double_credit_long_runs": rules.double_credit_long_runs,
        "hand_visibility": rules.hand_visibility,
        "allow_dead_card_exchange": rules.allow_dead_card_exchange,
    }


def get_public_room_info(state: RoomState) -> Dict[str, Any]:
    """Get public information about a room for listings."""
    return {
        "code": state.code,
        "phase": state.phase,
        "player_count": len(state.players),
        "max_players": state.rule_config.max_players,
        "created_at": state.created_at,
    }
