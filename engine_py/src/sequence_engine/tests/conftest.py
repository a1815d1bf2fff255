"""
Pytest configuration and shared fixtures for the Sequence engine.
"""

import pytest

from sequence_engine.engine import create_room, join_room, start_game, toggle_ready
from sequence_engine.layout import cell_cards


def _make_lobby(count=2, seed=7, rule_config=None):
    """Room with ``count`` ready players p1..pn; p1 is host."""
    state = create_room("TEST", rule_config=rule_config, seed=seed)
    for i in range(count):
        player_id = f"p{i + 1}"
        state = join_room(state, player_id, f"Player {i + 1}").state
        state = toggle_ready(state, player_id).state
    return state


def _make_game(count=2, seed=7, rule_config=None):
    """Started game with p1 to move."""
    result = start_game(_make_lobby(count, seed, rule_config), "p1", seed=seed)
    assert result.success, result.error_message
    state = result.state
    state.turn_index = 0
    return state


@pytest.fixture
def make_lobby():
    return _make_lobby


@pytest.fixture
def make_game():
    return _make_game


@pytest.fixture
def card_for():
    """Positional card id shown at a cell of the room's layout."""
    def _card_for(state, cell):
        return cell_cards(state.layout)[cell]
    return _card_for


@pytest.fixture
def place_chips():
    """Put chips of a player's color straight onto the board."""
    def _place_chips(state, player_id, cells):
        color = state.players[player_id].color
        for cell in cells:
            state.board.place(cell, color)
    return _place_chips
