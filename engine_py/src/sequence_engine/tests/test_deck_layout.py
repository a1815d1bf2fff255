"""
Tests for deck creation, drawing and the per-room board layout.
"""

import random
from collections import Counter

from sequence_engine.constants import (
    CARD_POSITIONAL, CARD_REMOVER, CARD_WILD, CORNERS, DECK_SIZE, card_class,
    create_card_ids, parse_card
)
from sequence_engine.engine import create_room, start_game, toggle_ready
from sequence_engine.layout import cell_cards, new_layout_map, non_corner_cells
from sequence_engine.shuffle import create_deck, deal_hands, draw_card, new_deck, shuffle_deck


def test_deck_has_two_of_every_card():
    """Every deck: 104 cards, each of the 52 identities twice, no jokers."""
    for seed in range(5):
        deck = new_deck(random.Random(seed))
        assert len(deck) == DECK_SIZE == 104
        counts = Counter(deck)
        assert len(counts) == 52
        assert set(counts.values()) == {2}
        assert not any('JOKER' in card for card in deck)


def test_shuffle_is_deterministic_with_seed():
    deck = create_deck()
    assert shuffle_deck(deck, random.Random(3)) == shuffle_deck(deck, random.Random(3))
    assert shuffle_deck(deck, random.Random(3)) != deck
    # Input is not modified
    assert deck == create_deck()


def test_card_classes():
    assert card_class("JH") == CARD_WILD
    assert card_class("JD") == CARD_WILD
    assert card_class("JS") == CARD_REMOVER
    assert card_class("JC") == CARD_REMOVER
    assert card_class("10H") == CARD_POSITIONAL
    assert card_class("QS") == CARD_POSITIONAL
    assert parse_card("10H") == ("10", "H")


def test_layout_is_a_bijection():
    """Every non-corner cell appears in exactly one pair; jacks never appear."""
    for seed in range(5):
        layout = new_layout_map(random.Random(seed))

        assert len(layout) == 48
        assert not any(card.startswith('J') for card in layout)

        all_cells = [cell for pair in layout.values() for cell in pair]
        assert len(all_cells) == 96
        assert set(all_cells) == set(non_corner_cells())
        assert not set(all_cells) & set(CORNERS)

        for first, second in layout.values():
            assert first != second


def test_layout_inverse_view():
    layout = new_layout_map(random.Random(1))
    cells = cell_cards(layout)
    assert len(cells) == 96
    for card_id, pair in layout.items():
        for cell in pair:
            assert cells[cell] == card_id


def test_layout_fixed_per_room(make_game):
    """Restarting the game keeps the room's layout."""
    state = make_game(2)
    layout = dict(state.layout)
    state.phase = "finished"
    for player_id in state.players:
        state = toggle_ready(state, player_id).state
    restarted = start_game(state, "p1", seed=99).state

    assert restarted.layout == layout


def test_draw_reshuffles_discard_when_deck_empty():
    state = create_room("DRAW", seed=1)
    state.deck = []
    state.discard = ["2H", "3H", "4H"]

    card = draw_card(state)

    assert card in ("2H", "3H", "4H")
    assert state.discard == []
    assert len(state.deck) == 2


def test_draw_from_empty_piles_returns_none():
    state = create_room("DRAW", seed=1)
    state.deck = []
    state.discard = []
    assert draw_card(state) is None


def test_deal_hands_sizes(make_lobby):
    expected = {2: 7, 3: 6, 4: 6, 5: 5, 6: 5, 7: 4, 8: 4, 9: 3, 12: 3}
    for count, size in expected.items():
        state = make_lobby(count)
        state.deck = new_deck(random.Random(count))
        deal_hands(state)
        for player in state.players.values():
            assert len(player.hand) == size
        assert len(state.deck) == 104 - size * count


def test_all_card_ids_parse():
    for card_id in create_card_ids():
        rank, suit = parse_card(card_id)
        assert f"{rank}{suit}" == card_id
