"""
Card shuffling, dealing and drawing utilities.
"""

import random
from typing import List, Optional

from .constants import DECK_COPIES, create_card_ids
from .models import RoomState


def create_deck() -> List[str]:
    """Create the draw deck: two standard 52-card sets, no jokers."""
    deck = []
    for _ in range(DECK_COPIES):
        deck.extend(create_card_ids())
    return deck


def shuffle_deck(deck: List[str], rng: Optional[random.Random] = None) -> List[str]:
    """
    Shuffle a deck, deterministically if a seeded generator is provided.

    Args:
        deck: List of card IDs to shuffle
        rng: Optional random generator (e.g. ``random.Random(seed)``)

    Returns:
        Shuffled copy of the deck
    """
    deck_copy = deck.copy()

    if rng is not None:
        rng.shuffle(deck_copy)
    else:
        random.shuffle(deck_copy)

    return deck_copy


def new_deck(rng: Optional[random.Random] = None) -> List[str]:
    """A freshly shuffled 104-card deck."""
    return shuffle_deck(create_deck(), rng)


def draw_card(state: RoomState) -> Optional[str]:
    """
    Draw one card from the end of the deck.

    When the deck is empty the discard pile is shuffled back into it first.
    Returns None when both piles are empty.
    """
    if not state.deck and state.discard:
        state.deck = shuffle_deck(state.discard, state.rng)
        state.discard = []
        state.log("Discard pile reshuffled into the deck")
    if not state.deck:
        return None
    return state.deck.pop()


def deal_hands(state: RoomState) -> None:
    """
    Deal cards round-robin to every player in turn order.

    The number of cards per player depends on the player count.
    """
    players = state.player_order()
    cards_per_player = state.rule_config.get_hand_size(len(players))

    for player in players:
        player.hand = []

    for _ in range(cards_per_player):
        for player in players:
            card = draw_card(state)
            if card is not None:
                player.hand.append(card)
