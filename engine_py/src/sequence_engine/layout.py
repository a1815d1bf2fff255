"""
Per-room board layout: which two cells show each positional card.
"""

import random
from typing import Dict, List, Optional

from .constants import BOARD_SIZE, Cell, is_corner, positional_card_ids
from .models import LayoutMap


def non_corner_cells() -> List[Cell]:
    return [
        (row, col)
        for row in range(BOARD_SIZE)
        for col in range(BOARD_SIZE)
        if not is_corner((row, col))
    ]


def new_layout_map(rng: Optional[random.Random] = None) -> LayoutMap:
    """
    Randomly partition the 96 non-corner cells into 48 pairs, one per
    positional card (jacks never appear on the board).

    Args:
        rng: Optional random generator for deterministic layouts

    Returns:
        Mapping of card id to its two cells, each pair sorted
    """
    rng = rng or random.Random()
    cells = non_corner_cells()
    rng.shuffle(cells)

    cards = positional_card_ids()
    if len(cells) != 2 * len(cards):
        raise ValueError(f"Cannot pair {len(cells)} cells with {len(cards)} cards")

    layout = {}
    for i, card_id in enumerate(cards):
        first, second = sorted((cells[2 * i], cells[2 * i + 1]))
        layout[card_id] = (first, second)
    return layout


def cell_cards(layout: LayoutMap) -> Dict[Cell, str]:
    """Inverse view of a layout: cell -> card id."""
    return {cell: card_id for card_id, pair in layout.items() for cell in pair}
