"""Game constants and utilities"""

from typing import Dict, List, Tuple

BOARD_SIZE = 10
CORNERS = ((0, 0), (0, 9), (9, 0), (9, 9))

SUITS = ['S', 'H', 'D', 'C']
RANKS = ['A', '2', '3', '4', '5', '6', '7', '8', '9', '10', 'J', 'Q', 'K']
DECK_COPIES = 2
DECK_SIZE = len(SUITS) * len(RANKS) * DECK_COPIES

# Jack suits decide the card class; red jacks have two eyes
TWO_EYED_JACKS = ('JH', 'JD')
ONE_EYED_JACKS = ('JS', 'JC')

CARD_POSITIONAL = 'positional'
CARD_WILD = 'wild'
CARD_REMOVER = 'remover'

SEQUENCE_LENGTH = 5
LONG_RUN_LENGTH = 9

# Game phases
PHASE_LOBBY = 'lobby'
PHASE_IN_PROGRESS = 'in_progress'
PHASE_FINISHED = 'finished'

# Player limits
MIN_PLAYERS = 2
MAX_PLAYERS = 12
MAX_TEAM_SIZE = 2

# Cards dealt per player count; anything above 8 players gets 3
HAND_SIZES: Dict[int, int] = {
    2: 7,
    3: 6,
    4: 6,
    5: 5,
    6: 5,
    7: 4,
    8: 4,
}
MIN_HAND_SIZE = 3

# Sequence points needed to win, by player count
WIN_THRESHOLDS: Dict[int, int] = {
    2: 2,
    3: 2,
}
DEFAULT_WIN_THRESHOLD = 1

ROOM_CODE_LENGTH = 4
ROOM_CODE_ALPHABET = 'ABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789'

HAND_VISIBILITY_ALL = 'all'
HAND_VISIBILITY_OWNER = 'owner'

Cell = Tuple[int, int]


def create_card_ids() -> List[str]:
    """The 52 distinct card identities."""
    return [f"{rank}{suit}" for suit in SUITS for rank in RANKS]


def parse_card(card_id: str) -> Tuple[str, str]:
    rank, suit = card_id[:-1], card_id[-1]
    if rank not in RANKS or suit not in SUITS:
        raise ValueError(f"Invalid card: {card_id}")
    return rank, suit


def card_class(card_id: str) -> str:
    if card_id in TWO_EYED_JACKS:
        return CARD_WILD
    if card_id in ONE_EYED_JACKS:
        return CARD_REMOVER
    return CARD_POSITIONAL


def positional_card_ids() -> List[str]:
    return [card_id for card_id in create_card_ids() if card_class(card_id) == CARD_POSITIONAL]


def is_corner(cell: Cell) -> bool:
    return tuple(cell) in CORNERS


def in_bounds(cell: Cell) -> bool:
    row, col = cell
    return 0 <= row < BOARD_SIZE and 0 <= col < BOARD_SIZE

