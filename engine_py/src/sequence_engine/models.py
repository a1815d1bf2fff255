"""Game models and data structures"""

import random
import time
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Set, Tuple

from .board import Board, Color, PersonalColor, Team, TeamColor
from .constants import Cell, PHASE_LOBBY
from .rules import RuleConfig, default_rules

# card id -> the two cells showing that card
LayoutMap = Dict[str, Tuple[Cell, Cell]]


@dataclass
class Player:
    id: str
    name: str
    seat: int
    team: Optional[Team] = None
    ready: bool = False
    hand: List[str] = field(default_factory=list)  # card ids

    @property
    def color(self) -> Color:
        if self.team is not None:
            return TeamColor(self.team)
        return PersonalColor(self.id)


@dataclass(frozen=True)
class Sequence:
    cells: Tuple[Cell, ...]  # sorted, corners excluded
    color: Color
    length: int  # full run length, corners included
    points: int = 1


@dataclass
class RoomState:
    code: str
    host_id: Optional[str] = None
    version: int = 0
    phase: str = PHASE_LOBBY  # lobby|in_progress|finished
    players: Dict[str, Player] = field(default_factory=dict)  # join order == turn order
    next_seat: int = 0
    board: Board = field(default_factory=Board)
    deck: List[str] = field(default_factory=list)
    discard: List[str] = field(default_factory=list)
    layout: LayoutMap = field(default_factory=dict)
    sequences: List[Sequence] = field(default_factory=list)
    sequence_keys: Set[Tuple[Cell, ...]] = field(default_factory=set)
    turn_index: int = 0
    winner: Optional[Color] = None
    exchanged_this_turn: bool = False
    last_move: Optional[dict] = None
    game_log: List[str] = field(default_factory=list)
    rule_config: RuleConfig = field(default_factory=lambda: default_rules)
    rng: random.Random = field(default_factory=random.Random, repr=False)
    created_at: float = field(default_factory=time.time)

    def increment_version(self):
        self.version += 1

    def log(self, message: str):
        self.game_log.append(message)

    def player_order(self) -> List[Player]:
        return list(self.players.values())

    def current_player(self) -> Optional[Player]:
        order = self.player_order()
        if not order or not 0 <= self.turn_index < len(order):
            return None
        return order[self.turn_index]

    def advance_turn(self):
        self.turn_index = (self.turn_index + 1) % len(self.players)
        self.exchanged_this_turn = False

    def team_size(self, team: Team) -> int:
        return sum(1 for player in self.players.values() if player.team == team)

    def players_with_color(self, color: Color) -> List[Player]:
        return [player for player in self.players.values() if player.color == color]
