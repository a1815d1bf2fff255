"""
Board grid, chips and chip colors.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Optional, Union

from .constants import BOARD_SIZE, Cell, in_bounds, is_corner
from .errors import GameError, INVALID_CELL, LOCKED, NO_TARGET, OCCUPIED, CORNER_FORBIDDEN


class Team(str, Enum):
    """Selectable team colors."""
    BLUE = "blue"
    GREEN = "green"
    RED = "red"
    YELLOW = "yellow"
    PURPLE = "purple"
    ORANGE = "orange"


@dataclass(frozen=True)
class TeamColor:
    team: Team

    @property
    def key(self) -> str:
        return self.team.value


@dataclass(frozen=True)
class PersonalColor:
    """Color of a player who has not joined a team (free-for-all)."""
    player_id: str

    @property
    def key(self) -> str:
        return f"player:{self.player_id}"


Color = Union[TeamColor, PersonalColor]


@dataclass
class Chip:
    color: Color
    locked: bool = False


class Board:
    """10x10 grid of chips. Corners never hold a chip and match every color."""

    def __init__(self):
        self.grid: List[List[Optional[Chip]]] = [
            [None] * BOARD_SIZE for _ in range(BOARD_SIZE)
        ]

    def get(self, cell: Cell) -> Optional[Chip]:
        row, col = self._check(cell)
        return self.grid[row][col]

    def is_empty(self, cell: Cell) -> bool:
        return not is_corner(cell) and self.get(cell) is None

    def place(self, cell: Cell, color: Color) -> None:
        row, col = self._check(cell)
        if is_corner(cell):
            raise GameError(CORNER_FORBIDDEN, f"Corner {cell} cannot hold a chip")
        if self.grid[row][col] is not None:
            raise GameError(OCCUPIED, f"Cell {cell} is already occupied")
        self.grid[row][col] = Chip(color=color)

    def remove(self, cell: Cell) -> Chip:
        row, col = self._check(cell)
        chip = self.grid[row][col]
        if chip is None:
            raise GameError(NO_TARGET, f"No chip at {cell}")
        if chip.locked:
            raise GameError(LOCKED, f"Chip at {cell} is part of a sequence")
        self.grid[row][col] = None
        return chip

    def lock(self, cells: Iterable[Cell]) -> None:
        for cell in cells:
            if is_corner(cell):
                continue
            chip = self.get(cell)
            if chip is not None:
                chip.locked = True

    def is_wild_or_color(self, cell: Cell, color: Color) -> bool:
        if not in_bounds(cell):
            return False
        if is_corner(cell):
            return True
        chip = self.grid[cell[0]][cell[1]]
        return chip is not None and chip.color == color

    def chips(self):
        """Yield (cell, chip) for every occupied cell."""
        for row in range(BOARD_SIZE):
            for col in range(BOARD_SIZE):
                chip = self.grid[row][col]
                if chip is not None:
                    yield (row, col), chip

    def _check(self, cell: Cell) -> Cell:
        if not in_bounds(cell):
            raise GameError(INVALID_CELL, f"Cell {cell} is outside the board")
        return cell[0], cell[1]
