"""
Sequence detection over a board snapshot.

A sequence is a straight run of at least five cells that all hold chips of
one color, where wild corners count for every color. Detection only looks at
runs through the cell that just changed.
"""

from typing import Iterable, List, Optional, Tuple

from .board import Board, Color
from .constants import Cell, SEQUENCE_LENGTH, is_corner
from .models import RoomState, Sequence

# horizontal, vertical, diagonal, anti-diagonal
DIRECTIONS = ((0, 1), (1, 0), (1, 1), (1, -1))


def walk(board: Board, cell: Cell, color: Color, step: Tuple[int, int]) -> List[Cell]:
    """Cells after ``cell`` in one sense of an axis that match ``color``."""
    cells = []
    row, col = cell[0] + step[0], cell[1] + step[1]
    while board.is_wild_or_color((row, col), color):
        cells.append((row, col))
        row, col = row + step[0], col + step[1]
    return cells


def detect_runs(board: Board, cell: Cell, color: Color) -> List[List[Cell]]:
    """
    Find every maximal run of length >= 5 through ``cell``.

    Args:
        board: Board snapshot
        cell: The cell that just changed
        color: Color of the chip on that cell

    Returns:
        One ordered list of cells per qualifying direction
    """
    runs = []
    for d_row, d_col in DIRECTIONS:
        backward = walk(board, cell, color, (-d_row, -d_col))
        forward = walk(board, cell, color, (d_row, d_col))
        run = list(reversed(backward)) + [tuple(cell)] + forward
        if len(run) >= SEQUENCE_LENGTH:
            runs.append(run)
    return runs


def canonical_cells(run: Iterable[Cell]) -> Tuple[Cell, ...]:
    """Sorted non-corner cells of a run; corners are never stored."""
    return tuple(sorted(tuple(cell) for cell in run if not is_corner(cell)))


def classify_run(state: RoomState, run: List[Cell], color: Color) -> Optional[Sequence]:
    """
    Decide whether a detected run is a new sequence.

    A run is new unless a recorded sequence of the same color already covers
    all of its cells. A run that extends a recorded sequence is a new
    sequence of its own.

    Returns:
        The sequence to record, or None for a duplicate
    """
    cells = canonical_cells(run)
    if cells in state.sequence_keys:
        return None

    cell_set = set(cells)
    for recorded in state.sequences:
        if recorded.color == color and cell_set <= set(recorded.cells):
            return None

    return Sequence(
        cells=cells,
        color=color,
        length=len(run),
        points=state.rule_config.points_for_run(len(run)),
    )


def record_sequence(state: RoomState, sequence: Sequence) -> int:
    """
    Record a sequence and lock its cells.

    Returns:
        Sequence points gained by the color
    """
    state.sequences.append(sequence)
    state.sequence_keys.add(sequence.cells)
    state.board.lock(sequence.cells)
    return sequence.points


def find_new_sequences(state: RoomState, cell: Cell, color: Color) -> List[Sequence]:
    """All runs through ``cell`` that would add a sequence."""
    found = []
    for run in detect_runs(state.board, cell, color):
        sequence = classify_run(state, run, color)
        if sequence is not None:
            found.append(sequence)
    return found
