"""Static line geometry and win detection.

The eight winning lines are fixed position triples, computed once at import
and shared read-only.  :func:`winning_line` only inspects the (at most four)
lines that pass through the cell just marked.
"""

from __future__ import annotations

from enum import IntEnum
from typing import TYPE_CHECKING

from tictactoe.core.types import ALL_POSITIONS, EMPTY, CellPosition

if TYPE_CHECKING:
    from tictactoe.core.board import Board


class BoardLine(IntEnum):
    """The eight lines of the grid, in traversal order."""

    HORIZONTAL_1 = 0  # top row
    HORIZONTAL_2 = 1
    HORIZONTAL_3 = 2
    VERTICAL_1 = 3  # left column
    VERTICAL_2 = 4
    VERTICAL_3 = 5
    DIAGONAL_1 = 6  # \
    DIAGONAL_2 = 7  # /

    @property
    def cells(self) -> tuple[CellPosition, CellPosition, CellPosition]:
        return LINE_CELLS[self]


def _build_line_cells() -> dict[BoardLine, tuple[CellPosition, CellPosition, CellPosition]]:
    table: dict[BoardLine, tuple[CellPosition, CellPosition, CellPosition]] = {}
    for i in range(3):
        table[BoardLine(BoardLine.HORIZONTAL_1 + i)] = (
            CellPosition(i, 0),
            CellPosition(i, 1),
            CellPosition(i, 2),
        )
        table[BoardLine(BoardLine.VERTICAL_1 + i)] = (
            CellPosition(0, i),
            CellPosition(1, i),
            CellPosition(2, i),
        )
    table[BoardLine.DIAGONAL_1] = (CellPosition(0, 0), CellPosition(1, 1), CellPosition(2, 2))
    table[BoardLine.DIAGONAL_2] = (CellPosition(0, 2), CellPosition(1, 1), CellPosition(2, 0))
    return table


LINE_CELLS = _build_line_cells()

# cell -> lines through it, in BoardLine order
LINES_THROUGH: dict[CellPosition, tuple[BoardLine, ...]] = {
    pos: tuple(line for line in BoardLine if pos in LINE_CELLS[line])
    for pos in ALL_POSITIONS
}


def lines_through(position: CellPosition) -> tuple[BoardLine, ...]:
    return LINES_THROUGH[position]


def winning_line(board: Board, position: CellPosition) -> BoardLine | None:
    """Line through *position* uniformly holding the label found there.

    Returns the first such line in traversal order, or ``None``.
    """
    label = board[position]
    if label == EMPTY:
        return None
    for line in LINES_THROUGH[position]:
        if all(board[cell] == label for cell in LINE_CELLS[line]):
            return line
    return None
