"""Core domain layer — board, line geometry, labels, with zero external dependencies.

Quick start::

    from tictactoe.core import Board, CellPosition, LABEL_X, winning_line

    board = Board()
    board.mark(CellPosition(1, 1), LABEL_X)
    print(winning_line(board, CellPosition(1, 1)))
"""

from tictactoe.core.board import Board
from tictactoe.core.enums import Difficulty
from tictactoe.core.errors import (
    BoardFullError,
    GameError,
    InvalidIndexError,
    InvalidLabelError,
    OverwriteError,
    PositionNotChosenError,
    TurnViolationError,
)
from tictactoe.core.lines import LINE_CELLS, BoardLine, lines_through, winning_line
from tictactoe.core.types import (
    ALL_POSITIONS,
    EMPTY,
    LABEL_O,
    LABEL_X,
    CellPosition,
    Label,
    label_symbol,
)

__all__ = [
    # Enums
    "BoardLine",
    "Difficulty",
    # Types / helpers
    "ALL_POSITIONS",
    "EMPTY",
    "LABEL_O",
    "LABEL_X",
    "CellPosition",
    "Label",
    "label_symbol",
    # Domain objects
    "Board",
    "LINE_CELLS",
    "lines_through",
    "winning_line",
    # Errors
    "BoardFullError",
    "GameError",
    "InvalidIndexError",
    "InvalidLabelError",
    "OverwriteError",
    "PositionNotChosenError",
    "TurnViolationError",
]
