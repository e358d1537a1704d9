"""Contract-violation errors raised by the board and the match controller.

None of these are recoverable inside the engine: they always signal a
caller bug and propagate synchronously.
"""

from __future__ import annotations


class GameError(Exception):
    """Base class for every error raised by :mod:`tictactoe`."""


class InvalidIndexError(GameError, IndexError):
    """A row or column outside ``[0, 3)`` was addressed."""


class InvalidLabelError(GameError, ValueError):
    """The EMPTY sentinel was used as a mark, or player labels clash."""


class OverwriteError(GameError):
    """An already-marked cell was marked again."""


class BoardFullError(GameError):
    """A mark was attempted on a board with no empty cells left."""


class TurnViolationError(GameError):
    """A player tried to move out of turn."""


class PositionNotChosenError(GameError):
    """A human player was asked for a move before one was selected."""
