"""Abstract interfaces for the game layer.

Follows Dependency Inversion: the high-level GameController depends on
these ABCs, not on concrete Player/listener implementations.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import IntEnum, auto
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from tictactoe.core.board import Board
    from tictactoe.core.lines import BoardLine
    from tictactoe.core.types import CellPosition, Label


# ── Match FSM states ─────────────────────────────────────────────────────────


class MatchPhase(IntEnum):
    """Finite-state-machine states of a single match."""

    AWAITING_MOVE = auto()
    WON = auto()
    DRAW = auto()
    BLOCKED = auto()  # interrupted from outside via block()


# ── Abstract interfaces ─────────────────────────────────────────────────────


class IPlayer(ABC):
    """Interface for a match participant (human or bot)."""

    @property
    @abstractmethod
    def label(self) -> Label: ...

    @property
    @abstractmethod
    def name(self) -> str: ...

    @property
    @abstractmethod
    def is_human(self) -> bool: ...

    @abstractmethod
    def choose(self, board: Board) -> CellPosition:
        """Return the empty cell this player marks.

        *board* is always a copy of the match board; players may mutate it
        freely.
        """


class IGameListener(ABC):
    """Receives match-over notifications from the controller.

    Callbacks must not call back into the controller.
    """

    @abstractmethod
    def on_winning(self, winner: IPlayer, line: BoardLine) -> None:
        """A match ended with *winner* completing *line*."""

    @abstractmethod
    def on_filling_board(self) -> None:
        """A match ended with a full board and no completed line."""


class IGameController(ABC):
    """Interface for the match orchestrator."""

    @abstractmethod
    def start_new_match(self) -> None:
        """Clear the board and unblock play."""

    @abstractmethod
    def make_move(self, player: IPlayer) -> CellPosition | None:
        """Let *player* mark a cell. Returns ``None`` while blocked."""

    @abstractmethod
    def block(self) -> None:
        """Stop accepting moves until the next match starts."""
