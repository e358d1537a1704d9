"""Shared decision models and engine protocol."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum, auto
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from tictactoe.core.board import Board
    from tictactoe.core.enums import Difficulty
    from tictactoe.core.types import CellPosition, Label


class DecisionRule(IntEnum):
    """Which layer of the heuristic produced a move."""

    EMPTY_BOARD = auto()
    WIN = auto()
    BLOCK = auto()
    FORK = auto()
    FORCED_WIN = auto()
    SAFE = auto()
    RANDOM = auto()  # optimal path found no safe cell
    SUBOPTIMAL = auto()  # strategy roll failed


class Condition(IntEnum):
    """Outcome looked for at the end of a forced simulation."""

    VICTORY = auto()
    DEFEAT = auto()


@dataclass(slots=True, frozen=True)
class Decision:
    """Result produced by a decision engine."""

    position: CellPosition
    rule: DecisionRule
    candidates: frozenset[CellPosition]


class IDecisionEngine(Protocol):
    """Protocol for engines used by :class:`~tictactoe.game.player.BotPlayer`."""

    def decide(
        self,
        board: Board,
        label: Label,
        opponent_label: Label,
        difficulty: Difficulty,
    ) -> Decision: ...
