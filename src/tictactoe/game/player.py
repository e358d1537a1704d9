"""Concrete player implementations."""

from __future__ import annotations

import random
from typing import TYPE_CHECKING

from tictactoe.core.enums import Difficulty
from tictactoe.core.errors import InvalidLabelError, PositionNotChosenError
from tictactoe.core.types import EMPTY, Label, label_symbol
from tictactoe.engine.heuristic import HeuristicEngine
from tictactoe.game.interfaces import IPlayer

if TYPE_CHECKING:
    from tictactoe.core.board import Board
    from tictactoe.core.types import CellPosition
    from tictactoe.engine.search import Decision, IDecisionEngine


class HumanPlayer(IPlayer):
    """A human participant — the cell comes from the UI.

    The UI sets :attr:`position` before asking the controller to move.
    """

    __slots__ = ("_label", "_name", "position")

    def __init__(self, label: Label, name: str = "") -> None:
        self._label = label
        self._name = name or f"Player ({label_symbol(label)})"
        self.position: CellPosition | None = None

    @property
    def label(self) -> Label:
        return self._label

    @property
    def name(self) -> str:
        return self._name

    @property
    def is_human(self) -> bool:
        return True

    def choose(self, board: Board) -> CellPosition:
        if self.position is None:
            raise PositionNotChosenError(f"{self._name} has not selected a cell")
        return self.position


class BotPlayer(IPlayer):
    """A computer participant backed by a decision engine.

    Args:
        label: Mark the bot plays with.
        opponent_label: Mark of the other side.
        difficulty: Initial strength; change it with :meth:`change_difficulty`.
        name: Display name.
        engine: Decision engine; defaults to :class:`HeuristicEngine`.
        rng: Random source for the default engine.
    """

    __slots__ = ("_label", "_opponent_label", "_difficulty", "_name", "_engine", "_last")

    def __init__(
        self,
        label: Label,
        opponent_label: Label,
        difficulty: Difficulty = Difficulty.INVINCIBLE,
        name: str = "Bot",
        engine: IDecisionEngine | None = None,
        rng: random.Random | None = None,
    ) -> None:
        if EMPTY in (label, opponent_label):
            raise InvalidLabelError(f"Label cannot be {EMPTY}")
        if label == opponent_label:
            raise InvalidLabelError("Bot and opponent labels must differ")
        self._label = label
        self._opponent_label = opponent_label
        self._difficulty = difficulty
        self._name = name
        self._engine: IDecisionEngine = engine if engine is not None else HeuristicEngine(rng)
        self._last: Decision | None = None

    @property
    def label(self) -> Label:
        return self._label

    @property
    def opponent_label(self) -> Label:
        return self._opponent_label

    @property
    def name(self) -> str:
        return self._name

    @property
    def is_human(self) -> bool:
        return False

    @property
    def difficulty(self) -> Difficulty:
        return self._difficulty

    @property
    def last_decision(self) -> Decision | None:
        return self._last

    def change_difficulty(self, difficulty: Difficulty) -> None:
        """Takes effect from the next decision."""
        self._difficulty = difficulty

    def choose(self, board: Board) -> CellPosition:
        self._last = self._engine.decide(
            board, self._label, self._opponent_label, self._difficulty
        )
        return self._last.position
