"""Layered heuristic decision engine for the computer opponent.

Candidates are searched layer by layer and the first non-empty set wins;
a cell is then drawn uniformly from it:

1. cells that complete a line for the bot,
2. cells that complete a line for the opponent (block),
3. a strategy roll weighted by difficulty; on failure the bot plays any
   cell that does not set up a win for itself,
4. fork cells (two open lines meet),
5. forcing cells whose forced continuation still ends in a bot fork, then
   cells whose forced continuation does not hand the opponent a fork,
6. any empty cell.

Speculative play never touches the board passed in: every simulation
starts from a copy, and the recursion consumes one empty cell per call so
its depth is bounded by the board size.
"""

from __future__ import annotations

import logging
import random
from collections.abc import Iterable

from tictactoe.core.board import Board
from tictactoe.core.enums import Difficulty
from tictactoe.core.errors import BoardFullError
from tictactoe.core.lines import LINE_CELLS, BoardLine
from tictactoe.core.types import EMPTY, CellPosition, Label
from tictactoe.engine.search import Condition, Decision, DecisionRule

_LOGGER = logging.getLogger(__name__)


def _unique(positions: Iterable[CellPosition]) -> list[CellPosition]:
    return list(dict.fromkeys(positions))


class HeuristicEngine:
    """Rule-based opponent with controlled randomness.

    Args:
        rng: Source of randomness for the strategy roll, candidate
            selection and simulated replies.  Inject a seeded
            ``random.Random`` for reproducible play.
    """

    __slots__ = ("_rng",)

    def __init__(self, rng: random.Random | None = None) -> None:
        self._rng = rng if rng is not None else random.Random()

    # ── Public API ───────────────────────────────────────────────────────

    def decide(
        self,
        board: Board,
        label: Label,
        opponent_label: Label,
        difficulty: Difficulty,
    ) -> Decision:
        empties = board.empty_positions()
        if not empties:
            raise BoardFullError("No empty cell left to choose")

        if board.is_empty():
            return self._decision(empties, DecisionRule.EMPTY_BOARD)

        wins = self.completing_positions(board, label)
        if wins:
            return self._decision(wins, DecisionRule.WIN)

        blocks = self.completing_positions(board, opponent_label)
        if blocks:
            return self._decision(blocks, DecisionRule.BLOCK)

        if not self.plays_optimally(difficulty):
            # Never hand itself a won game when deliberately playing weak.
            excluded = set(
                self.positions_on_condition(board, label, opponent_label, Condition.VICTORY)
            )
            excluded.update(self.fork_positions(board, label))
            remaining = [p for p in empties if p not in excluded]
            return self._decision(remaining or empties, DecisionRule.SUBOPTIMAL)

        forks = self.fork_positions(board, label)
        if forks:
            return self._decision(forks, DecisionRule.FORK)

        forced = self.positions_on_condition(board, label, opponent_label, Condition.VICTORY)
        if forced:
            return self._decision(forced, DecisionRule.FORCED_WIN)

        safe = self.safe_positions(board, label, opponent_label)
        if safe:
            return self._decision(safe, DecisionRule.SAFE)

        return self._decision(empties, DecisionRule.RANDOM)

    def plays_optimally(self, difficulty: Difficulty) -> bool:
        """Roll whether this turn follows the best strategy."""
        return self._rng.random() < difficulty.optimal_probability

    # ── Line scans ───────────────────────────────────────────────────────

    @staticmethod
    def completing_positions(board: Board, label: Label) -> list[CellPosition]:
        """Empty cells that complete a line of *label*, one entry per line.

        A cell closing two lines at once is listed twice.
        """
        result: list[CellPosition] = []
        for line in BoardLine:
            marked = 0
            blanks: list[CellPosition] = []
            for cell in LINE_CELLS[line]:
                value = board[cell]
                if value == EMPTY:
                    blanks.append(cell)
                elif value == label:
                    marked += 1
            if marked == 2 and len(blanks) == 1:
                result.append(blanks[0])
        return result

    @staticmethod
    def open_pair(board: Board, line: BoardLine, label: Label) -> list[CellPosition]:
        """The two empty cells of *line* if it holds exactly one *label*."""
        marked = 0
        blanks: list[CellPosition] = []
        for cell in LINE_CELLS[line]:
            value = board[cell]
            if value == EMPTY:
                blanks.append(cell)
            elif value == label:
                marked += 1
        if marked == 1 and len(blanks) == 2:
            return blanks
        return []

    def fork_positions(self, board: Board, label: Label) -> list[CellPosition]:
        """Empty cells shared by two open lines of *label*."""
        seen: set[CellPosition] = set()
        result: list[CellPosition] = []
        for line in BoardLine:
            for cell in self.open_pair(board, line, label):
                if cell in seen:
                    if cell not in result:
                        result.append(cell)
                else:
                    seen.add(cell)
        return result

    def forcing_positions(self, board: Board, label: Label) -> list[CellPosition]:
        """Empty cells that, once marked, threaten to complete a line."""
        return _unique(
            cell for line in BoardLine for cell in self.open_pair(board, line, label)
        )

    def has_double_threat(self, board: Board, label: Label) -> bool:
        return len(self.completing_positions(board, label)) > 1

    # ── Forced play ──────────────────────────────────────────────────────

    def simulate(
        self,
        board: Board,
        position: CellPosition,
        label: Label,
        opponent_label: Label,
    ) -> tuple[Label, Board]:
        """Play *position* for *label* and follow the forced continuation.

        Returns the label of the last forced mover and the resulting board,
        a copy of *board*.
        """
        sandbox = board.copy()
        last = self._play_forced(sandbox, position, label, opponent_label)
        return last, sandbox

    def _play_forced(
        self,
        board: Board,
        position: CellPosition,
        label: Label,
        opponent_label: Label,
    ) -> Label:
        board.mark(position, label)
        if self.has_double_threat(board, label):
            return label
        threats = self.completing_positions(board, label)
        if threats:
            # The opponent has to block.
            reply = self._rng.choice(threats)
            return self._play_forced(board, reply, opponent_label, label)
        forks = self.fork_positions(board, opponent_label)
        if forks:
            reply = self._rng.choice(forks)
            return self._play_forced(board, reply, opponent_label, label)
        return label

    def positions_on_condition(
        self,
        board: Board,
        label: Label,
        opponent_label: Label,
        condition: Condition,
    ) -> list[CellPosition]:
        """Forcing cells whose forced continuation ends in *condition*.

        ``VICTORY`` keeps cells ending with a double threat for *label*;
        ``DEFEAT`` keeps cells ending with one for the opponent.
        """
        target = label if condition == Condition.VICTORY else opponent_label
        result: list[CellPosition] = []
        for position in self.forcing_positions(board, label):
            _, final = self.simulate(board, position, label, opponent_label)
            if self.has_double_threat(final, target):
                result.append(position)
        return result

    def leads_to_defeat(
        self,
        board: Board,
        position: CellPosition,
        label: Label,
        opponent_label: Label,
    ) -> bool:
        """Whether marking *position* lets the opponent force a win."""
        last, final = self.simulate(board, position, label, opponent_label)
        if self.has_double_threat(final, last):
            return last == opponent_label

        empties = final.empty_positions()
        if not empties:
            return False

        if last == label:
            # Opponent to move: any reply that ends in its fork is fatal.
            for reply in empties:
                _, after = self.simulate(final, reply, opponent_label, label)
                if self.has_double_threat(after, opponent_label):
                    return True
            return False

        # Own move next: fatal only if every follow-up hands over a fork.
        losing = 0
        for follow_up in empties:
            _, after = self.simulate(final, follow_up, label, opponent_label)
            if self.has_double_threat(after, opponent_label):
                losing += 1
        return losing == len(empties)

    def safe_positions(
        self, board: Board, label: Label, opponent_label: Label
    ) -> list[CellPosition]:
        return [
            p
            for p in board.empty_positions()
            if not self.leads_to_defeat(board, p, label, opponent_label)
        ]

    # ── Internal helpers ─────────────────────────────────────────────────

    def _decision(self, candidates: Iterable[CellPosition], rule: DecisionRule) -> Decision:
        pool = _unique(candidates)
        position = self._rng.choice(pool)
        _LOGGER.debug(
            "Decision %s at %s from %d candidate(s)", rule.name, position, len(pool)
        )
        return Decision(position=position, rule=rule, candidates=frozenset(pool))
