"""GameController — the central orchestrator of a match series.

Coordinates: Players, Board, win detection, scores.
Emits events via simple callbacks so the UI / tests can subscribe.
"""

from __future__ import annotations

import logging
import random
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field

from tictactoe.core.board import Board
from tictactoe.core.errors import InvalidLabelError, TurnViolationError
from tictactoe.core.lines import BoardLine, winning_line
from tictactoe.core.types import EMPTY, CellPosition
from tictactoe.game.interfaces import IGameController, IGameListener, IPlayer, MatchPhase

_LOGGER = logging.getLogger(__name__)

# ── Event definitions ────────────────────────────────────────────────────────

WinningCallback = Callable[[IPlayer, BoardLine], None]  # winner, line
FillingBoardCallback = Callable[[], None]


@dataclass
class GameEvents:
    """Observable callbacks. Multiple handlers per event."""

    on_winning: list[WinningCallback] = field(default_factory=list)
    on_filling_board: list[FillingBoardCallback] = field(default_factory=list)


# ── Controller ───────────────────────────────────────────────────────────────


class GameController(IGameController):
    """Runs matches between two players: alternates turns, applies moves,
    detects wins and full boards, keeps score, notifies listeners.

    The board is owned here; players only ever see copies.

    Thread-safety: none.  ``make_move``, ``start_new_match`` and ``block``
    must be serialized by the caller (one decision in flight at a time).

    Args:
        player1: First participant.
        player2: Second participant.
        listeners: Objects notified when a match ends.
        rng: Random source for the very first starter.
    """

    __slots__ = (
        "_board",
        "_player1",
        "_player2",
        "_current",
        "_player1_score",
        "_player2_score",
        "_match_number",
        "_had_winner",
        "_blocked",
        "_phase",
        "_winning_line",
        "_listeners",
        "events",
    )

    def __init__(
        self,
        player1: IPlayer,
        player2: IPlayer,
        listeners: Iterable[IGameListener] = (),
        rng: random.Random | None = None,
    ) -> None:
        if EMPTY in (player1.label, player2.label):
            raise InvalidLabelError(f"Player label cannot be {EMPTY}")
        if player1.label == player2.label:
            raise InvalidLabelError("Players must have distinct labels")

        self._board = Board()
        self._player1 = player1
        self._player2 = player2
        rng = rng if rng is not None else random.Random()
        self._current: IPlayer = rng.choice((player1, player2))
        self._player1_score = 0
        self._player2_score = 0
        self._match_number = 0
        # True so the first match keeps the randomly drawn starter.
        self._had_winner = True
        self._blocked = False
        self._phase = MatchPhase.AWAITING_MOVE
        self._winning_line: BoardLine | None = None
        self._listeners: list[IGameListener] = []
        self.events = GameEvents()
        for listener in listeners:
            self.add_listener(listener)

    # ── Properties ───────────────────────────────────────────────────────

    @property
    def board(self) -> Board:
        """A copy of the match board."""
        return self._board.copy()

    @property
    def current_player(self) -> IPlayer:
        return self._current

    @property
    def player1(self) -> IPlayer:
        return self._player1

    @property
    def player2(self) -> IPlayer:
        return self._player2

    @property
    def player1_score(self) -> int:
        return self._player1_score

    @property
    def player2_score(self) -> int:
        return self._player2_score

    @property
    def match_number(self) -> int:
        return self._match_number

    @property
    def is_blocked(self) -> bool:
        return self._blocked

    @property
    def had_winner(self) -> bool:
        return self._had_winner

    @property
    def phase(self) -> MatchPhase:
        return self._phase

    @property
    def winning_line(self) -> BoardLine | None:
        """Line completed in the current match, if any."""
        return self._winning_line

    def score(self, player: IPlayer) -> int:
        if player is self._player1:
            return self._player1_score
        return self._player2_score

    def opponent(self, player: IPlayer) -> IPlayer:
        return self._player2 if player is self._player1 else self._player1

    def is_empty_position(self, position: CellPosition) -> bool:
        return self._board.is_empty_cell(position)

    # ── Listeners ────────────────────────────────────────────────────────

    def add_listener(self, listener: IGameListener) -> None:
        self._listeners.append(listener)

    def remove_listener(self, listener: IGameListener) -> None:
        self._listeners.remove(listener)

    # ── IGameController impl ─────────────────────────────────────────────

    def start_new_match(self) -> None:
        self._blocked = False
        self._match_number += 1
        self._board.clear()
        if not self._had_winner:
            self._current = self.opponent(self._current)
        self._had_winner = False
        self._winning_line = None
        self._phase = MatchPhase.AWAITING_MOVE
        _LOGGER.info(
            "Match %d started, %s moves first", self._match_number, self._current.name
        )

    def make_move(self, player: IPlayer) -> CellPosition | None:
        if self._blocked:
            return None
        if player is not self._current:
            raise TurnViolationError(f"It's not {player.name}'s turn to mark")

        position = player.choose(self._board.copy())
        self._board.mark(position, player.label)
        _LOGGER.debug("%s marked %s", player.name, position)

        line = winning_line(self._board, position)
        if line is not None:
            self._blocked = True
            self._had_winner = True
            self._winning_line = line
            self._phase = MatchPhase.WON
            if player is self._player1:
                self._player1_score += 1
            else:
                self._player2_score += 1
            _LOGGER.info(
                "Match %d won by %s on %s", self._match_number, player.name, line.name
            )
            self._emit_winning(player, line)
        elif self._board.is_full():
            self._blocked = True
            self._phase = MatchPhase.DRAW
            _LOGGER.info("Match %d ended with a full board", self._match_number)
            self._emit_filling_board()
        else:
            self._current = self.opponent(player)
        return position

    def block(self) -> None:
        if not self._blocked:
            self._phase = MatchPhase.BLOCKED
        self._blocked = True

    # ── Internal helpers ─────────────────────────────────────────────────

    def _emit_winning(self, winner: IPlayer, line: BoardLine) -> None:
        for listener in list(self._listeners):
            listener.on_winning(winner, line)
        for cb in self.events.on_winning:
            cb(winner, line)

    def _emit_filling_board(self) -> None:
        for listener in list(self._listeners):
            listener.on_filling_board()
        for cb in self.events.on_filling_board:
            cb()
