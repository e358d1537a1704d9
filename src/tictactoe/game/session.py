"""Caller-side pacing of bot turns on the Qt event loop."""

from __future__ import annotations

import logging
import random

from PyQt6.QtCore import QObject, QTimer, pyqtSignal, pyqtSlot

from tictactoe.core.errors import GameError
from tictactoe.game.controller import GameController

_LOGGER = logging.getLogger(__name__)


class BotMoveSession(QObject):
    """Plays the bot's turn after a human-like pause.

    The decision itself runs synchronously inside
    :meth:`GameController.make_move`; this object only delays *when* that
    call happens, through a cancellable single-shot timer.
    """

    move_made = pyqtSignal(object, object)  # player, position
    move_failed = pyqtSignal(str)

    DEFAULT_MIN_DELAY_MS = 500
    DEFAULT_MAX_DELAY_MS = 1000

    def __init__(
        self,
        controller: GameController,
        *,
        min_delay_ms: int = DEFAULT_MIN_DELAY_MS,
        max_delay_ms: int = DEFAULT_MAX_DELAY_MS,
        rng: random.Random | None = None,
        parent: QObject | None = None,
    ) -> None:
        super().__init__(parent)
        self._controller = controller
        self._rng = rng if rng is not None else random.Random()
        self._min_delay_ms = 0
        self._max_delay_ms = 0
        self.set_delays(min_delay_ms, max_delay_ms)

        self._timer = QTimer(self)
        self._timer.setSingleShot(True)
        self._timer.timeout.connect(self._play_pending_turn)

    @property
    def is_pending(self) -> bool:
        return self._timer.isActive()

    @property
    def delays(self) -> tuple[int, int]:
        return self._min_delay_ms, self._max_delay_ms

    def set_delays(self, min_delay_ms: int, max_delay_ms: int) -> None:
        """Update the pause range (applies to the next scheduled turn)."""
        if min_delay_ms < 0 or max_delay_ms < min_delay_ms:
            raise ValueError(
                f"Invalid delay range {min_delay_ms}..{max_delay_ms} ms"
            )
        self._min_delay_ms = min_delay_ms
        self._max_delay_ms = max_delay_ms

    def schedule(self) -> bool:
        """Queue the bot's move if it is the bot's turn.

        Returns ``True`` when a turn was queued.
        """
        ctrl = self._controller
        if ctrl.is_blocked or ctrl.current_player.is_human:
            return False
        delay = self._rng.randint(self._min_delay_ms, self._max_delay_ms)
        self._timer.start(delay)
        return True

    def cancel(self) -> None:
        """Drop a queued turn that has not started yet."""
        self._timer.stop()

    @pyqtSlot()
    def _play_pending_turn(self) -> None:
        ctrl = self._controller
        player = ctrl.current_player
        if ctrl.is_blocked or player.is_human:
            return
        try:
            position = ctrl.make_move(player)
        except GameError as exc:
            _LOGGER.error("Bot move failed: %s", exc)
            self.move_failed.emit(str(exc))
            return
        if position is not None:
            self.move_made.emit(player, position)
