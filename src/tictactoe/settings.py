"""User-configurable settings and how they reach the running game."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from tictactoe.core.enums import Difficulty
from tictactoe.core.types import EMPTY, LABEL_O, LABEL_X, Label

if TYPE_CHECKING:
    from tictactoe.game.controller import GameController
    from tictactoe.game.player import BotPlayer
    from tictactoe.game.session import BotMoveSession


@dataclass
class GameSettings:
    """All user-configurable settings."""

    # Opponent
    difficulty: Difficulty = Difficulty.INVINCIBLE

    # Sound
    sound_enabled: bool = False

    # Pacing of bot turns
    bot_delay_min_ms: int = 500
    bot_delay_max_ms: int = 1000

    # Marks
    human_label: Label = LABEL_X
    bot_label: Label = LABEL_O

    @property
    def level(self) -> int:
        """Slider position (0..2) for :attr:`difficulty`."""
        return int(self.difficulty)

    def validate(self) -> None:
        if self.bot_delay_min_ms < 0 or self.bot_delay_max_ms < self.bot_delay_min_ms:
            raise ValueError(
                f"Invalid bot delay range {self.bot_delay_min_ms}..{self.bot_delay_max_ms} ms"
            )
        if EMPTY in (self.human_label, self.bot_label):
            raise ValueError(f"Labels cannot be {EMPTY}")
        if self.human_label == self.bot_label:
            raise ValueError("Human and bot labels must differ")


def difficulty_from_level(level: int) -> Difficulty:
    """Map a slider position (0, 1, 2) to a :class:`Difficulty`."""
    try:
        return Difficulty(level)
    except ValueError:
        raise ValueError(f"Unknown difficulty level: {level}") from None


def apply_settings(
    settings: GameSettings,
    *,
    bot: BotPlayer,
    controller: GameController | None = None,
    session: BotMoveSession | None = None,
) -> None:
    """Push *settings* into the running objects.

    A difficulty change interrupts the match in progress: the controller
    is blocked and any queued bot turn is cancelled.  The caller must then
    call :meth:`GameController.start_new_match` to resume play.
    """
    settings.validate()
    if bot.difficulty != settings.difficulty:
        bot.change_difficulty(settings.difficulty)
        if controller is not None:
            controller.block()
        if session is not None:
            session.cancel()
    if session is not None:
        session.set_delays(settings.bot_delay_min_ms, settings.bot_delay_max_ms)
