"""Game management layer — controller, players, listeners, match state machine.

Quick start::

    from tictactoe.core import LABEL_O, LABEL_X, CellPosition, Difficulty
    from tictactoe.game import BotPlayer, GameController, HumanPlayer

    human = HumanPlayer(LABEL_X, "Alice")
    bot = BotPlayer(LABEL_O, LABEL_X, Difficulty.HARD)
    ctrl = GameController(human, bot)
    ctrl.start_new_match()
"""

from tictactoe.game.controller import GameController, GameEvents
from tictactoe.game.interfaces import (
    IGameController,
    IGameListener,
    IPlayer,
    MatchPhase,
)
from tictactoe.game.player import BotPlayer, HumanPlayer

__all__ = [
    # Interfaces
    "IGameController",
    "IGameListener",
    "IPlayer",
    "MatchPhase",
    # Concrete
    "BotPlayer",
    "GameController",
    "GameEvents",
    "HumanPlayer",
]
