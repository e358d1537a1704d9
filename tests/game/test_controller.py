"""Tests for GameController — the match orchestrator."""

import random

import pytest

from tictactoe.core.board import Board
from tictactoe.core.enums import Difficulty
from tictactoe.core.errors import InvalidLabelError, OverwriteError, TurnViolationError
from tictactoe.core.lines import BoardLine
from tictactoe.core.types import EMPTY, LABEL_O, LABEL_X, CellPosition
from tictactoe.game.controller import GameController
from tictactoe.game.interfaces import IGameListener, IPlayer, MatchPhase
from tictactoe.game.player import BotPlayer, HumanPlayer

_WIN_FOR_STARTER = [(0, 0), (1, 0), (0, 1), (1, 1), (0, 2)]
_DRAW = [(0, 0), (0, 1), (0, 2), (1, 1), (1, 0), (1, 2), (2, 1), (2, 0), (2, 2)]


class _Recorder(IGameListener):
    def __init__(self) -> None:
        self.wins: list[tuple[IPlayer, BoardLine]] = []
        self.fills = 0

    def on_winning(self, winner: IPlayer, line: BoardLine) -> None:
        self.wins.append((winner, line))

    def on_filling_board(self) -> None:
        self.fills += 1


class _Scribbler(IPlayer):
    """Marks every cell of the board it is handed, then picks (2, 2)."""

    @property
    def label(self) -> int:
        return LABEL_O

    @property
    def name(self) -> str:
        return "Scribbler"

    @property
    def is_human(self) -> bool:
        return False

    def choose(self, board: Board) -> CellPosition:
        for position in board.empty_positions():
            board.mark(position, LABEL_O)
        return CellPosition(2, 2)


def _make_hh_controller(seed: int = 0) -> tuple[GameController, _Recorder]:
    """Helper: human vs human series with a recording listener."""
    recorder = _Recorder()
    ctrl = GameController(
        HumanPlayer(LABEL_X, "X"),
        HumanPlayer(LABEL_O, "O"),
        [recorder],
        rng=random.Random(seed),
    )
    ctrl.start_new_match()
    return ctrl, recorder


def _play(ctrl: GameController, cells: list[tuple[int, int]]) -> None:
    for row, col in cells:
        player = ctrl.current_player
        assert isinstance(player, HumanPlayer)
        player.position = CellPosition(row, col)
        ctrl.make_move(player)


class TestConstruction:
    def test_initial_state(self) -> None:
        ctrl = GameController(HumanPlayer(LABEL_X), HumanPlayer(LABEL_O))
        assert ctrl.phase == MatchPhase.AWAITING_MOVE
        assert not ctrl.is_blocked
        assert ctrl.match_number == 0
        assert ctrl.player1_score == ctrl.player2_score == 0
        assert ctrl.current_player in (ctrl.player1, ctrl.player2)

    def test_first_match_keeps_drawn_starter(self) -> None:
        ctrl = GameController(
            HumanPlayer(LABEL_X), HumanPlayer(LABEL_O), rng=random.Random(3)
        )
        starter = ctrl.current_player
        ctrl.start_new_match()
        assert ctrl.current_player is starter
        assert ctrl.match_number == 1

    def test_first_starter_is_uniform(self) -> None:
        rng = random.Random(99)
        p1_starts = 0
        trials = 2000
        for _attempt in range(trials):
            p1 = HumanPlayer(LABEL_X)
            ctrl = GameController(p1, HumanPlayer(LABEL_O), rng=rng)
            p1_starts += ctrl.current_player is p1
        assert p1_starts / trials == pytest.approx(0.5, abs=0.05)

    def test_labels_must_differ(self) -> None:
        with pytest.raises(InvalidLabelError):
            GameController(HumanPlayer(LABEL_X), HumanPlayer(LABEL_X))

    def test_empty_label_rejected(self) -> None:
        with pytest.raises(InvalidLabelError):
            GameController(HumanPlayer(EMPTY), HumanPlayer(LABEL_O))


class TestMakeMove:
    def test_move_applied_and_turn_swapped(self) -> None:
        ctrl, _rec = _make_hh_controller()
        starter = ctrl.current_player
        _play(ctrl, [(1, 1)])
        assert ctrl.board[1, 1] == starter.label
        assert ctrl.current_player is ctrl.opponent(starter)
        assert not ctrl.is_empty_position(CellPosition(1, 1))

    def test_returns_marked_position(self) -> None:
        ctrl, _rec = _make_hh_controller()
        player = ctrl.current_player
        assert isinstance(player, HumanPlayer)
        player.position = CellPosition(0, 2)
        assert ctrl.make_move(player) == CellPosition(0, 2)

    def test_turn_violation(self) -> None:
        ctrl, _rec = _make_hh_controller()
        other = ctrl.opponent(ctrl.current_player)
        assert isinstance(other, HumanPlayer)
        other.position = CellPosition(0, 0)
        with pytest.raises(TurnViolationError):
            ctrl.make_move(other)
        assert ctrl.board == Board()
        assert ctrl.current_player is not other

    def test_overwrite_propagates(self) -> None:
        ctrl, _rec = _make_hh_controller()
        _play(ctrl, [(0, 0)])
        player = ctrl.current_player
        assert isinstance(player, HumanPlayer)
        player.position = CellPosition(0, 0)
        with pytest.raises(OverwriteError):
            ctrl.make_move(player)
        assert ctrl.current_player is player
        assert ctrl.board.filled_count == 1

    def test_player_sees_copy(self) -> None:
        ctrl = GameController(
            HumanPlayer(LABEL_X), _Scribbler(), rng=random.Random(0)
        )
        ctrl.start_new_match()
        if ctrl.current_player.is_human:
            _play(ctrl, [(0, 0)])
        ctrl.make_move(ctrl.current_player)
        board = ctrl.board
        assert board[2, 2] == LABEL_O
        assert board.count(LABEL_O) == 1

    def test_board_property_is_a_copy(self) -> None:
        ctrl, _rec = _make_hh_controller()
        ctrl.board.set(1, 1, LABEL_X)
        assert ctrl.board.is_empty()


class TestMatchEnd:
    def test_win(self) -> None:
        ctrl, rec = _make_hh_controller()
        starter = ctrl.current_player
        _play(ctrl, _WIN_FOR_STARTER)
        assert ctrl.is_blocked
        assert ctrl.had_winner
        assert ctrl.phase == MatchPhase.WON
        assert ctrl.winning_line == BoardLine.HORIZONTAL_1
        assert ctrl.score(starter) == 1
        assert ctrl.score(ctrl.opponent(starter)) == 0
        assert rec.wins == [(starter, BoardLine.HORIZONTAL_1)]
        assert rec.fills == 0

    def test_score_updated_before_notification(self) -> None:
        ctrl, _rec = _make_hh_controller()
        seen: list[int] = []
        ctrl.events.on_winning.append(lambda winner, _line: seen.append(ctrl.score(winner)))
        _play(ctrl, _WIN_FOR_STARTER)
        assert seen == [1]

    def test_draw(self) -> None:
        ctrl, rec = _make_hh_controller()
        fills: list[bool] = []
        ctrl.events.on_filling_board.append(lambda: fills.append(True))
        _play(ctrl, _DRAW)
        assert ctrl.is_blocked
        assert not ctrl.had_winner
        assert ctrl.phase == MatchPhase.DRAW
        assert ctrl.winning_line is None
        assert rec.fills == 1
        assert fills == [True]
        assert rec.wins == []
        assert ctrl.player1_score == ctrl.player2_score == 0

    def test_moves_ignored_after_match_over(self) -> None:
        ctrl, rec = _make_hh_controller()
        _play(ctrl, _WIN_FOR_STARTER)
        player = ctrl.current_player
        assert isinstance(player, HumanPlayer)
        player.position = CellPosition(2, 2)
        assert ctrl.make_move(player) is None
        assert ctrl.make_move(ctrl.opponent(player)) is None
        assert ctrl.board[2, 2] == EMPTY
        assert len(rec.wins) == 1

    def test_removed_listener_not_notified(self) -> None:
        ctrl, rec = _make_hh_controller()
        ctrl.remove_listener(rec)
        _play(ctrl, _WIN_FOR_STARTER)
        assert rec.wins == []


class TestNewMatch:
    def test_winner_starts_again(self) -> None:
        ctrl, _rec = _make_hh_controller()
        starter = ctrl.current_player
        _play(ctrl, _WIN_FOR_STARTER)
        ctrl.start_new_match()
        assert ctrl.current_player is starter
        assert not ctrl.is_blocked
        assert not ctrl.had_winner
        assert ctrl.board.is_empty()
        assert ctrl.match_number == 2
        assert ctrl.phase == MatchPhase.AWAITING_MOVE

    def test_loser_win_keeps_scores(self) -> None:
        ctrl, _rec = _make_hh_controller()
        starter = ctrl.current_player
        _play(ctrl, _WIN_FOR_STARTER)
        ctrl.start_new_match()
        _play(ctrl, _WIN_FOR_STARTER)
        assert ctrl.score(starter) == 2

    def test_draw_alternates_starter(self) -> None:
        ctrl, _rec = _make_hh_controller()
        starter = ctrl.current_player
        _play(ctrl, _DRAW)
        ctrl.start_new_match()
        assert ctrl.current_player is ctrl.opponent(starter)
        _play(ctrl, _DRAW)
        ctrl.start_new_match()
        assert ctrl.current_player is starter
        assert ctrl.match_number == 3


class TestBlock:
    def test_block_stops_moves(self) -> None:
        ctrl, _rec = _make_hh_controller()
        ctrl.block()
        assert ctrl.is_blocked
        assert ctrl.phase == MatchPhase.BLOCKED
        player = ctrl.current_player
        assert isinstance(player, HumanPlayer)
        player.position = CellPosition(1, 1)
        assert ctrl.make_move(player) is None
        assert ctrl.board.is_empty()

    def test_block_after_win_keeps_phase(self) -> None:
        ctrl, _rec = _make_hh_controller()
        _play(ctrl, _WIN_FOR_STARTER)
        ctrl.block()
        assert ctrl.phase == MatchPhase.WON

    def test_new_match_unblocks(self) -> None:
        ctrl, _rec = _make_hh_controller()
        ctrl.block()
        ctrl.start_new_match()
        assert not ctrl.is_blocked
        assert ctrl.phase == MatchPhase.AWAITING_MOVE


class TestBotIntegration:
    def test_bot_blocks_human(self) -> None:
        human = HumanPlayer(LABEL_X)
        bot = BotPlayer(LABEL_O, LABEL_X, Difficulty.NORMAL, rng=random.Random(1))
        ctrl = GameController(human, bot, rng=random.Random(0))
        ctrl.start_new_match()
        if ctrl.current_player is bot:
            ctrl.block()
            ctrl.start_new_match()  # no winner -> human starts
        assert ctrl.current_player is human

        human.position = CellPosition(0, 0)
        ctrl.make_move(human)
        first = ctrl.make_move(bot)
        assert first is not None
        if first in (CellPosition(0, 1), CellPosition(0, 2)):
            threat, expected = CellPosition(1, 0), CellPosition(2, 0)
        else:
            threat, expected = CellPosition(0, 1), CellPosition(0, 2)
        human.position = threat
        ctrl.make_move(human)
        assert ctrl.make_move(bot) == expected
        assert bot.last_decision is not None
        assert bot.last_decision.candidates == frozenset({expected})

    @pytest.mark.parametrize("seed", [1, 2, 3])
    def test_invincible_bots_always_draw(self, seed: int) -> None:
        bot_x = BotPlayer(LABEL_X, LABEL_O, Difficulty.INVINCIBLE, "X", rng=random.Random(seed))
        bot_o = BotPlayer(LABEL_O, LABEL_X, Difficulty.INVINCIBLE, "O", rng=random.Random(seed + 100))
        rec = _Recorder()
        ctrl = GameController(bot_x, bot_o, [rec], rng=random.Random(seed))
        for _match in range(15):
            ctrl.start_new_match()
            while not ctrl.is_blocked:
                ctrl.make_move(ctrl.current_player)
            assert ctrl.phase == MatchPhase.DRAW
        assert rec.wins == []
        assert rec.fills == 15
        assert ctrl.player1_score == ctrl.player2_score == 0
