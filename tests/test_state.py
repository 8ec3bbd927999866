import pytest

from betaothello.game.board import Position
from betaothello.game.errors import GameOver, IllegalPass, InvalidMove, OccupiedCell, OutOfRange
from betaothello.game.state import OthelloGameState
from betaothello.game.types import Player, Point

EMPTY_ROW = "........"


def _game(rows, current=Player.X):
    return OthelloGameState(Position.from_rows(rows), current_player=current)


class TestOthelloGameState:
    def test_initial_state(self):
        g = OthelloGameState()
        assert g.current_player is Player.X
        assert not g.is_over
        assert g.winner is None
        assert g.score == {Player.X: 2, Player.O: 2}
        assert len(g.legal_moves()) == 4

    def test_apply_move_alternates(self):
        g = OthelloGameState()
        effect = g.apply_move(Point(2, 4))
        assert effect.flips == [Point(3, 4)]
        assert g.current_player is Player.O
        assert g.count(Player.X) == 4
        assert g.count(Player.O) == 1
        assert str(g.moves[-1]) == "X: (2,4)"

    def test_errors_leave_state_unchanged(self):
        g = OthelloGameState()
        with pytest.raises(OutOfRange):
            g.apply_move(Point(8, 8))
        with pytest.raises(OccupiedCell):
            g.apply_move(Point(3, 3))
        with pytest.raises(InvalidMove):
            g.apply_move(Point(0, 0))
        assert g.moves == []
        assert g.current_player is Player.X
        assert g.score == {Player.X: 2, Player.O: 2}

    def test_undo_move(self):
        g = OthelloGameState()
        g.apply_move(Point(2, 4))
        g.apply_move(Point(2, 3))
        record = g.undo_move()
        assert record.point == Point(2, 3)
        assert g.current_player is Player.O
        assert g.board.is_empty(2, 3)
        assert g.score == {Player.X: 4, Player.O: 1}

    def test_undo_empty_returns_none(self):
        assert OthelloGameState().undo_move() is None

    def test_cannot_pass_with_legal_move(self):
        g = OthelloGameState()
        with pytest.raises(IllegalPass):
            g.pass_turn()


class TestPassAndTermination:
    def test_blocked_player_passes_and_game_continues(self):
        g = _game(["OX......"] + [EMPTY_ROW] * 7)
        assert not g.is_over
        assert g.must_pass()
        g.pass_turn()
        assert g.moves[-1].is_pass
        assert str(g.moves[-1]) == "X: pass"
        assert not g.is_over
        assert g.current_player is Player.O
        assert g.legal_moves() == [Point(0, 2)]

    def test_wipe_out_ends_game(self):
        g = _game(["OX......"] + [EMPTY_ROW] * 7)
        g.pass_turn()
        g.apply_move(Point(0, 2))
        assert g.count(Player.X) == 0
        assert g.is_over
        assert g.winner is Player.O
        assert g.legal_moves() == []

    def test_two_passes_end_game(self):
        g = _game(["X......."] + [EMPTY_ROW] * 6 + [".......O"])
        g.pass_turn()
        assert not g.is_over
        assert g.must_pass()
        g.pass_turn()
        assert g.is_over
        assert g.is_draw
        assert g.result_text() == "Draw (1-1)"

    def test_undo_pass(self):
        g = _game(["X......."] + [EMPTY_ROW] * 6 + [".......O"])
        g.pass_turn()
        g.pass_turn()
        record = g.undo_move()
        assert record.is_pass
        assert not g.is_over
        assert g.current_player is Player.O

    def test_full_board_ends_game(self):
        g = _game(["XXXXXXXX"] * 5 + ["OOOOOOOO"] * 3)
        assert g.is_over
        assert g.winner is Player.X
        assert g.result_text() == "X wins (40-24)"
        with pytest.raises(GameOver):
            g.apply_move(Point(0, 0))
        with pytest.raises(GameOver):
            g.pass_turn()

    def test_resign(self):
        g = OthelloGameState()
        g.resign()
        assert g.is_over
        assert g.winner is Player.O
        assert g.result_text() == "X resigns; O wins"
        with pytest.raises(GameOver):
            g.resign()
