import pytest

from betaothello.agent.minimax_agent import MinimaxAgent
from betaothello.agent.random_agent import RandomAgent
from betaothello.game.board import Position
from betaothello.game.state import OthelloGameState
from betaothello.game.types import Player, Point

EMPTY_ROW = "........"


def _play_out(x_agent, o_agent):
    game = OthelloGameState()
    agents = {Player.X: x_agent, Player.O: o_agent}
    while not game.is_over:
        if game.must_pass():
            assert agents[game.current_player].select_move(game) is None
            game.pass_turn()
            continue
        move = agents[game.current_player].select_move(game)
        assert move in game.legal_moves()
        game.apply_move(move)
        game.position.check_counts()
    return game


class TestRandomAgent:
    def test_returns_legal_moves(self):
        g = OthelloGameState()
        agent = RandomAgent(seed=0)
        for _ in range(10):
            if g.must_pass():
                g.pass_turn()
                continue
            move = agent.select_move(g)
            assert isinstance(move, Point)
            assert move in g.legal_moves()
            g.apply_move(move)

    def test_passes_without_moves(self):
        g = OthelloGameState(Position.from_rows(["OX......"] + [EMPTY_ROW] * 7))
        assert RandomAgent().select_move(g) is None

    def test_name(self):
        assert RandomAgent().name == "RandomAgent"


class TestMinimaxAgent:
    def test_default_depth(self):
        assert MinimaxAgent().depth == 3

    def test_name(self):
        assert MinimaxAgent(depth=2).name == "MinimaxAgent(d=2)"

    @pytest.mark.parametrize("depth", [0, 11])
    def test_depth_range(self, depth):
        with pytest.raises(ValueError):
            MinimaxAgent(depth=depth)

    def test_takes_corner(self):
        g = OthelloGameState(Position.from_rows([
            ".OX.....",
            EMPTY_ROW,
            EMPTY_ROW,
            "...OX...",
            EMPTY_ROW,
            EMPTY_ROW,
            EMPTY_ROW,
            EMPTY_ROW,
        ]))
        assert MinimaxAgent(depth=2, seed=1).select_move(g) == Point(0, 0)

    def test_no_move_returns_none(self):
        g = OthelloGameState(Position.from_rows(["OX......"] + [EMPTY_ROW] * 7))
        assert MinimaxAgent(depth=2).select_move(g) is None

    def test_analyse_keeps_position(self):
        g = OthelloGameState()
        result = MinimaxAgent(depth=3, seed=0).analyse(g)
        assert result.move in g.legal_moves()
        assert g.score == {Player.X: 2, Player.O: 2}
        assert g.moves == []

    def test_seeded_agents_agree(self):
        g = OthelloGameState()
        a = MinimaxAgent(depth=2, seed=42).select_move(g)
        b = MinimaxAgent(depth=2, seed=42).select_move(g)
        assert a == b

    def test_full_game_against_random(self):
        game = _play_out(MinimaxAgent(depth=2, seed=3), RandomAgent(seed=3))
        assert game.is_over
        total = game.count(Player.X) + game.count(Player.O)
        assert total == game.board.occupied_count
