from betaothello.agent.minimax_agent import MinimaxAgent
from betaothello.agent.random_agent import RandomAgent
from betaothello.game.board import Position
from betaothello.game.state import OthelloGameState
from betaothello.game.types import Player
from betaothello.ui.arena_tab import _run_arena
from betaothello.ui.play_tab import (
    GameSession,
    _apply_human_move,
    _new_game_with_color,
    _resign,
    _suggest,
    _undo_move,
)


def test_new_game_as_x():
    session = GameSession()
    result = _new_game_with_color("X", "RandomAgent", session)
    assert session.human_player is Player.X
    assert isinstance(session.agent, RandomAgent)
    assert len(session.game.moves) == 0
    assert result[4] == "You are X."


def test_new_game_as_o_ai_goes_first():
    session = GameSession()
    result = _new_game_with_color("O", "MinimaxAgent (d=1)", session)
    assert session.human_player is Player.O
    assert isinstance(session.agent, MinimaxAgent)
    assert session.agent.depth == 1
    assert len(session.game.moves) == 1
    assert session.game.moves[0].player is Player.X
    assert session.game.current_player is Player.O
    assert result[4] == "You are O."


def test_new_game_random_assigns_valid_color():
    session = GameSession()
    colors_seen = set()
    for _ in range(50):
        _new_game_with_color("Random", "RandomAgent", session)
        colors_seen.add(session.human_player)
    assert colors_seen == {Player.X, Player.O}


def test_human_move_gets_reply():
    session = GameSession()
    _new_game_with_color("X", "MinimaxAgent (d=1)", session)
    html, status, table, _, coord = _apply_human_move("2,4", session)
    assert len(session.game.moves) == 2
    assert session.game.current_player is Player.X
    assert table[0][2] == "(2,4)"
    assert status.startswith("Your turn")
    assert coord == ""


def test_invalid_inputs():
    session = GameSession()
    _new_game_with_color("X", "RandomAgent", session)
    assert "Invalid coordinate" in _apply_human_move("z", session)[1]
    assert "already occupied" in _apply_human_move("3,3", session)[1]
    assert "flips nothing" in _apply_human_move("0,0", session)[1]
    assert session.game.moves == []


def test_suggest_then_undo():
    session = GameSession()
    _new_game_with_color("X", "MinimaxAgent (d=1)", session)
    status = _suggest(session)[1]
    assert status.startswith("Suggest")
    assert session.suggestion in session.game.legal_moves()

    _apply_human_move("2,4", session)
    assert session.suggestion is None
    _undo_move(session)
    assert session.game.moves == []
    assert session.game.current_player is Player.X
    assert "Nothing to undo." == _undo_move(session)[1]


def test_game_over_banner_win():
    session = GameSession()
    session.human_player = Player.X
    session.game = OthelloGameState(Position.from_rows(["XXXXXXXX"] * 5 + ["OOOOOOOO"] * 3))
    assert session.game_over_banner == "You win!"


def test_game_over_banner_resign():
    session = GameSession()
    session.human_player = Player.X
    _resign(session)
    assert session.game_over_banner == "AI wins!"


def test_game_over_banner_draw():
    session = GameSession()
    session.game = OthelloGameState(Position.from_rows(["XXXXXXXX"] * 4 + ["OOOOOOOO"] * 4))
    assert session.game_over_banner == "Draw!"


def test_game_over_banner_empty_when_playing():
    assert GameSession().game_over_banner == ""


def test_arena_plays_to_the_end():
    updates = list(_run_arena("RandomAgent", "MinimaxAgent (d=1)", 0.0))
    assert updates[0][1].startswith("Game started")
    assert updates[-1][1].startswith("Game over")
    assert len(updates[-1][2]) == len(updates) - 1
