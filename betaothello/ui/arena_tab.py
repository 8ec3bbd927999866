"""Arena tab: AI vs AI with live board updates."""

from __future__ import annotations

import time
from typing import Generator

import gradio as gr

from betaothello.game.board import format_point
from betaothello.game.state import OthelloGameState
from betaothello.game.types import Player
from betaothello.ui.board_component import render_board_svg
from betaothello.ui.play_tab import AGENT_CHOICES

MOVE_DELAY = 0.4  # seconds between moves


def _render_arena_board(game: OthelloGameState, result_msg: str = "") -> str:
    return render_board_svg(game, clickable=False, game_over_message=result_msg)


def _result_message(game: OthelloGameState) -> str:
    if not game.is_over:
        return ""
    if game.winner is None:
        return "Draw!"
    return f"{game.winner} wins!"


def _move_table(game: OthelloGameState) -> list[list[str]]:
    rows: list[list[str]] = []
    for i, record in enumerate(game.moves):
        move = "pass" if record.point is None else format_point(record.point)
        rows.append([str(i + 1), str(record.player), move])
    return rows


def _run_arena(
    x_name: str,
    o_name: str,
    delay: float,
) -> Generator:
    """Generator that yields board updates after each move or pass."""
    agents = {
        Player.X: AGENT_CHOICES[x_name](),
        Player.O: AGENT_CHOICES[o_name](),
    }
    names = {Player.X: x_name, Player.O: o_name}
    game = OthelloGameState()

    yield (
        _render_arena_board(game),
        f"Game started: {x_name} (X) vs {o_name} (O)",
        _move_table(game),
    )

    while not game.is_over:
        player = game.current_player
        if game.must_pass():
            game.pass_turn()
            action = "passed"
        else:
            move = agents[player].select_move(game)
            game.apply_move(move)
            action = f"played {format_point(move)}"

        result = _result_message(game)
        if result:
            status = f"Game over — {result} {game.result_text()}"
        else:
            status = (
                f"Move {len(game.moves)}: {names[player]} ({player}) {action} — "
                f"X {game.count(Player.X)} / O {game.count(Player.O)}"
            )

        yield (
            _render_arena_board(game, result),
            status,
            _move_table(game),
        )

        if not game.is_over:
            time.sleep(delay)


def build_arena_tab() -> None:
    """Construct the Arena tab UI inside a gr.Blocks context."""

    with gr.Row():
        with gr.Column(scale=3):
            board_html = gr.HTML(
                value=_render_arena_board(OthelloGameState()),
                label="Board",
            )
        with gr.Column(scale=1):
            status_text = gr.Textbox(
                value="Select two agents and click Start.",
                label="Status",
                interactive=False,
                lines=2,
            )

            gr.Markdown("### Setup")
            x_choice = gr.Dropdown(
                choices=list(AGENT_CHOICES.keys()),
                value="MinimaxAgent (d=3)",
                label="X Agent",
            )
            o_choice = gr.Dropdown(
                choices=list(AGENT_CHOICES.keys()),
                value="RandomAgent",
                label="O Agent",
            )
            delay_slider = gr.Slider(
                minimum=0.0,
                maximum=2.0,
                value=MOVE_DELAY,
                step=0.1,
                label="Delay between moves (sec)",
            )
            start_btn = gr.Button("Start", variant="primary")

            gr.Markdown("### Move History")
            move_table = gr.Dataframe(
                headers=["#", "Player", "Move"],
                datatype=["number", "str", "str"],
                interactive=False,
                column_count=3,
            )

    start_btn.click(
        fn=_run_arena,
        inputs=[x_choice, o_choice, delay_slider],
        outputs=[board_html, status_text, move_table],
    )
