"""Play tab: Human vs AI with interactive SVG board."""

from __future__ import annotations

import logging
import random as _random
import time as _time
from dataclasses import dataclass, field
from typing import Callable, Optional

import gradio as gr

from betaothello.agent.base import Agent
from betaothello.agent.minimax_agent import DEFAULT_LEVEL, MAX_LEVEL, MIN_LEVEL, MinimaxAgent
from betaothello.agent.random_agent import RandomAgent
from betaothello.game.board import format_point, parse_coordinate
from betaothello.game.errors import InvalidMove, OccupiedCell, OthelloError
from betaothello.game.state import OthelloGameState
from betaothello.game.types import Player, Point
from betaothello.ui.board_component import render_board_svg

logger = logging.getLogger(__name__)

AGENT_CHOICES: dict[str, Callable[[], Agent]] = {
    **{
        f"MinimaxAgent (d={d})": (lambda d=d: MinimaxAgent(depth=d))
        for d in range(MIN_LEVEL, MAX_LEVEL + 1)
    },
    "RandomAgent": RandomAgent,
}
DEFAULT_AGENT = f"MinimaxAgent (d={DEFAULT_LEVEL})"


@dataclass
class GameSession:
    """Per-tab game state held in gr.State."""

    game: OthelloGameState = field(default_factory=OthelloGameState)
    agent: Agent = field(default_factory=MinimaxAgent)
    advisor: MinimaxAgent = field(default_factory=MinimaxAgent)
    human_player: Player = field(default=Player.X)
    suggestion: Optional[Point] = None
    _turn_start: float = field(default_factory=_time.time)

    def reset(self, human_player: Optional[Player] = None) -> None:
        self.game = OthelloGameState()
        self.suggestion = None
        self._turn_start = _time.time()
        if human_player is not None:
            self.human_player = human_player

    def mark_turn_start(self) -> None:
        """Record the moment the current player's clock starts."""
        self._turn_start = _time.time()

    def elapsed_since_turn_start(self) -> float:
        return _time.time() - self._turn_start

    @property
    def game_over_banner(self) -> str:
        """Short text for the SVG overlay banner. Empty if game is not over."""
        g = self.game
        if not g.is_over:
            return ""
        if g.winner is not None:
            if g.winner == self.human_player:
                return "You win!"
            return "AI wins!"
        return "Draw!"

    @property
    def status_text(self) -> str:
        g = self.game
        score = f"X {g.count(Player.X)} - O {g.count(Player.O)}"
        if g.is_over:
            return f"Game over — {self.game_over_banner} ({g.result_text()})"
        if g.current_player == self.human_player:
            return f"Your turn ({g.current_player}) · {score}"
        return f"AI is thinking... ({g.current_player}) · {score}"

    @property
    def move_history_table(self) -> list[list[str]]:
        rows: list[list[str]] = []
        for i, record in enumerate(self.game.moves):
            move = "pass" if record.point is None else format_point(record.point)
            flips = str(record.effect.num_flips) if record.effect is not None else "—"
            t = f"{record.elapsed:.2f}" if record.elapsed is not None else "—"
            rows.append([str(i + 1), str(record.player), move, flips, t])
        return rows


def _make_board_html(session: GameSession) -> str:
    clickable = (
        not session.game.is_over
        and session.game.current_player == session.human_player
    )
    return render_board_svg(
        session.game,
        clickable=clickable,
        game_over_message=session.game_over_banner,
        suggestion=session.suggestion,
    )


def _outputs(session: GameSession, status: Optional[str] = None):
    return (
        _make_board_html(session),
        status if status is not None else session.status_text,
        session.move_history_table,
        session,
    )


def _advance(session: GameSession) -> None:
    """Play passes and AI moves until it is the human's turn to move."""
    g = session.game
    while not g.is_over:
        if g.must_pass():
            g.pass_turn()
            continue
        if g.current_player == session.human_player:
            break
        t0 = _time.time()
        ai_move = session.agent.select_move(g)
        assert ai_move is not None, "agent returned no move with legal moves available"
        g.apply_move(ai_move, elapsed=_time.time() - t0)
    session.mark_turn_start()


def _apply_human_move(coord_text: str, session: GameSession):
    """Process a human move, then let the AI respond."""
    if session.game.is_over:
        return _outputs(session) + ("",)

    if session.game.current_player != session.human_player:
        return _outputs(session, "Wait — it's the AI's turn.") + ("",)

    point = parse_coordinate(coord_text)
    if point is None:
        return _outputs(
            session, f"Invalid coordinate: '{coord_text}'. Use row,col like 2,4."
        ) + ("",)

    try:
        session.game.apply_move(point, elapsed=session.elapsed_since_turn_start())
    except OccupiedCell:
        return _outputs(session, f"{format_point(point)} is already occupied.") + ("",)
    except InvalidMove:
        return _outputs(session, f"{format_point(point)} flips nothing; try again.") + ("",)

    session.suggestion = None
    _advance(session)
    return _outputs(session) + ("",)


def _new_game_with_color(color_choice: str, agent_choice: str, session: GameSession):
    """Start a new game. color_choice is 'X', 'O', or 'Random'."""
    if color_choice == "Random":
        human = _random.choice([Player.X, Player.O])
    elif color_choice == "O":
        human = Player.O
    else:
        human = Player.X

    factory = AGENT_CHOICES.get(agent_choice, AGENT_CHOICES[DEFAULT_AGENT])
    session.agent = factory()
    if isinstance(session.agent, MinimaxAgent):
        session.advisor = MinimaxAgent(depth=session.agent.depth)
    session.reset(human_player=human)

    # If human is O, the AI (X) plays first
    _advance(session)
    return _outputs(session) + (f"You are {human}.",)


def _suggest(session: GameSession):
    """Search the human's best move and mark it on the board."""
    g = session.game
    if g.is_over or g.current_player != session.human_player:
        return _outputs(session)
    result = session.advisor.analyse(g)
    if result.chain is None:
        return _outputs(session, "No move to suggest.")
    session.suggestion = result.move
    session.advisor.pool.release(result.chain)
    return _outputs(
        session,
        f"Suggest {format_point(session.suggestion)} with an effect of {result.score}",
    )


def _undo_move(session: GameSession):
    """Undo back to before the human's last move."""
    g = session.game
    if not any(r.player == session.human_player and not r.is_pass for r in g.moves):
        return _outputs(session, "Nothing to undo.")

    while g.moves:
        record = g.undo_move()
        if record.player == session.human_player and not record.is_pass:
            break
    session.suggestion = None
    session.mark_turn_start()
    return _outputs(session)


def _resign(session: GameSession):
    try:
        session.game.resign(session.human_player)
    except OthelloError as exc:
        logger.info("Resign ignored: %s", exc)
    return _outputs(session)


def build_play_tab() -> None:
    """Construct the Play tab UI inside a gr.Blocks context."""

    session_state = gr.State(GameSession())

    with gr.Row():
        # Left: board
        with gr.Column(scale=3):
            board_html = gr.HTML(
                value=render_board_svg(OthelloGameState()),
                label="Board",
            )
        # Right: controls
        with gr.Column(scale=1):
            status_text = gr.Textbox(
                value="Your turn (X)",
                label="Status",
                interactive=False,
                lines=2,
            )
            color_info = gr.Textbox(
                value="You are X.",
                label="Color",
                interactive=False,
                lines=1,
            )

            gr.Markdown("### New Game")
            color_choice = gr.Radio(
                choices=["Random", "X", "O"],
                value="X",
                label="Play as (X moves first)",
            )
            agent_choice = gr.Dropdown(
                choices=list(AGENT_CHOICES.keys()),
                value=DEFAULT_AGENT,
                label="Opponent",
            )
            new_game_btn = gr.Button("New Game", variant="primary")

            with gr.Row():
                suggest_btn = gr.Button("Suggest")
                undo_btn = gr.Button("Undo")
                resign_btn = gr.Button("Resign", variant="stop")

            gr.Markdown("### Enter Move")
            coord_input = gr.Textbox(
                label="Coordinate (row,col e.g. 2,4)",
                placeholder="2,4",
                elem_id="coord-input",
                lines=1,
            )
            coord_submit = gr.Button(
                "Submit Move",
                elem_id="coord-submit",
            )

            gr.Markdown("### Move History")
            move_table = gr.Dataframe(
                headers=["#", "Player", "Move", "Flips", "Time (s)"],
                datatype=["number", "str", "str", "str", "str"],
                interactive=False,
                column_count=5,
            )

    board_outputs = [board_html, status_text, move_table, session_state]

    coord_submit.click(
        fn=_apply_human_move,
        inputs=[coord_input, session_state],
        outputs=board_outputs + [coord_input],
    )

    new_game_btn.click(
        fn=_new_game_with_color,
        inputs=[color_choice, agent_choice, session_state],
        outputs=board_outputs + [color_info],
    )

    suggest_btn.click(
        fn=_suggest,
        inputs=[session_state],
        outputs=board_outputs,
    )

    undo_btn.click(
        fn=_undo_move,
        inputs=[session_state],
        outputs=board_outputs,
    )

    resign_btn.click(
        fn=_resign,
        inputs=[session_state],
        outputs=board_outputs,
    )
