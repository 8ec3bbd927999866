"""Text console front end: human or computer on each side, board drawn as text."""

from __future__ import annotations

import argparse
import logging
from typing import Callable, Optional

from betaothello.agent.minimax_agent import DEFAULT_LEVEL, MAX_LEVEL, MIN_LEVEL, MinimaxAgent
from betaothello.agent.search import MoveChain
from betaothello.game.board import BOARD_SIZE, Board, format_point, parse_coordinate
from betaothello.game.effect import Effect
from betaothello.game.errors import InvalidMove, OccupiedCell
from betaothello.game.state import OthelloGameState
from betaothello.game.types import Player

logger = logging.getLogger(__name__)

HELP_TEXT = (
    f"Enter: row, column (comma-separated) (both in range 0-{BOARD_SIZE - 1})\n"
    "      H for a suggested move, Q to quit"
)


def render_board(board: Board) -> str:
    """Draw the board framed, with column digits on top and row digits on the left."""
    lines = ["", "       " + "".join(str(c) for c in range(BOARD_SIZE))]
    frame = "      +" + "-" * BOARD_SIZE + "+"
    lines.append(frame)
    for r, row in enumerate(board.rows()):
        cells = "".join(" " if cell is None else cell.marker for cell in row)
        lines.append(f"    {r} |{cells}|")
    lines.append(frame)
    lines.append("")
    return "\n".join(lines)


def format_chain(chain: MoveChain, first: Player) -> list[str]:
    """One line per move of a chain, alternating players from `first`."""
    lines = []
    player = first
    for move in chain:
        lines.append(f"{player}: {move}")
        player = player.other
    return lines


class ConsoleGame:
    """The turn loop. `read` and `write` default to input() and print()."""

    def __init__(
        self,
        agents: dict[Player, Optional[MinimaxAgent]],
        level: int = DEFAULT_LEVEL,
        pause_after: bool = False,
        seed: Optional[int] = None,
        read: Callable[[str], str] = input,
        write: Callable[[str], None] = print,
    ) -> None:
        self.game = OthelloGameState()
        self.agents = agents
        self.pause_after = pause_after
        self.read = read
        self.write = write
        # Used for the human's "H" suggestions
        self.advisor = MinimaxAgent(depth=level, seed=seed)

    def counts_line(self) -> str:
        return f"X: {self.game.count(Player.X)};  O: {self.game.count(Player.O)}"

    def _prompt(self, text: str) -> Optional[str]:
        try:
            return self.read(text)
        except EOFError:
            return None

    def human_turn(self) -> Optional[Effect]:
        """Read moves until one is legal. Returns None if the human quits."""
        player = self.game.current_player
        self.write(self.counts_line())
        while True:
            text = self._prompt(f"{player}: ")
            if text is None:
                return None
            text = text.strip()
            if not text:
                continue

            command = text[0].upper()
            if command == "Q":
                return None
            if command == "H":
                result = self.advisor.analyse(self.game)
                if result.chain is None:
                    self.write("No move to suggest")
                else:
                    self.write(
                        f"Suggest {format_point(result.move)} with an effect of {result.score}\n"
                    )
                    self.advisor.pool.release(result.chain)
                continue

            point = parse_coordinate(text)
            if point is None:
                self.write("Invalid coordinates; re-enter:")
                continue
            try:
                return self.game.apply_move(point)
            except OccupiedCell:
                self.write("That position already occupied; try again:")
            except InvalidMove:
                self.write("Zero-yield move; try again:")

    def computer_turn(self, agent: MinimaxAgent) -> Effect:
        player = self.game.current_player
        self.write("Computer is moving...")
        result = agent.analyse(self.game)
        assert result.chain is not None, "computer turn without a legal move"
        point = result.move
        self.write(f"Computer's move: {player} placed at {point.row}, {point.col}")
        effect = self.game.apply_move(point)

        self.write("Optimal chain:")
        for line in format_chain(result.chain, player):
            self.write(line)
        agent.pool.release(result.chain)
        return effect

    def play(self) -> OthelloGameState:
        game = self.game
        self.write(render_board(game.board))
        self.write(HELP_TEXT)

        while not game.is_over:
            player = game.current_player
            if game.must_pass():
                self.write(f"{player} cannot move")
                game.pass_turn()
                if game.is_over:
                    self.write("Deadlock: game terminated")
                continue

            agent = self.agents.get(player)
            if agent is None:
                effect = self.human_turn()
                if effect is None:
                    self.write("Quit.")
                    break
            else:
                effect = self.computer_turn(agent)

            self.write(f"\nEffect of move == {effect.score}")
            if self.pause_after and agent is not None:
                self._prompt("\nPress RETURN to continue...\n")
            self.write(self.counts_line())
            self.write(render_board(game.board))

        self.write(game.result_text())
        for agent in [a for a in self.agents.values() if a is not None] + [self.advisor]:
            logger.info(
                "%s: %d chains allocated, %d in pool", agent.name, agent.pool.allocated, agent.pool.size
            )
        return game


def _ask_yes_no(read: Callable[[str], str], text: str) -> bool:
    return read(text).strip().lower().startswith("y")


def _ask_level(read: Callable[[str], str]) -> int:
    while True:
        try:
            level = int(read(f"Enter skill level ({MIN_LEVEL}-{MAX_LEVEL}): ").strip())
        except ValueError:
            continue
        if MIN_LEVEL <= level <= MAX_LEVEL:
            return level


def _ask_control(read: Callable[[str], str], player: Player) -> str:
    while True:
        answer = read(f"{player}: (h)uman or (c)omputer: ").strip().lower()
        if answer[:1] == "h":
            return "human"
        if answer[:1] == "c":
            return "computer"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="betaothello",
        description="Othello against a minimax engine. Options left out are asked for interactively.",
    )
    parser.add_argument("--verbose", action=argparse.BooleanOptionalAction, default=None,
                        help="Trace the search at DEBUG level")
    parser.add_argument("--level", type=int, choices=range(MIN_LEVEL, MAX_LEVEL + 1),
                        metavar=f"{{{MIN_LEVEL}-{MAX_LEVEL}}}", help="Search depth in plies")
    parser.add_argument("-x", dest="x", choices=["human", "computer"], help="Who plays X")
    parser.add_argument("-o", dest="o", choices=["human", "computer"], help="Who plays O")
    parser.add_argument("--pause", action=argparse.BooleanOptionalAction, default=None,
                        help="Wait for RETURN after each computer move")
    parser.add_argument("--seed", type=int, default=None, help="Seed for tie-breaks between equal moves")
    return parser


def main(
    argv: Optional[list[str]] = None,
    read: Callable[[str], str] = input,
    write: Callable[[str], None] = print,
) -> int:
    args = build_parser().parse_args(argv)

    verbose = args.verbose if args.verbose is not None else _ask_yes_no(read, "verbose? ")
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
    )

    level = args.level if args.level is not None else _ask_level(read)
    controls = {
        Player.X: args.x or _ask_control(read, Player.X),
        Player.O: args.o or _ask_control(read, Player.O),
    }
    pause_after = args.pause if args.pause is not None else not read(
        "Pause after computer move? : "
    ).strip().lower().startswith("n")

    agents = {
        player: MinimaxAgent(depth=level, seed=args.seed) if control == "computer" else None
        for player, control in controls.items()
    }
    ConsoleGame(agents, level=level, pause_after=pause_after, seed=args.seed, read=read, write=write).play()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
