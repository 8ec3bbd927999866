from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from .board import Board, Position, format_point
from .effect import Effect, apply_move, has_legal_move, legal_moves, undo_move
from .errors import GameOver, IllegalPass, InvalidMove, OccupiedCell, OutOfRange
from .types import Player, Point

logger = logging.getLogger(__name__)


@dataclass
class MoveRecord:
    player: Player
    point: Optional[Point]  # None for a pass
    effect: Optional[Effect] = None
    elapsed: Optional[float] = None

    @property
    def is_pass(self) -> bool:
        return self.point is None

    def __str__(self) -> str:
        if self.point is None:
            return f"{self.player}: pass"
        return f"{self.player}: {format_point(self.point)}"


class OthelloGameState:
    """Full game state for Othello: position, turn, history, termination.

    X moves first. A player with no legal move passes; the game ends after
    two passes in a row, on a full board, or when one side has no markers
    left.
    """

    def __init__(self, position: Optional[Position] = None, current_player: Player = Player.X) -> None:
        self.position = position if position is not None else Position()
        self.current_player = current_player
        self.moves: list[MoveRecord] = []
        self._resigned: Optional[Player] = None

    @property
    def board(self) -> Board:
        return self.position.board

    def count(self, player: Player) -> int:
        return self.position.counts[player]

    @property
    def score(self) -> dict[Player, int]:
        return dict(self.position.counts)

    @property
    def _deadlocked(self) -> bool:
        # Two consecutive turns without a move
        return len(self.moves) >= 2 and self.moves[-1].is_pass and self.moves[-2].is_pass

    @property
    def is_over(self) -> bool:
        if self._resigned is not None:
            return True
        counts = self.position.counts
        if counts[Player.X] == 0 or counts[Player.O] == 0:
            return True
        if self.position.is_full:
            return True
        return self._deadlocked

    @property
    def winner(self) -> Optional[Player]:
        if not self.is_over:
            return None
        if self._resigned is not None:
            return self._resigned.other
        x, o = self.position.counts[Player.X], self.position.counts[Player.O]
        if x == o:
            return None
        return Player.X if x > o else Player.O

    @property
    def is_draw(self) -> bool:
        return self.is_over and self.winner is None

    def legal_moves(self) -> list[Point]:
        if self.is_over:
            return []
        return legal_moves(self.position, self.current_player)

    def must_pass(self) -> bool:
        """True if the current player has no legal move but the game goes on."""
        return not self.is_over and not has_legal_move(self.position, self.current_player)

    def apply_move(self, point: Point, elapsed: Optional[float] = None) -> Effect:
        """Play `point` for the current player and advance the turn.

        Raises OutOfRange, OccupiedCell or InvalidMove (zero-yield) without
        changing anything.
        """
        if self.is_over:
            raise GameOver("Game is already over")
        row, col = point
        if not self.board.is_on_grid(row, col):
            raise OutOfRange(row, col)
        if not self.board.is_empty(row, col):
            raise OccupiedCell(row, col)

        player = self.current_player
        effect = apply_move(self.position, row, col, player)
        if effect is None:
            raise InvalidMove(row, col)

        self.moves.append(MoveRecord(player=player, point=Point(row, col), effect=effect, elapsed=elapsed))
        self.current_player = player.other
        return effect

    def pass_turn(self, elapsed: Optional[float] = None) -> None:
        """Record that the current player cannot move."""
        if self.is_over:
            raise GameOver("Game is already over")
        player = self.current_player
        if has_legal_move(self.position, player):
            raise IllegalPass(f"{player} has a legal move and cannot pass")
        logger.info("%s cannot move", player)
        self.moves.append(MoveRecord(player=player, point=None, elapsed=elapsed))
        self.current_player = player.other
        if self._deadlocked:
            logger.info("Deadlock: neither player can move")

    def undo_move(self) -> Optional[MoveRecord]:
        """Undo the last move or pass. Returns the record, or None if no moves."""
        if not self.moves:
            return None
        record = self.moves.pop()
        if record.point is not None:
            assert record.effect is not None
            undo_move(self.position, record.point.row, record.point.col, record.player, record.effect.flips)
        self.current_player = record.player
        self._resigned = None
        return record

    def resign(self, player: Optional[Player] = None) -> None:
        if self.is_over:
            raise GameOver("Game is already over")
        self._resigned = player if player is not None else self.current_player

    def result_text(self) -> str:
        if not self.is_over:
            return "In progress"
        x, o = self.position.counts[Player.X], self.position.counts[Player.O]
        if self._resigned is not None:
            return f"{self._resigned} resigns; {self._resigned.other} wins"
        if self.winner is None:
            return f"Draw ({x}-{o})"
        return f"{self.winner} wins ({x}-{o})"
