"""Move effects: which markers a placement flips, applying it, and undoing it."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from .board import BOARD_SIZE, MAX_LINE_FLIPS, Position, cell_weight
from .errors import OccupiedCell
from .types import Player, Point

# The eight unit vectors around a cell
DIRECTIONS = [(-1, -1), (-1, 0), (-1, 1), (0, -1), (0, 1), (1, -1), (1, 0), (1, 1)]


@dataclass
class Effect:
    """Result of applying a move: heuristic score and the cells it flipped."""

    score: int
    flips: list[Point] = field(default_factory=list)

    @property
    def num_flips(self) -> int:
        return len(self.flips)


def _line_flips(position: Position, row: int, col: int, dr: int, dc: int, mover: Player) -> list[Point]:
    """Opponent cells captured along one direction, or [] if the line isn't closed."""
    board = position.board
    opponent = mover.other
    line: list[Point] = []
    r, c = row + dr, col + dc
    while 0 <= r < BOARD_SIZE and 0 <= c < BOARD_SIZE:
        cell = board.get(r, c)
        if cell is mover:
            assert len(line) <= MAX_LINE_FLIPS, f"too many flips from ({row},{col})"
            return line
        if cell is not opponent:
            return []
        line.append(Point(r, c))
        r += dr
        c += dc
    return []


def would_flip(position: Position, row: int, col: int, mover: Player) -> list[Point]:
    """Cells `mover` would flip by playing (row, col). Does not mutate."""
    if not position.board.is_empty(row, col):
        raise OccupiedCell(row, col)
    flips: list[Point] = []
    for dr, dc in DIRECTIONS:
        flips.extend(_line_flips(position, row, col, dr, dc, mover))
    return flips


def apply_move(position: Position, row: int, col: int, mover: Player) -> Optional[Effect]:
    """Place `mover` at (row, col) and flip captured markers.

    Returns None for a zero-yield move, in which case nothing changes.
    Raises OutOfRange or OccupiedCell before touching the board.
    """
    flips = would_flip(position, row, col, mover)
    if not flips:
        return None

    board = position.board
    score = cell_weight(row, col)
    for p in flips:
        board.set(p.row, p.col, mover)
        score += cell_weight(p.row, p.col)
    board.set(row, col, mover)

    position.counts[mover] += len(flips) + 1
    position.counts[mover.other] -= len(flips)
    return Effect(score=score, flips=flips)


def undo_move(position: Position, row: int, col: int, mover: Player, flips: list[Point]) -> None:
    """Exact inverse of apply_move for the same arguments."""
    board = position.board
    assert board.get(row, col) is mover, f"({row},{col}) does not hold {mover}"
    opponent = mover.other
    board.set(row, col, None)
    for p in flips:
        board.set(p.row, p.col, opponent)

    position.counts[mover] -= len(flips) + 1
    position.counts[opponent] += len(flips)
    assert position.counts[mover] >= 0 and position.counts[opponent] >= 0


def legal_moves(position: Position, player: Player) -> list[Point]:
    """Empty cells, in row-major order, where `player` would flip something."""
    return [
        p for p in position.board.empty_points()
        if would_flip(position, p.row, p.col, player)
    ]


def has_legal_move(position: Position, player: Player) -> bool:
    return any(
        would_flip(position, p.row, p.col, player)
        for p in position.board.empty_points()
    )
