from __future__ import annotations

import re
from typing import Iterator, Optional

from .errors import OutOfRange
from .types import Player, Point

BOARD_SIZE = 8
BOARD_AREA = BOARD_SIZE * BOARD_SIZE

# Cells a single direction can capture: the whole line minus the placed
# marker and the bracketing marker at the far end.
MAX_LINE_FLIPS = BOARD_SIZE - 2

_COORD_RE = re.compile(r"^\s*(\d+)\s*[,\s]\s*(\d+)\s*$")


def parse_coordinate(text: str) -> Optional[Point]:
    """Parse a coordinate string like '2,4' into a Point.

    Row comes first, both values 0-7. A space works as the separator too.
    Returns None if the string is invalid.
    """
    match = _COORD_RE.match(text)
    if match is None:
        return None
    row, col = int(match.group(1)), int(match.group(2))
    if not (0 <= row < BOARD_SIZE and 0 <= col < BOARD_SIZE):
        return None
    return Point(row, col)


def format_point(point: Point) -> str:
    """Format a Point as '(row,col)'."""
    return f"({point.row},{point.col})"


def _idx_weight(index: int) -> int:
    return BOARD_SIZE if index in (0, BOARD_SIZE - 1) else 1


def cell_weight(row: int, col: int) -> int:
    """Static positional value: 64 for corners, 8 for other edges, 1 inside."""
    return _idx_weight(row) * _idx_weight(col)


class Board:
    """8x8 Othello board. Each cell is None (empty) or a Player."""

    def __init__(self) -> None:
        self._grid: list[list[Optional[Player]]] = [
            [None] * BOARD_SIZE for _ in range(BOARD_SIZE)
        ]

    @classmethod
    def initial(cls) -> Board:
        board = cls()
        board.set(3, 3, Player.X)
        board.set(4, 4, Player.X)
        board.set(3, 4, Player.O)
        board.set(4, 3, Player.O)
        return board

    def _check(self, row: int, col: int) -> None:
        if not (0 <= row < BOARD_SIZE and 0 <= col < BOARD_SIZE):
            raise OutOfRange(row, col)

    def get(self, row: int, col: int) -> Optional[Player]:
        self._check(row, col)
        return self._grid[row][col]

    def set(self, row: int, col: int, state: Optional[Player]) -> None:
        self._check(row, col)
        self._grid[row][col] = state

    def is_empty(self, row: int, col: int) -> bool:
        return self.get(row, col) is None

    @staticmethod
    def is_on_grid(row: int, col: int) -> bool:
        return 0 <= row < BOARD_SIZE and 0 <= col < BOARD_SIZE

    @property
    def occupied_count(self) -> int:
        return sum(cell is not None for row in self._grid for cell in row)

    def count(self, player: Player) -> int:
        return sum(cell is player for row in self._grid for cell in row)

    def empty_points(self) -> Iterator[Point]:
        """Yield empty cells in row-major order."""
        for r in range(BOARD_SIZE):
            for c in range(BOARD_SIZE):
                if self._grid[r][c] is None:
                    yield Point(r, c)

    def rows(self) -> list[list[Optional[Player]]]:
        return [list(row) for row in self._grid]

    def copy(self) -> Board:
        board = Board()
        board._grid = self.rows()
        return board

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self._grid == other._grid

    def __str__(self) -> str:
        return "\n".join(
            "".join(" " if cell is None else cell.marker for cell in row)
            for row in self._grid
        )


class Position:
    """A board plus the live piece count of each player.

    This is the context the effect calculator and the search mutate in
    place. The counts always equal the markers on the board, except in
    the middle of an apply or undo.
    """

    def __init__(self, board: Optional[Board] = None) -> None:
        self.board = board if board is not None else Board.initial()
        self.counts: dict[Player, int] = {
            Player.X: self.board.count(Player.X),
            Player.O: self.board.count(Player.O),
        }

    @classmethod
    def from_rows(cls, rows: list[str]) -> Position:
        """Build a position from eight strings of 'X', 'O' and ' ' or '.'."""
        assert len(rows) == BOARD_SIZE, "Need one string per row"
        board = Board()
        for r, line in enumerate(rows):
            assert len(line) == BOARD_SIZE, f"Row {r} must have {BOARD_SIZE} cells"
            for c, ch in enumerate(line):
                if ch in ("X", "O"):
                    board.set(r, c, Player(ch))
        return cls(board)

    @property
    def occupied(self) -> int:
        return self.counts[Player.X] + self.counts[Player.O]

    @property
    def is_full(self) -> bool:
        return self.occupied >= BOARD_AREA

    def copy(self) -> Position:
        return Position(self.board.copy())

    def check_counts(self) -> None:
        assert self.occupied == self.board.occupied_count, (
            f"count mismatch: X={self.counts[Player.X]} O={self.counts[Player.O]} "
            f"but {self.board.occupied_count} occupied cells"
        )
