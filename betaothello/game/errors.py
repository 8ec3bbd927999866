"""Exceptions raised by the board, effect calculator and game state."""

from __future__ import annotations


class OthelloError(Exception):
    """Base class for recoverable game errors."""


class OutOfRange(OthelloError, IndexError):
    def __init__(self, row: int, col: int) -> None:
        super().__init__(f"({row},{col}) is off the board")
        self.row = row
        self.col = col


class OccupiedCell(OthelloError):
    def __init__(self, row: int, col: int) -> None:
        super().__init__(f"({row},{col}) is already occupied")
        self.row = row
        self.col = col


class InvalidMove(OthelloError):
    """A placement that would flip nothing (zero-yield move)."""

    def __init__(self, row: int, col: int) -> None:
        super().__init__(f"({row},{col}) is a zero-yield move")
        self.row = row
        self.col = col


class IllegalPass(OthelloError):
    pass


class GameOver(OthelloError):
    pass
