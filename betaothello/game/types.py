from __future__ import annotations

import enum
from typing import NamedTuple


class Player(enum.Enum):
    X = "X"
    O = "O"

    @property
    def other(self) -> Player:
        return Player.O if self is Player.X else Player.X

    @property
    def marker(self) -> str:
        return self.value

    def __str__(self) -> str:
        return self.value


class Point(NamedTuple):
    row: int  # 0-indexed, 0 = top
    col: int  # 0-indexed, 0 = left
