from __future__ import annotations

import abc
from typing import Optional

from betaothello.game.state import OthelloGameState
from betaothello.game.types import Point


class Agent(abc.ABC):
    @abc.abstractmethod
    def select_move(self, game_state: OthelloGameState) -> Optional[Point]:
        """Return the point where this agent wants to play, or None to pass."""

    @property
    def name(self) -> str:
        return self.__class__.__name__
