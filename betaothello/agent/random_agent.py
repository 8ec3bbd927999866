from __future__ import annotations

import random
from typing import Optional

from betaothello.game.state import OthelloGameState
from betaothello.game.types import Point

from .base import Agent


class RandomAgent(Agent):
    def __init__(self, seed: Optional[int] = None) -> None:
        self.rng = random.Random(seed)

    def select_move(self, game_state: OthelloGameState) -> Optional[Point]:
        moves = game_state.legal_moves()
        if not moves:
            return None
        return self.rng.choice(moves)
