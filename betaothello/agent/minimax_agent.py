"""Minimax agent: alpha-beta search over the corner/edge weighted effect score."""

from __future__ import annotations

import logging
import random
from typing import Optional

from betaothello.agent.base import Agent
from betaothello.agent.search import ChainPool, SearchContext, SearchResult, search
from betaothello.game.state import OthelloGameState
from betaothello.game.types import Point

logger = logging.getLogger(__name__)

# Skill level is the search depth in plies
MIN_LEVEL = 1
MAX_LEVEL = 10
DEFAULT_LEVEL = 3


class MinimaxAgent(Agent):
    """Plays the best move chain found by a depth-limited alpha-beta search.

    The chain pool is kept across moves so chain lists are reused for the
    whole game. Pass a seed to make tie-breaks reproducible.
    """

    def __init__(self, depth: int = DEFAULT_LEVEL, seed: Optional[int] = None) -> None:
        if not MIN_LEVEL <= depth <= MAX_LEVEL:
            raise ValueError(f"depth must be in {MIN_LEVEL}-{MAX_LEVEL}, got {depth}")
        self.depth = depth
        self.rng = random.Random(seed)
        self.pool = ChainPool()
        self.last_result: Optional[SearchResult] = None

    @property
    def name(self) -> str:
        return f"MinimaxAgent(d={self.depth})"

    def analyse(self, game_state: OthelloGameState, depth: Optional[int] = None) -> SearchResult:
        """Search the current player's best chain without playing it."""
        ctx = SearchContext(rng=self.rng, pool=self.pool)
        result = search(
            game_state.position,
            game_state.current_player,
            depth if depth is not None else self.depth,
            ctx,
        )
        logger.info(
            "%s: %s searched %d nodes (%d cutoffs), score %d",
            self.name, game_state.current_player, ctx.nodes, ctx.cutoffs, result.score,
        )
        return result

    def select_move(self, game_state: OthelloGameState) -> Optional[Point]:
        if self.last_result is not None:
            self.pool.release(self.last_result.chain)
        self.last_result = self.analyse(game_state)
        return self.last_result.move
