"""Minimax search with alpha-beta pruning over move effects.

Each node tries every empty cell in row-major order, applies the move,
recurses for the opponent, subtracts the opponent's best net score from
the move's own score and undoes the move. Moves that tie for the best
score are all kept and one is picked at random, so equally good lines of
play don't become predictable.

The result is a move chain: the chosen move followed by the expected
replies, one per ply, down to the depth limit.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from typing import Optional

from betaothello.game.board import BOARD_AREA, BOARD_SIZE, Position
from betaothello.game.effect import apply_move, undo_move
from betaothello.game.types import Player, Point

logger = logging.getLogger(__name__)

# Lower than the sum of every cell's heuristic weight, so any real
# net score beats it.
INIT_MAX_SCORE = -9 * BOARD_AREA


@dataclass(frozen=True)
class Move:
    point: Point
    score: int  # effect score of the move when played

    def __str__(self) -> str:
        return f"({self.point.row},{self.point.col})"


# Chosen move first, then the expected replies
MoveChain = list[Move]


class ChainPool:
    """Free list of move chains reused across search nodes."""

    def __init__(self) -> None:
        self._free: list[MoveChain] = []
        self.allocated = 0

    def acquire(self) -> MoveChain:
        if self._free:
            return self._free.pop()
        self.allocated += 1
        return []

    def release(self, chain: Optional[MoveChain]) -> None:
        if chain is None:
            return
        chain.clear()
        self._free.append(chain)

    @property
    def size(self) -> int:
        return len(self._free)


@dataclass
class SearchContext:
    """Per-search state: tie-break randomness, chain pool, and counters.

    Set prune=False to run a full minimax over the same tree.
    """

    rng: random.Random = field(default_factory=random.Random)
    pool: ChainPool = field(default_factory=ChainPool)
    prune: bool = True
    nodes: int = 0
    cutoffs: int = 0
    verbose: bool = field(default_factory=lambda: logger.isEnabledFor(logging.DEBUG))


@dataclass
class SearchResult:
    score: int
    chain: Optional[MoveChain]

    @property
    def is_no_move(self) -> bool:
        return self.chain is None

    @property
    def move(self) -> Optional[Point]:
        return self.chain[0].point if self.chain else None


def best_move(
    position: Position,
    player: Player,
    ply: int,
    max_ply: int,
    parent_score: int,
    best_sibling: int,
    ctx: SearchContext,
) -> tuple[int, Optional[MoveChain]]:
    """Search one node. Returns (best net score, chosen chain).

    parent_score is the effect score of the parent's move that led here and
    best_sibling the parent's best net score so far. A node where `player`
    cannot move returns (0, None).
    """
    ctx.nodes += 1
    board = position.board
    best_score = INIT_MAX_SCORE
    candidates: list[MoveChain] = []
    done = False

    for r in range(BOARD_SIZE):
        for c in range(BOARD_SIZE):
            if board.get(r, c) is not None:
                continue

            effect = apply_move(position, r, c, player)
            if effect is None:
                continue

            if ctx.verbose:
                logger.debug("Ply %d: %s placed at (%d,%d)", ply, player, r, c)

            score = effect.score
            reply: Optional[MoveChain] = None
            if ply < max_ply and position.occupied < BOARD_AREA:
                reply_score, reply = best_move(
                    position, player.other, ply + 1, max_ply, effect.score, best_score, ctx
                )
                score -= reply_score
                assert score > INIT_MAX_SCORE, f"score {score} at ply {ply} below floor"

            if score > best_score:
                for chain in candidates:
                    ctx.pool.release(chain)
                candidates = []

                if ctx.prune and ply > 1 and parent_score - score < best_sibling:
                    if ctx.verbose:
                        logger.debug("prune: %d - %d < %d", parent_score, score, best_sibling)
                    ctx.cutoffs += 1
                    done = True

                best_score = score

            if score == best_score:
                chain = ctx.pool.acquire()
                chain.append(Move(Point(r, c), effect.score))
                if reply:
                    chain.extend(reply)
                candidates.append(chain)
            ctx.pool.release(reply)

            undo_move(position, r, c, player, effect.flips)

            if done:
                break
        if done:
            break

    if not candidates:
        if ctx.verbose:
            logger.debug("Ply %d: no best move chosen", ply)
        return 0, None

    chosen = ctx.rng.randrange(len(candidates))
    for i, chain in enumerate(candidates):
        if i != chosen:
            ctx.pool.release(chain)

    if ctx.verbose:
        logger.debug("Chose move %d of %d", chosen, len(candidates))
        logger.debug(
            "Ply %d: %s @ %s => %d", ply, player, candidates[chosen][0], best_score
        )
    return best_score, candidates[chosen]


def search(
    position: Position,
    player: Player,
    max_ply: int,
    ctx: Optional[SearchContext] = None,
) -> SearchResult:
    """Find `player`'s best move chain looking `max_ply` half-moves ahead.

    The position is restored before returning. A result with chain None
    means `player` has no legal move.
    """
    assert max_ply >= 1, f"max_ply must be at least 1, got {max_ply}"
    if ctx is None:
        ctx = SearchContext()
    score, chain = best_move(position, player, 1, max_ply, 0, 0, ctx)
    return SearchResult(score=score, chain=chain)
