# engine/core/search.py
import logging
import time
from dataclasses import dataclass
from typing import Optional

from .board import Board
from .constants import SIDE_1, SIDE_2
from .evaluator import Decided, Outcome, assess, is_terminal

logger = logging.getLogger(__name__)


class NoLegalMoveError(ValueError):
    """Raised when the engine is asked to move on a full board."""


@dataclass(frozen=True)
class SearchLimits:
    node_budget: Optional[int] = None
    time_limit_ms: Optional[int] = None

    def __post_init__(self):
        if self.node_budget is not None and self.node_budget < 1:
            raise ValueError(f"node_budget must be positive, got {self.node_budget}")
        if self.time_limit_ms is not None and self.time_limit_ms < 1:
            raise ValueError(f"time_limit_ms must be positive, got {self.time_limit_ms}")


@dataclass(frozen=True)
class Decision:
    outcome: Outcome
    column: Optional[int]
    nodes: int = 0
    truncated: bool = False
    # Distance from the root to the position the outcome was read from.
    plies: int = 0

    @property
    def score(self) -> int:
        return self.outcome.score

    @property
    def rank(self):
        """
        Search ordering. A win reached in fewer plies beats a later one,
        a loss reached in more plies beats an earlier one.
        """
        if isinstance(self.outcome, Decided):
            tier = self.outcome.rank[0]
            return (tier, -tier * self.plies)
        return self.outcome.rank


class Minimax:
    """
    Fixed-depth minimax, no pruning.

    Depth counts move pairs: the counter advances on the opponent's ply and
    is only compared at the engine's own nodes, so every line ends after an
    opponent reply. Depth d looks 2 * (d + 1) plies ahead.
    """

    def __init__(self, side: int, depth: int, limits: Optional[SearchLimits] = None):
        if side not in (SIDE_1, SIDE_2):
            raise ValueError(f"side must be {SIDE_1} or {SIDE_2}, got {side!r}")
        if isinstance(depth, bool) or not isinstance(depth, int) or depth < 0:
            raise ValueError(f"depth must be a non-negative integer, got {depth!r}")
        self.side = int(side)
        self.opponent = -self.side
        self.max_depth = depth
        self.limits = limits or SearchLimits()
        self.nodes = 0
        self._deadline: Optional[float] = None
        self._truncated = False

    def decide(self, board: Board) -> int:
        """Root entry point. Returns the column to play."""
        return self.search(board).column

    def search(self, board: Board) -> Decision:
        if not board.legal_columns():
            raise NoLegalMoveError("No legal column on a full board")

        self.nodes = 0
        self._truncated = False
        self._deadline = None
        if self.limits.time_limit_ms is not None:
            self._deadline = time.monotonic() + self.limits.time_limit_ms / 1000.0

        decision = self._expand(board, True, 0, 0)
        decision = Decision(decision.outcome, decision.column, self.nodes, self._truncated, decision.plies)

        if self._truncated:
            logger.warning("Search limit hit after %d nodes, playing column %d", self.nodes, decision.column)
        logger.debug(
            "Side %d depth %d -> column %s (score %d, %d nodes)",
            self.side, self.max_depth, decision.column, decision.score, self.nodes,
        )
        return decision

    def _minimax(self, board: Board, maximizing: bool, depth: int, ply: int, previous: int) -> Decision:
        self.nodes += 1
        outcome = assess(board, self.side)

        # 1. Leaf: game over, horizon reached, or out of budget
        if is_terminal(outcome):
            return Decision(outcome, previous, plies=ply)
        if maximizing and depth > self.max_depth:
            return Decision(outcome, previous, plies=ply)
        if self._limit_reached():
            return Decision(outcome, previous, plies=ply)

        # 2. Recursive Search
        return self._expand(board, maximizing, depth, ply)

    def _expand(self, board: Board, maximizing: bool, depth: int, ply: int) -> Decision:
        mover = self.side if maximizing else self.opponent
        # One move pair = one unit of depth, counted on the opponent's ply.
        child_depth = depth if maximizing else depth + 1

        best: Optional[Decision] = None
        for col in board.legal_columns():
            child = self._minimax(board.apply(col, mover), not maximizing, child_depth, ply + 1, col)
            if best is None:
                better = True
            elif maximizing:
                better = child.rank > best.rank
            else:
                better = child.rank < best.rank
            # Strict comparison: ties keep the first column seen.
            if better:
                best = Decision(child.outcome, col, plies=child.plies)
        return best

    def _limit_reached(self) -> bool:
        if self._truncated:
            return True
        if self.limits.node_budget is not None and self.nodes > self.limits.node_budget:
            self._truncated = True
        elif self._deadline is not None and time.monotonic() >= self._deadline:
            self._truncated = True
        return self._truncated
