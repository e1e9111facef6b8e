"""Bounded-depth minimax with alpha-beta pruning over the candidate frontier.

Depth counts from 1 at the root. A node at depth d expands moves for the
agent when d is odd (maximizing) and for the opponent when d is even
(minimizing). Nodes at depth >= max depth are leaves scored by the
LineEvaluator from the agent's point of view.
"""

from __future__ import annotations

import logging
import math
import random
from dataclasses import dataclass, field
from typing import Optional

from gomokubot.agent.candidates import CandidateMoveSet
from gomokubot.agent.evaluator import JITTER_RANGE, OPPONENT_WEIGHT, LineEvaluator
from gomokubot.game.board import Board, ContractError
from gomokubot.game.types import Player, Point

logger = logging.getLogger(__name__)

# Default search depth. Depth 3 searches the agent's move and the opponent's
# reply before evaluating.
SEARCH_DEPTH = 3

INF = math.inf


class NoLegalMoveError(RuntimeError):
    """The position has no candidate move to search."""


@dataclass(frozen=True)
class SearchConfig:
    depth: int = SEARCH_DEPTH
    jitter: int = JITTER_RANGE
    opponent_weight: float = OPPONENT_WEIGHT

    def __post_init__(self) -> None:
        if self.depth < 2:
            raise ValueError(f"search depth must be at least 2, got {self.depth}")
        if self.jitter < 0:
            raise ValueError(f"jitter must be non-negative, got {self.jitter}")


@dataclass
class SearchNode:
    """One hypothetical placement. The root has no point and no player."""

    point: Optional[Point]
    player: Optional[Player]
    depth: int
    children: list[SearchNode] = field(default_factory=list)
    value: Optional[float] = None


@dataclass
class SearchStats:
    nodes: int = 0
    leaves: int = 0
    cutoffs: int = 0


class AlphaBetaSearch:
    """Chooses a move for `player` on a board it owns for one decision."""

    def __init__(
        self,
        player: Player,
        config: Optional[SearchConfig] = None,
        rng: Optional[random.Random] = None,
        evaluator: Optional[LineEvaluator] = None,
    ) -> None:
        self.player = player
        self.config = config or SearchConfig()
        self.evaluator = evaluator or LineEvaluator(
            player,
            rng=rng,
            jitter=self.config.jitter,
            opponent_weight=self.config.opponent_weight,
        )
        self.stats = SearchStats()
        self.root: Optional[SearchNode] = None

    def _mover(self, depth: int) -> Player:
        return self.player if depth % 2 == 1 else self.player.other

    def search(self, board: Board, candidates: CandidateMoveSet) -> Point:
        """Run the full search and return the chosen move.

        The board and candidate set are mutated during the search and are
        restored to their initial contents on return.
        """
        self.stats = SearchStats()
        root = self.root = SearchNode(point=None, player=None, depth=1)
        before = candidates.snapshot()

        self._search_root(root, board, candidates)

        if candidates.snapshot() != before:
            raise ContractError("candidate set was not restored after the search")
        best = self.select(root)
        logger.debug(
            "Searched %d nodes (%d leaves, %d cutoffs) at depth %d: %s -> %s",
            self.stats.nodes, self.stats.leaves, self.stats.cutoffs,
            self.config.depth, best.point, best.value,
        )
        return best.point

    def _search_root(self, root: SearchNode, board: Board, candidates: CandidateMoveSet) -> None:
        moves = candidates.ordered()
        if not moves:
            raise NoLegalMoveError("no empty cell to play")

        self.stats.nodes += 1
        mover = self._mover(root.depth)
        best = -INF
        for move in moves:
            child = SearchNode(point=move, player=mover, depth=root.depth + 1)
            root.children.append(child)
            # Searching just below the running best keeps tied values exact,
            # so the tie-break in `select` sees the true minimax values.
            alpha = -INF if best == -INF else math.nextafter(best, -INF)
            with candidates.tentative(board, move, mover):
                value = self._alphabeta(child, board, candidates, alpha, INF)
            best = max(best, value)
        root.value = best

    def _alphabeta(
        self,
        node: SearchNode,
        board: Board,
        candidates: CandidateMoveSet,
        alpha: float,
        beta: float,
    ) -> float:
        self.stats.nodes += 1
        moves = candidates.ordered() if node.depth < self.config.depth else []
        if not moves:
            self.stats.leaves += 1
            node.value = self.evaluator.evaluate(board)
            return node.value

        mover = self._mover(node.depth)
        maximizing = mover is self.player
        value = -INF if maximizing else INF
        for move in moves:
            child = SearchNode(point=move, player=mover, depth=node.depth + 1)
            node.children.append(child)
            with candidates.tentative(board, move, mover):
                child_value = self._alphabeta(child, board, candidates, alpha, beta)

            if maximizing:
                value = max(value, child_value)
                alpha = max(alpha, value)
                if alpha >= beta:
                    self.stats.cutoffs += 1
                    break
            else:
                value = min(value, child_value)
                beta = min(beta, value)
                if beta <= alpha:
                    self.stats.cutoffs += 1
                    break

        node.value = value
        return value

    @staticmethod
    def select(root: SearchNode) -> SearchNode:
        """Pick the last root child, in candidate order, with the maximum value."""
        best: Optional[SearchNode] = None
        best_value = -INF
        for child in root.children:
            if child.value is not None and child.value >= best_value:
                best_value = child.value
                best = child
        if best is None:
            raise NoLegalMoveError("search produced no scored move")
        return best
