"""Incrementally maintained frontier of candidate moves.

A candidate is an empty cell within Chebyshev distance 2 of any stone. The
search places and removes stones along a single recursion path, so the set is
updated in place and every placement is undone in reverse order.
"""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Iterator

from gomokubot.game.board import Board
from gomokubot.game.types import Player, Point

# 5x5 neighbourhood minus the centre: 24 offsets
NEIGHBOR_OFFSETS: list[tuple[int, int]] = [
    (dx, dy)
    for dx in range(-2, 3)
    for dy in range(-2, 3)
    if (dx, dy) != (0, 0)
]


@dataclass
class Placement:
    """Undo record for one tentative stone."""

    point: Point
    was_candidate: bool
    added: list[Point] = field(default_factory=list)


class CandidateMoveSet:
    """Ordered set of candidate points, iterated in ascending (x, y) order."""

    def __init__(self) -> None:
        self._points: set[Point] = set()

    @classmethod
    def from_board(cls, board: Board) -> CandidateMoveSet:
        """Seed the frontier from a board snapshot.

        On an empty board, the only candidate is the centre point.
        """
        candidates = cls()
        if board.occupied_count == 0:
            candidates._points.add(board.center)
            return candidates

        for pt, _ in board.occupied():
            for dx, dy in NEIGHBOR_OFFSETS:
                q = pt.offset(dx, dy)
                if board.in_bounds(q) and board.is_empty(q):
                    candidates._points.add(q)
        return candidates

    def ordered(self) -> list[Point]:
        """Snapshot of the current candidates in canonical order."""
        return sorted(self._points)

    def snapshot(self) -> frozenset[Point]:
        return frozenset(self._points)

    def __iter__(self) -> Iterator[Point]:
        return iter(self.ordered())

    def __contains__(self, point: object) -> bool:
        return point in self._points

    def __len__(self) -> int:
        return len(self._points)

    def apply(self, board: Board, point: Point, player: Player) -> Placement:
        """Place a stone and grow the frontier around it.

        Returns the record needed by `undo` to restore the exact prior state.
        """
        board.place(point, player)
        step = Placement(point=point, was_candidate=point in self._points)
        self._points.discard(point)
        for dx, dy in NEIGHBOR_OFFSETS:
            q = point.offset(dx, dy)
            if board.in_bounds(q) and board.is_empty(q) and q not in self._points:
                self._points.add(q)
                step.added.append(q)
        return step

    def undo(self, board: Board, step: Placement) -> None:
        """Reverse one `apply`. Steps must be undone in reverse order."""
        for q in step.added:
            self._points.remove(q)
        board.remove(step.point)
        if step.was_candidate:
            self._points.add(step.point)

    @contextmanager
    def tentative(self, board: Board, point: Point, player: Player) -> Iterator[Placement]:
        """Place a stone for the duration of the block, undoing it on every exit."""
        step = self.apply(board, point, player)
        try:
            yield step
        finally:
            self.undo(board, step)
