"""Pattern-based positional evaluation.

Every line through every stone is read as a short signature string and
looked up in fixed pattern catalogs:

    .  empty cell
    O  stone of the player who owns the centre stone
    X  opponent stone, or off the board

The centred 5-cell window is tried first (five in a row), then the 6-cell
window extended one cell forward (fours), then the 7-cell window extended one
cell backward (threes). At most one situation is credited per stone and
direction.
"""

from __future__ import annotations

import enum
import itertools
import random
from collections import Counter
from typing import Iterable, Optional

from gomokubot.game.board import DIRECTIONS, Board
from gomokubot.game.types import Player, Point

EMPTY_MARK = "."
OWN_MARK = "O"
BLOCKED_MARK = "X"

JITTER_RANGE = 20
OPPONENT_WEIGHT = 1.2


class Situation(enum.Enum):
    WIN5 = "win5"
    LIVE4 = "live4"
    OPEN4 = "open4"
    LIVE3 = "live3"
    OPEN3 = "open3"
    SELF2 = "self2"
    ENEMY2 = "enemy2"


SITUATION_WEIGHTS: dict[Situation, int] = {
    Situation.WIN5: 1_000_000,
    Situation.LIVE4: 2_000,
    Situation.OPEN4: 1_400,
    Situation.LIVE3: 1_000,
    Situation.OPEN3: 400,
    Situation.SELF2: 200,    # not produced by the line classifier
    Situation.ENEMY2: 50,    # not produced by the line classifier
}

# ---------------------------------------------------------------------------
# Pattern catalogs (substrings that must occur in the window signature)
# ---------------------------------------------------------------------------

WIN5_PATTERNS = ("OOOOO",)

LIVE4_PATTERNS = (".OOOO.",)
OPEN4_PATTERNS = ("OOOO.", ".OOOO", "OOO.O", "O.OOO", "OO.OO")

LIVE3_PATTERNS = ("..OOO.", ".OOO..", ".OO.O.", ".O.OO.")
OPEN3_PATTERNS = (
    "XOOO..", "..OOOX",
    "XOO.O.", ".O.OOX",
    "XO.OO.", ".OO.OX",
    "OO..O", "O..OO", "O.O.O",
    "X.OOO.X",
)


def _expand(patterns: Iterable[str], width: int) -> frozenset[str]:
    """All `width`-long signatures that contain at least one of `patterns`."""
    patterns = tuple(patterns)
    return frozenset(
        sig
        for sig in map("".join, itertools.product(EMPTY_MARK + OWN_MARK + BLOCKED_MARK, repeat=width))
        if any(p in sig for p in patterns)
    )


WIN5 = _expand(WIN5_PATTERNS, 5)
LIVE4 = _expand(LIVE4_PATTERNS, 6)
OPEN4 = _expand(OPEN4_PATTERNS, 6)
LIVE3 = _expand(LIVE3_PATTERNS, 7)
OPEN3 = _expand(OPEN3_PATTERNS, 7)

# Checked in order; the first catalog containing the signature wins.
CATALOGS: list[tuple[int, Situation, frozenset[str]]] = [
    (5, Situation.WIN5, WIN5),
    (6, Situation.LIVE4, LIVE4),
    (6, Situation.OPEN4, OPEN4),
    (7, Situation.LIVE3, LIVE3),
    (7, Situation.OPEN3, OPEN3),
]


def line_signature(board: Board, point: Point, direction: tuple[int, int], owner: Player) -> str:
    """7-cell signature through `point` covering offsets -3..+3 along `direction`.

    The centred 5-cell window is `sig[1:6]` and the forward-extended 6-cell
    window is `sig[1:]`.
    """
    dx, dy = direction
    marks = []
    for step in range(-3, 4):
        q = point.offset(dx * step, dy * step)
        if not board.in_bounds(q):
            marks.append(BLOCKED_MARK)
            continue
        cell = board.get(q)
        if cell is None:
            marks.append(EMPTY_MARK)
        elif cell is owner:
            marks.append(OWN_MARK)
        else:
            marks.append(BLOCKED_MARK)
    return "".join(marks)


def classify(signature: str) -> Optional[Situation]:
    """Map a 7-cell line signature to the highest-priority situation, if any."""
    windows = {5: signature[1:6], 6: signature[1:], 7: signature}
    for width, situation, catalog in CATALOGS:
        if windows[width] in catalog:
            return situation
    return None


class SituationTally:
    """Per-player counts of each situation found on the board."""

    def __init__(self) -> None:
        self._counts: dict[Player, Counter] = {p: Counter() for p in Player}

    def add(self, player: Player, situation: Situation) -> None:
        self._counts[player][situation] += 1

    def count(self, player: Player, situation: Situation) -> int:
        return self._counts[player][situation]

    def weighted(self, player: Player) -> int:
        return sum(
            n * SITUATION_WEIGHTS[situation]
            for situation, n in self._counts[player].items()
        )

    def as_dict(self, player: Player) -> dict[str, int]:
        return {s.value: self._counts[player][s] for s in Situation}


def tally_board(board: Board) -> SituationTally:
    tally = SituationTally()
    for pt, owner in board.occupied():
        for direction in DIRECTIONS:
            situation = classify(line_signature(board, pt, direction, owner))
            if situation is not None:
                tally.add(owner, situation)
    return tally


class LineEvaluator:
    """Scores boards from the fixed viewpoint of `perspective`.

    Each player's raw score starts from a random jitter in [0, jitter) drawn
    from `rng`; pass jitter=0 for a deterministic evaluation.
    """

    def __init__(
        self,
        perspective: Player,
        rng: Optional[random.Random] = None,
        jitter: int = JITTER_RANGE,
        opponent_weight: float = OPPONENT_WEIGHT,
    ) -> None:
        self.perspective = perspective
        self.rng = rng if rng is not None else random.Random()
        self.jitter = jitter
        self.opponent_weight = opponent_weight

    def _jitter(self) -> int:
        return self.rng.randrange(self.jitter) if self.jitter > 0 else 0

    def evaluate(self, board: Board) -> float:
        tally = tally_board(board)
        own = self._jitter() + tally.weighted(self.perspective)
        opp = self._jitter() + tally.weighted(self.perspective.other)
        return own - self.opponent_weight * opp
