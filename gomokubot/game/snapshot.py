"""Read board snapshots and write chosen moves in the plain-text exchange format.

A snapshot file holds the player to move (1 = Black, 2 = White) followed by
BOARD_SIZE * BOARD_SIZE cell values in row-major order (0 empty, 1 black,
2 white), all whitespace separated. The answer file holds one line "x y".
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import NamedTuple, Union

from .board import BOARD_SIZE, Board
from .types import Player, Point

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


class SnapshotError(ValueError):
    """The snapshot text could not be parsed into a board."""


class Snapshot(NamedTuple):
    player: Player
    board: Board


def parse_snapshot(text: str, size: int = BOARD_SIZE) -> Snapshot:
    tokens = text.split()
    expected = 1 + size * size
    if len(tokens) != expected:
        raise SnapshotError(f"expected {expected} values, got {len(tokens)}")
    try:
        values = [int(tok) for tok in tokens]
    except ValueError as exc:
        raise SnapshotError(f"non-integer value in snapshot: {exc}") from exc

    if values[0] not in (1, 2):
        raise SnapshotError(f"player must be 1 or 2, got {values[0]}")
    cells = values[1:]
    bad = [v for v in cells if v not in (0, 1, 2)]
    if bad:
        raise SnapshotError(f"cell values must be 0, 1 or 2, got {bad[0]}")

    grid = [cells[x * size:(x + 1) * size] for x in range(size)]
    return Snapshot(player=Player(values[0]), board=Board.from_grid(grid))


def read_snapshot(path: PathLike, size: int = BOARD_SIZE) -> Snapshot:
    """Load a snapshot file. Raises SnapshotError on malformed content."""
    with open(path) as f:
        snapshot = parse_snapshot(f.read(), size=size)
    logger.debug(
        "Loaded snapshot from %s: %s to move, %d stones",
        path, snapshot.player, snapshot.board.occupied_count,
    )
    return snapshot


def format_snapshot(player: Player, board: Board) -> str:
    lines = [str(player.value)]
    lines.extend(" ".join(str(v) for v in row) for row in board.to_grid())
    return "\n".join(lines) + "\n"


def write_move(path: PathLike, point: Point) -> None:
    """Write the chosen move as a single "x y" line."""
    with open(path, "w") as f:
        f.write(f"{point.x} {point.y}\n")
        f.flush()
