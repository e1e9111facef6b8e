from __future__ import annotations

import enum
from typing import NamedTuple


class Player(enum.Enum):
    BLACK = 1
    WHITE = 2

    @property
    def other(self) -> Player:
        return Player.WHITE if self is Player.BLACK else Player.BLACK

    def __str__(self) -> str:
        return self.name.capitalize()


class Point(NamedTuple):
    x: int  # 0-indexed row of the grid
    y: int  # 0-indexed column of the grid

    def offset(self, dx: int, dy: int) -> Point:
        return Point(self.x + dx, self.y + dy)
