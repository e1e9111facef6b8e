from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Optional, Sequence

from .types import Player, Point

BOARD_SIZE = 15
WIN_LENGTH = 5

# Column labels: A-O, one per y index
COL_LABELS = "ABCDEFGHIJKLMNO"

# Four line axes: horizontal, vertical, down-right, up-right
DIRECTIONS = [(0, 1), (1, 0), (1, 1), (-1, 1)]


class ContractError(AssertionError):
    """A board or game precondition was violated."""


def parse_coordinate(text: str) -> Optional[Point]:
    """Parse a coordinate string like 'E5' or 'H12' into a Point.

    Column is a letter A-O (the y index), row is a number 1-15 (x + 1).
    Returns None if the string is invalid.
    """
    text = text.strip().upper()
    if len(text) < 2 or len(text) > 3:
        return None
    col_char = text[0]
    row_str = text[1:]
    if col_char not in COL_LABELS:
        return None
    try:
        row = int(row_str)
    except ValueError:
        return None
    if not (1 <= row <= BOARD_SIZE):
        return None
    return Point(row - 1, COL_LABELS.index(col_char))


def format_point(point: Point) -> str:
    """Format a Point as a coordinate string like 'E5'."""
    return f"{COL_LABELS[point.y]}{point.x + 1}"


@dataclass
class Move:
    point: Point
    player: Player
    elapsed: Optional[float] = None

    def __str__(self) -> str:
        return f"{self.player}: {format_point(self.point)}"


class Board:
    """Square Gomoku board. Cells absent from the grid are empty."""

    def __init__(self, size: int = BOARD_SIZE) -> None:
        self.size = size
        self._grid: dict[Point, Player] = {}

    @classmethod
    def from_grid(cls, grid: Sequence[Sequence[int]]) -> Board:
        """Build a board from rows of cell values (0 empty, 1 black, 2 white)."""
        board = cls(size=len(grid))
        for x, row in enumerate(grid):
            if len(row) != board.size:
                raise ContractError(f"row {x} has {len(row)} cells, expected {board.size}")
            for y, value in enumerate(row):
                if value:
                    board.place(Point(x, y), Player(value))
        return board

    def to_grid(self) -> list[list[int]]:
        grid = [[0] * self.size for _ in range(self.size)]
        for pt, player in self._grid.items():
            grid[pt.x][pt.y] = player.value
        return grid

    def copy(self) -> Board:
        board = Board(self.size)
        board._grid = dict(self._grid)
        return board

    def place(self, point: Point, player: Player) -> None:
        if not self.in_bounds(point):
            raise ContractError(f"{point} is off the grid")
        if point in self._grid:
            raise ContractError(f"{point} is occupied")
        self._grid[point] = player

    def remove(self, point: Point) -> None:
        if point not in self._grid:
            raise ContractError(f"{point} is already empty")
        del self._grid[point]

    def get(self, point: Point) -> Optional[Player]:
        return self._grid.get(point)

    def is_empty(self, point: Point) -> bool:
        return point not in self._grid

    def in_bounds(self, point: Point) -> bool:
        return 0 <= point.x < self.size and 0 <= point.y < self.size

    def occupied(self) -> Iterator[tuple[Point, Player]]:
        """Yield (point, player) for every stone in ascending point order."""
        for pt in sorted(self._grid):
            yield pt, self._grid[pt]

    @property
    def center(self) -> Point:
        return Point(self.size // 2, self.size // 2)

    @property
    def occupied_count(self) -> int:
        return len(self._grid)

    @property
    def is_full(self) -> bool:
        return len(self._grid) == self.size * self.size

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self.size == other.size and self._grid == other._grid


class GomokuGameState:
    """Full game state for Gomoku (15x15, 5-in-a-row)."""

    def __init__(self, board: Optional[Board] = None, current_player: Player = Player.BLACK) -> None:
        self.board = board if board is not None else Board()
        self.current_player = current_player
        self.moves: list[Move] = []
        self._winner: Optional[Player] = None
        self._is_over = False

    @property
    def is_over(self) -> bool:
        return self._is_over

    @property
    def winner(self) -> Optional[Player]:
        return self._winner

    @property
    def is_draw(self) -> bool:
        return self._is_over and self._winner is None

    def legal_moves(self) -> list[Point]:
        if self._is_over:
            return []
        size = self.board.size
        return [
            Point(x, y)
            for x in range(size)
            for y in range(size)
            if self.board.is_empty(Point(x, y))
        ]

    def apply_move(self, point: Point, elapsed: Optional[float] = None) -> None:
        """Place a stone for the current player and advance the turn."""
        if self._is_over:
            raise ContractError("Game is already over")

        player = self.current_player
        self.board.place(point, player)
        self.moves.append(Move(point=point, player=player, elapsed=elapsed))

        if self._check_win(point, player):
            self._winner = player
            self._is_over = True
        elif self.board.is_full:
            self._is_over = True

        self.current_player = self.current_player.other

    def undo_move(self) -> Optional[Move]:
        """Undo the last move. Returns the undone Move, or None if no moves."""
        if not self.moves:
            return None
        move = self.moves.pop()
        self.board.remove(move.point)
        self.current_player = move.player
        self._winner = None
        self._is_over = False
        return move

    def resign(self, player: Player) -> None:
        self._winner = player.other
        self._is_over = True

    def _check_win(self, point: Point, player: Player) -> bool:
        """Check if placing at `point` creates 5-in-a-row for `player`."""
        for dx, dy in DIRECTIONS:
            count = 1
            for sign in (1, -1):
                for step in range(1, WIN_LENGTH):
                    p = point.offset(sign * dx * step, sign * dy * step)
                    if not self.board.in_bounds(p) or self.board.get(p) is not player:
                        break
                    count += 1
            if count >= WIN_LENGTH:
                return True
        return False
