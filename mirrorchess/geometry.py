"""Board geometry: directions, positions and players."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

BOARD_SIZE = 8
BOARD_SIZE_CHAR = "8"

NO_CHECK = -1


@dataclass(frozen=True)
class Direction:
    """A step on the board, in rows and columns."""

    d_row: int
    d_col: int


UP = Direction(-1, 0)
DOWN = Direction(1, 0)
LEFT = Direction(0, -1)
RIGHT = Direction(0, 1)

UP_LEFT = Direction(-1, -1)
UP_RIGHT = Direction(-1, 1)
DOWN_LEFT = Direction(1, -1)
DOWN_RIGHT = Direction(1, 1)

ORTHOGONAL = (UP, DOWN, LEFT, RIGHT)
DIAGONAL = (UP_LEFT, UP_RIGHT, DOWN_LEFT, DOWN_RIGHT)


@dataclass(frozen=True)
class Position:
    """A square on the board given by row and column indices."""

    row: int
    col: int

    def moved(self, direction: Direction) -> Position:
        """Return the position one step away in the given direction."""
        return Position(self.row + direction.d_row, self.col + direction.d_col)

    def is_out_of_bounds(self) -> bool:
        """Tell whether the position lies outside the board."""
        return not (0 <= self.row < BOARD_SIZE and 0 <= self.col < BOARD_SIZE)


NO_POSITION = Position(-1, -1)


class Player(Enum):
    """The two sides of the game."""

    WHITE = 0
    BLACK = 1

    def opponent(self) -> Player:
        """Return the other side."""
        return Player.BLACK if self is Player.WHITE else Player.WHITE

    def __str__(self) -> str:
        return self.name