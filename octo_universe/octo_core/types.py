"""
Core type definitions for the octomino tiling puzzle.

Board geometry, the Tile value type, direction and difficulty names, and the
difficulty thresholds shared by the offline ranking tools and the live
catalog selector.
"""

import math
from dataclasses import dataclass
from typing import Literal, Optional

# Board geometry
BOARD_SIZE = 8  # Board is BOARD_SIZE × BOARD_SIZE cells
SHAPE_SIZE = 8  # Tiles per shape
SHAPE_COUNT = 8  # Shapes per solved board
CELL_COUNT = BOARD_SIZE * BOARD_SIZE

Position = tuple[int, int]  # (x, y) = (column, row)

Direction = Literal["up", "down", "left", "right"]
Difficulty = Literal["easy", "medium", "hard"]

DIRECTION_DELTAS: dict[str, Position] = {
    "up": (0, -1),
    "down": (0, 1),
    "left": (-1, 0),
    "right": (1, 0),
}

DIFFICULTIES: tuple[str, ...] = ("easy", "medium", "hard")


@dataclass(frozen=True, order=True)
class Tile:
    """
    One board cell occupied by a shape.

    x is the column and y the row, both expected in [0, BOARD_SIZE) once a
    transform has been rebounded. The color is only carried by tiles decoded
    from a full solution grid; gameplay tiles take their shape's color.
    """
    x: int
    y: int
    color: Optional[str] = None

    def __iter__(self):
        """Allow tuple unpacking: x, y = tile"""
        return iter((self.x, self.y))

    @property
    def position(self) -> Position:
        return (self.x, self.y)

    def in_bounds(self) -> bool:
        return 0 <= self.x < BOARD_SIZE and 0 <= self.y < BOARD_SIZE

    def moved(self, dx: int, dy: int) -> "Tile":
        return Tile(self.x + dx, self.y + dy, self.color)

    def __str__(self) -> str:
        return f"Tile (x={self.x}, y={self.y})"


@dataclass(frozen=True)
class DifficultyThresholds:
    """
    Mapping from a 1-20 ranking to a difficulty bucket.

    - easy: ranking >= easy_min
    - medium: medium_min <= ranking < easy_min
    - hard: ranking < medium_min
    """
    easy_min: int
    medium_min: int

    def classify(self, ranking: int) -> str:
        if ranking >= self.easy_min:
            return "easy"
        if ranking >= self.medium_min:
            return "medium"
        return "hard"

    def matches(self, ranking: int, difficulty: str) -> bool:
        return self.classify(ranking) == validate_difficulty(difficulty)


# Offline ranking/ordering tools: easy 14-20, medium 7-13, hard 1-6
SCORER_THRESHOLDS = DifficultyThresholds(easy_min=14, medium_min=7)

# Live catalog selector: easy 12-20, medium 6-11, hard 1-5.
# Differs from SCORER_THRESHOLDS; both are kept until one is declared authoritative.
LIVE_THRESHOLDS = DifficultyThresholds(easy_min=12, medium_min=6)


def validate_direction(direction: str) -> Position:
    """
    Resolve a direction name to its (dx, dy) delta.

    Raises:
        ValueError: If direction is not one of DIRECTION_DELTAS
    """
    if direction not in DIRECTION_DELTAS:
        raise ValueError(
            f"Invalid direction '{direction}'. Must be one of {list(DIRECTION_DELTAS)}"
        )
    return DIRECTION_DELTAS[direction]


def validate_difficulty(difficulty: str) -> str:
    if difficulty not in DIFFICULTIES:
        raise ValueError(
            f"Invalid difficulty '{difficulty}'. Must be one of {list(DIFFICULTIES)}"
        )
    return difficulty


def round_half_up(value: float) -> int:
    """
    Round to the nearest integer, ties toward +infinity.

    Python's round() uses banker's rounding; every transform and reflection
    in this package rounds half-integers upward instead.

    Examples:
        >>> round_half_up(2.5)
        3
        >>> round_half_up(-0.5)
        0
        >>> round_half_up(-1.5)
        -1
    """
    return math.floor(value + 0.5)


def cell_to_xy(idx: int) -> Position:
    """Cell index (row*8 + col) -> (x, y)."""
    return (idx % BOARD_SIZE, idx // BOARD_SIZE)


def xy_to_cell(x: int, y: int) -> int:
    return y * BOARD_SIZE + x
