"""
Shape transform engine.

A Shape is an immutable group of tiles plus a color and an active flag.
Every transform returns a new Shape:
- rotate: 90° about the shape's own centroid
- flip: mirror about the centroid's vertical or horizontal axis
- translate: all-or-nothing move, rejected if any tile would leave the board
- rebound: unconditional minimal shift back onto the board

Centroid-relative transforms keep a shape in place on screen; the caller
rebounds after rotate/flip since neither checks bounds.
"""

import random
from dataclasses import dataclass, replace
from typing import Iterable, Optional, Tuple

from .types import BOARD_SIZE, SHAPE_SIZE, Position, Tile, cell_to_xy, round_half_up

BoundingBox = Tuple[int, int, int, int]  # (min_x, max_x, min_y, max_y)


def random_color(rng: Optional[random.Random] = None) -> str:
    """Random #rrggbb color."""
    rng = rng or random
    return f"#{rng.randrange(0xFFFFFF):06x}"


@dataclass(frozen=True)
class Shape:
    """
    Immutable shape value.

    Attributes:
        tiles: Tile positions (x, y); order is preserved across transforms
        color: Hex color string shared by all tiles
        is_active: True for the one shape the player is currently moving
    """
    tiles: Tuple[Tile, ...]
    color: str
    is_active: bool = False

    # ==========================================================================
    # Construction
    # ==========================================================================

    @classmethod
    def from_positions(
        cls,
        positions: Iterable[Position],
        color: Optional[str] = None,
        is_active: bool = False,
    ) -> "Shape":
        tiles = tuple(Tile(x, y) for x, y in positions)
        return cls(tiles, color if color is not None else random_color(), is_active)

    @classmethod
    def from_cells(cls, cells: Iterable[int], color: Optional[str] = None) -> "Shape":
        """Build a shape from cell indices (idx = row*8 + col)."""
        return cls.from_positions((cell_to_xy(idx) for idx in cells), color)

    def duplicate(self) -> "Shape":
        """Independent copy with the same tiles and color, inactive."""
        return Shape(tuple(Tile(t.x, t.y) for t in self.tiles), self.color, False)

    def with_color(self, color: str) -> "Shape":
        return replace(self, color=color)

    def activated(self) -> "Shape":
        return replace(self, is_active=True)

    def deactivated(self) -> "Shape":
        return replace(self, is_active=False)

    # ==========================================================================
    # Queries
    # ==========================================================================

    def positions(self) -> frozenset[Position]:
        return frozenset(t.position for t in self.tiles)

    def has_tile_at(self, x: int, y: int) -> bool:
        return any(t.x == x and t.y == y for t in self.tiles)

    def centroid(self) -> Tuple[float, float]:
        """Mean (x, y) of all tiles; not necessarily a grid point."""
        n = len(self.tiles)
        cx = sum(t.x for t in self.tiles) / n
        cy = sum(t.y for t in self.tiles) / n
        return cx, cy

    def bounding_box(self) -> BoundingBox:
        xs = [t.x for t in self.tiles]
        ys = [t.y for t in self.tiles]
        return min(xs), max(xs), min(ys), max(ys)

    def in_bounds(self) -> bool:
        return all(t.in_bounds() for t in self.tiles)

    # ==========================================================================
    # Transforms
    # ==========================================================================

    def rotate(self, clockwise: bool) -> "Shape":
        """
        Rotate 90° about the centroid.

        Clockwise (screen coordinates, y down): (x', y') = (-y, x)
        Counter-clockwise: (x', y') = (y, -x)
        Both applied to centroid-relative coordinates, then rounded half-up.

        No bounds check; see rebound().
        """
        cx, cy = self.centroid()
        rotated = []
        for tile in self.tiles:
            rx = tile.x - cx
            ry = tile.y - cy
            if clockwise:
                nx, ny = -ry, rx
            else:
                nx, ny = ry, -rx
            rotated.append(Tile(round_half_up(nx + cx), round_half_up(ny + cy)))
        return replace(self, tiles=tuple(rotated))

    def flip(self, horizontal: bool) -> "Shape":
        """
        Mirror about the centroid.

        horizontal=True mirrors x (left/right); False mirrors y (up/down).
        """
        cx, cy = self.centroid()
        flipped = []
        for tile in self.tiles:
            if horizontal:
                flipped.append(Tile(round_half_up(2 * cx - tile.x), tile.y))
            else:
                flipped.append(Tile(tile.x, round_half_up(2 * cy - tile.y)))
        return replace(self, tiles=tuple(flipped))

    def can_translate(self, dx: int, dy: int) -> bool:
        return all(t.moved(dx, dy).in_bounds() for t in self.tiles)

    def translate(self, dx: int, dy: int) -> "Shape":
        """
        Move every tile by (dx, dy), or none of them.

        If any tile would leave [0, 8) × [0, 8), the shape is returned
        unchanged so it is never torn apart at the board edge.
        """
        if not self.can_translate(dx, dy):
            return self
        return self._shift(dx, dy)

    interpolate = translate

    def rebound(self) -> "Shape":
        """
        Shift the shape back onto the board after a rotate/flip.

        Minimal (dx, dy) per axis, applied without the translate() bounds
        check since it is computed to land in-bounds.
        """
        dx, dy = rebound_delta(self.bounding_box())
        if dx == 0 and dy == 0:
            return self
        return self._shift(dx, dy)

    def _shift(self, dx: int, dy: int) -> "Shape":
        return replace(self, tiles=tuple(t.moved(dx, dy) for t in self.tiles))

    def __str__(self) -> str:
        tiles = ", ".join(f"({t.x},{t.y})" for t in self.tiles)
        return f"Shape(color={self.color}, tiles=[{tiles}])"


def rebound_delta(bbox: BoundingBox) -> Position:
    """Minimal integer (dx, dy) bringing bbox inside the board."""
    min_x, max_x, min_y, max_y = bbox
    dx = 0
    dy = 0
    if min_x < 0:
        dx = -min_x
    elif max_x >= BOARD_SIZE:
        dx = BOARD_SIZE - 1 - max_x
    if min_y < 0:
        dy = -min_y
    elif max_y >= BOARD_SIZE:
        dy = BOARD_SIZE - 1 - max_y
    return dx, dy


def randomize_shape(shape: Shape, rng: Optional[random.Random] = None) -> Shape:
    """
    Random orientation and placement of a shape.

    Steps:
    1. 0-3 clockwise quarter turns
    2. 50% chance of a horizontal flip, then independently 50% vertical flip
    3. Uniformly random translation keeping every tile on the board

    Each rotate/flip is rebounded. Pure: the input shape is not modified and
    all randomness comes from rng.

    Args:
        shape: Shape to place (color and active flag are kept)
        rng: Random source (module-level random if None)

    Returns:
        New on-board shape with the same topology
    """
    rng = rng or random

    result = shape.rebound()
    for _ in range(rng.randrange(4)):
        result = result.rotate(clockwise=True).rebound()

    if rng.random() < 0.5:
        result = result.flip(horizontal=True).rebound()
    if rng.random() < 0.5:
        result = result.flip(horizontal=False).rebound()

    min_x, max_x, min_y, max_y = result.bounding_box()
    dx = rng.randint(-min_x, BOARD_SIZE - 1 - max_x)
    dy = rng.randint(-min_y, BOARD_SIZE - 1 - max_y)
    return result.translate(dx, dy)


def generate_random_shape(
    rng: Optional[random.Random] = None, color: Optional[str] = None
) -> Shape:
    """
    Shape of SHAPE_SIZE distinct random cells.

    Development helper: the cells are scattered and need not be connected.
    """
    rng = rng or random
    positions: list[Position] = []
    while len(positions) < SHAPE_SIZE:
        pos = (rng.randrange(BOARD_SIZE), rng.randrange(BOARD_SIZE))
        if pos not in positions:
            positions.append(pos)
    return Shape.from_positions(positions, color if color is not None else random_color(rng))
