"""
Cell-index geometry used by the difficulty scorer.

Scorer tiles are cell indices (idx = row*8 + col); coordinates here are
(row, col), matching the catalog encoding.
"""

from typing import List, Sequence, Tuple

import numpy as np

from octo_core.types import BOARD_SIZE

Cell = Tuple[int, int]  # (row, col)


def cell_coords(tiles: Sequence[int]) -> List[Cell]:
    return [divmod(t, BOARD_SIZE) for t in tiles]


def coords_array(tiles: Sequence[int]) -> np.ndarray:
    """n×2 float array of (row, col)."""
    return np.array(cell_coords(tiles), dtype=np.float64).reshape(-1, 2)


def center_of_mass(tiles: Sequence[int]) -> Tuple[float, float]:
    coords = cell_coords(tiles)
    n = len(coords)
    return sum(r for r, _ in coords) / n, sum(c for _, c in coords) / n


def bounding_box(tiles: Sequence[int]) -> Tuple[int, int, int, int]:
    """(min_row, max_row, min_col, max_col)"""
    coords = cell_coords(tiles)
    rows = [r for r, _ in coords]
    cols = [c for _, c in coords]
    return min(rows), max(rows), min(cols), max(cols)


def bounding_box_area(tiles: Sequence[int]) -> int:
    min_row, max_row, min_col, max_col = bounding_box(tiles)
    return (max_row - min_row + 1) * (max_col - min_col + 1)


def calculate_compactness(tiles: Sequence[int]) -> float:
    """Tile count / bounding-box area; 1.0 for a filled rectangle, 0 if empty."""
    if len(tiles) == 0:
        return 0.0
    return len(tiles) / bounding_box_area(tiles)


def is_rectangle(tiles: Sequence[int]) -> bool:
    """At least 4 tiles exactly filling their bounding box."""
    if len(tiles) < 4:
        return False
    return bounding_box_area(tiles) == len(tiles)


def is_straight_line(tiles: Sequence[int]) -> bool:
    """All tiles in one row or one column."""
    coords = cell_coords(tiles)
    rows = {r for r, _ in coords}
    cols = {c for _, c in coords}
    return len(rows) == 1 or len(cols) == 1
