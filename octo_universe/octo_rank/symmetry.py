"""
Symmetry measures for the difficulty scorer.

Two unrelated notions:

1. Shape symmetry (tile sets): fraction of tiles whose mirror image through
   the set's own centroid is also a tile. Five mirrors are checked:
   horizontal (mirror columns), vertical (mirror rows), diagonal (swap row
   and column offsets), anti-diagonal (swap and negate), and 180° rotation.
   Mirrored coordinates are rounded half-up to a grid cell before the
   membership test.

2. Grid value symmetry (64-value board): fraction of mirrored cell pairs
   holding equal values, for left/right, top/bottom, transpose,
   anti-transpose and point reflection.

Both report the best of their five ratios, in [0, 1].
"""

from typing import Callable, Dict, List, Optional, Sequence, Tuple

import numpy as np

from octo_core.types import BOARD_SIZE, CELL_COUNT, SHAPE_SIZE, round_half_up

from .geometry import Cell, cell_coords, center_of_mass

# Maps (row, col, center_row, center_col) -> mirrored (row, col), unrounded
Mirror = Callable[[int, int, float, float], Tuple[float, float]]


# =============================================================================
# Shape symmetry
# =============================================================================

def _mirror_horizontal(row, col, cr, cc):
    return row, 2 * cc - col


def _mirror_vertical(row, col, cr, cc):
    return 2 * cr - row, col


def _mirror_diagonal(row, col, cr, cc):
    return cr + (col - cc), cc + (row - cr)


def _mirror_anti_diagonal(row, col, cr, cc):
    return cr - (col - cc), cc - (row - cr)


def _mirror_rotational(row, col, cr, cc):
    return 2 * cr - row, 2 * cc - col


SHAPE_MIRRORS: Dict[str, Mirror] = {
    "horizontal": _mirror_horizontal,
    "vertical": _mirror_vertical,
    "diagonal": _mirror_diagonal,
    "anti_diagonal": _mirror_anti_diagonal,
    "rotational": _mirror_rotational,
}


def mirror_ratio(tiles: Sequence[int], mirror: Mirror) -> float:
    """Fraction of tiles whose mirror image is also a tile."""
    if len(tiles) == 0:
        return 0.0

    coords = cell_coords(tiles)
    occupied = set(coords)
    cr, cc = center_of_mass(tiles)

    hits = 0
    for row, col in coords:
        mr, mc = mirror(row, col, cr, cc)
        if (round_half_up(mr), round_half_up(mc)) in occupied:
            hits += 1
    return hits / len(tiles)


def shape_symmetries(tiles: Sequence[int]) -> Dict[str, float]:
    return {name: mirror_ratio(tiles, mirror) for name, mirror in SHAPE_MIRRORS.items()}


def calculate_symmetry(tiles: Sequence[int]) -> float:
    """
    Best of the five shape symmetry ratios (0 for an empty set).

    Examples:
        >>> calculate_symmetry([0, 1, 8, 9])  # 2×2 square
        1.0
    """
    if len(tiles) == 0:
        return 0.0
    return max(shape_symmetries(tiles).values())


# =============================================================================
# Grid value symmetry
# =============================================================================

def _pair_ratio(a: np.ndarray, b: np.ndarray, mask: np.ndarray) -> float:
    total = int(mask.sum())
    if total == 0:
        return 0.0
    return float((a == b)[mask].sum()) / total


def grid_symmetries(values: Sequence[int]) -> Dict[str, float]:
    """
    The five value-mirroring ratios of a 64-value board.

    - horizontal: (r, c) vs (r, 7-c) for c < 4 (32 pairs)
    - vertical: (r, c) vs (7-r, c) for r < 4 (32 pairs)
    - diagonal: (r, c) vs (c, r) for r < c (28 pairs)
    - anti_diagonal: (r, c) vs (7-c, 7-r) for r + c < 7 (28 pairs)
    - rotational: cell i vs cell 63-i for i < 32 (32 pairs)
    """
    n = BOARD_SIZE
    grid = np.asarray(values).reshape(n, n)
    rows, cols = np.indices((n, n))

    flat = grid.ravel()
    half = CELL_COUNT // 2

    return {
        "horizontal": _pair_ratio(grid, grid[:, ::-1], cols < n // 2),
        "vertical": _pair_ratio(grid, grid[::-1, :], rows < n // 2),
        "diagonal": _pair_ratio(grid, grid.T, rows < cols),
        "anti_diagonal": _pair_ratio(grid, grid[::-1, ::-1].T, rows + cols < n - 1),
        "rotational": _pair_ratio(flat[:half], flat[::-1][:half], np.ones(half, dtype=bool)),
    }


def calculate_grid_symmetry(values: Optional[Sequence[int]]) -> float:
    """Best of the five grid value ratios; 0 unless exactly 64 values."""
    if values is None or len(values) != CELL_COUNT:
        return 0.0
    return max(grid_symmetries(values).values())


def solution_label_grid(cells: Sequence[int]) -> List[int]:
    """
    Board of piece numbers: entry idx is the shape (0-7) covering cell idx.

    cells is a catalog line's 64 cell indices (shape k = cells[8k:8k+8]).
    """
    labels = [0] * CELL_COUNT
    for i, idx in enumerate(cells[:CELL_COUNT]):
        labels[idx] = i // SHAPE_SIZE
    return labels
