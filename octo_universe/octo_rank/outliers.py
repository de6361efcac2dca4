"""
Outlier detection for scorer shapes.

A tile is an outlier when its mean distance to the other tiles is well above
the shape's typical mean distance. Shapes of 3 tiles or fewer have no
outliers.

Algorithm:
1. Mean Euclidean distance from each tile to all others (numpy)
2. Stable sort descending
3. median = sorted[floor(n/2)] (no averaging for even n)
4. Candidates: mean distance > median * ratio (ratio = 1.8)
5. Keep the first min(max_outliers, floor(max_fraction * n)) candidates
"""

import math
from dataclasses import dataclass
from typing import List, Sequence, Tuple

import numpy as np

from .geometry import coords_array

OUTLIER_RATIO = 1.8
MAX_OUTLIERS = 2
MAX_OUTLIER_FRACTION = 0.25


@dataclass(frozen=True)
class OutlierSplit:
    """
    Result of detect_outliers.

    - outliers: flagged tiles, farthest first
    - core: remaining tiles in their original order
    """
    outliers: Tuple[int, ...]
    core: Tuple[int, ...]


def mean_distances(tiles: Sequence[int]) -> np.ndarray:
    """
    Mean Euclidean distance from each tile to every other tile.

    Returns:
        1-D float array, entry i for tiles[i]
    """
    coords = coords_array(tiles)
    n = len(coords)
    if n < 2:
        return np.zeros(n, dtype=np.float64)

    diff = coords[:, None, :] - coords[None, :, :]
    dist = np.sqrt((diff ** 2).sum(axis=-1))
    return dist.sum(axis=1) / (n - 1)


def detect_outliers(
    tiles: Sequence[int],
    ratio: float = OUTLIER_RATIO,
    max_outliers: int = MAX_OUTLIERS,
    max_fraction: float = MAX_OUTLIER_FRACTION,
) -> OutlierSplit:
    """
    Split a shape into outlier tiles and core tiles.

    Args:
        tiles: Cell indices of the shape
        ratio: Multiple of the median mean-distance above which a tile is a
            candidate
        max_outliers: Absolute cap on flagged tiles
        max_fraction: Cap on flagged tiles as a fraction of the shape

    Returns:
        OutlierSplit(outliers, core)

    Examples:
        >>> detect_outliers([0, 1, 2]).outliers
        ()
    """
    tiles = tuple(tiles)
    if len(tiles) <= 3:
        return OutlierSplit(outliers=(), core=tiles)

    means = mean_distances(tiles)

    # Stable: ties keep tile order
    order = sorted(range(len(tiles)), key=lambda i: -means[i])
    median = float(means[order[len(order) // 2]])
    threshold = median * ratio

    candidates: List[int] = [tiles[i] for i in order if means[i] > threshold]
    cap = min(max_outliers, math.floor(len(tiles) * max_fraction))
    outliers = tuple(candidates[:cap])

    core = tuple(t for t in tiles if t not in outliers)
    return OutlierSplit(outliers=outliers, core=core)
