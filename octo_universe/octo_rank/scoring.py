"""
Puzzle difficulty score.

Higher score = more symmetric/compact primary shape = easier puzzle.

Pipeline for the primary shape (first 8 cells of a catalog line):
1. Split off up to 2 outlier tiles (outliers.detect_outliers)
2. core_score = 0.7 * symmetry(core) + 0.3 * compactness(core)
3. Pattern bonus: +0.15 rectangle core, else +0.10 straight-line core
4. Outlier penalty: 0.15 per outlier
5. Full-shape bonus (no outliers only): 0.1 * (0.7 * sym + 0.3 * compact) of
   the whole shape
6. Grid bonus: 0.2 * grid value symmetry of the 64-value line
7. final = clamp(core + pattern + full - penalty + grid, 0, 1)
"""

from dataclasses import asdict, dataclass
from typing import Optional, Sequence

from octo_core.types import CELL_COUNT, SHAPE_SIZE

from .geometry import calculate_compactness, is_rectangle, is_straight_line
from .outliers import MAX_OUTLIER_FRACTION, MAX_OUTLIERS, OUTLIER_RATIO, detect_outliers
from .symmetry import calculate_grid_symmetry, calculate_symmetry, solution_label_grid

GRID_SOURCES = ("values", "labels")


@dataclass(frozen=True)
class ScoreWeights:
    """
    Scoring weights and outlier parameters.

    grid_source selects what the grid bonus measures:
    - "values": the 64 raw cell indices of the catalog line
    - "labels": the board of piece numbers (which shape covers each cell)
    """
    symmetry: float = 0.7
    compactness: float = 0.3
    rectangle_bonus: float = 0.15
    line_bonus: float = 0.10
    outlier_penalty: float = 0.15
    full_shape_factor: float = 0.1
    grid_weight: float = 0.2
    outlier_ratio: float = OUTLIER_RATIO
    max_outliers: int = MAX_OUTLIERS
    max_outlier_fraction: float = MAX_OUTLIER_FRACTION
    grid_source: str = "values"

    def __post_init__(self):
        if self.grid_source not in GRID_SOURCES:
            raise ValueError(
                f"Invalid grid_source '{self.grid_source}'. Must be one of {list(GRID_SOURCES)}"
            )


DEFAULT_WEIGHTS = ScoreWeights()


@dataclass(frozen=True)
class ScoreBreakdown:
    """Every intermediate term of the score, for inspection and tests."""
    outliers: tuple
    core: tuple
    core_symmetry: float
    core_compactness: float
    core_score: float
    pattern_bonus: float
    outlier_penalty: float
    full_shape_bonus: float
    grid_symmetry: float
    grid_bonus: float
    final_score: float

    @property
    def outlier_count(self) -> int:
        return len(self.outliers)

    def to_dict(self) -> dict:
        return asdict(self)


def combined_quality(tiles: Sequence[int], weights: ScoreWeights = DEFAULT_WEIGHTS) -> float:
    """weights.symmetry * symmetry + weights.compactness * compactness"""
    return (
        calculate_symmetry(tiles) * weights.symmetry
        + calculate_compactness(tiles) * weights.compactness
    )


def pattern_bonus(tiles: Sequence[int], weights: ScoreWeights = DEFAULT_WEIGHTS) -> float:
    """Rectangle bonus, else straight-line bonus, else 0."""
    if is_rectangle(tiles):
        return weights.rectangle_bonus
    if is_straight_line(tiles):
        return weights.line_bonus
    return 0.0


def score_breakdown(
    tiles: Sequence[int],
    all_numbers: Optional[Sequence[int]] = None,
    weights: ScoreWeights = DEFAULT_WEIGHTS,
) -> ScoreBreakdown:
    """
    Full scoring pipeline for one puzzle.

    Args:
        tiles: Primary shape cell indices
        all_numbers: The line's 64 cell indices (grid bonus is 0 without them)
        weights: Scoring weights

    Returns:
        ScoreBreakdown with final_score in [0, 1]
    """
    split = detect_outliers(
        tiles,
        ratio=weights.outlier_ratio,
        max_outliers=weights.max_outliers,
        max_fraction=weights.max_outlier_fraction,
    )
    core = split.core

    core_symmetry = calculate_symmetry(core)
    core_compactness = calculate_compactness(core)
    core_score = core_symmetry * weights.symmetry + core_compactness * weights.compactness

    bonus = pattern_bonus(core, weights)
    penalty = len(split.outliers) * weights.outlier_penalty

    full_shape_bonus = 0.0
    if not split.outliers:
        full_shape_bonus = combined_quality(tiles, weights) * weights.full_shape_factor

    grid_values = all_numbers
    if weights.grid_source == "labels" and all_numbers is not None and len(all_numbers) == CELL_COUNT:
        grid_values = solution_label_grid(all_numbers)
    grid_symmetry = calculate_grid_symmetry(grid_values)
    grid_bonus = grid_symmetry * weights.grid_weight

    raw = core_score + bonus + full_shape_bonus - penalty + grid_bonus
    final_score = max(0.0, min(1.0, raw))

    return ScoreBreakdown(
        outliers=split.outliers,
        core=core,
        core_symmetry=core_symmetry,
        core_compactness=core_compactness,
        core_score=core_score,
        pattern_bonus=bonus,
        outlier_penalty=penalty,
        full_shape_bonus=full_shape_bonus,
        grid_symmetry=grid_symmetry,
        grid_bonus=grid_bonus,
        final_score=final_score,
    )


def calculate_score(
    tiles: Sequence[int],
    all_numbers: Optional[Sequence[int]] = None,
    weights: ScoreWeights = DEFAULT_WEIGHTS,
) -> float:
    return score_breakdown(tiles, all_numbers, weights).final_score


def score_line(numbers: Sequence[int], weights: ScoreWeights = DEFAULT_WEIGHTS) -> float:
    """Score a catalog line (its first 64 numbers; the primary shape is the first 8)."""
    grid = list(numbers[:CELL_COUNT])
    return calculate_score(grid[:SHAPE_SIZE], grid, weights)
