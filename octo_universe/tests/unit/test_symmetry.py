"""
Unit tests for octo_rank/symmetry.py.

Acceptance criteria:
- Shape symmetry is the best of five mirror ratios, each in [0, 1]
- Mirrored coordinates round half-up before the membership test
- Grid symmetry compares mirrored cell values on a 64-value board
- Grid symmetry of a permutation of 0..63 is always 0
"""

import pytest

from octo_rank.symmetry import (
    SHAPE_MIRRORS,
    calculate_grid_symmetry,
    calculate_symmetry,
    grid_symmetries,
    shape_symmetries,
    solution_label_grid,
)

ROWS = list(range(64))
COLUMNS = [r * 8 + c for c in range(8) for r in range(8)]


class TestShapeSymmetry:
    """Tile-set mirror symmetry."""

    def test_mirror_names(self):
        """Five mirrors are checked."""
        assert set(SHAPE_MIRRORS) == {
            "horizontal", "vertical", "diagonal", "anti_diagonal", "rotational",
        }

    def test_square_fully_symmetric(self):
        """A 2x2 square is symmetric under every mirror."""
        ratios = shape_symmetries([0, 1, 8, 9])
        assert all(r == pytest.approx(1.0) for r in ratios.values())

    def test_l_tromino(self):
        """(0,0), (0,1), (1,0): symmetric only about the main diagonal."""
        ratios = shape_symmetries([0, 1, 8])
        assert ratios["diagonal"] == pytest.approx(1.0)
        assert ratios["horizontal"] == pytest.approx(2 / 3)
        assert calculate_symmetry([0, 1, 8]) == pytest.approx(1.0)

    def test_row_is_symmetric(self):
        """A full row mirrors onto itself."""
        assert calculate_symmetry(list(range(8))) == pytest.approx(1.0)

    def test_l_octomino(self):
        """Long L: best mirror is horizontal with 5 of 8 tiles."""
        tiles = [0, 1, 2, 3, 4, 5, 8, 9]
        ratios = shape_symmetries(tiles)
        assert ratios["horizontal"] == pytest.approx(5 / 8)
        assert ratios["vertical"] == pytest.approx(4 / 8)
        assert ratios["rotational"] == pytest.approx(4 / 8)
        assert calculate_symmetry(tiles) == pytest.approx(5 / 8)

    def test_empty(self):
        """Empty shape has symmetry 0."""
        assert calculate_symmetry([]) == 0.0

    @pytest.mark.parametrize(
        "tiles",
        [[0, 9, 18, 27], [0, 1, 2, 10, 18], [5, 6, 13, 20, 27, 28, 29, 36]],
    )
    def test_ratios_in_unit_interval(self, tiles):
        """Every ratio is in [0, 1]."""
        for value in shape_symmetries(tiles).values():
            assert 0.0 <= value <= 1.0


class TestGridSymmetry:
    """64-value board symmetry."""

    def test_permutation_is_never_symmetric(self):
        """Distinct values never match their mirror."""
        assert calculate_grid_symmetry(ROWS) == 0.0
        assert calculate_grid_symmetry(COLUMNS) == 0.0

    def test_constant_grid(self):
        """A constant board matches everywhere."""
        assert calculate_grid_symmetry([4] * 64) == pytest.approx(1.0)

    def test_wrong_length(self):
        """Anything but 64 values scores 0."""
        assert calculate_grid_symmetry(None) == 0.0
        assert calculate_grid_symmetry([1] * 63) == 0.0

    def test_difference_grid(self):
        """value = row - col is preserved by the anti-transpose only."""
        values = [r - c for r in range(8) for c in range(8)]
        ratios = grid_symmetries(values)
        assert ratios["anti_diagonal"] == pytest.approx(1.0)
        assert ratios["diagonal"] == pytest.approx(0.0)
        assert ratios["horizontal"] == pytest.approx(0.0)
        assert ratios["rotational"] == pytest.approx(4 / 32)

    def test_column_mirror(self):
        """A left-right mirrored board is fully horizontal and vertical."""
        values = [min(c, 7 - c) for r in range(8) for c in range(8)]
        ratios = grid_symmetries(values)
        assert ratios["horizontal"] == pytest.approx(1.0)
        assert ratios["vertical"] == pytest.approx(1.0)


class TestSolutionLabelGrid:
    """Piece-number board."""

    def test_rows_tiling(self):
        """Rows tiling labels each row with its piece."""
        labels = solution_label_grid(ROWS)
        assert labels[:8] == [0] * 8
        assert labels[56:] == [7] * 8
        assert grid_symmetries(labels)["horizontal"] == pytest.approx(1.0)

    def test_columns_tiling(self):
        """Columns tiling labels each column with its piece."""
        labels = solution_label_grid(COLUMNS)
        assert labels[:8] == list(range(8))
        assert grid_symmetries(labels)["vertical"] == pytest.approx(1.0)
