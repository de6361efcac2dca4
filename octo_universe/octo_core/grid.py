"""
Play session state machine.

States:
    not_started -> placing (1..8 shapes, one active) -> won | full

The grid holds:
- stamp: the puzzle's shape, as decoded (before any randomization)
- solution: the 8 decoded shapes (ground truth, fixed colors and positions)
- shapes: the placed copies of the stamp, most recent last

Every public operation completes fully before returning. Shapes are
immutable, so the active shape is replaced in the list on each transform.
"""

import logging
import random
from typing import List, Optional

from .catalog import CatalogSelector, PuzzleSelection
from .shape import Shape, randomize_shape
from .types import SHAPE_COUNT, validate_direction

logger = logging.getLogger(__name__)

NOT_STARTED = "not_started"
PLACING = "placing"
WON = "won"
FULL = "full"  # 8 shapes placed but overlapping


class TilingGrid:
    """
    One play session on the 8×8 board.

    Args:
        selector: Source of puzzles
        rng: Random source for shape orientation/placement (defaults to the
            selector's rng)
    """

    def __init__(self, selector: CatalogSelector, rng: Optional[random.Random] = None):
        self.selector = selector
        self.rng = rng or selector.rng
        self._stamp: Optional[Shape] = None
        self._solution: List[Shape] = []
        self._shapes: List[Shape] = []
        self._puzzle_index: Optional[int] = None

    # ==========================================================================
    # Session lifecycle
    # ==========================================================================

    def start_game(self, difficulty: str) -> None:
        """
        Start a puzzle from the given difficulty bucket.

        Raises:
            ValueError: If difficulty is not easy/medium/hard
            NoMatchingPuzzleError: If no catalog line is in the bucket
        """
        self._start(self.selector.select_by_difficulty(difficulty))

    def start_game_with_puzzle_index(self, puzzle_index: int) -> None:
        """
        Start the puzzle at a 1-based catalog index.

        Raises:
            PuzzleIndexError: If puzzle_index is outside [1, catalog size]
        """
        self._start(self.selector.select_by_index(puzzle_index))

    def _start(self, selection: PuzzleSelection) -> None:
        # Selection has already succeeded; nothing below can fail
        self._solution = [shape.deactivated() for shape in selection.shapes]
        self._stamp = self._solution[0].duplicate()
        self._puzzle_index = selection.puzzle_index
        self._shapes = [self._place_stamp(self._solution[0].color)]
        logger.debug(f"Started puzzle {self._puzzle_index}")

    def _place_stamp(self, color: str) -> Shape:
        placed = randomize_shape(self._stamp.with_color(color), self.rng)
        return placed.activated()

    def add_shape(self) -> None:
        """
        Deactivate the active shape and place the next stamp copy.

        The new copy takes the next solution shape's color. Once 8 shapes are
        placed no further copy is added.
        """
        if self._stamp is None:
            logger.error("Tried to add shape before starting the game!")
            return

        self._replace_active(lambda shape: shape.deactivated())

        if len(self._shapes) < SHAPE_COUNT:
            color = self._solution[len(self._shapes)].color
            self._shapes.append(self._place_stamp(color))

    def undo(self) -> None:
        """Remove the last placed shape; the first shape is never removed."""
        if len(self._shapes) <= 1:
            return
        self._shapes.pop()
        self._shapes[-1] = self._shapes[-1].activated()

    def auto_complete(self) -> None:
        """Replace the placed shapes with the solution, all inactive."""
        self._shapes = [shape.deactivated() for shape in self._solution]

    # ==========================================================================
    # Active shape transforms
    # ==========================================================================

    def move_active_shape(self, direction: str) -> bool:
        """
        Move the active shape one cell.

        Returns:
            True if the shape moved; False if the move would leave the board
            or no shape is active

        Raises:
            ValueError: If direction is not up/down/left/right
        """
        dx, dy = validate_direction(direction)
        return self.interpolate_active_shape(dx, dy)

    def interpolate_active_shape(self, dx: int, dy: int) -> bool:
        active = self.get_active_shape()
        if active is None or not active.can_translate(dx, dy):
            return False
        self._replace_active(lambda shape: shape.translate(dx, dy))
        return True

    def rotate_active_shape(self, clockwise: bool) -> None:
        self._replace_active(lambda shape: shape.rotate(clockwise).rebound())

    def flip_active_shape(self, horizontal: bool) -> None:
        self._replace_active(lambda shape: shape.flip(horizontal).rebound())

    def _replace_active(self, transform) -> None:
        for i, shape in enumerate(self._shapes):
            if shape.is_active:
                self._shapes[i] = transform(shape)
                return

    # ==========================================================================
    # Queries
    # ==========================================================================

    @property
    def is_started(self) -> bool:
        return self._stamp is not None

    @property
    def state(self) -> str:
        if not self.is_started:
            return NOT_STARTED
        if len(self._shapes) < SHAPE_COUNT:
            return PLACING
        return WON if self.has_won() else FULL

    def get_shapes(self) -> List[Shape]:
        return list(self._shapes)

    def get_solution_shapes(self) -> List[Shape]:
        return list(self._solution)

    def get_stamp(self) -> Optional[Shape]:
        return self._stamp

    def get_puzzle_index(self) -> Optional[int]:
        return self._puzzle_index

    def get_active_shape(self) -> Optional[Shape]:
        for shape in self._shapes:
            if shape.is_active:
                return shape
        return None

    def get_active_shape_at(self, x: int, y: int) -> Optional[Shape]:
        """Active shape if it covers (x, y), else None."""
        for shape in self._shapes:
            if shape.is_active and shape.has_tile_at(x, y):
                return shape
        return None

    def has_overlapping_shapes(self) -> bool:
        occupied = set()
        for shape in self._shapes:
            for tile in shape.tiles:
                if tile.position in occupied:
                    return True
                occupied.add(tile.position)
        return False

    def has_won(self) -> bool:
        """
        8 shapes placed with no overlap.

        8 shapes × 8 tiles = 64 cells, so no overlap implies full coverage.
        """
        return len(self._shapes) == SHAPE_COUNT and not self.has_overlapping_shapes()
