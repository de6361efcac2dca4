"""
octo_core: Play engine for the octomino tiling puzzle.

Provides:
- types: Tile, board constants, direction/difficulty names and thresholds
- shape: Immutable Shape with rotate/flip/translate/rebound and randomize_shape
- catalog: Load-once catalog repository and puzzle selector
- grid: TilingGrid play session (placement, undo, overlap and win detection)
"""

from .catalog import (
    CatalogError,
    CatalogRepository,
    CatalogSelector,
    NoMatchingPuzzleError,
    PuzzleIndexError,
)
from .grid import TilingGrid
from .shape import Shape, randomize_shape
from .types import Tile

__all__ = [
    "CatalogError",
    "CatalogRepository",
    "CatalogSelector",
    "NoMatchingPuzzleError",
    "PuzzleIndexError",
    "Shape",
    "Tile",
    "TilingGrid",
    "randomize_shape",
]
