"""
Puzzle catalog: load-once repository, line decoding and puzzle selection.

Catalog format (one puzzle per line, whitespace separated):
- 64 cell indices (idx = row*8 + col), 8 runs of 8, one run per shape
- optional 65th integer: difficulty ranking 1-20 (20 = easiest)

Provides:
- CatalogRepository: lazily loads the catalog text once and caches it
- parse_catalog_line / decode_shapes: line -> 8 colored Shapes
- CatalogSelector: pick a puzzle by difficulty bucket or 1-based index
- validate_catalog_cells: structural check of a solved board
- is_puzzle_number_invalid: validation of user-entered puzzle numbers
"""

import logging
import random
import re
from collections import Counter, deque
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, List, Optional, Sequence, Tuple

from .shape import Shape
from .types import (
    BOARD_SIZE,
    CELL_COUNT,
    LIVE_THRESHOLDS,
    SHAPE_COUNT,
    SHAPE_SIZE,
    DifficultyThresholds,
    validate_difficulty,
)

logger = logging.getLogger(__name__)

# Number of puzzles in the shipped catalog
MAX_PUZZLE_NUMBER = 62642

_DECIMAL_RE = re.compile(r"[+-]?[0-9]+")

PALETTE: Tuple[str, ...] = (
    "#FD9301",
    "#FFFF00",
    "#23FA00",
    "#FD40FF",
    "#27FDFF",
    "#0A32FF",
    "#FD2600",
    "#7030A0",
)


# =============================================================================
# Errors
# =============================================================================

class CatalogError(ValueError):
    """Recoverable catalog configuration error; session state is untouched."""


class NoMatchingPuzzleError(CatalogError):
    """No catalog line falls in the requested difficulty bucket."""


class PuzzleIndexError(CatalogError):
    """Requested puzzle index is outside [1, catalog size]."""


class CatalogFormatError(CatalogError):
    """A catalog line does not hold at least 64 integers."""


# =============================================================================
# Repository (load once, cache for the process lifetime)
# =============================================================================

class CatalogRepository:
    """
    Lazily loaded catalog text.

    The loader runs at most once; every later call reuses the cached lines.
    Use from_path() for the shipped file and from_text()/from_lines() for
    synthetic catalogs in tests.
    """

    def __init__(self, loader: Callable[[], str], source: str = "<memory>"):
        self._loader = loader
        self._source = source
        self._lines: Optional[List[str]] = None

    @classmethod
    def from_path(cls, path) -> "CatalogRepository":
        path = Path(path)
        return cls(lambda: path.read_text(encoding="utf-8"), source=str(path))

    @classmethod
    def from_text(cls, text: str) -> "CatalogRepository":
        return cls(lambda: text)

    @classmethod
    def from_lines(cls, lines: Sequence[str]) -> "CatalogRepository":
        return cls.from_text("\n".join(lines))

    @property
    def is_loaded(self) -> bool:
        return self._lines is not None

    def lines(self) -> List[str]:
        """
        Non-empty catalog lines, loading on first call.

        Raises:
            FileNotFoundError: If a path-backed catalog is missing
        """
        if self._lines is None:
            text = self._loader()
            self._lines = [line.strip() for line in text.strip().splitlines() if line.strip()]
            logger.info(f"Loaded {len(self._lines)} catalog lines from {self._source}")
        return self._lines

    @property
    def size(self) -> int:
        return len(self.lines())


# =============================================================================
# Decoding
# =============================================================================

@dataclass(frozen=True)
class CatalogEntry:
    """
    One parsed catalog line.

    - cells: the 64 cell indices (shape k = cells[8k : 8k+8])
    - ranking: trailing difficulty 1-20, or None for a bare 64-number line
    """
    cells: Tuple[int, ...]
    ranking: Optional[int]

    def shape_cells(self, k: int) -> Tuple[int, ...]:
        return self.cells[k * SHAPE_SIZE:(k + 1) * SHAPE_SIZE]


@dataclass(frozen=True)
class PuzzleSelection:
    """Decoded solution shapes plus the 1-based catalog index they came from."""
    shapes: Tuple[Shape, ...]
    puzzle_index: int


def parse_catalog_line(line: str) -> CatalogEntry:
    """
    Parse one catalog line.

    Raises:
        CatalogFormatError: If the line has fewer than 64 integers or a
            non-integer token
    """
    try:
        numbers = [int(tok) for tok in line.split()]
    except ValueError as e:
        raise CatalogFormatError(f"Non-integer token in catalog line: {e}") from e

    if len(numbers) < CELL_COUNT:
        raise CatalogFormatError(
            f"Catalog line has {len(numbers)} numbers, expected at least {CELL_COUNT}"
        )

    ranking = numbers[CELL_COUNT] if len(numbers) > CELL_COUNT else None
    return CatalogEntry(cells=tuple(numbers[:CELL_COUNT]), ranking=ranking)


def decode_shapes(cells: Sequence[int], colors: Sequence[str]) -> List[Shape]:
    """
    Split 64 cell indices into SHAPE_COUNT shapes, shape k colored colors[k].

    Cell idx maps to (x, y) = (idx % 8, idx // 8).
    """
    return [
        Shape.from_cells(cells[k * SHAPE_SIZE:(k + 1) * SHAPE_SIZE], colors[k])
        for k in range(SHAPE_COUNT)
    ]


def validate_catalog_cells(cells: Sequence[int]) -> List[str]:
    """
    Check that 64 cell indices describe a valid tiling.

    A valid line is a permutation of 0..63 whose 8 runs of 8 are each
    4-connected pieces.

    Returns:
        List of problem descriptions (empty if valid)
    """
    problems: List[str] = []

    if len(cells) != CELL_COUNT:
        problems.append(f"expected {CELL_COUNT} cells, got {len(cells)}")
        return problems

    out_of_range = [c for c in cells if not 0 <= c < CELL_COUNT]
    if out_of_range:
        problems.append(f"cells out of range: {out_of_range}")

    counts = Counter(cells)
    dupes = sorted(c for c, n in counts.items() if n > 1)
    if dupes:
        problems.append(f"duplicate cells: {dupes}")

    for k in range(SHAPE_COUNT):
        piece = set(cells[k * SHAPE_SIZE:(k + 1) * SHAPE_SIZE])
        if not _is_4_connected(piece):
            problems.append(f"shape {k} is not 4-connected")

    return problems


def _is_4_connected(piece: set) -> bool:
    if not piece:
        return False
    start = next(iter(piece))
    seen = {start}
    queue = deque([start])
    while queue:
        idx = queue.popleft()
        r, c = divmod(idx, BOARD_SIZE)
        for nr, nc in ((r - 1, c), (r + 1, c), (r, c - 1), (r, c + 1)):
            if 0 <= nr < BOARD_SIZE and 0 <= nc < BOARD_SIZE:
                nidx = nr * BOARD_SIZE + nc
                if nidx in piece and nidx not in seen:
                    seen.add(nidx)
                    queue.append(nidx)
    return len(seen) == len(piece)


def is_puzzle_number_invalid(puzzle_number: str, max_number: int = MAX_PUZZLE_NUMBER) -> bool:
    """
    Validate a user-entered puzzle number.

    Empty input is not invalid (nothing entered yet); anything that is not
    a whole decimal number in [1, max_number] is. Fractions ("1.5"),
    exponent forms ("1e3"), digit separators ("1_000") and hex ("0x10")
    are invalid.
    """
    text = puzzle_number.strip()
    if text == "":
        return False
    if not _DECIMAL_RE.fullmatch(text):
        return True
    number = int(text)
    return number < 1 or number > max_number


# =============================================================================
# Selection
# =============================================================================

class CatalogSelector:
    """
    Picks puzzles from a CatalogRepository.

    Args:
        repository: Catalog source (loaded on first selection)
        rng: Random source for puzzle choice and color shuffling
        thresholds: Bucket boundaries; LIVE_THRESHOLDS by default
    """

    def __init__(
        self,
        repository: CatalogRepository,
        rng: Optional[random.Random] = None,
        thresholds: DifficultyThresholds = LIVE_THRESHOLDS,
    ):
        self.repository = repository
        self.rng = rng or random.Random()
        self.thresholds = thresholds

    def select_by_difficulty(self, difficulty: str) -> PuzzleSelection:
        """
        Uniformly random puzzle whose ranking falls in the bucket.

        Lines without a trailing ranking never match.

        Raises:
            ValueError: If difficulty is not easy/medium/hard
            NoMatchingPuzzleError: If no line matches
        """
        validate_difficulty(difficulty)

        candidates: List[Tuple[int, CatalogEntry]] = []
        for i, line in enumerate(self.repository.lines()):
            entry = parse_catalog_line(line)
            if entry.ranking is not None and self.thresholds.matches(entry.ranking, difficulty):
                candidates.append((i + 1, entry))

        if not candidates:
            raise NoMatchingPuzzleError(f"No shapes found for ranking: {difficulty}")

        puzzle_index, entry = self.rng.choice(candidates)
        logger.debug(
            f"Selected puzzle {puzzle_index} ({difficulty}) from {len(candidates)} candidates"
        )
        return self._build(entry, puzzle_index)

    def select_by_index(self, puzzle_index: int) -> PuzzleSelection:
        """
        Puzzle at a 1-based catalog position.

        Raises:
            PuzzleIndexError: If puzzle_index is outside [1, catalog size]
        """
        lines = self.repository.lines()
        if not 1 <= puzzle_index <= len(lines):
            raise PuzzleIndexError(
                f"Invalid puzzle index: {puzzle_index}. Must be between 1 and {len(lines)}"
            )
        entry = parse_catalog_line(lines[puzzle_index - 1])
        return self._build(entry, puzzle_index)

    def shuffled_palette(self) -> List[str]:
        colors = list(PALETTE)
        self.rng.shuffle(colors)
        return colors

    def _build(self, entry: CatalogEntry, puzzle_index: int) -> PuzzleSelection:
        shapes = decode_shapes(entry.cells, self.shuffled_palette())
        return PuzzleSelection(shapes=tuple(shapes), puzzle_index=puzzle_index)
