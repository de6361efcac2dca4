"""
Campaign ordering of ranked puzzles.

Puzzles are bucketed by ranking (SCORER_THRESHOLDS: easy 14-20, medium 7-13,
hard 1-6), each bucket is shuffled, and the buckets are interleaved in the
repeating pattern 3 easy, 2 medium, 2 hard. A bucket that runs out is
skipped; the cycle continues until every bucket is exhausted.

Output line: the original ranked line followed by its 1-based line number.
"""

import random
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Tuple

from octo_core.types import CELL_COUNT, DIFFICULTIES, SCORER_THRESHOLDS, DifficultyThresholds

DEFAULT_PATTERN: Tuple[Tuple[str, int], ...] = (
    ("easy", 3),
    ("medium", 2),
    ("hard", 2),
)


@dataclass(frozen=True)
class OrderedEntry:
    """
    One ranked line and where it came from.

    - original_line: the stripped input line (64 cells + ranking)
    - original_index: its 1-based line number in the input
    """
    grid: Tuple[int, ...]
    ranking: int
    original_line: str
    original_index: int

    def to_line(self) -> str:
        return f"{self.original_line} {self.original_index}"


def parse_ordered_input(text: str) -> List[OrderedEntry]:
    """
    Parse "<64 numbers> <ranking>" lines.

    Raises:
        ValueError: If a line has fewer than 65 numbers (message includes the
            line number)
    """
    entries = []
    for index, line in enumerate(text.strip().splitlines(), start=1):
        stripped = line.strip()
        numbers = [int(tok) for tok in stripped.split()]
        if len(numbers) < CELL_COUNT + 1:
            raise ValueError(
                f"Line {index}: expected {CELL_COUNT} cells and a ranking, got {len(numbers)} numbers"
            )
        entries.append(
            OrderedEntry(
                grid=tuple(numbers[:CELL_COUNT]),
                ranking=numbers[CELL_COUNT],
                original_line=stripped,
                original_index=index,
            )
        )
    return entries


def categorize_puzzles(
    entries: Sequence[OrderedEntry],
    thresholds: DifficultyThresholds = SCORER_THRESHOLDS,
) -> Dict[str, List[OrderedEntry]]:
    """Bucket entries by difficulty, preserving input order within a bucket."""
    categories: Dict[str, List[OrderedEntry]] = {d: [] for d in DIFFICULTIES}
    for entry in entries:
        categories[thresholds.classify(entry.ranking)].append(entry)
    return categories


def shuffled(items: Sequence, rng: Optional[random.Random] = None) -> list:
    """Fisher-Yates shuffled copy; items is left untouched."""
    rng = rng or random
    result = list(items)
    for i in range(len(result) - 1, 0, -1):
        j = rng.randint(0, i)
        result[i], result[j] = result[j], result[i]
    return result


def interleave(
    categories: Dict[str, Sequence],
    pattern: Sequence[Tuple[str, int]] = DEFAULT_PATTERN,
) -> list:
    """
    Cycle through pattern, taking up to count items from each category.

    Categories missing from pattern are never emitted.
    """
    queues = {name: list(categories.get(name, [])) for name, _ in pattern}
    positions = {name: 0 for name in queues}
    remaining = sum(len(q) for q in queues.values())

    result = []
    step = 0
    while remaining > 0:
        name, count = pattern[step % len(pattern)]
        queue = queues[name]
        take = min(count, len(queue) - positions[name])
        result.extend(queue[positions[name]:positions[name] + take])
        positions[name] += take
        remaining -= take
        step += 1
    return result


def generate_ordered_list(
    entries: Sequence[OrderedEntry],
    rng: Optional[random.Random] = None,
    thresholds: DifficultyThresholds = SCORER_THRESHOLDS,
    pattern: Sequence[Tuple[str, int]] = DEFAULT_PATTERN,
) -> List[OrderedEntry]:
    categories = categorize_puzzles(entries, thresholds)
    shuffled_categories = {name: shuffled(items, rng) for name, items in categories.items()}
    return interleave(shuffled_categories, pattern)


def write_ordered(entries: Sequence[OrderedEntry], path) -> None:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("\n".join(e.to_line() for e in entries) + "\n", encoding="utf-8")
