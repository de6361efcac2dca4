"""
Ranking file I/O and 1-20 rank assignment.

Input lines: 64 cell indices, optionally followed by a legacy ranking (which
is discarded). Output lines: the 64 numbers followed by the new ranking, in
descending score order.

Rank mapping over N puzzles sorted by score (descending, stable):
    ranking(i) = round_half_up(1 + (1 - i / (N - 1)) * 19)
so the best-scoring puzzle gets 20 (easiest) and the worst gets 1.
"""

from collections import Counter
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Tuple

from octo_core.types import CELL_COUNT, SHAPE_SIZE, round_half_up

from .scoring import DEFAULT_WEIGHTS, ScoreWeights, calculate_score

MIN_RANKING = 1
MAX_RANKING = 20


@dataclass(frozen=True)
class PuzzleRecord:
    """
    One parsed input line.

    - all_numbers: the 64 cell indices
    - original_ranking: trailing 65th number if present, else None
    """
    all_numbers: Tuple[int, ...]
    original_ranking: Optional[int] = None

    @property
    def tiles(self) -> Tuple[int, ...]:
        """Primary shape: the first 8 cells."""
        return self.all_numbers[:SHAPE_SIZE]


@dataclass(frozen=True)
class RankedPuzzle:
    all_numbers: Tuple[int, ...]
    score: float
    ranking: int

    def to_line(self) -> str:
        return " ".join(str(n) for n in self.all_numbers) + f" {self.ranking}"


def parse_ranking_line(line: str) -> PuzzleRecord:
    """
    Parse a 64- or 65-number line.

    Raises:
        ValueError: On non-integer tokens or a count other than 64/65
    """
    numbers = [int(tok) for tok in line.split()]
    if len(numbers) == CELL_COUNT + 1:
        return PuzzleRecord(tuple(numbers[:-1]), numbers[-1])
    if len(numbers) == CELL_COUNT:
        return PuzzleRecord(tuple(numbers), None)
    raise ValueError(f"Expected {CELL_COUNT} or {CELL_COUNT + 1} numbers, got {len(numbers)}")


def parse_ranking_text(text: str) -> List[PuzzleRecord]:
    records = []
    for line_no, line in enumerate(text.strip().splitlines(), start=1):
        if not line.strip():
            continue
        try:
            records.append(parse_ranking_line(line))
        except ValueError as e:
            raise ValueError(f"Line {line_no}: {e}") from e
    return records


def parse_ranking_file(path) -> List[PuzzleRecord]:
    """
    Raises:
        FileNotFoundError: If path does not exist
        ValueError: If a line is malformed (message includes the line number)
    """
    return parse_ranking_text(Path(path).read_text(encoding="utf-8"))


def percentile_ranking(index: int, count: int) -> int:
    """Ranking for position index (0 = best) among count puzzles."""
    if count <= 1:
        return MAX_RANKING
    percentile = 1 - index / (count - 1)
    return round_half_up(MIN_RANKING + percentile * (MAX_RANKING - MIN_RANKING))


def assign_rankings(
    records: Sequence[PuzzleRecord], weights: ScoreWeights = DEFAULT_WEIGHTS
) -> List[RankedPuzzle]:
    """
    Score every record and map score order to rankings 1-20.

    Returns:
        RankedPuzzle list sorted by score descending (ties keep input order)
    """
    scored = [
        (record, calculate_score(record.tiles, record.all_numbers, weights))
        for record in records
    ]
    scored.sort(key=lambda item: -item[1])

    n = len(scored)
    return [
        RankedPuzzle(record.all_numbers, score, percentile_ranking(i, n))
        for i, (record, score) in enumerate(scored)
    ]


def ranking_distribution(ranked: Sequence[RankedPuzzle]) -> Dict[int, int]:
    """Count of puzzles per ranking, highest ranking first."""
    counts = Counter(p.ranking for p in ranked)
    return {rank: counts[rank] for rank in sorted(counts, reverse=True)}


def write_rankings(ranked: Sequence[RankedPuzzle], path) -> None:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("\n".join(p.to_line() for p in ranked) + "\n", encoding="utf-8")
