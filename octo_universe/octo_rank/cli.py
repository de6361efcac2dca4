"""
Command-line entry points for the offline ranking tools.

- generate-new-ranking: score a catalog and write 1-20 rankings
- generate-ordered-ranking: reorder a ranked catalog as 3 easy / 2 medium / 2 hard

Both return exit code 1 when the input file is missing or malformed.
"""

import argparse
import random
from pathlib import Path
from typing import List, Optional

from octo_core.types import SCORER_THRESHOLDS

from .ordering import generate_ordered_list, parse_ordered_input, write_ordered
from .ranking import assign_rankings, parse_ranking_file, ranking_distribution, write_rankings
from .scoring import GRID_SOURCES, ScoreWeights
from .utils import setup_logger

DEFAULT_CATALOG = Path("data/8x8squaresNumb.txt")
DEFAULT_RANKING = Path("data/NewRanking.txt")
DEFAULT_ORDERED = Path("data/OrderedRanking.txt")

PREVIEW_COUNT = 21


def generate_new_ranking_main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        description="Symmetry-based ranking generator (outlier-aware)"
    )
    parser.add_argument(
        "input",
        nargs="?",
        type=Path,
        default=DEFAULT_CATALOG,
        help=f"Catalog with 64 or 65 numbers per line (default: {DEFAULT_CATALOG})",
    )
    parser.add_argument(
        "output",
        nargs="?",
        type=Path,
        default=DEFAULT_RANKING,
        help=f"Ranked output file (default: {DEFAULT_RANKING})",
    )
    parser.add_argument(
        "--grid-source",
        type=str,
        default="values",
        choices=list(GRID_SOURCES),
        help="What the grid symmetry bonus measures (default: values)",
    )
    parser.add_argument("--log-file", type=Path, default=None, help="Optional log file")

    args = parser.parse_args(argv)
    logger = setup_logger("generate_new_ranking", args.log_file)

    logger.info("=" * 60)
    logger.info("Symmetry-Based Ranking Generator")
    logger.info("=" * 60)
    logger.info(f"Reading shapes from: {args.input}")

    try:
        records = parse_ranking_file(args.input)
    except FileNotFoundError:
        logger.error(f"Input file not found: {args.input}")
        return 1
    except ValueError as e:
        logger.error(f"Malformed input {args.input}: {e}")
        return 1

    has_original = bool(records) and records[0].original_ranking is not None
    logger.info(f"Loaded {len(records)} shapes")
    logger.info(
        f"Format: {'65 numbers (with ranking)' if has_original else '64 numbers (no ranking)'}"
    )

    logger.info("Calculating rankings...")
    ranked = assign_rankings(records, ScoreWeights(grid_source=args.grid_source))

    logger.info(f"Writing rankings to: {args.output}")
    write_rankings(ranked, args.output)
    logger.info(f"Done! Generated {len(ranked)} ranked shapes")

    logger.info("Ranking distribution:")
    for rank, count in ranking_distribution(ranked).items():
        logger.info(f"  Rank {rank}: {count} shapes")

    return 0


def generate_ordered_ranking_main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        description="Ordered ranking generator: 3 easy, 2 medium, 2 hard (repeated)"
    )
    parser.add_argument(
        "input",
        nargs="?",
        type=Path,
        default=DEFAULT_RANKING,
        help=f"Ranked catalog, 64 numbers + ranking per line (default: {DEFAULT_RANKING})",
    )
    parser.add_argument(
        "output",
        nargs="?",
        type=Path,
        default=DEFAULT_ORDERED,
        help=f"Ordered output file (default: {DEFAULT_ORDERED})",
    )
    parser.add_argument(
        "--seed", type=int, default=None, help="Random seed for bucket shuffling"
    )
    parser.add_argument("--log-file", type=Path, default=None, help="Optional log file")

    args = parser.parse_args(argv)
    logger = setup_logger("generate_ordered_ranking", args.log_file)

    logger.info("=" * 60)
    logger.info("Ordered Ranking Generator")
    logger.info("=" * 60)
    logger.info(f"Reading puzzles from: {args.input}")

    try:
        entries = parse_ordered_input(args.input.read_text(encoding="utf-8"))
    except FileNotFoundError:
        logger.error(f"Input file not found: {args.input}")
        return 1
    except ValueError as e:
        logger.error(f"Malformed input {args.input}: {e}")
        return 1

    logger.info(f"Loaded {len(entries)} puzzles")

    rng = random.Random(args.seed)
    ordered = generate_ordered_list(entries, rng=rng, thresholds=SCORER_THRESHOLDS)

    counts = {"easy": 0, "medium": 0, "hard": 0}
    for entry in entries:
        counts[SCORER_THRESHOLDS.classify(entry.ranking)] += 1
    logger.info(f"  Easy ({SCORER_THRESHOLDS.easy_min}-20): {counts['easy']} puzzles")
    logger.info(
        f"  Medium ({SCORER_THRESHOLDS.medium_min}-{SCORER_THRESHOLDS.easy_min - 1}): "
        f"{counts['medium']} puzzles"
    )
    logger.info(f"  Hard (1-{SCORER_THRESHOLDS.medium_min - 1}): {counts['hard']} puzzles")

    logger.info(f"Writing to: {args.output}")
    write_ordered(ordered, args.output)
    logger.info(f"Done! Generated {len(ordered)} ordered puzzles")

    logger.info(f"Pattern verification (first {PREVIEW_COUNT} puzzles):")
    for i, entry in enumerate(ordered[:PREVIEW_COUNT], start=1):
        difficulty = SCORER_THRESHOLDS.classify(entry.ranking).capitalize()
        logger.info(
            f"  {i:2d}: {difficulty:<6} (rank {entry.ranking}, puzzle #{entry.original_index})"
        )

    return 0
