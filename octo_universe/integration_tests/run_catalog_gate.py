#!/usr/bin/env python3
"""
Catalog Gate: every catalog line must decode to a winnable puzzle.

Critical Invariants:
- each line holds a permutation of cells 0..63
- each of the 8 shapes is 4-connected
- rankings, when present, are in 1..20
- the decoded solution, placed via auto_complete, is a win

Usage:
    python run_catalog_gate.py --catalog ../../data/NewRanking.txt --limit 500
"""

import argparse
import sys
from pathlib import Path

# Add parent directory to path to import octo_core
sys.path.insert(0, str(Path(__file__).parent.parent))

from octo_core.catalog import CatalogRepository, CatalogSelector, parse_catalog_line, validate_catalog_cells
from octo_core.grid import TilingGrid
from octo_rank.utils import setup_logger

from utils import build_receipt, compute_summary_stats, get_data_dir, save_receipt


def validate_puzzle(grid, selector, puzzle_index, logger):
    """
    Validate a single catalog line.

    Returns:
        Receipt dictionary
    """
    line = selector.repository.lines()[puzzle_index - 1]
    try:
        entry = parse_catalog_line(line)
    except ValueError as e:
        logger.error(f"Puzzle {puzzle_index}: {e}")
        return build_receipt(puzzle_index, "CATALOG", problems=[str(e)])

    problems = validate_catalog_cells(entry.cells)
    if entry.ranking is not None and not 1 <= entry.ranking <= 20:
        problems.append(f"ranking {entry.ranking} outside 1..20")

    solution_wins = None
    if not problems:
        grid.start_game_with_puzzle_index(puzzle_index)
        grid.auto_complete()
        solution_wins = grid.has_won()

    if problems or solution_wins is False:
        logger.error(f"Puzzle {puzzle_index}: FAIL {problems}")

    return build_receipt(
        puzzle_index,
        "CATALOG",
        ranking=entry.ranking,
        problems=problems,
        solution_wins=solution_wins,
    )


def main():
    parser = argparse.ArgumentParser(
        description="Catalog Gate: decode and validate every catalog line"
    )
    parser.add_argument(
        "--catalog",
        type=Path,
        default=get_data_dir() / "NewRanking.txt",
        help="Catalog file (default: data/NewRanking.txt)",
    )
    parser.add_argument(
        "--limit",
        type=int,
        default=None,
        help="Only check the first N lines (default: all)",
    )

    args = parser.parse_args()

    # Setup paths
    integration_dir = Path(__file__).parent
    logs_dir = integration_dir / "logs"
    receipts_dir = integration_dir / "receipts" / "catalog"

    logger = setup_logger("catalog_gate", logs_dir / "catalog_gate.log")

    logger.info("=" * 80)
    logger.info("Catalog Gate")
    logger.info(f"Catalog: {args.catalog}")
    logger.info(f"Line limit: {args.limit}")
    logger.info("=" * 80)

    selector = CatalogSelector(CatalogRepository.from_path(args.catalog))
    grid = TilingGrid(selector)

    try:
        total = selector.repository.size
    except FileNotFoundError:
        logger.error(f"Catalog not found: {args.catalog}")
        sys.exit(1)

    count = total if args.limit is None else min(args.limit, total)
    receipts = [
        validate_puzzle(grid, selector, puzzle_index, logger)
        for puzzle_index in range(1, count + 1)
    ]

    stats = compute_summary_stats(receipts)
    save_receipt(stats, receipts_dir, "summary")

    logger.info("\n" + "=" * 80)
    logger.info("SUMMARY STATISTICS")
    logger.info("=" * 80)
    logger.info(f"Total puzzles: {stats['total_puzzles']}")
    logger.info(f"Passed: {stats['passed']}")
    logger.info(f"Failed: {stats['failed']}")
    logger.info(f"Pass rate: {stats['pass_rate']:.2%}")
    for rank, n in stats["ranking_histogram"].items():
        logger.info(f"  Rank {rank}: {n} puzzles")

    if stats["failed"]:
        logger.error(f"Failed puzzles: {stats['failed_indices'][:50]}")
        sys.exit(1)

    logger.info(f"Catalog gate complete. Summary saved to: {receipts_dir}")


if __name__ == "__main__":
    main()
