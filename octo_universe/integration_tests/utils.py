"""
Utility functions for catalog integration gates.

Provides:
- Catalog path resolution
- Receipt generation and saving
- Summary statistics over receipts
"""

import json
from collections import Counter
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional


def get_data_dir() -> Path:
    """Get the absolute path to the data directory."""
    # octo_universe/integration_tests/utils.py -> octo_universe -> parent -> data
    return Path(__file__).parent.parent.parent / "data"


def build_receipt(
    puzzle_index: int,
    gate: str,
    ranking: Optional[int] = None,
    problems: Optional[List[str]] = None,
    solution_wins: Optional[bool] = None,
) -> Dict[str, Any]:
    """
    Build a receipt dictionary for one catalog line.

    Args:
        puzzle_index: 1-based catalog line number
        gate: Gate name
        ranking: Trailing ranking of the line, if any
        problems: Structural problems found (empty or None when valid)
        solution_wins: Whether the decoded solution is a winning board

    Returns:
        Receipt dictionary; status is "PASS" when there are no problems and
        the solution wins
    """
    problems = problems or []
    status = "PASS" if not problems and solution_wins is not False else "FAIL"

    receipt = {
        "puzzle_index": puzzle_index,
        "gate": gate,
        "timestamp": datetime.now().isoformat(),
        "status": status,
        "ranking": ranking,
    }

    if problems:
        receipt["problems"] = problems

    if solution_wins is not None:
        receipt["solution_wins"] = solution_wins

    return receipt


def save_receipt(receipt: Dict[str, Any], output_dir: Path, name: str) -> None:
    """
    Save receipt to JSON file.

    Args:
        receipt: Receipt dictionary
        output_dir: Directory to save receipt (e.g., receipts/catalog/)
        name: File stem
    """
    output_dir.mkdir(parents=True, exist_ok=True)
    receipt_file = output_dir / f"{name}.json"

    with open(receipt_file, "w") as f:
        json.dump(receipt, f, indent=2)


def compute_summary_stats(receipts: List[Dict[str, Any]]) -> Dict[str, Any]:
    """
    Compute summary statistics from a list of receipts.

    Returns:
        Summary with pass/fail counts, the failing puzzle indices and the
        ranking histogram (highest ranking first)
    """
    total = len(receipts)
    passed = sum(1 for r in receipts if r["status"] == "PASS")

    rankings = Counter(r["ranking"] for r in receipts if r.get("ranking") is not None)

    return {
        "total_puzzles": total,
        "passed": passed,
        "failed": total - passed,
        "pass_rate": passed / total if total > 0 else 0.0,
        "failed_indices": [r["puzzle_index"] for r in receipts if r["status"] != "PASS"],
        "ranking_histogram": {str(k): rankings[k] for k in sorted(rankings, reverse=True)},
    }
