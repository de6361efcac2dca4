#!/usr/bin/env python3
"""
Reorder a ranked catalog as 3 easy, 2 medium, 2 hard (repeated).

Usage:
    python generate_ordered_ranking.py [inputFile] [outputFile] [--seed N]
"""

import sys
from pathlib import Path

# Add parent directory to path to import octo_rank
sys.path.insert(0, str(Path(__file__).parent.parent))

from octo_rank.cli import generate_ordered_ranking_main

if __name__ == "__main__":
    sys.exit(generate_ordered_ranking_main())
