#!/usr/bin/env python3
"""
Score a puzzle catalog and write 1-20 difficulty rankings.

Usage:
    python generate_new_ranking.py [inputFile] [outputFile]
"""

import sys
from pathlib import Path

# Add parent directory to path to import octo_rank
sys.path.insert(0, str(Path(__file__).parent.parent))

from octo_rank.cli import generate_new_ranking_main

if __name__ == "__main__":
    sys.exit(generate_new_ranking_main())
