"""
octo_rank: Offline difficulty ranking for the octomino puzzle catalog.

Modules:
- geometry.py: Cell-index geometry (bounding box, compactness, rectangle/line)
- outliers.py: Mean-distance outlier detection
- symmetry.py: Shape symmetry and full-grid value symmetry
- scoring.py: Outlier-aware symmetry/compactness score
- ranking.py: Ranking file I/O and 1-20 percentile ranks
- ordering.py: 3 easy / 2 medium / 2 hard campaign ordering
- cli.py: generate-new-ranking / generate-ordered-ranking entry points
"""

from .ordering import generate_ordered_list
from .ranking import assign_rankings
from .scoring import DEFAULT_WEIGHTS, ScoreBreakdown, ScoreWeights, calculate_score, score_breakdown

__all__ = [
    "DEFAULT_WEIGHTS",
    "ScoreBreakdown",
    "ScoreWeights",
    "assign_rankings",
    "calculate_score",
    "generate_ordered_list",
    "score_breakdown",
]
