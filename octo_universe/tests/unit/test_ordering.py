"""
Unit tests for octo_rank/ordering.py.

Acceptance criteria:
- Buckets: easy 14-20, medium 7-13, hard 1-6
- Interleave 3 easy / 2 medium / 2 hard, skipping exhausted buckets
- Every input puzzle appears exactly once in the output
- Output line = original line + 1-based original line number
"""

import random

import pytest

from octo_rank.ordering import (
    OrderedEntry,
    categorize_puzzles,
    generate_ordered_list,
    interleave,
    parse_ordered_input,
    shuffled,
    write_ordered,
)

CELLS = " ".join(str(i) for i in range(64))


def ranked_text(rankings):
    return "\n".join(f"{CELLS} {r}" for r in rankings)


class TestParse:
    """Ranked input parsing."""

    def test_entries(self):
        """Each line keeps its grid, ranking and 1-based index."""
        entries = parse_ordered_input(ranked_text([20, 5]) + "\n")
        assert [e.ranking for e in entries] == [20, 5]
        assert [e.original_index for e in entries] == [1, 2]
        assert entries[0].grid == tuple(range(64))
        assert entries[0].original_line == f"{CELLS} 20"

    def test_short_line(self):
        """Lines without a ranking are rejected with the line number."""
        with pytest.raises(ValueError, match="Line 2:"):
            parse_ordered_input(f"{CELLS} 20\n1 2 3")

    def test_to_line(self):
        """Output is the original line plus its line number."""
        entry = parse_ordered_input(ranked_text([9, 14, 3]))[2]
        numbers = entry.to_line().split()
        assert len(numbers) == 66
        assert numbers[-2:] == ["3", "3"]


class TestCategorize:
    """Difficulty buckets."""

    def test_boundaries(self):
        """Scorer thresholds 14 and 7 split the buckets."""
        entries = parse_ordered_input(ranked_text([20, 14, 13, 7, 6, 1]))
        categories = categorize_puzzles(entries)
        assert [e.ranking for e in categories["easy"]] == [20, 14]
        assert [e.ranking for e in categories["medium"]] == [13, 7]
        assert [e.ranking for e in categories["hard"]] == [6, 1]


class TestInterleave:
    """3 easy / 2 medium / 2 hard interleaving."""

    def test_pattern_with_exhaustion(self):
        """Exhausted buckets are skipped."""
        categories = {
            "easy": ["e1", "e2", "e3", "e4", "e5"],
            "medium": ["m1", "m2", "m3"],
            "hard": ["h1"],
        }
        assert interleave(categories) == [
            "e1", "e2", "e3", "m1", "m2", "h1", "e4", "e5", "m3",
        ]

    def test_empty_bucket_skipped(self):
        """An empty easy bucket never blocks the cycle."""
        categories = {"easy": [], "medium": ["m1"], "hard": ["h1", "h2", "h3"]}
        assert interleave(categories) == ["m1", "h1", "h2", "h3"]

    def test_all_empty(self):
        """No input, no output."""
        assert interleave({"easy": [], "medium": [], "hard": []}) == []

    def test_full_cycles(self):
        """Full buckets repeat the pattern exactly."""
        categories = {
            "easy": [f"e{i}" for i in range(6)],
            "medium": [f"m{i}" for i in range(4)],
            "hard": [f"h{i}" for i in range(4)],
        }
        result = interleave(categories)
        assert [item[0] for item in result] == list("eeemmhh" * 2)


class TestShuffled:
    """Fisher-Yates shuffle."""

    def test_permutation_and_input_untouched(self):
        """Result is a permutation and the input is not modified."""
        items = list(range(20))
        result = shuffled(items, random.Random(4))
        assert sorted(result) == items
        assert items == list(range(20))

    def test_seeded_is_reproducible(self):
        """Same seed, same order."""
        assert shuffled(range(10), random.Random(1)) == shuffled(range(10), random.Random(1))

    def test_empty(self):
        """Empty input shuffles to empty output."""
        assert shuffled([], random.Random(0)) == []


class TestGenerateOrderedList:
    """End-to-end ordering."""

    @pytest.mark.parametrize("seed", range(5))
    def test_every_puzzle_once(self, seed):
        """Each input puzzle appears exactly once."""
        rankings = [20, 19, 18, 17, 12, 10, 8, 5, 3, 2, 16, 1]
        entries = parse_ordered_input(ranked_text(rankings))
        ordered = generate_ordered_list(entries, rng=random.Random(seed))
        assert sorted(e.original_index for e in ordered) == list(range(1, 13))

    @pytest.mark.parametrize("seed", range(5))
    def test_leading_pattern(self, seed):
        """Bucket sequence follows the pattern until buckets run out."""
        rankings = [20, 19, 18, 17, 12, 10, 8, 5, 3, 2, 16, 1]
        entries = parse_ordered_input(ranked_text(rankings))
        ordered = generate_ordered_list(entries, rng=random.Random(seed))
        buckets = [
            "e" if e.ranking >= 14 else "m" if e.ranking >= 7 else "h" for e in ordered
        ]
        # 5 easy, 3 medium, 4 hard
        assert buckets == list("eeemmhheemhh")

    def test_write_ordered(self, tmp_path):
        """Ordered file holds one line per entry."""
        entries = [OrderedEntry(tuple(range(64)), 20, f"{CELLS} 20", 1)]
        path = tmp_path / "ordered.txt"
        write_ordered(entries, path)
        assert path.read_text().strip() == f"{CELLS} 20 1"
