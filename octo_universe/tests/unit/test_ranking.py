"""
Unit tests for octo_rank/ranking.py.

Acceptance criteria:
- 64- and 65-number lines parse; the legacy 65th number is kept aside
- Rankings run from 20 (best score) down to 1 (worst), rounded half-up
- Ties keep input order
- Output lines are the 64 numbers followed by the new ranking
"""

from pathlib import Path

import pytest

from octo_rank.ranking import (
    PuzzleRecord,
    RankedPuzzle,
    assign_rankings,
    parse_ranking_file,
    parse_ranking_line,
    parse_ranking_text,
    percentile_ranking,
    ranking_distribution,
    write_rankings,
)

SAMPLE_CATALOG = Path(__file__).resolve().parents[3] / "data" / "sample_catalog.txt"

ROWS = list(range(64))
L_LINE = [0, 1, 2, 3, 4, 5, 8, 9] + [c for c in range(64) if c not in (0, 1, 2, 3, 4, 5, 8, 9)]


def text_of(*lines):
    return "\n".join(" ".join(str(n) for n in line) for line in lines)


class TestParsing:
    """Ranking input parsing."""

    def test_64_numbers(self):
        """Bare line: no legacy ranking."""
        record = parse_ranking_line(text_of(ROWS))
        assert record.all_numbers == tuple(ROWS)
        assert record.original_ranking is None
        assert record.tiles == tuple(range(8))

    def test_65_numbers(self):
        """65th number is kept as the legacy ranking."""
        record = parse_ranking_line(text_of(ROWS + [7]))
        assert record.original_ranking == 7
        assert len(record.all_numbers) == 64

    @pytest.mark.parametrize("count", [10, 63, 66])
    def test_wrong_count(self, count):
        """Only 64 or 65 numbers are accepted."""
        with pytest.raises(ValueError, match="Expected 64 or 65 numbers"):
            parse_ranking_line(" ".join("1" for _ in range(count)))

    def test_text_reports_line_number(self):
        """Errors name the offending line."""
        with pytest.raises(ValueError, match="Line 2:"):
            parse_ranking_text(text_of(ROWS, ROWS[:20]))

    def test_text_skips_blank_lines(self):
        """Blank lines are ignored."""
        records = parse_ranking_text(text_of(ROWS) + "\n\n" + text_of(L_LINE) + "\n")
        assert len(records) == 2

    def test_missing_file(self, tmp_path):
        """A missing file raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            parse_ranking_file(tmp_path / "nope.txt")


class TestPercentileRanking:
    """Score position to 1-20 ranking."""

    @pytest.mark.parametrize(
        "index,count,expected",
        [
            (0, 5, 20),
            (1, 5, 15),
            (2, 5, 11),   # 10.5 rounds half-up
            (3, 5, 6),
            (4, 5, 1),
            (0, 2, 20),
            (1, 2, 1),
            (0, 1, 20),
        ],
    )
    def test_cases(self, index, count, expected):
        """Best is 20, worst is 1, ties round half-up."""
        assert percentile_ranking(index, count) == expected

    def test_range(self):
        """Rankings never increase down the order."""
        ranks = [percentile_ranking(i, 100) for i in range(100)]
        assert ranks[0] == 20
        assert ranks[-1] == 1
        assert ranks == sorted(ranks, reverse=True)


class TestAssignRankings:
    """Scoring and ranking a catalog."""

    def test_sample_catalog(self):
        """Sample catalog ranks the L-shaped puzzle last."""
        records = parse_ranking_file(SAMPLE_CATALOG)
        ranked = assign_rankings(records)

        assert [p.ranking for p in ranked] == [20, 15, 11, 6, 1]
        # Four perfect rectangles tie at 1.0 and keep file order; the L is last
        assert [p.all_numbers for p in ranked[:4]] == [r.all_numbers for r in records[:4]]
        assert ranked[-1].all_numbers == records[4].all_numbers
        assert ranked[-1].score < ranked[0].score

    def test_sorted_by_score_descending(self):
        """Higher score comes first."""
        records = [PuzzleRecord(tuple(L_LINE)), PuzzleRecord(tuple(ROWS))]
        ranked = assign_rankings(records)
        assert ranked[0].all_numbers == tuple(ROWS)
        assert [p.ranking for p in ranked] == [20, 1]
        assert ranked[0].score >= ranked[1].score

    def test_single_record(self):
        """A lone puzzle gets 20."""
        ranked = assign_rankings([PuzzleRecord(tuple(L_LINE))])
        assert ranked[0].ranking == 20

    def test_legacy_ranking_ignored(self):
        """The input ranking does not affect the output ranking."""
        with_legacy = assign_rankings([PuzzleRecord(tuple(ROWS), 3)])
        assert with_legacy[0].to_line().split()[-1] == "20"

    def test_empty(self):
        """No records, no rankings."""
        assert assign_rankings([]) == []


class TestOutput:
    """Ranking output."""

    def test_to_line(self):
        """Output line holds 64 cells plus the ranking."""
        line = RankedPuzzle(tuple(ROWS), 1.0, 17).to_line()
        numbers = line.split()
        assert len(numbers) == 65
        assert numbers[-1] == "17"

    def test_distribution_highest_first(self):
        """Histogram lists the highest ranking first."""
        ranked = [
            RankedPuzzle(tuple(ROWS), 1.0, 20),
            RankedPuzzle(tuple(ROWS), 0.5, 1),
            RankedPuzzle(tuple(ROWS), 0.9, 20),
        ]
        assert list(ranking_distribution(ranked).items()) == [(20, 2), (1, 1)]

    def test_write_rankings(self, tmp_path):
        """Rankings file has one line per puzzle."""
        path = tmp_path / "out" / "ranking.txt"
        write_rankings([RankedPuzzle(tuple(ROWS), 1.0, 20)], path)
        lines = path.read_text().splitlines()
        assert len(lines) == 1
        assert lines[0].endswith(" 20")
