"""Unit tests for adaptive row grouping."""

# pylint: disable=missing-class-docstring,missing-function-docstring

import pytest
from conftest import make_token

from table_wizard.config import ReconstructionConfig
from table_wizard.reconstruction.rows import Row, estimate_row_tolerance, group_rows


def tokens_at(ys: list[float]) -> list:
    return [make_token(f"t{i}", 0, y) for i, y in enumerate(ys)]


# ===========================================================================
# estimate_row_tolerance tests
# ===========================================================================


class TestEstimateRowTolerance:

    def test_no_tokens_uses_default(self):
        assert estimate_row_tolerance([]) == 5.0

    def test_single_token_uses_default(self):
        assert estimate_row_tolerance(tokens_at([100])) == 5.0

    def test_all_on_one_line_uses_default(self):
        assert estimate_row_tolerance(tokens_at([100, 100, 100])) == 5.0

    def test_mode_of_gaps(self):
        # Gaps 12, 12, 12, 3, 12 -> spacing 12
        ys = [100, 88, 76, 64, 61, 49]
        assert estimate_row_tolerance(tokens_at(ys)) == pytest.approx(7.2)

    def test_duplicate_ys_ignored(self):
        ys = [100, 100, 90, 90, 80]
        assert estimate_row_tolerance(tokens_at(ys)) == pytest.approx(6.0)

    def test_outlier_gap_does_not_dominate(self):
        # Title 60 units above a table with 10-unit spacing
        ys = [200, 140, 130, 120, 110]
        assert estimate_row_tolerance(tokens_at(ys)) == pytest.approx(6.0)

    def test_noise_floor_ignored(self):
        ys = [100.5, 100, 90]
        assert estimate_row_tolerance(tokens_at(ys)) == pytest.approx(6.0)

    def test_tie_goes_to_first_gap_seen(self):
        # Scanning bottom-up: gap 10 (0->10) is seen before gap 20 (10->30)
        assert estimate_row_tolerance(tokens_at([0, 10, 30])) == pytest.approx(6.0)

    def test_gaps_round_half_up(self):
        # Gaps 2.5, 7.5, 2.5 round to 3, 8, 3
        ys = [0, 2.5, 10, 12.5]
        assert estimate_row_tolerance(tokens_at(ys)) == pytest.approx(1.8)

    def test_config_factor(self):
        config = ReconstructionConfig(row_spacing_factor=0.5)
        assert estimate_row_tolerance(tokens_at([0, 10, 20]), config) == pytest.approx(5.0)

    def test_config_default(self):
        config = ReconstructionConfig(default_row_tolerance=3.0)
        assert estimate_row_tolerance(tokens_at([50]), config) == 3.0


# ===========================================================================
# group_rows tests
# ===========================================================================


class TestGroupRows:

    def test_empty(self):
        assert group_rows([]) == []

    def test_small_gap_merges_rows(self):
        ys = [100, 88, 76, 64, 61, 49]
        tokens = [make_token(f"r{i}", i * 20, y) for i, y in enumerate(ys)]
        rows = group_rows(tokens)
        assert len(rows) == 5
        assert [t.text for t in rows[3].tokens] == ["r3", "r4"]

    def test_rows_top_to_bottom(self):
        tokens = tokens_at([60, 100, 80])
        rows = group_rows(tokens)
        assert [row.anchor_y for row in rows] == [100, 80, 60]

    def test_tokens_sorted_left_to_right(self):
        tokens = [make_token("C", 90, 100), make_token("A", 10, 100), make_token("B", 50, 101)]
        rows = group_rows(tokens)
        assert len(rows) == 1
        assert [t.text for t in rows[0].tokens] == ["A", "B", "C"]

    def test_anchor_is_first_token_of_row(self):
        tokens = [make_token("A", 0, 100), make_token("B", 20, 97), make_token("C", 40, 80)]
        rows = group_rows(tokens)
        assert rows[0].anchor_y == 100
        assert rows[1].anchor_y == 80

    def test_drift_measured_from_anchor(self):
        # Each token is within tolerance of its neighbour but not of the row anchor
        tokens = [make_token("A", 0, 100), make_token("B", 20, 96), make_token("C", 40, 92)]
        rows = group_rows(tokens, tolerance=5.0)
        assert [[t.text for t in row.tokens] for row in rows] == [["A", "B"], ["C"]]

    def test_explicit_tolerance(self):
        tokens = tokens_at([100, 95, 90])
        assert len(group_rows(tokens, tolerance=20)) == 1
        assert len(group_rows(tokens, tolerance=1)) == 3

    def test_blank_tokens_still_form_rows(self):
        tokens = [make_token("A", 0, 100), make_token("", 0, 80), make_token("B", 0, 60)]
        rows = group_rows(tokens)
        assert len(rows) == 3
        assert rows[1].qualifying_count == 0


class TestRow:

    def test_content_tokens_skip_empty(self):
        row = Row(anchor_y=10, tokens=(make_token("A", 0, 10), make_token("", 20, 10), make_token("B", 40, 10)))
        assert [t.text for t in row.content_tokens] == ["A", "B"]
        assert row.qualifying_count == 2
        assert row.text == "A B"

    def test_is_bold(self):
        row = Row(anchor_y=10, tokens=(make_token("A", 0, 10, font_name="Arial-BoldMT"), make_token("B", 40, 10)))
        assert row.is_bold is True

    def test_not_bold(self):
        row = Row(anchor_y=10, tokens=(make_token("A", 0, 10, font_name="ArialMT"),))
        assert row.is_bold is False
