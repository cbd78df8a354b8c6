"""Tests for the quality_scorer module.

Covers completeness, the duplicate and consistency penalties, the overall
quality score, trend hints, and empty or ragged grids.
"""

from __future__ import annotations

import pytest

from sheet_insights.discovery.models import Dataset
from sheet_insights.discovery.quality_scorer import (
    TREND_CATEGORICAL,
    TREND_MULTI_NUMERIC,
    TREND_TEMPORAL,
    assess_data_quality,
    build_summary,
    calculate_completeness,
    consistency_penalty,
    duplicate_penalty,
    duplicate_row_count,
    identify_trends,
)


# -------------------------------------------------------------------------
# Helpers / fixtures
# -------------------------------------------------------------------------

def _sales_sheet() -> Dataset:
    return Dataset(
        headers=["name", "amount"],
        rows=[["A", "100"], ["B", "200"], ["A", "100"]],
    )


_SAMPLE_SHEETS = [
    Dataset(headers=[], rows=[]),
    Dataset(headers=["a"], rows=[]),
    Dataset(headers=[], rows=[[1, 2]]),
    Dataset(headers=["a", "b"], rows=[[None, ""], ["", None]]),
    Dataset(headers=["a"], rows=[["x"]] * 50),
    Dataset(headers=["n", "m"], rows=[[1, "a"], ["b", 2], [3, 4], [5, None], [7, 8]]),
    _sales_sheet(),
]


# =========================================================================
# 1. Completeness
# =========================================================================

class TestCalculateCompleteness:

    def test_full_sheet(self):
        assert calculate_completeness(_sales_sheet()) == 100

    def test_half_filled(self):
        ds = Dataset(headers=["a", "b"], rows=[[1, None], ["", 2]])
        assert calculate_completeness(ds) == 50

    def test_ragged_rows_use_header_width(self):
        ds = Dataset(headers=["a", "b", "c"], rows=[[1], [1, 2, 3, 4]])
        # 4 of 6 declared cells filled; the fourth cell of row 2 is ignored
        assert calculate_completeness(ds) == 67

    def test_no_rows(self):
        assert calculate_completeness(Dataset(headers=["a", "b"], rows=[])) == 0

    def test_no_columns(self):
        assert calculate_completeness(Dataset(headers=[], rows=[[1, 2]])) == 0

    def test_zero_is_filled(self):
        ds = Dataset(headers=["a"], rows=[[0], [False]])
        assert calculate_completeness(ds) == 100


# =========================================================================
# 2. Duplicates
# =========================================================================

class TestDuplicates:

    def test_one_duplicate(self):
        assert duplicate_row_count(_sales_sheet()) == 1

    def test_penalty_scaled_to_twenty(self):
        assert duplicate_penalty(_sales_sheet()) == pytest.approx(20 / 3)

    def test_cell_order_matters(self):
        ds = Dataset(headers=["a", "b"], rows=[["x", "y"], ["y", "x"]])
        assert duplicate_row_count(ds) == 0

    def test_string_and_number_differ(self):
        ds = Dataset(headers=["a"], rows=[["1"], [1]])
        assert duplicate_row_count(ds) == 0

    def test_integral_float_matches_int(self):
        ds = Dataset(headers=["name", "qty"], rows=[["A", 1], ["A", 1.0]])
        assert duplicate_row_count(ds) == 1

    def test_triplicate_counts_twice(self):
        ds = Dataset(headers=["a"], rows=[["x"], ["x"], ["x"]])
        assert duplicate_row_count(ds) == 2

    def test_no_rows(self):
        assert duplicate_penalty(Dataset(headers=["a"], rows=[])) == 0.0

    def test_doubling_rows_increases_penalty(self):
        ds = _sales_sheet()
        doubled = Dataset(headers=ds.headers, rows=ds.rows + ds.rows)
        assert duplicate_penalty(doubled) > duplicate_penalty(ds)
        assert assess_data_quality(doubled) <= assess_data_quality(ds)


# =========================================================================
# 3. Consistency
# =========================================================================

class TestConsistencyPenalty:

    def test_clean_numeric_column(self):
        ds = Dataset(headers=["v"], rows=[[1], [2], [3]])
        assert consistency_penalty(ds) == 0.0

    def test_mostly_numeric_column(self):
        ds = Dataset(headers=["v"], rows=[[1], [2], [3], ["x"]])
        assert consistency_penalty(ds) == pytest.approx(2.5)

    def test_mostly_text_column_not_penalized(self):
        ds = Dataset(headers=["v"], rows=[[1], ["a"], ["b"]])
        assert consistency_penalty(ds) == 0.0

    def test_exactly_half_not_penalized(self):
        ds = Dataset(headers=["v"], rows=[[1], ["a"]])
        assert consistency_penalty(ds) == 0.0

    def test_missing_values_ignored(self):
        ds = Dataset(headers=["v"], rows=[[1], [None], [""], [4]])
        assert consistency_penalty(ds) == 0.0

    def test_penalties_sum_across_columns(self):
        ds = Dataset(
            headers=["a", "b"],
            rows=[[1, 1], [2, 2], [3, 3], ["x", "y"]],
        )
        assert consistency_penalty(ds) == pytest.approx(5.0)


# =========================================================================
# 4. Overall score
# =========================================================================

class TestAssessDataQuality:

    def test_duplicate_lowers_score(self):
        assert assess_data_quality(_sales_sheet()) == 93

    def test_rounds_half_up(self):
        ds = Dataset(headers=["v"], rows=[[1], [2], [3], ["x"]])
        assert assess_data_quality(ds) == 98

    def test_clean_sheet_is_perfect(self):
        ds = Dataset(headers=["a", "b"], rows=[["x", 1], ["y", 2]])
        assert assess_data_quality(ds) == 100

    def test_empty_sheet(self):
        assert assess_data_quality(Dataset(headers=["a"], rows=[])) == 100

    @pytest.mark.parametrize("ds", _SAMPLE_SHEETS)
    def test_scores_in_range(self, ds):
        assert 0 <= assess_data_quality(ds) <= 100
        assert 0 <= calculate_completeness(ds) <= 100


# =========================================================================
# 5. Trends
# =========================================================================

class TestIdentifyTrends:

    def test_temporal(self):
        ds = Dataset(headers=["date", "sales"], rows=[["2024-01-01", 10], ["2024-01-02", 20]])
        assert identify_trends(ds) == [TREND_TEMPORAL]

    def test_temporal_only_looks_at_first_five_rows(self):
        rows = [["x"]] * 5 + [["2024-01-01"]]
        ds = Dataset(headers=["when"], rows=rows)
        assert TREND_TEMPORAL not in identify_trends(ds)

    def test_multi_numeric(self):
        ds = Dataset(headers=["a", "b"], rows=[[1, 10], [2, 20]])
        assert identify_trends(ds) == [TREND_MULTI_NUMERIC]

    def test_categorical(self):
        ds = Dataset(headers=["region"], rows=[["N"], ["S"], ["N"], ["S"], ["N"]])
        assert identify_trends(ds) == [TREND_CATEGORICAL]

    def test_integral_floats_count_as_same_category(self):
        ds = Dataset(headers=["tier"], rows=[[1], [1.0], [2], [2.0], [1]])
        assert identify_trends(ds) == [TREND_CATEGORICAL]

    def test_constant_column_not_categorical(self):
        ds = Dataset(headers=["region"], rows=[["N"]] * 5)
        assert identify_trends(ds) == []

    def test_fixed_order(self):
        ds = Dataset(
            headers=["date", "region", "units", "revenue"],
            rows=[
                ["2024-01-01", "N", 1, 10],
                ["2024-01-02", "N", 2, 20],
                ["2024-01-03", "S", 3, 30],
                ["2024-01-04", "N", 4, 40],
                ["2024-01-05", "S", 5, 50],
            ],
        )
        assert identify_trends(ds) == [TREND_TEMPORAL, TREND_MULTI_NUMERIC, TREND_CATEGORICAL]

    def test_empty(self):
        assert identify_trends(Dataset(headers=["a"], rows=[])) == []


class TestBuildSummary:

    def test_scenario_duplicate_sales(self):
        summary = build_summary(_sales_sheet())
        assert summary.total_records == 3
        assert summary.completeness == 100
        assert summary.data_quality < 100

    def test_empty_dataset(self):
        summary = build_summary(Dataset(headers=["a", "b"], rows=[]))
        assert summary.total_records == 0
        assert summary.completeness == 0
        assert summary.data_quality == 100
        assert summary.trends == []
