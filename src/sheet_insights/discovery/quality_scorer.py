"""Data quality scoring for a spreadsheet grid.

Pure-function module with no external dependencies.
Computes completeness, a 0-100 quality score penalized by duplicate rows
and mixed-type numeric columns, and short trend hints, then combines them
into an :class:`AnalysisSummary`.
"""

from __future__ import annotations

from sheet_insights.discovery.cell_values import (
    cell_key,
    is_missing,
    parse_date,
    parse_number,
    round_half_up,
    row_key,
)
from sheet_insights.discovery.models import AnalysisSummary, Dataset
from sheet_insights.discovery.type_inference import numeric_column_indices

DUPLICATE_WEIGHT = 20
INCONSISTENCY_WEIGHT = 10
TEMPORAL_SCAN_ROWS = 5

TREND_TEMPORAL = "Temporal data detected - trend analysis possible"
TREND_MULTI_NUMERIC = "Multiple numeric metrics - correlations possible"
TREND_CATEGORICAL = "Categorical data identified - segmentation available"


# ---------------------------------------------------------------------------
# Scorers
# ---------------------------------------------------------------------------


def calculate_completeness(dataset: Dataset) -> int:
    """Percentage of non-missing cells over rows x declared columns.

    Cells past the header width are ignored. Returns 0 for a dataset with
    no rows or no columns.
    """
    width = len(dataset.headers)
    total_cells = dataset.total_rows * width
    if total_cells == 0:
        return 0

    filled = 0
    for row in dataset.rows:
        for index in range(width):
            if not is_missing(dataset.cell(row, index)):
                filled += 1

    return round_half_up(filled / total_cells * 100)


def duplicate_row_count(dataset: Dataset) -> int:
    """Number of rows whose full content repeats an earlier row."""
    seen: set[str] = set()
    duplicates = 0
    for row in dataset.rows:
        key = row_key(row)
        if key in seen:
            duplicates += 1
        else:
            seen.add(key)
    return duplicates


def duplicate_penalty(dataset: Dataset) -> float:
    """Duplicate share of all rows, scaled to at most 20 points."""
    if not dataset.rows:
        return 0.0
    return duplicate_row_count(dataset) / dataset.total_rows * DUPLICATE_WEIGHT


def consistency_penalty(dataset: Dataset) -> float:
    """Penalty for mostly-numeric columns that still hold non-numeric values.

    Each column where more than half of the valid values are numeric
    contributes its non-numeric share times 10.
    """
    penalty = 0.0
    for index in range(len(dataset.headers)):
        values = dataset.valid_values(index)
        if not values:
            continue
        numeric = sum(1 for v in values if parse_number(v) is not None)
        if numeric > len(values) * 0.5:
            penalty += (len(values) - numeric) / len(values) * INCONSISTENCY_WEIGHT
    return penalty


def assess_data_quality(dataset: Dataset) -> int:
    """Quality score 0-100: 100 minus duplicate and consistency penalties."""
    score = 100 - duplicate_penalty(dataset) - consistency_penalty(dataset)
    return max(0, round_half_up(score))


# ---------------------------------------------------------------------------
# Trend hints
# ---------------------------------------------------------------------------


def _has_temporal_column(dataset: Dataset) -> bool:
    head = dataset.rows[:TEMPORAL_SCAN_ROWS]
    for index in range(len(dataset.headers)):
        for row in head:
            if parse_date(dataset.cell(row, index)) is not None:
                return True
    return False


def _has_categorical_column(dataset: Dataset) -> bool:
    for index in range(len(dataset.headers)):
        values = dataset.valid_values(index)
        distinct = len({cell_key(v) for v in values})
        if 1 < distinct < len(values) * 0.5:
            return True
    return False


def identify_trends(dataset: Dataset) -> list[str]:
    """Short hints about which analyses the data supports.

    Checks run in a fixed order (temporal, multi-numeric, categorical) and
    each adds at most one message.
    """
    trends: list[str] = []
    if _has_temporal_column(dataset):
        trends.append(TREND_TEMPORAL)
    if len(numeric_column_indices(dataset)) >= 2:
        trends.append(TREND_MULTI_NUMERIC)
    if _has_categorical_column(dataset):
        trends.append(TREND_CATEGORICAL)
    return trends


def build_summary(dataset: Dataset) -> AnalysisSummary:
    return AnalysisSummary(
        total_records=dataset.total_rows,
        data_quality=assess_data_quality(dataset),
        completeness=calculate_completeness(dataset),
        trends=identify_trends(dataset),
    )
