"""Correlation engine: computes pairwise correlations between numeric columns.

Pure functions that take a dataset and find linear relationships between
its numeric columns.
"""

from __future__ import annotations

import logging
import math

from sheet_insights.discovery.cell_values import zero_filled
from sheet_insights.discovery.models import CorrelationRecord, Dataset
from sheet_insights.discovery.type_inference import numeric_column_indices

logger = logging.getLogger(__name__)

MIN_STRENGTH = 0.3
STRONG_STRENGTH = 0.7
DEFAULT_MAX_COLUMNS = 50


def _pearson_terms(x: list[float], y: list[float]) -> tuple[float, float]:
    n = len(x)
    sum_x = sum(x)
    sum_y = sum(y)
    sum_xy = sum(xi * yi for xi, yi in zip(x, y))
    sum_x2 = sum(xi * xi for xi in x)
    sum_y2 = sum(yi * yi for yi in y)
    numerator = n * sum_xy - sum_x * sum_y
    variance_product = (n * sum_x2 - sum_x * sum_x) * (n * sum_y2 - sum_y * sum_y)
    return numerator, variance_product


def _rescaled(values: list[float]) -> list[float]:
    scale = max((abs(v) for v in values), default=0.0)
    if scale == 0 or not math.isfinite(scale):
        return list(values)
    return [v / scale for v in values]


def compute_pearson(x: list[float], y: list[float]) -> float:
    """Pearson correlation via the sum-based formula.

    Uses the paired prefix of both series. Returns 0.0 when fewer than two
    pairs exist or either series has no variance.
    """
    n = min(len(x), len(y))
    if n < 2:
        return 0.0

    x = x[:n]
    y = y[:n]
    numerator, variance_product = _pearson_terms(x, y)
    if not (math.isfinite(numerator) and math.isfinite(variance_product)):
        # r is scale-invariant; shrink both series so the sums fit in a float
        x = _rescaled(x)
        y = _rescaled(y)
        numerator, variance_product = _pearson_terms(x, y)
    if not (math.isfinite(numerator) and math.isfinite(variance_product)):
        return 0.0
    if variance_product <= 0:
        return 0.0

    r = numerator / math.sqrt(variance_product)
    if not math.isfinite(r):
        return 0.0
    # float error can push |r| a hair past 1
    return max(-1.0, min(1.0, r))


def classify_significance(strength: float) -> float:
    """Coarse confidence bucket for a correlation strength."""
    return 0.95 if strength > STRONG_STRENGTH else 0.75


def find_correlations(
    dataset: Dataset,
    max_columns: int | None = DEFAULT_MAX_COLUMNS,
) -> list[CorrelationRecord]:
    """Find numeric column pairs with |r| above 0.3.

    Missing and non-numeric cells are read as 0 so every pair is compared
    over the full row set. Results keep column-scan order (left column
    first, then each column to its right) rather than strength order.

    Args:
        dataset: Grid to scan.
        max_columns: Upper bound on numeric columns considered, since the
            pair scan is quadratic. ``None`` scans every numeric column.
    """
    indices = numeric_column_indices(dataset)
    if max_columns is not None and len(indices) > max_columns:
        logger.warning(
            "Correlation scan limited to the first %d of %d numeric columns (%d skipped)",
            max_columns, len(indices), len(indices) - max_columns,
        )
        indices = indices[:max_columns]

    series = {i: [zero_filled(v) for v in dataset.column(i)] for i in indices}
    records: list[CorrelationRecord] = []

    for pos, i in enumerate(indices):
        for j in indices[pos + 1:]:
            strength = abs(compute_pearson(series[i], series[j]))
            if strength > MIN_STRENGTH:
                records.append(CorrelationRecord(
                    variables=(dataset.headers[i], dataset.headers[j]),
                    strength=strength,
                    significance=classify_significance(strength),
                ))

    logger.debug(
        "Correlation scan: %d numeric columns, %d pairs retained", len(indices), len(records),
    )
    return records


def strong_correlations(records: list[CorrelationRecord]) -> list[CorrelationRecord]:
    """Correlations with strength above 0.7, in discovery order."""
    return [r for r in records if r.strength > STRONG_STRENGTH]
