"""Per-column outlier detection using IQR fences.

Quartiles are read straight off the sorted values at ``floor(n * 0.25)``
and ``floor(n * 0.75)`` (lower order statistic, no interpolation), so the
fences for small columns can differ from textbook quartiles.
"""

from __future__ import annotations

import logging
import math

from sheet_insights.discovery.cell_values import parse_number
from sheet_insights.discovery.models import Dataset, OutlierImpact, OutlierRecord

logger = logging.getLogger(__name__)

MIN_VALUES = 5
IQR_MULTIPLIER = 1.5
HIGH_IMPACT_SHARE = 0.10


def quartile_bounds(values: list[float]) -> tuple[float, float]:
    """Return the (lower, upper) IQR fences for *values*.

    Raises ValueError on an empty list.
    """
    if not values:
        raise ValueError("quartile_bounds needs at least one value")
    ordered = sorted(values)
    n = len(ordered)
    q1 = ordered[math.floor(n * 0.25)]
    q3 = ordered[math.floor(n * 0.75)]
    iqr = q3 - q1
    return q1 - IQR_MULTIPLIER * iqr, q3 + IQR_MULTIPLIER * iqr


def find_outlier_values(values: list[float]) -> list[float]:
    """Values strictly outside the IQR fences, in their original order."""
    lower, upper = quartile_bounds(values)
    return [v for v in values if v < lower or v > upper]


def detect_outliers(dataset: Dataset) -> list[OutlierRecord]:
    """Scan every column for numeric outliers.

    Non-numeric cells are dropped rather than zero-filled. Columns with
    fewer than five numeric values, or with no outliers, are skipped.
    """
    records: list[OutlierRecord] = []

    for index, header in enumerate(dataset.headers):
        numbers = [
            num for num in (parse_number(v) for v in dataset.valid_values(index))
            if num is not None
        ]
        if len(numbers) < MIN_VALUES:
            continue

        outliers = find_outlier_values(numbers)
        if not outliers:
            continue

        impact = (
            OutlierImpact.HIGH
            if len(outliers) > len(numbers) * HIGH_IMPACT_SHARE
            else OutlierImpact.MODERATE
        )
        records.append(OutlierRecord(field=header, values=outliers, impact=impact))
        logger.debug("Column %s: %d outliers of %d values", header, len(outliers), len(numbers))

    return records
