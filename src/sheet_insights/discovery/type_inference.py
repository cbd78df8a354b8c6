"""Column type inference: number, currency, date, or text per column.

Looks only at a short head sample of each column, so the result is cheap
even for wide sheets.
"""

from __future__ import annotations

import re
from typing import Any

from sheet_insights.discovery.cell_values import CellKind, classify_cell, is_missing
from sheet_insights.discovery.models import ColumnType, Dataset

SAMPLE_SIZE = 10

# R$, $, €, £, ¥ followed by digits with optional thousands separators
# and an optional two-digit decimal part.
_CURRENCY_RE = re.compile(
    r"^(?:R\$|[$€£¥])\s*\d{1,3}(?:[.,\s]?\d{3})*(?:[.,]\d{2})?$"
)


def is_currency(value: Any) -> bool:
    """Return True if *value* is a currency-prefixed amount such as ``$1,200.50``."""
    if value is None:
        return False
    return bool(_CURRENCY_RE.match(str(value).strip()))


def column_sample(dataset: Dataset, index: int, size: int = SAMPLE_SIZE) -> list[Any]:
    """First *size* non-missing values of column *index* in row order."""
    sample: list[Any] = []
    for row in dataset.rows:
        value = dataset.cell(row, index)
        if is_missing(value):
            continue
        sample.append(value)
        if len(sample) >= size:
            break
    return sample


def classify_sample(sample: list[Any]) -> ColumnType:
    """Classify a value sample; the first matching rule wins."""
    if not sample:
        return ColumnType.TEXT
    if any(is_currency(v) for v in sample):
        return ColumnType.CURRENCY
    kinds = [classify_cell(v) for v in sample]
    if all(kind == CellKind.NUMBER for kind in kinds):
        return ColumnType.NUMBER
    if CellKind.DATE in kinds:
        return ColumnType.DATE
    return ColumnType.TEXT


def infer_column_types(dataset: Dataset) -> dict[str, ColumnType]:
    """Map every header to its inferred :class:`ColumnType`.

    With duplicate headers the right-most column of that name wins.
    """
    types: dict[str, ColumnType] = {}
    for index, header in enumerate(dataset.headers):
        types[header] = classify_sample(column_sample(dataset, index))
    return types


def numeric_column_indices(dataset: Dataset) -> list[int]:
    """Indices of columns whose valid values are all numeric.

    Unlike :func:`infer_column_types` this scans the whole column, and a
    column with no valid values is not numeric.
    """
    indices: list[int] = []
    for index in range(len(dataset.headers)):
        values = dataset.valid_values(index)
        if values and all(classify_cell(v) == CellKind.NUMBER for v in values):
            indices.append(index)
    return indices
