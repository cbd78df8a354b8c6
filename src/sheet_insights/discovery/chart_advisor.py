"""Chart suggestions from inferred column types.

Produces chart configurations (type, axes, and a small point sample) for a
presentation layer to draw. Nothing here renders.
"""

from __future__ import annotations

import math
from typing import Any

from sheet_insights.discovery.cell_values import is_missing, zero_filled
from sheet_insights.discovery.models import ChartSuggestion, ChartType, ColumnType, Dataset
from sheet_insights.discovery.type_inference import infer_column_types

MAX_SUGGESTIONS = 3
MAX_POINTS = 20


def _is_blank(value: Any) -> bool:
    """Cells that carry no plottable content: missing, zero, false, or NaN."""
    if is_missing(value) or value is False:
        return True
    if isinstance(value, (int, float)):
        return value == 0 or (isinstance(value, float) and math.isnan(value))
    return False


def prepare_chart_data(dataset: Dataset, x_column: str, y_column: str) -> list[dict]:
    """Up to 20 ``{"x", "y"}`` points from rows where both cells are set."""
    if x_column not in dataset.headers or y_column not in dataset.headers:
        return []
    x_index = dataset.headers.index(x_column)
    y_index = dataset.headers.index(y_column)

    points: list[dict] = []
    for row in dataset.rows:
        x = dataset.cell(row, x_index)
        y = dataset.cell(row, y_index)
        if _is_blank(x) or _is_blank(y):
            continue
        points.append({"x": x, "y": zero_filled(y)})
        if len(points) >= MAX_POINTS:
            break
    return points


def suggest_charts(
    dataset: Dataset,
    column_types: dict[str, ColumnType] | None = None,
) -> list[ChartSuggestion]:
    """Suggest up to three charts.

    A bar and a pie chart when the sheet has both a numeric and a text
    column; a line chart against the first column when it has two or more
    numeric columns.
    """
    if column_types is None:
        column_types = infer_column_types(dataset)

    numeric = [
        name for name, kind in column_types.items()
        if kind in (ColumnType.NUMBER, ColumnType.CURRENCY)
    ]
    text = [name for name, kind in column_types.items() if kind == ColumnType.TEXT]
    suggestions: list[ChartSuggestion] = []

    if numeric and text:
        data = prepare_chart_data(dataset, text[0], numeric[0])
        suggestions.append(ChartSuggestion(
            chart_type=ChartType.BAR,
            title=f"{numeric[0]} by {text[0]}",
            x_axis=text[0],
            y_axis=numeric[0],
            data=data,
        ))
        suggestions.append(ChartSuggestion(
            chart_type=ChartType.PIE,
            title=f"Distribution by {text[0]}",
            x_axis=text[0],
            y_axis=numeric[0],
            data=list(data),
        ))

    if len(numeric) >= 2:
        x_axis = dataset.headers[0]
        suggestions.append(ChartSuggestion(
            chart_type=ChartType.LINE,
            title=f"{numeric[0]} trend",
            x_axis=x_axis,
            y_axis=numeric[0],
            data=prepare_chart_data(dataset, x_axis, numeric[0]),
        ))

    return suggestions[:MAX_SUGGESTIONS]
