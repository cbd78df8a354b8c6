"""Naive trend forecasting for numeric metrics.

Projects the column average forward by a straight-line trend taken from
the first and last values. No seasonality, no regression fit; it is meant
as a rough directional hint, not a model.
"""

from __future__ import annotations

import math

from sheet_insights.discovery.cell_values import round_half_up, zero_filled
from sheet_insights.discovery.models import Dataset, ForecastPrediction, ForecastRecord
from sheet_insights.discovery.type_inference import numeric_column_indices

MAX_METRICS = 2

# (step, period label, confidence)
_HORIZON: list[tuple[int, str, float]] = [
    (1, "Next period", 0.75),
    (2, "2 periods", 0.65),
    (3, "3 periods", 0.55),
]


def linear_trend(values: list[float]) -> float:
    """Per-step trend estimate: (last - first) / count."""
    if len(values) <= 1:
        return 0.0
    n = len(values)
    trend = (values[-1] - values[0]) / n
    if not math.isfinite(trend):
        trend = values[-1] / n - values[0] / n
    return trend


def series_mean(values: list[float]) -> float:
    """Arithmetic mean that stays finite for finite values near the float limit."""
    if not values:
        return 0.0
    n = len(values)
    mean = sum(values) / n
    if not math.isfinite(mean):
        mean = sum(v / n for v in values)
    return mean


def forecast_series(metric: str, values: list[float]) -> ForecastRecord:
    """Three-step projection of *values* from their average and trend."""
    average = series_mean(values)
    trend = linear_trend(values)
    return ForecastRecord(
        metric=metric,
        predictions=[
            ForecastPrediction(
                period=label,
                value=round_half_up(average + trend * step),
                confidence=confidence,
            )
            for step, label, confidence in _HORIZON
        ],
    )


def generate_forecasts(dataset: Dataset) -> list[ForecastRecord]:
    """Forecast the first two fully numeric columns in header order.

    Missing cells count as 0 in both the average and the trend.
    """
    forecasts: list[ForecastRecord] = []
    for index in numeric_column_indices(dataset)[:MAX_METRICS]:
        values = [zero_filled(v) for v in dataset.column(index)]
        forecasts.append(forecast_series(dataset.headers[index], values))
    return forecasts
