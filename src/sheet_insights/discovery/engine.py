"""Main analysis engine orchestrator: runs all passes in sequence."""

from __future__ import annotations

import logging
import time
from typing import Any

from sheet_insights.discovery.chart_advisor import suggest_charts
from sheet_insights.discovery.correlation_engine import DEFAULT_MAX_COLUMNS, find_correlations
from sheet_insights.discovery.insight_generator import generate_insights
from sheet_insights.discovery.models import AnalysisReport, DataAnalysis, Dataset, PatternSet
from sheet_insights.discovery.outlier_detector import detect_outliers
from sheet_insights.discovery.quality_scorer import build_summary
from sheet_insights.discovery.recommendation_engine import generate_recommendations
from sheet_insights.discovery.seasonality_detector import detect_seasonality
from sheet_insights.discovery.trend_forecaster import generate_forecasts
from sheet_insights.discovery.type_inference import infer_column_types

logger = logging.getLogger(__name__)

DEFAULT_PREVIEW_ROWS = 10


class _PassTracker:
    """Logs per-pass counts and timings; timings never reach the results."""

    def __init__(self, label: str) -> None:
        self._label = label
        self._results: list[dict] = []

    def record(self, name: str, count: int, t0: float) -> None:
        entry = {"pass": name, "count": count, "duration_ms": _elapsed_ms(t0)}
        self._results.append(entry)
        logger.debug("Analysis %s: %s found %d in %d ms", self._label, name, count, entry["duration_ms"])

    @property
    def total_ms(self) -> int:
        return sum(r["duration_ms"] for r in self._results)


def _elapsed_ms(t0: float) -> int:
    return int((time.monotonic() - t0) * 1000)


def _label(dataset: Dataset) -> str:
    return dataset.file_name or "<unnamed>"


def analyze_data(
    dataset: Dataset,
    *,
    max_correlation_columns: int | None = DEFAULT_MAX_COLUMNS,
) -> DataAnalysis:
    """Run the statistical passes over *dataset*.

    1. Summary (completeness, quality score, trend hints)
    2. Correlations between numeric columns
    3. Outliers per column
    4. Seasonality (always empty)
    5. Naive forecasts for the first two numeric columns
    """
    tracker = _PassTracker(_label(dataset))

    t0 = time.monotonic()
    summary = build_summary(dataset)
    tracker.record("summary", len(summary.trends), t0)

    t0 = time.monotonic()
    correlations = find_correlations(dataset, max_columns=max_correlation_columns)
    tracker.record("correlations", len(correlations), t0)

    t0 = time.monotonic()
    outliers = detect_outliers(dataset)
    tracker.record("outliers", len(outliers), t0)

    t0 = time.monotonic()
    seasonality = detect_seasonality(dataset)
    tracker.record("seasonality", len(seasonality), t0)

    t0 = time.monotonic()
    forecasts = generate_forecasts(dataset)
    tracker.record("forecasts", len(forecasts), t0)

    logger.info(
        "Analyzed %s: %d rows x %d columns, quality=%d, completeness=%d (%d ms)",
        _label(dataset), dataset.total_rows, dataset.total_columns,
        summary.data_quality, summary.completeness, tracker.total_ms,
    )

    return DataAnalysis(
        summary=summary,
        patterns=PatternSet(
            correlations=correlations,
            outliers=outliers,
            seasonality=seasonality,
        ),
        forecasts=forecasts,
    )


def dataset_preview(dataset: Dataset, limit: int = DEFAULT_PREVIEW_ROWS) -> list[list[Any]]:
    """First *limit* rows cut or padded to the header width."""
    width = dataset.total_columns
    return [
        [dataset.cell(row, index) for index in range(width)]
        for row in dataset.rows[:max(0, limit)]
    ]


def build_report(
    dataset: Dataset,
    *,
    max_correlation_columns: int | None = DEFAULT_MAX_COLUMNS,
    preview_rows: int = DEFAULT_PREVIEW_ROWS,
) -> AnalysisReport:
    """Run every pass and bundle the results for a presentation layer."""
    analysis = analyze_data(dataset, max_correlation_columns=max_correlation_columns)
    insights = generate_insights(dataset, analysis)
    recommendations = generate_recommendations(dataset, analysis, insights)
    column_types = infer_column_types(dataset)
    charts = suggest_charts(dataset, column_types)

    logger.info(
        "Report for %s: %d insights, %d recommendations, %d charts",
        _label(dataset), len(insights), len(recommendations), len(charts),
    )

    return AnalysisReport(
        file_name=dataset.file_name,
        file_type=dataset.file_type,
        total_rows=dataset.total_rows,
        total_columns=dataset.total_columns,
        column_types=column_types,
        analysis=analysis,
        insights=insights,
        recommendations=recommendations,
        charts=charts,
        preview=dataset_preview(dataset, preview_rows),
    )
