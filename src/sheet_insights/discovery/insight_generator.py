"""Insight generation: turns analysis signals into ranked findings.

Rules run in a fixed order (quality, correlations, outliers, volume) and
each fires at most once per triggering signal, so callers can take the
first N insights as the most important ones.
"""

from __future__ import annotations

import logging

from sheet_insights.discovery.cell_values import round_half_up
from sheet_insights.discovery.correlation_engine import strong_correlations
from sheet_insights.discovery.models import (
    DataAnalysis,
    Dataset,
    Impact,
    Insight,
    InsightCategory,
    OutlierImpact,
)

logger = logging.getLogger(__name__)

QUALITY_THRESHOLD = 80
LARGE_DATASET_ROWS = 5000


def generate_insights(dataset: Dataset, analysis: DataAnalysis) -> list[Insight]:
    """Derive human-readable insights from *analysis*."""
    insights: list[Insight] = []
    quality = analysis.summary.data_quality

    # 1. Data quality
    if quality < QUALITY_THRESHOLD:
        insights.append(Insight(
            id="data-quality",
            title="Data Quality Needs Attention",
            description=(
                f"Data quality is at {quality}%, indicating inconsistencies "
                f"that may affect the analysis."
            ),
            impact=Impact.HIGH,
            category=InsightCategory.RISK,
            supporting_data=[quality],
            confidence=90,
        ))

    # 2. Strong correlations
    for corr in strong_correlations(analysis.patterns.correlations):
        first, second = corr.variables
        insights.append(Insight(
            id=f"correlation-{first}-{second}",
            title="Strong Correlation Identified",
            description=(
                f"{first} and {second} show a correlation of "
                f"{corr.strength * 100:.1f}%, suggesting a significant relationship."
            ),
            impact=Impact.MEDIUM,
            category=InsightCategory.OPPORTUNITY,
            supporting_data=[first, second],
            confidence=round_half_up(corr.significance * 100),
        ))

    # 3. High-impact outliers
    for outlier in analysis.patterns.outliers:
        if outlier.impact != OutlierImpact.HIGH:
            continue
        insights.append(Insight(
            id=f"outlier-{outlier.field}",
            title=f"Outliers in {outlier.field}",
            description=(
                f"Detected {len(outlier.values)} outlier values in {outlier.field}, "
                f"which may indicate data errors or exceptional events."
            ),
            impact=Impact.MEDIUM,
            category=InsightCategory.RISK,
            supporting_data=list(outlier.values),
            confidence=85,
        ))

    # 4. Volume
    if dataset.total_rows > LARGE_DATASET_ROWS:
        insights.append(Insight(
            id="large-dataset",
            title="Robust Dataset for Analysis",
            description=(
                f"With {dataset.total_rows:,} records, the dataset offers a solid "
                f"base for reliable statistical analysis."
            ),
            impact=Impact.HIGH,
            category=InsightCategory.OPPORTUNITY,
            supporting_data=[dataset.total_rows],
            confidence=95,
        ))

    logger.debug("Generated %d insights", len(insights))
    return insights
