"""Recommendation engine: suggests next actions from an analysis.

Each recommendation is a fixed template switched on by one condition on
the summary, the patterns, or the forecasts. Templates carry no values
from the data itself.
"""

from __future__ import annotations

import logging

from sheet_insights.discovery.correlation_engine import strong_correlations
from sheet_insights.discovery.models import (
    DataAnalysis,
    Dataset,
    Insight,
    Priority,
    Recommendation,
    Timeframe,
)

logger = logging.getLogger(__name__)

QUALITY_THRESHOLD = 80
AUTOMATION_ROWS = 1000


# ---------------------------------------------------------------------------
# Templates
# ---------------------------------------------------------------------------

_TEMPLATES: dict[str, dict] = {
    "improve-data-quality": {
        "title": "Implement a Data Cleaning Process",
        "description": (
            "Establish data validation and cleaning routines to improve the "
            "quality of future analyses."
        ),
        "priority": Priority.HIGH,
        "timeframe": Timeframe.SHORT_TERM,
        "expected_impact": "15-25% improvement in analysis reliability",
        "resources": ["Data analyst", "ETL tooling", "Process documentation"],
        "kpis": ["Data completeness rate", "Quality index", "Processing time"],
    },
    "leverage-correlations": {
        "title": "Explore Identified Relationships",
        "description": (
            "Investigate the strong correlations found to identify optimization "
            "and forecasting opportunities."
        ),
        "priority": Priority.MEDIUM,
        "timeframe": Timeframe.MEDIUM_TERM,
        "expected_impact": "Potential 10-20% improvement in forecast accuracy",
        "resources": ["Data scientist", "Advanced analytics tooling"],
        "kpis": [
            "Forecast accuracy",
            "Response time to changes",
            "ROI of data-driven decisions",
        ],
    },
    "automate-reporting": {
        "title": "Automate Report Generation",
        "description": (
            "Deploy automated dashboards for continuous monitoring of the "
            "identified KPIs."
        ),
        "priority": Priority.MEDIUM,
        "timeframe": Timeframe.MEDIUM_TERM,
        "expected_impact": "60-80% reduction in report preparation time",
        "resources": ["BI developer", "BI platform", "User training"],
        "kpis": ["Report generation time", "Update frequency", "User adoption"],
    },
    "implement-forecasting": {
        "title": "Develop Predictive Models",
        "description": (
            "Build forecasting models on the identified patterns to support "
            "strategic planning."
        ),
        "priority": Priority.HIGH,
        "timeframe": Timeframe.LONG_TERM,
        "expected_impact": "25-40% improvement in planning accuracy",
        "resources": ["Data scientist", "ML infrastructure", "Historical data"],
        "kpis": [
            "Forecast accuracy",
            "Lead time",
            "Impact on strategic decisions",
        ],
    },
}


def _from_template(rec_id: str) -> Recommendation:
    template = _TEMPLATES[rec_id]
    return Recommendation(
        id=rec_id,
        title=template["title"],
        description=template["description"],
        priority=template["priority"],
        timeframe=template["timeframe"],
        expected_impact=template["expected_impact"],
        resources=list(template["resources"]),
        kpis=list(template["kpis"]),
    )


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def generate_recommendations(
    dataset: Dataset,
    analysis: DataAnalysis,
    insights: list[Insight] | None = None,
) -> list[Recommendation]:
    """Prioritized recommendations, in a fixed gate order.

    *insights* is accepted so callers can pass the full signal set; the
    current gates read only the dataset and the analysis.
    """
    fired: list[str] = []

    if analysis.summary.data_quality < QUALITY_THRESHOLD:
        fired.append("improve-data-quality")
    if strong_correlations(analysis.patterns.correlations):
        fired.append("leverage-correlations")
    if dataset.total_rows > AUTOMATION_ROWS:
        fired.append("automate-reporting")
    if analysis.forecasts:
        fired.append("implement-forecasting")

    logger.debug("Recommendations fired: %s", fired)
    return [_from_template(rec_id) for rec_id in fired]
