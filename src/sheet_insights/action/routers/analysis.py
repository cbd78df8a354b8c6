"""Spreadsheet analysis routes."""

import logging
from dataclasses import asdict
from typing import Any

from fastapi import APIRouter, HTTPException, status
from pydantic import BaseModel, Field

from sheet_insights.config.settings import settings
from sheet_insights.discovery.chart_advisor import suggest_charts
from sheet_insights.discovery.engine import analyze_data, build_report
from sheet_insights.discovery.insight_generator import generate_insights
from sheet_insights.discovery.models import Dataset
from sheet_insights.discovery.recommendation_engine import generate_recommendations
from sheet_insights.discovery.type_inference import infer_column_types

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/analysis", tags=["analysis"])


# ---------------------------------------------------------------------------
# Request Models
# ---------------------------------------------------------------------------


class DatasetPayload(BaseModel):
    headers: list[str]
    rows: list[list[Any]] = Field(default_factory=list)
    file_name: str = ""
    file_type: str = ""


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _to_dataset(payload: DatasetPayload) -> Dataset:
    """Build a Dataset from a request body, enforcing the row limit."""
    if len(payload.rows) > settings.max_rows:
        logger.warning(
            "Rejected %s: %d rows exceeds limit of %d",
            payload.file_name or "<unnamed>", len(payload.rows), settings.max_rows,
        )
        raise HTTPException(
            status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            detail=f"Dataset has {len(payload.rows)} rows; the limit is {settings.max_rows}",
        )
    return Dataset(
        headers=list(payload.headers),
        rows=[list(row) for row in payload.rows],
        file_name=payload.file_name,
        file_type=payload.file_type,
    )


def _serialize(obj: Any) -> Any:
    """Dataclass results to plain JSON-ready structures."""
    if isinstance(obj, list):
        return [_serialize(item) for item in obj]
    return asdict(obj)


# ---------------------------------------------------------------------------
# Routes
# ---------------------------------------------------------------------------


@router.post("")
def analyze_report(payload: DatasetPayload) -> dict:
    """Full report: analysis, insights, recommendations, column types, charts, preview."""
    dataset = _to_dataset(payload)
    report = build_report(
        dataset,
        max_correlation_columns=settings.max_correlation_columns,
        preview_rows=settings.preview_rows,
    )
    return _serialize(report)


@router.post("/summary")
def analyze_summary(payload: DatasetPayload) -> dict:
    """Summary, patterns, and forecasts only."""
    dataset = _to_dataset(payload)
    analysis = analyze_data(dataset, max_correlation_columns=settings.max_correlation_columns)
    return _serialize(analysis)


@router.post("/insights")
def analyze_insights(payload: DatasetPayload) -> dict:
    """Insights and recommendations derived from a fresh analysis."""
    dataset = _to_dataset(payload)
    analysis = analyze_data(dataset, max_correlation_columns=settings.max_correlation_columns)
    insights = generate_insights(dataset, analysis)
    recommendations = generate_recommendations(dataset, analysis, insights)
    return {
        "insights": _serialize(insights),
        "recommendations": _serialize(recommendations),
    }


@router.post("/column-types")
def analyze_column_types(payload: DatasetPayload) -> dict:
    """Inferred type per column."""
    dataset = _to_dataset(payload)
    return {"column_types": infer_column_types(dataset)}


@router.post("/charts")
def analyze_charts(payload: DatasetPayload) -> dict:
    """Chart suggestions with sample points."""
    dataset = _to_dataset(payload)
    return {"charts": _serialize(suggest_charts(dataset))}
