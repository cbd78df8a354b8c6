"""Dataclasses and closed enumerations shared by the analysis passes."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from sheet_insights.discovery.cell_values import is_missing


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------


class ColumnType(str, Enum):
    NUMBER = "number"
    CURRENCY = "currency"
    DATE = "date"
    TEXT = "text"


class OutlierImpact(str, Enum):
    HIGH = "Alto"
    MODERATE = "Moderado"


class Impact(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class InsightCategory(str, Enum):
    PERFORMANCE = "performance"
    TREND = "trend"
    OPPORTUNITY = "opportunity"
    RISK = "risk"


class Priority(str, Enum):
    CRITICAL = "critical"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class Timeframe(str, Enum):
    IMMEDIATE = "immediate"
    SHORT_TERM = "short-term"
    MEDIUM_TERM = "medium-term"
    LONG_TERM = "long-term"


class ChartType(str, Enum):
    BAR = "bar"
    LINE = "line"
    PIE = "pie"
    DOUGHNUT = "doughnut"


# ---------------------------------------------------------------------------
# Input
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Dataset:
    """A materialized spreadsheet grid.

    Rows may be shorter or longer than ``headers``; any index beyond a
    row's width reads as missing. The engine only reads datasets.
    """

    headers: list[str]
    rows: list[list[Any]]
    file_name: str = ""
    file_type: str = ""

    @property
    def total_rows(self) -> int:
        return len(self.rows)

    @property
    def total_columns(self) -> int:
        return len(self.headers)

    def cell(self, row: list[Any], index: int) -> Any:
        """Return the cell at *index* of *row*, or None past its width."""
        return row[index] if index < len(row) else None

    def column(self, index: int) -> list[Any]:
        """All cells of column *index* in row order, missing cells included."""
        return [self.cell(row, index) for row in self.rows]

    def valid_values(self, index: int) -> list[Any]:
        """Non-missing cells of column *index* in row order."""
        return [v for v in self.column(index) if not is_missing(v)]


# ---------------------------------------------------------------------------
# Analysis results
# ---------------------------------------------------------------------------


@dataclass
class AnalysisSummary:
    total_records: int
    data_quality: int  # 0-100
    completeness: int  # 0-100
    trends: list[str] = field(default_factory=list)


@dataclass
class CorrelationRecord:
    """Absolute Pearson correlation between two numeric columns."""

    variables: tuple[str, str]
    strength: float  # |r|, 0-1
    significance: float  # 0.95 or 0.75


@dataclass
class OutlierRecord:
    field: str
    values: list[float]
    impact: OutlierImpact


@dataclass
class ForecastPrediction:
    period: str
    value: int
    confidence: float


@dataclass
class ForecastRecord:
    metric: str
    predictions: list[ForecastPrediction]


@dataclass
class PatternSet:
    correlations: list[CorrelationRecord] = field(default_factory=list)
    outliers: list[OutlierRecord] = field(default_factory=list)
    seasonality: list[dict] = field(default_factory=list)


@dataclass
class DataAnalysis:
    """Summary, patterns, and forecasts for one dataset."""

    summary: AnalysisSummary
    patterns: PatternSet
    forecasts: list[ForecastRecord]


@dataclass
class Insight:
    id: str
    title: str
    description: str
    impact: Impact
    category: InsightCategory
    supporting_data: list[Any]
    confidence: int  # 0-100


@dataclass
class Recommendation:
    id: str
    title: str
    description: str
    priority: Priority
    timeframe: Timeframe
    expected_impact: str
    resources: list[str]
    kpis: list[str]


@dataclass
class ChartSuggestion:
    chart_type: ChartType
    title: str
    x_axis: str
    y_axis: str
    data: list[dict]  # [{"x": ..., "y": float}]


@dataclass
class AnalysisReport:
    """Everything a presentation layer needs to render one dataset."""

    file_name: str
    file_type: str
    total_rows: int
    total_columns: int
    column_types: dict[str, ColumnType]
    analysis: DataAnalysis
    insights: list[Insight]
    recommendations: list[Recommendation]
    charts: list[ChartSuggestion]
    preview: list[list[Any]]
