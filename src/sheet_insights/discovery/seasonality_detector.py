"""Seasonality detection for spreadsheet grids.

Not implemented in this version: periodic patterns are never reported.
The pass exists so the pattern set keeps a stable shape for callers.
"""

from __future__ import annotations

from sheet_insights.discovery.models import Dataset


def detect_seasonality(dataset: Dataset) -> list[dict]:
    """Return seasonal patterns found in *dataset*; always empty for now."""
    return []
