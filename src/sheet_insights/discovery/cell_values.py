"""Cell value classification and coercion.

Pure-function module using only the Python stdlib. Every analyzer reads raw grid
cells through these helpers so the missing/number/date rules stay identical
across passes.
"""

from __future__ import annotations

import json
import math
import re
import sys
from datetime import date, datetime
from enum import Enum
from typing import Any


class CellKind(str, Enum):
    """Closed set of shapes a grid cell can take."""

    MISSING = "missing"
    NUMBER = "number"
    DATE = "date"
    TEXT = "text"


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

_NUMBER_RE = re.compile(r"^[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?$")

_DATE_FORMATS: list[str] = [
    "%Y-%m-%dT%H:%M:%S.%f",
    "%Y-%m-%dT%H:%M:%S",
    "%Y-%m-%dT%H:%M",
    "%Y-%m-%d %H:%M:%S",
    "%Y-%m-%d %H:%M",
    "%Y-%m-%d",
    "%Y/%m/%d",
    "%Y-%m",
    "%m/%d/%Y",
    "%d/%m/%Y",
    "%m/%d/%Y %H:%M",
    "%d/%m/%Y %H:%M",
    "%m-%d-%Y",
    "%d-%m-%Y",
    "%d.%m.%Y",
    "%b %d %Y",
    "%b %d, %Y",
    "%B %d %Y",
    "%B %d, %Y",
    "%d %b %Y",
    "%d %B %Y",
    "%b %Y",
    "%B %Y",
    "%a, %d %b %Y %H:%M:%S",
]


def is_missing(value: Any) -> bool:
    """Return True for absent cells: ``None`` or the empty string."""
    return value is None or value == ""


def parse_number(value: Any) -> float | None:
    """Parse *value* as a finite number, returning None when it is not one."""
    if value is None:
        return None
    if isinstance(value, bool):
        return 1.0 if value else 0.0
    if isinstance(value, (int, float)):
        try:
            num = float(value)
        except OverflowError:
            return None
        return num if math.isfinite(num) else None
    if isinstance(value, str):
        stripped = value.strip()
        if not _NUMBER_RE.match(stripped):
            return None
        num = float(stripped)
        return num if math.isfinite(num) else None
    return None


def parse_date(value: Any) -> datetime | None:
    """Leniently parse *value* as a calendar date.

    Plain numbers never count as dates, even when a permissive parser
    would accept them as a year.
    """
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    if not isinstance(value, str):
        return None
    stripped = value.strip()
    if not stripped or parse_number(stripped) is not None:
        return None
    candidate = stripped[:-1] if stripped.endswith("Z") else stripped
    try:
        return datetime.fromisoformat(candidate)
    except ValueError:
        pass
    for fmt in _DATE_FORMATS:
        try:
            return datetime.strptime(stripped, fmt)
        except ValueError:
            continue
    return None


def classify_cell(value: Any) -> CellKind:
    """Tag a raw cell with its :class:`CellKind`."""
    if is_missing(value):
        return CellKind.MISSING
    if parse_number(value) is not None:
        return CellKind.NUMBER
    if parse_date(value) is not None:
        return CellKind.DATE
    return CellKind.TEXT


def zero_filled(value: Any) -> float:
    """Numeric value of a cell, with missing and non-numeric cells as 0."""
    num = parse_number(value)
    return num if num is not None else 0.0


def _canonical(value: Any) -> Any:
    # integral floats serialize like ints, so 1 and 1.0 share a key
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


def cell_key(value: Any) -> str:
    """Canonical serialization of a cell; ``"1"`` and ``1`` stay distinct."""
    return json.dumps(_canonical(value), default=str, ensure_ascii=False)


def row_key(row: list[Any]) -> str:
    """Canonical serialization of a whole row, cell order included."""
    return json.dumps([_canonical(v) for v in row], default=str, ensure_ascii=False)


def round_half_up(value: float) -> int:
    """Round to the nearest integer with .5 going towards +infinity.

    Infinities clamp to the largest finite float and NaN rounds to 0.
    """
    if math.isnan(value):
        return 0
    if math.isinf(value):
        value = math.copysign(sys.float_info.max, value)
    return int(math.floor(value + 0.5))
