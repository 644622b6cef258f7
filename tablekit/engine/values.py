"""Helpers for the loosely typed scalar values carried by table rows.

Rows arrive from CSV/JSON ingestion, so a cell can be a number, a numeric
string, free text, a boolean or null. Every engine component goes through these
helpers instead of trusting the declared column semantics.
"""
from __future__ import annotations

import math
import numbers
from typing import Any, Dict, Iterable, List, Optional

import pandas as pd

Row = Dict[str, Any]
Table = List[Row]

UNKNOWN_LABEL = "Unknown"


def _numeric_candidate(value: Any) -> Any:
    # booleans and containers never count as numbers
    if isinstance(value, bool):
        return None
    if isinstance(value, numbers.Real):
        try:
            return float(value)
        except (OverflowError, ValueError):
            return None
    if isinstance(value, str):
        return value.strip()
    return None


def numeric_series(values: Iterable[Any]) -> pd.Series:
    """Coerce loose cells to float64; NaN wherever a cell is not a finite number."""
    raw = pd.Series([_numeric_candidate(v) for v in values], dtype=object)
    parsed = pd.to_numeric(raw, errors="coerce").astype("float64")
    # "inf"/"nan" text parses, but only finite numbers count
    return parsed.where(parsed.abs() < math.inf)


def is_missing(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return value == ""
    # pandas hands back NaN for empty cells
    return isinstance(value, float) and math.isnan(value)


def to_text(value: Any) -> Optional[str]:
    """Render a cell as text the way it reads in JSON (true/false, 3 not 3.0)."""
    if value is None:
        return None
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, numbers.Integral):
        return str(int(value))
    if isinstance(value, numbers.Real):
        number = float(value)
        if math.isfinite(number) and number.is_integer():
            return str(int(number))
        return str(number)
    return str(value)


def group_label(value: Any) -> str:
    # missing keys are bucketed together
    if is_missing(value):
        return UNKNOWN_LABEL
    return to_text(value) or UNKNOWN_LABEL


def column_numbers(table: Table, column: str) -> pd.Series:
    """One float per row (NaN when the cell does not parse), aligned with the table."""
    return numeric_series(row.get(column) for row in table)


def numeric_values(table: Table, column: str) -> List[float]:
    """Collect the parseable numbers of a column, in row order."""
    return [float(v) for v in column_numbers(table, column).dropna()]
