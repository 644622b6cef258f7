"""Column classification (numeric vs categorical) for in-memory tables."""
from __future__ import annotations

from enum import Enum
from typing import Any, Dict, List, Optional, Sequence

from tablekit.engine.values import Table, column_numbers

# Classification only looks at the head of the table
TYPE_SAMPLE_SIZE = 10


class ColumnKind(str, Enum):
    NUMERIC = "numeric"
    CATEGORICAL = "categorical"


# Input: table, column
# Output: ColumnKind
# Numeric when any value among the first TYPE_SAMPLE_SIZE rows parses as a
# finite number. Later rows are never inspected.
def classify(table: Table, column: str) -> ColumnKind:
    sample = table[:TYPE_SAMPLE_SIZE]
    if column_numbers(sample, column).notna().any():
        return ColumnKind.NUMERIC
    return ColumnKind.CATEGORICAL


def is_numeric_column_full(table: Table, column: str) -> bool:
    """Full-column variant of classify, used by chart recommendations."""
    return bool(column_numbers(table, column).notna().any())


def _resolve_columns(table: Table, columns: Optional[Sequence[str]]) -> List[str]:
    if columns is not None:
        return list(columns)
    if not table:
        return []
    return list(table[0].keys())


def numeric_columns(table: Table, columns: Optional[Sequence[str]] = None) -> List[str]:
    return [
        col for col in _resolve_columns(table, columns)
        if classify(table, col) is ColumnKind.NUMERIC
    ]


def categorical_columns(table: Table, columns: Optional[Sequence[str]] = None) -> List[str]:
    return [
        col for col in _resolve_columns(table, columns)
        if classify(table, col) is ColumnKind.CATEGORICAL
    ]


# Input: table
# Output: summary dict attached to query results
# The column set is whatever the first row carries (result tables from
# AGGREGATE/GROUP_BY have no declared column list).
def summarize(table: Table) -> Dict[str, Any]:
    columns = _resolve_columns(table, None)
    numeric = numeric_columns(table, columns)
    return {
        "row_count": len(table),
        "column_count": len(columns),
        "numeric_columns": numeric,
        "categorical_columns": [c for c in columns if c not in numeric],
    }
