"""Apply a parsed QueryIntent to an in-memory table."""
from __future__ import annotations

import math
from typing import Any, Dict, List, Optional, Sequence, Tuple

from tablekit.engine.query_parser import QueryIntent, QueryType
from tablekit.engine.type_inference import numeric_columns
from tablekit.engine.values import (
    UNKNOWN_LABEL,
    Row,
    Table,
    group_label,
    is_missing,
    numeric_values,
    to_text,
)
from tablekit.errors import AggregateOverflowError
from tablekit.utils.logging import log_event


def _column_stats(table: Table, column: str, *, with_extremes: bool) -> Dict[str, Any]:
    values = numeric_values(table, column)
    # a column without a single parseable value is left out entirely
    if not values:
        return {}
    total = sum(values)
    if not math.isfinite(total):
        raise AggregateOverflowError(column)
    stats: Dict[str, Any] = {
        f"count_{column}": len(values),
        f"sum_{column}": total,
        f"avg_{column}": total / len(values),
    }
    if with_extremes:
        stats[f"min_{column}"] = min(values)
        stats[f"max_{column}"] = max(values)
    return stats


def execute_aggregate(table: Table, columns: Sequence[str]) -> Table:
    result: Row = {}
    for col in numeric_columns(table, columns):
        result.update(_column_stats(table, col, with_extremes=True))
    return [result]


def execute_group_by(table: Table, columns: Sequence[str], group_column: str) -> Table:
    # dict preserves first-seen order of the group labels
    groups: Dict[str, List[Row]] = {}
    keys: Dict[str, Any] = {}
    for row in table:
        value = row.get(group_column)
        label = group_label(value)
        if label not in groups:
            groups[label] = []
            keys[label] = UNKNOWN_LABEL if is_missing(value) else value
        groups[label].append(row)

    result: Table = []
    for label, group_rows in groups.items():
        out: Row = {group_column: keys[label]}
        # numeric columns are classified on the group's own rows
        for col in numeric_columns(group_rows, columns):
            out.update(_column_stats(group_rows, col, with_extremes=False))
        result.append(out)
    return result


def parse_equality(clause: str) -> Optional[Tuple[str, str]]:
    """Split ``column = value`` at the first '='. None when there is no test."""
    column, sep, value = clause.partition("=")
    column = column.strip()
    if not sep or not column:
        return None
    return column, value.strip().strip("'\"")


def execute_filter(table: Table, clause: str) -> Table:
    condition = parse_equality(clause)
    if condition is None:
        return list(table)
    column, expected = condition
    # compare rendered text, never numbers
    return [row for row in table if to_text(row.get(column)) == expected]


def execute(
    table: Table,
    columns: Sequence[str],
    intent: QueryIntent,
) -> Tuple[Table, QueryType]:
    """Run the intent and return (result_table, query_type)."""
    query_type = intent.query_type

    if query_type is QueryType.AGGREGATE:
        result = execute_aggregate(table, columns)
    elif query_type is QueryType.GROUP_BY:
        group_column = intent.group_column
        if not group_column or group_column not in columns:
            log_event("executor.group_by.degraded", {"group_column": group_column})
            return table, QueryType.SELECT
        result = execute_group_by(table, columns, group_column)
    elif query_type is QueryType.FILTER:
        result = execute_filter(table, intent.filter_clause or "")
    else:
        result = table

    log_event(
        "executor.done",
        {"query_type": query_type.value, "rows_in": len(table), "rows_out": len(result)},
    )
    return result, query_type
