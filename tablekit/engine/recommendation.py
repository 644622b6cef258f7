"""Heuristic advice for a chosen chart type."""
from __future__ import annotations

from typing import List, Optional, Sequence

import pandas as pd

from tablekit.engine.chart_aggregator import ChartType
from tablekit.engine.type_inference import is_numeric_column_full
from tablekit.engine.values import Table, numeric_values

PIE_MAX_CATEGORIES = 10
OUTLIER_STD_FACTOR = 2.0


def count_outliers(values: List[float], factor: float = OUTLIER_STD_FACTOR) -> int:
    """Count values further than ``factor`` population std devs from the mean."""
    if not values:
        return 0
    series = pd.Series(values, dtype="float64")
    mean = float(series.mean())
    std = float(series.std(ddof=0))
    return int(((series - mean).abs() > factor * std).sum())


# Input: table, columns, chart_type, x_col, y_col
# Output: advisory strings, in rule order
# Axis types here come from a full-column scan, unlike classify() which only
# samples the first rows.
def recommend(
    table: Table,
    columns: Sequence[str],
    chart_type: ChartType | str,
    x_col: str,
    y_col: Optional[str],
) -> List[str]:
    kind = ChartType(chart_type)
    x_numeric = is_numeric_column_full(table, x_col)
    y_numeric = is_numeric_column_full(table, y_col) if y_col else False

    recommendations: List[str] = []

    if kind is ChartType.BAR and x_numeric:
        recommendations.append("Consider using a line chart for numeric X-axis data")

    if kind is ChartType.LINE and not x_numeric:
        recommendations.append("Consider using a bar chart for categorical X-axis data")

    if kind is ChartType.SCATTER and (not x_numeric or not y_numeric):
        recommendations.append("Scatter plots work best with numeric data on both axes")

    if kind is ChartType.PIE and len(table) > PIE_MAX_CATEGORIES:
        recommendations.append(
            "Pie charts become hard to read with more than 10 categories. "
            "Consider a bar chart instead."
        )

    if y_numeric:
        outliers = count_outliers(numeric_values(table, y_col))
        if outliers > 0:
            recommendations.append(
                f"Found {outliers} potential outliers. "
                "Consider using a box plot to visualize the distribution."
            )

    return recommendations
