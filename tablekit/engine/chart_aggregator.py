"""Turn a table into chart-ready series.

- bar/line: mean of y per x category (+ row count)
- scatter: numeric (x, y) pairs
- pie: sum of y per x category
- histogram: fixed-width bins over x
- box: nearest-rank quartiles of y per x category
"""
from __future__ import annotations

import math
from enum import Enum
from typing import Any, Dict, List, Optional

import pandas as pd

from tablekit.engine.values import Table, column_numbers, group_label, numeric_values
from tablekit.utils.logging import log_event

HISTOGRAM_MAX_BINS = 10
BOX_QUANTILES = (0.25, 0.5, 0.75)

ChartSeries = List[Dict[str, Any]]


class ChartType(str, Enum):
    BAR = "bar"
    LINE = "line"
    SCATTER = "scatter"
    PIE = "pie"
    HISTOGRAM = "histogram"
    BOX = "box"


def _label_frame(table: Table, x: str, y: str) -> pd.DataFrame:
    return pd.DataFrame(
        {
            "label": [group_label(row.get(x)) for row in table],
            "value": column_numbers(table, y),
        }
    )


def categorical_series(table: Table, x: str, y: str) -> ChartSeries:
    frame = _label_frame(table, x, y).dropna(subset=["value"])
    if frame.empty:
        return []
    grouped = frame.groupby("label", sort=False)["value"].agg(["mean", "count"])
    return [
        {"x": str(label), "y": float(stats["mean"]), "count": int(stats["count"])}
        for label, stats in grouped.iterrows()
    ]


def scatter_series(table: Table, x: str, y: str) -> ChartSeries:
    frame = pd.DataFrame({"x": column_numbers(table, x), "y": column_numbers(table, y)})
    # rows missing either coordinate are dropped
    frame = frame.dropna()
    return [
        {"x": float(x_value), "y": float(y_value)}
        for x_value, y_value in zip(frame["x"], frame["y"])
    ]


def pie_series(table: Table, x: str, y: str) -> ChartSeries:
    frame = _label_frame(table, x, y)
    if frame.empty:
        return []
    # unparseable values still count toward the slice, as zero
    frame["value"] = frame["value"].fillna(0.0)
    totals = frame.groupby("label", sort=False)["value"].sum()
    return [{"label": str(label), "value": float(value)} for label, value in totals.items()]


def histogram_series(table: Table, x: str) -> ChartSeries:
    values = numeric_values(table, x)
    if not values:
        return []

    low = min(values)
    high = max(values)
    bin_count = max(1, min(HISTOGRAM_MAX_BINS, math.ceil(math.sqrt(len(values)))))
    # halves keep the span finite even when high - low overflows
    half_span = high / 2 - low / 2

    counts = [0] * bin_count
    for value in values:
        if half_span > 0:
            index = math.floor((value / 2 - low / 2) / half_span * bin_count)
        else:
            index = 0
        # the maximum (and float spill-over) lands in the last bin
        counts[min(index, bin_count - 1)] += 1

    series: ChartSeries = []
    for index, count in enumerate(counts):
        t = (index + 0.5) / bin_count
        series.append({"x": low * (1 - t) + high * t, "y": count})
    return series


def nearest_rank(sorted_values: List[float], p: float) -> float:
    """Element at index floor(n*p) of an ascending list, no interpolation."""
    index = min(math.floor(len(sorted_values) * p), len(sorted_values) - 1)
    return sorted_values[index]


def box_series(table: Table, x: str, y: str) -> ChartSeries:
    frame = _label_frame(table, x, y).dropna(subset=["value"])
    if frame.empty:
        return []

    series: ChartSeries = []
    for label, values in frame.groupby("label", sort=False)["value"]:
        ordered = sorted(float(v) for v in values)
        q1, median, q3 = (nearest_rank(ordered, p) for p in BOX_QUANTILES)
        series.append(
            {
                "x": str(label),
                "min": ordered[0],
                "q1": q1,
                "median": median,
                "q3": q3,
                "max": ordered[-1],
            }
        )
    return series


def aggregate(
    table: Table,
    x_col: str,
    y_col: Optional[str],
    chart_type: ChartType | str,
) -> ChartSeries:
    """Build the series for one chart type. Histogram ignores ``y_col``."""
    kind = ChartType(chart_type)

    if kind is ChartType.HISTOGRAM:
        series = histogram_series(table, x_col)
    elif y_col is None:
        raise ValueError(f"{kind.value} chart requires a y column")
    elif kind in (ChartType.BAR, ChartType.LINE):
        series = categorical_series(table, x_col, y_col)
    elif kind is ChartType.SCATTER:
        series = scatter_series(table, x_col, y_col)
    elif kind is ChartType.PIE:
        series = pie_series(table, x_col, y_col)
    else:
        series = box_series(table, x_col, y_col)

    log_event("aggregator.done", {"chart_type": kind.value, "points": len(series)})
    return series
