"""Chart config + Plotly figure generation from aggregated series.

- chart config mirrors what the frontend renders (title, labels, size, extras)
- the figure is returned as Plotly JSON so it can travel in a pydantic response
"""
from __future__ import annotations

import json
from typing import Any, Dict, Optional

import plotly.graph_objects as go
import plotly.io as pio

from tablekit.config.settings import CHART_COLOR, CHART_HEIGHT, CHART_WIDTH
from tablekit.engine.chart_aggregator import ChartSeries, ChartType
from tablekit.utils.logging import log_event

# Per-type rendering extras
_TYPE_OPTIONS: Dict[ChartType, Dict[str, Any]] = {
    ChartType.BAR: {"barWidth": 0.8},
    ChartType.LINE: {"lineWidth": 2, "showPoints": True},
    ChartType.SCATTER: {"pointSize": 6},
    ChartType.PIE: {"showPercentages": True},
    ChartType.HISTOGRAM: {"barWidth": 1},
    ChartType.BOX: {},
}


def default_title(chart_type: ChartType) -> str:
    return f"{chart_type.value.capitalize()} Chart"


def build_chart_config(
    chart_type: ChartType | str,
    chart_data: ChartSeries,
    x_axis: str,
    y_axis: Optional[str],
    title: Optional[str] = None,
    options: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    """Assemble {type, data, options} for one chart."""
    kind = ChartType(chart_type)
    options = options or {}

    chart_options: Dict[str, Any] = {
        "title": title or default_title(kind),
        "xAxis": {"label": x_axis},
        "yAxis": {"label": y_axis},
        "color": options.get("color") or CHART_COLOR,
        "width": options.get("width") or CHART_WIDTH,
        "height": options.get("height") or CHART_HEIGHT,
        "showLegend": options.get("showLegend", options.get("show_legend")) is not False,
    }
    chart_options.update(_TYPE_OPTIONS[kind])

    return {"type": kind.value, "data": chart_data, "options": chart_options}


def _trace(kind: ChartType, data: ChartSeries, opts: Dict[str, Any]) -> Any:
    color = opts["color"]
    if kind is ChartType.BAR:
        return go.Bar(
            x=[p["x"] for p in data],
            y=[p["y"] for p in data],
            customdata=[p["count"] for p in data],
            width=opts["barWidth"],
            marker=dict(color=color),
        )
    if kind is ChartType.LINE:
        return go.Scatter(
            x=[p["x"] for p in data],
            y=[p["y"] for p in data],
            mode="lines+markers" if opts.get("showPoints") else "lines",
            line=dict(color=color, width=opts["lineWidth"]),
        )
    if kind is ChartType.SCATTER:
        return go.Scatter(
            x=[p["x"] for p in data],
            y=[p["y"] for p in data],
            mode="markers",
            marker=dict(color=color, size=opts["pointSize"]),
        )
    if kind is ChartType.PIE:
        return go.Pie(
            labels=[p["label"] for p in data],
            values=[p["value"] for p in data],
            textinfo="label+percent" if opts.get("showPercentages") else "label",
        )
    if kind is ChartType.HISTOGRAM:
        # bins share one width; recover it from the centers
        bin_width = (data[1]["x"] - data[0]["x"] if len(data) > 1 else 0) or None
        return go.Bar(
            x=[p["x"] for p in data],
            y=[p["y"] for p in data],
            width=bin_width,
            marker=dict(color=color, line=dict(color="white", width=opts["barWidth"])),
        )
    # quartiles are precomputed, so feed them to plotly directly
    return go.Box(
        x=[p["x"] for p in data],
        q1=[p["q1"] for p in data],
        median=[p["median"] for p in data],
        q3=[p["q3"] for p in data],
        lowerfence=[p["min"] for p in data],
        upperfence=[p["max"] for p in data],
        marker=dict(color=color),
    )


def build_figure(chart_config: Dict[str, Any]) -> Optional[Dict[str, Any]]:
    """Render a chart config as Plotly figure JSON. None when there is no data."""
    kind = ChartType(chart_config["type"])
    data: ChartSeries = chart_config.get("data") or []
    opts: Dict[str, Any] = chart_config["options"]

    if not data:
        log_event("figure.noop", {"chart_type": kind.value})
        return None

    fig = go.Figure(data=[_trace(kind, data, opts)])
    fig.update_layout(
        title=opts["title"],
        width=opts["width"],
        height=opts["height"],
        showlegend=opts["showLegend"],
        margin=dict(l=56, r=24, t=48, b=56),
    )
    if kind is not ChartType.PIE:
        fig.update_xaxes(title_text=str(opts["xAxis"]["label"]))
        if opts["yAxis"]["label"]:
            fig.update_yaxes(title_text=str(opts["yAxis"]["label"]))

    # Numpy types in figure JSON can break Pydantic serialization
    fig_json = json.loads(pio.to_json(fig))
    log_event("figure.success", {"chart_type": kind.value})
    return fig_json
