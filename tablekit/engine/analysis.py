"""Outer call boundary for the tabular engine.

Role:
- query / visualization / ingestion calls are run in one place
- every failure is caught here and turned into ``success=False`` + message,
  with no partial data attached
"""
from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence

from tablekit.data.loader import clean_rows, load_file, load_table
from tablekit.engine import chart_aggregator, figure_builder, recommendation
from tablekit.engine.chart_aggregator import ChartType
from tablekit.engine.query_executor import execute
from tablekit.engine.query_parser import parse_query
from tablekit.engine.type_inference import summarize
from tablekit.errors import ColumnNotFoundError
from tablekit.models.responses import (
    DataProcessingResponse,
    QueryResponse,
    QuerySummary,
    VisualizationResponse,
)
from tablekit.utils.logging import log_event, new_request_id


def _error_message(exc: Exception) -> str:
    return str(exc) or "Unknown error occurred"


# Input: query, data (rows or JSON text), columns
# Output: QueryResponse
# parse intent -> execute -> summarize the result table
def run_query(query: str, data: Any, columns: Sequence[str]) -> QueryResponse:
    """Run a simplified SQL-like query against in-memory rows."""
    request_id = new_request_id()
    log_event("query.start", {"request_id": request_id, "query": query})

    try:
        table = load_table(data)
        intent = parse_query(query, columns)
        log_event("query.intent", {"request_id": request_id, **intent.model_dump(mode="json")})

        result, query_type = execute(table, list(columns), intent)
        summary = QuerySummary(**summarize(result))
    except Exception as exc:
        log_event("query.error", {"request_id": request_id, "error": str(exc)}, level="error")
        return QueryResponse(success=False, error=_error_message(exc))

    log_event(
        "query.done",
        {"request_id": request_id, "query_type": query_type.value, "rows": summary.row_count},
    )
    return QueryResponse(
        success=True,
        result=result,
        query_type=query_type,
        summary=summary,
    )


def _validate_axes(columns: Sequence[str], x_axis: str, y_axis: Optional[str]) -> None:
    if x_axis not in columns:
        raise ColumnNotFoundError("X-axis", x_axis)
    if y_axis is not None and y_axis not in columns:
        raise ColumnNotFoundError("Y-axis", y_axis)


# Input: data, columns, chart type, axes, optional title/options
# Output: VisualizationResponse
# validate axes -> aggregate series -> chart config + figure -> recommendations
def build_visualization(
    data: Any,
    columns: Sequence[str],
    chart_type: ChartType | str,
    x_axis: str,
    y_axis: Optional[str] = None,
    title: Optional[str] = None,
    options: Optional[Dict[str, Any]] = None,
) -> VisualizationResponse:
    """Aggregate rows into chart data with config, figure and advice."""
    request_id = new_request_id()
    log_event(
        "visualize.start",
        {"request_id": request_id, "chart_type": str(chart_type), "x": x_axis, "y": y_axis},
    )

    try:
        _validate_axes(columns, x_axis, y_axis)
        kind = ChartType(chart_type)
        table = load_table(data)

        chart_data = chart_aggregator.aggregate(table, x_axis, y_axis, kind)
        chart_config = figure_builder.build_chart_config(
            kind, chart_data, x_axis, y_axis, title, options
        )
        figure_json = figure_builder.build_figure(chart_config)
        recommendations = recommendation.recommend(table, columns, kind, x_axis, y_axis)
    except Exception as exc:
        log_event("visualize.error", {"request_id": request_id, "error": str(exc)}, level="error")
        return VisualizationResponse(success=False, error=_error_message(exc))

    log_event(
        "visualize.done",
        {
            "request_id": request_id,
            "points": len(chart_data),
            "recommendations": len(recommendations),
        },
    )
    return VisualizationResponse(
        success=True,
        chart_data=chart_data,
        chart_config=chart_config,
        figure_json=figure_json,
        recommendations=recommendations,
    )


def process_data(
    file_content: str,
    file_type: str,
    options: Optional[Dict[str, Any]] = None,
) -> DataProcessingResponse:
    """Parse uploaded CSV/JSON content into rows plus a cleaned copy."""
    request_id = new_request_id()
    options = options or {}
    log_event("process.start", {"request_id": request_id, "file_type": file_type})

    try:
        rows, columns = load_file(
            file_content,
            file_type,
            has_header=options.get("has_header", True),
            delimiter=options.get("delimiter") or ",",
        )
        cleaned: List[Dict[str, Any]] = clean_rows(rows)
    except Exception as exc:
        log_event("process.error", {"request_id": request_id, "error": str(exc)}, level="error")
        return DataProcessingResponse(success=False, error=_error_message(exc))

    return DataProcessingResponse(
        success=True,
        data=rows,
        columns=columns,
        row_count=len(rows),
        cleaned_data=cleaned,
    )
