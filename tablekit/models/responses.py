"""Result types returned across the engine boundary."""
from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel

from tablekit.engine.query_parser import QueryType


class QuerySummary(BaseModel):
    row_count: int
    column_count: int
    numeric_columns: List[str]
    categorical_columns: List[str]


class QueryResponse(BaseModel):
    success: bool
    # result table rows
    result: Optional[List[Dict[str, Any]]] = None
    query_type: Optional[QueryType] = None
    summary: Optional[QuerySummary] = None
    error: Optional[str] = None


class VisualizationResponse(BaseModel):
    success: bool
    # aggregated series, shape depends on the chart type
    chart_data: Optional[List[Dict[str, Any]]] = None
    # {type, data, options}
    chart_config: Optional[Dict[str, Any]] = None
    # Plotly figure JSON
    figure_json: Optional[Dict[str, Any]] = None
    recommendations: Optional[List[str]] = None
    error: Optional[str] = None


class DataProcessingResponse(BaseModel):
    success: bool
    data: Optional[List[Dict[str, Any]]] = None
    columns: Optional[List[str]] = None
    row_count: Optional[int] = None
    # trimmed copy with empty cells as null
    cleaned_data: Optional[List[Dict[str, Any]]] = None
    error: Optional[str] = None
