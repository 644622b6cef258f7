from __future__ import annotations

from typing import Any, Dict, List, Optional, Union

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel

from tablekit.config.settings import MAX_ROWS
from tablekit.data.loader import load_table
from tablekit.engine.analysis import build_visualization, process_data, run_query
from tablekit.engine.chart_aggregator import ChartType
from tablekit.errors import TableParseError
from tablekit.models.responses import (
    DataProcessingResponse,
    QueryResponse,
    VisualizationResponse,
)
from tablekit.utils.logging import log_event

app = FastAPI(title="Tablekit API")

# Rows as a list of objects, or the same list as JSON text
TableData = Union[List[Dict[str, Any]], str]


class QueryRequest(BaseModel):
    # SQL-like query text
    query: str
    data: TableData
    columns: List[str]


class VisualizeRequest(BaseModel):
    data: TableData
    columns: List[str]
    chart_type: ChartType
    x_axis: str
    # histogram only needs x
    y_axis: Optional[str] = None
    title: Optional[str] = None
    options: Optional[Dict[str, Any]] = None


class ProcessingOptions(BaseModel):
    has_header: bool = True
    delimiter: str = ","


class ProcessRequest(BaseModel):
    file_content: str
    file_type: str
    options: Optional[ProcessingOptions] = None


def _table_rows(data: TableData) -> TableData:
    """Parse JSON-text rows up front so the row limit sees them too."""
    if not isinstance(data, str):
        return data
    try:
        return load_table(data)
    except TableParseError:
        # malformed text is reported by the engine in the response body
        return data


def _enforce_row_limit(data: TableData) -> None:
    if isinstance(data, list) and len(data) > MAX_ROWS:
        log_event("request.rows_limit", {"rows": len(data), "max_rows": MAX_ROWS}, level="warning")
        raise HTTPException(
            status_code=413,
            detail={
                "code": "ROWS_LIMIT_EXCEEDED",
                "message": f"At most {MAX_ROWS} rows are accepted per request.",
                "rows": len(data),
            },
        )


@app.get("/health")
def health_check() -> dict:
    return {"status": "ok"}


# Input: QueryRequest
# Output: QueryResponse
# runs the query against the rows sent with the request
@app.post("/query", response_model=QueryResponse)
def query(req: QueryRequest) -> QueryResponse:
    data = _table_rows(req.data)
    _enforce_row_limit(data)
    log_event("request.query", {"query": req.query, "columns": req.columns})
    return run_query(req.query, data, req.columns)


# Input: VisualizeRequest
# Output: VisualizationResponse
# chart series + config + plotly figure + recommendations
@app.post("/visualize", response_model=VisualizationResponse)
def visualize(req: VisualizeRequest) -> VisualizationResponse:
    data = _table_rows(req.data)
    _enforce_row_limit(data)
    log_event(
        "request.visualize",
        {"chart_type": req.chart_type.value, "x": req.x_axis, "y": req.y_axis},
    )
    return build_visualization(
        data,
        req.columns,
        req.chart_type,
        req.x_axis,
        req.y_axis,
        title=req.title,
        options=req.options,
    )


@app.post("/process", response_model=DataProcessingResponse)
def process(req: ProcessRequest) -> DataProcessingResponse:
    log_event("request.process", {"file_type": req.file_type, "size": len(req.file_content)})
    options = req.options.model_dump() if req.options else None
    return process_data(req.file_content, req.file_type, options)
