"""Ingestion of CSV/JSON content into an in-memory table.

Values are kept as text here; the engine parses numbers on demand, so no type
coercion happens at load time.
"""
from __future__ import annotations

import io
import json
from typing import Any, List, Tuple

import pandas as pd

from tablekit.engine.values import Row, Table
from tablekit.errors import TableParseError, UnsupportedFileTypeError
from tablekit.utils.logging import log_event


def _strip(value: Any) -> Any:
    return value.strip() if isinstance(value, str) else value


def parse_csv(
    content: str,
    *,
    has_header: bool = True,
    delimiter: str = ",",
) -> Tuple[Table, List[str]]:
    try:
        frame = pd.read_csv(
            io.StringIO(content),
            sep=delimiter,
            header=0 if has_header else None,
            dtype=str,
            keep_default_na=False,
            skip_blank_lines=True,
        )
    except pd.errors.EmptyDataError:
        return [], []
    except pd.errors.ParserError as exc:
        raise TableParseError(f"Failed to parse CSV: {exc}") from exc

    if has_header:
        columns = [str(col).strip() for col in frame.columns]
    else:
        columns = [f"Column_{i + 1}" for i in range(len(frame.columns))]
    frame.columns = columns

    # short lines leave NaN behind; read them as empty cells
    frame = frame.fillna("")
    rows = [
        {col: _strip(value) for col, value in record.items()}
        for record in frame.to_dict(orient="records")
    ]
    return rows, columns


def _rows_from_json(payload: Any) -> Table:
    if isinstance(payload, list):
        rows = payload
    elif isinstance(payload, dict):
        rows = [payload]
    else:
        raise TableParseError("JSON data must be an array of objects or an object")
    if not all(isinstance(row, dict) for row in rows):
        raise TableParseError("Every JSON row must be an object")
    return rows


def parse_json(content: str) -> Tuple[Table, List[str]]:
    try:
        payload = json.loads(content)
    except json.JSONDecodeError as exc:
        raise TableParseError(f"Failed to parse JSON: {exc}") from exc
    rows = _rows_from_json(payload)
    columns = list(rows[0].keys()) if rows else []
    return rows, columns


def clean_rows(rows: Table) -> Table:
    """Trim text cells and turn empty strings into None."""
    cleaned: Table = []
    for row in rows:
        out: Row = {}
        for key, value in row.items():
            value = _strip(value)
            out[key] = None if value == "" else value
        cleaned.append(out)
    return cleaned


def load_table(data: Any) -> Table:
    """Accept rows as a list of dicts or as JSON text of one."""
    if isinstance(data, str):
        rows, _ = parse_json(data)
        return rows
    return _rows_from_json(data)


def load_file(
    content: str,
    file_type: str,
    *,
    has_header: bool = True,
    delimiter: str = ",",
) -> Tuple[Table, List[str]]:
    kind = (file_type or "").strip().lower()
    if kind == "csv":
        rows, columns = parse_csv(content, has_header=has_header, delimiter=delimiter)
    elif kind == "json":
        rows, columns = parse_json(content)
    else:
        raise UnsupportedFileTypeError(file_type)

    log_event("loader.done", {"file_type": kind, "rows": len(rows), "columns": len(columns)})
    return rows, columns
