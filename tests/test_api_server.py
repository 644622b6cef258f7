from __future__ import annotations

import json

from fastapi.testclient import TestClient

from tablekit.api import server
from tablekit.api.server import app


client = TestClient(app)


def test_health() -> None:
    assert client.get("/health").json() == {"status": "ok"}


def test_query_rejects_large_rows(monkeypatch) -> None:
    monkeypatch.setattr(server, "MAX_ROWS", 3)
    payload = {
        "query": "SELECT * FROM data",
        "data": [{"x": i} for i in range(4)],
        "columns": ["x"],
    }
    response = client.post("/query", json=payload)
    assert response.status_code == 413
    body = response.json()
    assert body["detail"]["code"] == "ROWS_LIMIT_EXCEEDED"


def test_query_filter_endpoint() -> None:
    payload = {
        "query": "rows where status = 'active'",
        "data": [{"status": "active"}, {"status": "inactive"}, {"status": "active"}],
        "columns": ["status"],
    }
    response = client.post("/query", json=payload)

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["query_type"] == "FILTER"
    assert body["result"] == [{"status": "active"}, {"status": "active"}]
    assert body["summary"]["row_count"] == 2


def test_query_parse_error_is_reported_in_body() -> None:
    payload = {"query": "COUNT", "data": "not json", "columns": ["x"]}
    response = client.post("/query", json=payload)

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is False
    assert body["result"] is None
    assert body["error"].startswith("Failed to parse JSON")


def test_visualize_pie_endpoint() -> None:
    payload = {
        "data": [{"k": f"c{i}", "v": i} for i in range(15)],
        "columns": ["k", "v"],
        "chart_type": "pie",
        "x_axis": "k",
        "y_axis": "v",
    }
    response = client.post("/visualize", json=payload)

    body = response.json()
    assert body["success"] is True
    assert len(body["chart_data"]) == 15
    assert body["chart_config"]["options"]["showPercentages"] is True
    assert any("more than 10 categories" in r for r in body["recommendations"])


def test_visualize_rejects_unknown_chart_type() -> None:
    payload = {
        "data": [{"a": 1}],
        "columns": ["a"],
        "chart_type": "radar",
        "x_axis": "a",
        "y_axis": "a",
    }
    assert client.post("/visualize", json=payload).status_code == 422


def test_process_endpoint() -> None:
    payload = {
        "file_content": "name|score\nAnn|3\n",
        "file_type": "csv",
        "options": {"delimiter": "|"},
    }
    body = client.post("/process", json=payload).json()

    assert body["success"] is True
    assert body["columns"] == ["name", "score"]
    assert body["cleaned_data"] == [{"name": "Ann", "score": "3"}]


def test_row_limit_applies_to_json_text_data(monkeypatch) -> None:
    monkeypatch.setattr(server, "MAX_ROWS", 3)
    rows = [{"x": i} for i in range(10)]

    query = client.post(
        "/query",
        json={"query": "SELECT * FROM data", "data": json.dumps(rows), "columns": ["x"]},
    )
    chart = client.post(
        "/visualize",
        json={"data": json.dumps(rows), "columns": ["x"], "chart_type": "histogram", "x_axis": "x"},
    )

    assert query.status_code == 413
    assert query.json()["detail"]["code"] == "ROWS_LIMIT_EXCEEDED"
    assert chart.status_code == 413


def test_json_text_data_under_limit_is_parsed() -> None:
    payload = {"query": "COUNT", "data": json.dumps([{"x": 1}, {"x": 3}]), "columns": ["x"]}

    body = client.post("/query", json=payload).json()

    assert body["success"] is True
    assert body["result"][0]["sum_x"] == 4


def test_processing_options_have_no_encoding_field() -> None:
    assert set(server.ProcessingOptions.model_fields) == {"has_header", "delimiter"}
