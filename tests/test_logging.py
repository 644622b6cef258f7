from __future__ import annotations

import json
import logging

from tablekit.utils.logging import JsonLineFormatter, log_event, new_request_id


def test_log_event_routes_to_stage_logger(caplog) -> None:
    with caplog.at_level(logging.INFO, logger="tablekit"):
        log_event("query.start", {"request_id": "tk-1", "query": "COUNT"})

    record = caplog.records[-1]
    assert record.name == "tablekit.query"
    assert record.event == "query.start"

    line = json.loads(JsonLineFormatter().format(record))
    assert line["event"] == "query.start"
    assert line["level"] == "info"
    assert line["request_id"] == "tk-1"
    assert line["query"] == "COUNT"


def test_log_event_level_and_unknown_level(caplog) -> None:
    with caplog.at_level(logging.INFO, logger="tablekit"):
        log_event("query.error", {"error": "boom"}, level="error")
        log_event("loader.done", level="chatty")

    assert [r.levelno for r in caplog.records[-2:]] == [logging.ERROR, logging.INFO]


def test_new_request_id_prefix() -> None:
    first, second = new_request_id(), new_request_id()

    assert first.startswith("tk-") and len(first) == 15
    assert first != second
