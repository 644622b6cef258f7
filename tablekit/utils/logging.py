"""JSON event logging shared by the engine, loader and HTTP layer.

Every event goes to a child logger named after its stage prefix
(``query.start`` -> ``tablekit.query``), so levels can be tuned per stage
while one handler on ``tablekit`` writes a JSON line per record.
"""
from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import Any, Dict
from uuid import uuid4

from tablekit.config.settings import LOG_LEVEL


_ROOT_LOGGER = "tablekit"


class JsonLineFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        data: Dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname.lower(),
            "logger": record.name,
        }
        event = getattr(record, "event", None)
        if event is None:
            data["message"] = record.getMessage()
        else:
            data["event"] = event
            data.update(getattr(record, "payload", {}))
        if record.exc_info:
            data["exc"] = self.formatException(record.exc_info)
        return json.dumps(data, ensure_ascii=False, default=str)


def get_logger(stage: str | None = None) -> logging.Logger:
    """Return the package logger, or its child for one stage."""
    root = logging.getLogger(_ROOT_LOGGER)
    if not root.handlers:
        root.setLevel(getattr(logging, LOG_LEVEL, logging.INFO))
        handler = logging.StreamHandler()
        handler.setFormatter(JsonLineFormatter())
        root.addHandler(handler)
    return root.getChild(stage) if stage else root


def new_request_id() -> str:
    """Tag for all events of one boundary call."""
    return f"tk-{uuid4().hex[:12]}"


def log_event(
    event: str,
    payload: Dict[str, Any] | None = None,
    *,
    level: str = "info",
) -> None:
    logger = get_logger(event.split(".", 1)[0])
    level_no = logging.getLevelName(level.upper())
    if not isinstance(level_no, int):
        level_no = logging.INFO
    logger.log(level_no, event, extra={"event": event, "payload": dict(payload or {})})
