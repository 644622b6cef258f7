from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv

# Load the project .env regardless of the working directory
_DOTENV_PATH = Path(__file__).resolve().parents[2] / ".env"
load_dotenv(_DOTENV_PATH)


def _read_int(name: str, default: int) -> int:
    raw = str(os.getenv(name, str(default))).strip()
    try:
        return int(raw)
    except ValueError:
        return default


# Request limits
MAX_ROWS = _read_int("TABLEKIT_MAX_ROWS", 50000)

# Chart defaults
CHART_COLOR = os.getenv("TABLEKIT_CHART_COLOR", "#3B82F6")
CHART_WIDTH = _read_int("TABLEKIT_CHART_WIDTH", 800)
CHART_HEIGHT = _read_int("TABLEKIT_CHART_HEIGHT", 600)

LOG_LEVEL = os.getenv("TABLEKIT_LOG_LEVEL", "INFO").upper()
