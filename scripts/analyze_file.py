from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

# Ensure the package is importable when running from a checkout
ROOT = Path(__file__).resolve().parents[1]
sys.path.append(str(ROOT))

from tablekit.engine.analysis import build_visualization, process_data, run_query


def main() -> int:
    parser = argparse.ArgumentParser(description="Query or chart a local CSV/JSON file.")
    parser.add_argument("path", help="CSV or JSON file to load.")
    parser.add_argument("--query", default="", help="SQL-like query to run.")
    parser.add_argument(
        "--chart",
        default="",
        choices=["", "bar", "line", "scatter", "pie", "histogram", "box"],
        help="Chart type to aggregate for.",
    )
    parser.add_argument("--x", default="", help="X-axis column (charts).")
    parser.add_argument("--y", default=None, help="Y-axis column (charts).")
    parser.add_argument("--delimiter", default=",", help="CSV delimiter.")
    parser.add_argument("--no-header", action="store_true", help="CSV has no header row.")
    args = parser.parse_args()

    path = Path(args.path)
    file_type = path.suffix.lstrip(".").lower()
    loaded = process_data(
        path.read_text(encoding="utf-8"),
        file_type,
        {"has_header": not args.no_header, "delimiter": args.delimiter},
    )
    if not loaded.success:
        print(json.dumps(loaded.model_dump(exclude_none=True), ensure_ascii=False, indent=2))
        return 1

    rows = loaded.cleaned_data or []
    columns = loaded.columns or []

    if args.chart:
        output = build_visualization(rows, columns, args.chart, args.x, args.y)
    else:
        output = run_query(args.query, rows, columns)

    print(json.dumps(output.model_dump(mode="json", exclude_none=True), ensure_ascii=False, indent=2))
    return 0 if output.success else 1


if __name__ == "__main__":
    raise SystemExit(main())
