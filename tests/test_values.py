from __future__ import annotations

import math

from tablekit.engine.values import (
    column_numbers,
    group_label,
    is_missing,
    numeric_series,
    numeric_values,
    to_text,
)


def test_numeric_series_accepts_numbers_and_numeric_text() -> None:
    parsed = numeric_series([3, "1.5", " 2 ", "-4e2", 0])

    assert parsed.tolist() == [3.0, 1.5, 2.0, -400.0, 0.0]


def test_numeric_series_rejects_loose_float_spellings() -> None:
    parsed = numeric_series(["1_000", "١٢", "12abc", "", None, True, False, [1]])

    assert parsed.isna().all()


def test_numeric_series_drops_non_finite_values() -> None:
    parsed = numeric_series(["nan", "inf", "-Infinity", float("nan"), math.inf, "1e400", 10**400])

    assert parsed.isna().all()


def test_numeric_values_keep_row_order() -> None:
    table = [{"v": "2"}, {"v": "x"}, {}, {"v": 1}]

    assert numeric_values(table, "v") == [2.0, 1.0]
    assert len(column_numbers(table, "v")) == 4


def test_missing_and_text_rendering() -> None:
    assert is_missing(None) and is_missing("") and is_missing(float("nan"))
    assert not is_missing(0) and not is_missing(False)

    assert to_text(True) == "true"
    assert to_text(3.0) == "3"
    assert to_text(2.5) == "2.5"
    assert group_label(None) == "Unknown"
    assert group_label(0) == "0"
