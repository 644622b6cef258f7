from __future__ import annotations

import pytest

from tablekit.engine.query_parser import (
    QueryType,
    extract_filter_clause,
    extract_group_by_column,
    parse_query,
)

COLUMNS = ["region", "units", "status"]


def test_select_from_wins_over_where() -> None:
    intent = parse_query("SELECT * FROM data WHERE x=1", COLUMNS)

    assert intent.query_type is QueryType.SELECT
    assert intent.filter_clause is None


def test_select_from_wins_over_group_by() -> None:
    intent = parse_query("select region from data group by region", COLUMNS)

    assert intent.query_type is QueryType.SELECT


@pytest.mark.parametrize(
    "query",
    ["count rows", "sum units group by region", "avg units where status = 'x'"],
)
def test_aggregate_keywords(query: str) -> None:
    assert parse_query(query, COLUMNS).query_type is QueryType.AGGREGATE


def test_aggregate_keyword_matches_inside_words() -> None:
    # plain substring match, no word boundaries
    assert parse_query("show summary", COLUMNS).query_type is QueryType.AGGREGATE


def test_group_by_extracts_column() -> None:
    intent = parse_query("units GROUP BY region", COLUMNS)

    assert intent.query_type is QueryType.GROUP_BY
    assert intent.group_column == "region"


def test_group_by_unknown_column_degrades_to_select() -> None:
    intent = parse_query("units group by country", COLUMNS)

    assert intent.query_type is QueryType.SELECT
    assert intent.group_column is None


def test_group_by_without_columns_keeps_identifier() -> None:
    intent = parse_query("group by country")

    assert intent.query_type is QueryType.GROUP_BY
    assert intent.group_column == "country"


def test_where_extracts_clause() -> None:
    intent = parse_query("rows where status = 'active'", COLUMNS)

    assert intent.query_type is QueryType.FILTER
    assert intent.filter_clause == "status = 'active'"


def test_where_clause_stops_at_order_by() -> None:
    assert extract_filter_clause("rows WHERE region = North ORDER BY units") == "region = North"
    assert extract_filter_clause("rows where region = North") == "region = North"


def test_where_without_clause_degrades_to_select() -> None:
    assert parse_query("rows where", COLUMNS).query_type is QueryType.SELECT


def test_fallback_is_select() -> None:
    assert parse_query("show me everything", COLUMNS).query_type is QueryType.SELECT
    assert parse_query("", COLUMNS).query_type is QueryType.SELECT


def test_extract_group_by_column_is_case_insensitive() -> None:
    assert extract_group_by_column("x group   by status") == "status"
    assert extract_group_by_column("no grouping here") is None
