"""Pattern-based intent extraction for simplified SQL-like queries.

There is no grammar here. The uppercased query is checked against an ordered
list of keyword rules and the first rule that matches decides the intent:

1. SELECT ... FROM ...      -> SELECT (pass-through)
2. COUNT / SUM / AVG        -> AGGREGATE
3. GROUP BY <column>        -> GROUP_BY
4. WHERE <clause>           -> FILTER
5. anything else            -> SELECT

A query such as ``SELECT * FROM data WHERE x=1`` therefore stays a SELECT and
its WHERE clause is ignored. Constructs that cannot be resolved (unknown group
column, empty WHERE clause) fall back to SELECT instead of failing.
"""
from __future__ import annotations

import re
from enum import Enum
from typing import Callable, Optional, Sequence, Tuple

from pydantic import BaseModel


class QueryType(str, Enum):
    SELECT = "SELECT"
    AGGREGATE = "AGGREGATE"
    GROUP_BY = "GROUP_BY"
    FILTER = "FILTER"


class QueryIntent(BaseModel):
    query_type: QueryType
    # GROUP_BY only
    group_column: Optional[str] = None
    # FILTER only, raw clause text
    filter_clause: Optional[str] = None


_GROUP_BY_RE = re.compile(r"GROUP\s+BY\s+(\w+)", re.IGNORECASE)
_WHERE_RE = re.compile(
    r"WHERE\s+(.+?)(?:\s+GROUP\s+BY|\s+ORDER\s+BY|$)",
    re.IGNORECASE | re.DOTALL,
)

_SELECT_INTENT = QueryIntent(query_type=QueryType.SELECT)


def extract_group_by_column(query: str) -> Optional[str]:
    match = _GROUP_BY_RE.search(query)
    return match.group(1) if match else None


def extract_filter_clause(query: str) -> Optional[str]:
    match = _WHERE_RE.search(query)
    if not match:
        return None
    clause = match.group(1).strip()
    return clause or None


def _select(query: str, columns: Optional[Sequence[str]]) -> QueryIntent:
    return _SELECT_INTENT


def _aggregate(query: str, columns: Optional[Sequence[str]]) -> QueryIntent:
    return QueryIntent(query_type=QueryType.AGGREGATE)


def _group_by(query: str, columns: Optional[Sequence[str]]) -> QueryIntent:
    column = extract_group_by_column(query)
    if not column or (columns is not None and column not in columns):
        return _SELECT_INTENT
    return QueryIntent(query_type=QueryType.GROUP_BY, group_column=column)


def _filter(query: str, columns: Optional[Sequence[str]]) -> QueryIntent:
    clause = extract_filter_clause(query)
    if clause is None:
        return _SELECT_INTENT
    return QueryIntent(query_type=QueryType.FILTER, filter_clause=clause)


Rule = Tuple[str, Callable[[str], bool], Callable[[str, Optional[Sequence[str]]], QueryIntent]]

# Order matters: later rules are unreachable once an earlier one matches.
_RULES: Tuple[Rule, ...] = (
    ("select_from", lambda q: "SELECT" in q and "FROM" in q, _select),
    ("aggregate", lambda q: any(k in q for k in ("COUNT", "SUM", "AVG")), _aggregate),
    ("group_by", lambda q: "GROUP BY" in q, _group_by),
    ("where", lambda q: "WHERE" in q, _filter),
)


def parse_query(query: str, columns: Optional[Sequence[str]] = None) -> QueryIntent:
    """Classify a query string into a QueryIntent.

    ``columns`` are the table's known columns; when given, a GROUP BY on a
    column outside of them degrades to SELECT.
    """
    upper = query.upper().strip()
    for _, predicate, build in _RULES:
        if predicate(upper):
            return build(query, columns)
    return _SELECT_INTENT
