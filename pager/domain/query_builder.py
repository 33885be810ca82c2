"""
Query builder: turns filters / ordering / page window into a parameterized
SELECT over the users table.

Pure functions, no DB access. Values always travel as bound parameters;
only allow-listed column names and direction keywords are written into
the SQL text.
"""
from __future__ import annotations

from typing import Any, List, Optional, Tuple

from .models import USER_COLUMNS, Filters, OrderBy, PageWindow, RetrieveOptions
from ..errors import InvalidOrderColumn, InvalidOrderDirection

SELECT_USERS = "SELECT id, name, age, country, degree, status, site FROM users"
BASE_SQL = SELECT_USERS + " WHERE 1=1"

DIRECTIONS = ("asc", "desc")
# fixed render precedence for multi-key ordering
PAGE_ORDER_COLUMNS = ("id", "age", "name")
RETRIEVE_ORDER_COLUMNS = USER_COLUMNS


def normalize_direction(value: str) -> str:
    if not isinstance(value, str) or value.strip().lower() not in DIRECTIONS:
        raise InvalidOrderDirection()
    return value.strip().lower()


def _check_column(column: str, allowed: tuple) -> str:
    if column not in allowed:
        raise InvalidOrderColumn()
    return column


def lower_placeholders(n: int) -> str:
    return ", ".join(["LOWER(?)"] * n)


def apply_filters(sql: str, params: List[Any], filters: Optional[Filters]) -> str:
    if filters is None:
        return sql
    if filters.status:
        sql += " AND LOWER(status) = LOWER(?)"
        params.append(filters.status)
    if filters.countries:
        sql += f" AND LOWER(country) IN ({lower_placeholders(len(filters.countries))})"
        params.extend(filters.countries)
    if filters.age and filters.age > 0:
        sql += " AND age = ?"
        params.append(filters.age)
    if filters.degree:
        sql += " AND LOWER(degree) = LOWER(?)"
        params.append(filters.degree)
    return sql


def order_clauses(order_by: Optional[OrderBy]) -> List[str]:
    if order_by is None:
        return []
    clauses = []
    for col in PAGE_ORDER_COLUMNS:
        direction = getattr(order_by, col)
        if direction:
            clauses.append(f"{col} {normalize_direction(direction)}")
    return clauses


def apply_order_by(sql: str, order_by: Optional[OrderBy]) -> str:
    clauses = order_clauses(order_by)
    if clauses:
        sql += " ORDER BY " + ", ".join(clauses)
    return sql


def build_page_query(
    filters: Optional[Filters],
    order_by: Optional[OrderBy],
    window: PageWindow,
) -> Tuple[str, List[Any]]:
    params: List[Any] = []
    sql = apply_filters(BASE_SQL, params, filters)
    sql = apply_order_by(sql, order_by)
    # ints only, so rendering them inline is safe
    sql += f" LIMIT {int(window.page_size)} OFFSET {int(window.offset)}"
    return sql, params


def build_retrieve_query(options: Optional[RetrieveOptions] = None) -> Tuple[str, List[Any]]:
    opts = options or RetrieveOptions()
    params: List[Any] = []
    sql = BASE_SQL

    if opts.statuses:
        sql += f" AND LOWER(status) IN ({lower_placeholders(len(opts.statuses))})"
        params.extend(opts.statuses)

    if opts.countries:
        sql += f" AND LOWER(country) IN ({lower_placeholders(len(opts.countries))})"
        params.extend(opts.countries)

    if opts.order_by and opts.order:
        column = _check_column(opts.order_by, RETRIEVE_ORDER_COLUMNS)
        sql += f" ORDER BY {column} {normalize_direction(opts.order)}"
    elif opts.order:
        normalize_direction(opts.order)

    if opts.limit and opts.limit > 0:
        sql += " LIMIT ?"
        params.append(opts.limit)

    return sql, params


def build_select_all() -> Tuple[str, List[Any]]:
    return SELECT_USERS, []
