"""Render ``QuerySpec`` objects to ClickHouse SQL.

Points live in a single table, one row per written point::

    measurement  LowCardinality(String)
    time         DateTime64(3)
    tags         Map(String, String)
    fields       Map(String, String)
"""

from typing import Any, Dict, List, Tuple

from shared.constants import Fields
from src.domain.errors import QueryError
from src.query.builder import Aggregate, QuerySpec

GROUP_KEY = "group_key"

_SORT_COLUMNS = {
    Fields.TIME: "time",
    Fields.VALUE: Fields.VALUE,
}


def _where(spec: QuerySpec) -> Tuple[str, Dict[str, Any]]:
    conditions = [
        "measurement = %(measurement)s",
        f"tags['{Fields.APPLICATION_TOKEN}'] = %(application_token)s",
    ]
    params: Dict[str, Any] = {
        "measurement": spec.measurement,
        "application_token": spec.application_token,
    }
    if spec.start is not None:
        conditions.append("time >= %(start)s")
        params["start"] = spec.start
    if spec.stop is not None:
        conditions.append("time < %(stop)s")
        params["stop"] = spec.stop
    return " AND ".join(conditions), params


def _order_by(spec: QuerySpec) -> str:
    if spec.sort_by is None:
        return ""
    column = _SORT_COLUMNS.get(spec.sort_by)
    if column is None or (column == Fields.VALUE and spec.aggregate is None):
        raise QueryError(f"Unsupported sort key: {spec.sort_by}")
    return f"\nORDER BY {column} ASC"


def render_query(spec: QuerySpec, table: str) -> Tuple[str, Dict[str, Any]]:
    """Return ``(sql, parameters)`` for ``clickhouse_connect`` client binding."""
    where_clause, params = _where(spec)
    select: List[str] = []
    group_clause = ""
    array_join = ""

    if spec.grouped:
        select.append(f"tags[%(group_by)s] AS {GROUP_KEY}")
        params["group_by"] = spec.group_by

    if spec.aggregate is Aggregate.COUNT:
        if not spec.grouped:
            raise QueryError("count aggregation requires a group key")
        select.append(f"count() AS {Fields.VALUE}")
        group_clause = f"\nGROUP BY {GROUP_KEY}"
    elif spec.aggregate is not None:
        raise QueryError(f"Unsupported aggregate: {spec.aggregate}")
    elif spec.pivot:
        select.extend([f"time AS {Fields.TIME}", "tags", "fields"])
    else:
        select.extend(
            [f"time AS {Fields.TIME}", "tags", Fields.FIELD, Fields.VALUE]
        )
        array_join = (
            f"\nARRAY JOIN mapKeys(fields) AS {Fields.FIELD}, "
            f"mapValues(fields) AS {Fields.VALUE}"
        )

    query = (
        f"SELECT {', '.join(select)}\n"
        f"FROM {table}{array_join}\n"
        f"WHERE {where_clause}"
        f"{group_clause}"
        f"{_order_by(spec)}"
    )
    return query, params
