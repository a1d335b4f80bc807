from datetime import datetime, timezone

import pytest
from src.domain.errors import QueryError
from src.infrastructure.clickhouse.queries import render_query
from src.query.builder import (
    Aggregate,
    abnormal_query,
    build_query,
    referrer_query,
    response_time_query,
)


def test_pivot_query_selects_whole_points():
    query, params = render_query(response_time_query("app-1"), "events")
    assert query.startswith("SELECT time AS _time, tags, fields\n")
    assert "FROM events\n" in query
    assert "measurement = %(measurement)s" in query
    assert "tags['applicationToken'] = %(application_token)s" in query
    assert "ARRAY JOIN" not in query
    assert "GROUP BY" not in query
    assert params == {"measurement": "data", "application_token": "app-1"}


def test_all_time_query_has_no_time_bounds():
    query, params = render_query(response_time_query("app-1"), "events")
    assert "time >=" not in query and "time <" not in query
    assert "start" not in params and "stop" not in params


def test_time_range_is_bound_as_parameters():
    start = datetime(2024, 1, 1, tzinfo=timezone.utc)
    stop = datetime(2024, 1, 2, tzinfo=timezone.utc)
    query, params = render_query(response_time_query("t", start, stop), "events")
    assert "time >= %(start)s" in query
    assert "time < %(stop)s" in query
    assert params["start"] == start and params["stop"] == stop


def test_grouped_count_query():
    query, params = render_query(referrer_query("app-1"), "events")
    assert "tags[%(group_by)s] AS group_key" in query
    assert "count() AS _value" in query
    assert query.rstrip().endswith("GROUP BY group_key")
    assert params["group_by"] == "beforeUrl"


def test_abnormal_query_sorts_ascending_by_time():
    query, params = render_query(abnormal_query("app-1"), "events")
    assert query.endswith("ORDER BY time ASC")
    assert params["measurement"] == "abnormal"


def test_unpivoted_query_explodes_fields():
    query, _ = render_query(build_query("data", "app-1"), "events")
    assert "ARRAY JOIN mapKeys(fields) AS _field, mapValues(fields) AS _value" in query
    assert "tags, _field, _value" in query


def test_count_without_group_is_rejected():
    with pytest.raises(QueryError, match="group key"):
        render_query(build_query("data", "t", aggregate=Aggregate.COUNT), "events")


def test_unknown_sort_key_is_rejected():
    with pytest.raises(QueryError, match="sort key"):
        render_query(build_query("data", "t", pivot=True, sort_by="responseTime"), "events")


def test_value_sort_requires_aggregate():
    with pytest.raises(QueryError):
        render_query(build_query("data", "t", sort_by="_value"), "events")
    query, _ = render_query(
        build_query(
            "data", "t", group_by="currentUrl", aggregate=Aggregate.COUNT, sort_by="_value"
        ),
        "events",
    )
    assert query.endswith("ORDER BY _value ASC")
