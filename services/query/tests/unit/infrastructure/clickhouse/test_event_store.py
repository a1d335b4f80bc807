from datetime import datetime, timezone
from unittest.mock import MagicMock, patch

import pytest
from clickhouse_connect.driver.exceptions import DatabaseError, OperationalError
from src.core.config import Settings
from src.domain.errors import QueryError, StoreUnavailable
from src.infrastructure.clickhouse.client import ClickHouseEventStore, create_client
from src.query.builder import abnormal_query, page_query, response_time_query

T0 = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)
T1 = datetime(2024, 5, 1, 12, 1, tzinfo=timezone.utc)


def _result(columns, rows):
    result = MagicMock()
    result.column_names = columns
    result.result_rows = rows
    return result


@pytest.fixture
def client():
    return MagicMock()


@pytest.fixture
def store(client):
    return ClickHouseEventStore(client, Settings(clickhouse_events_table="points"))


def test_create_client_uses_http_without_session():
    config = Settings(clickhouse_host="ch", clickhouse_port=8124, clickhouse_db="insite")
    with patch(
        "src.infrastructure.clickhouse.client.clickhouse_connect.get_client"
    ) as get_client:
        create_client(config)
    kwargs = get_client.call_args.kwargs
    assert kwargs["host"] == "ch"
    assert kwargs["port"] == 8124
    assert kwargs["database"] == "insite"
    assert kwargs["interface"] == "http"
    assert kwargs["autogenerate_session_id"] is False


def test_pivot_rows_become_one_table_of_string_records(store, client):
    client.query.return_value = _result(
        ["_time", "tags", "fields"],
        [
            (T0, {"applicationToken": "app-1", "currentUrl": "/a"}, {"responseTime": 120}),
            (T1, {"applicationToken": "app-1", "currentUrl": "/b"}, {"responseTime": 80}),
        ],
    )

    tables = store.execute(response_time_query("app-1"))

    query = client.query.call_args.args[0]
    assert "FROM points" in query
    assert client.query.call_args.kwargs["parameters"]["application_token"] == "app-1"
    assert len(tables) == 1
    first = tables[0][0]
    assert first.timestamp == T0
    assert first.measurement == "data"
    assert first.application_token == "app-1"
    assert first.raw("responseTime") == "120"
    assert first.raw("currentUrl") == "/a"


def test_grouped_rows_become_one_table_per_key(store, client):
    client.query.return_value = _result(
        ["group_key", "_value"], [("/a", 3), ("/b", 1)]
    )

    tables = store.execute(page_query("app-1"))

    assert len(tables) == 2
    assert [t[0].raw("currentUrl") for t in tables] == ["/a", "/b"]
    assert [t[0].as_int("_value") for t in tables] == [3, 1]
    assert all(t[0].timestamp is None for t in tables)


def test_no_rows_means_no_tables(store, client):
    client.query.return_value = _result(["_time", "tags", "fields"], [])
    assert store.execute(abnormal_query("app-1")) == []


def test_operational_error_maps_to_store_unavailable(store, client):
    client.query.side_effect = OperationalError("connection refused")
    with pytest.raises(StoreUnavailable):
        store.execute(response_time_query("app-1"))


def test_database_error_maps_to_query_error(store, client):
    client.query.side_effect = DatabaseError("Code: 62. Syntax error")
    with pytest.raises(QueryError) as exc_info:
        store.execute(response_time_query("app-1"))
    assert not isinstance(exc_info.value, StoreUnavailable)


def test_ping_and_close(store, client):
    client.ping.return_value = True
    assert store.ping() is True
    client.close.side_effect = RuntimeError("already closed")
    store.close()  # logged, not raised
    client.close.assert_called_once()
