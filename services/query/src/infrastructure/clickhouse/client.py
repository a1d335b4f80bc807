"""ClickHouse-backed event store."""

from __future__ import annotations

from typing import Any, Dict, List, Protocol, Sequence

import clickhouse_connect
from clickhouse_connect.driver.client import Client
from clickhouse_connect.driver.exceptions import ClickHouseError, OperationalError

from shared.constants import Fields
from src.core.config import Settings, settings
from src.core.logger import get_logger
from src.domain.errors import QueryError, StoreUnavailable
from src.domain.records import EventRecord, Table
from src.query.builder import QuerySpec

from .queries import GROUP_KEY, render_query

logger = get_logger("clickhouse_client")


class EventStore(Protocol):
    """What the read path needs from a time-series store."""

    def execute(self, spec: QuerySpec) -> List[Table]:
        """Run ``spec`` and return zero or more tables of records."""


def create_client(config: Settings = settings) -> Client:
    """Open an HTTP client that tolerates concurrent queries."""
    return clickhouse_connect.get_client(
        host=config.clickhouse_host,
        port=config.clickhouse_port,
        database=config.clickhouse_db,
        username=config.clickhouse_user,
        password=config.clickhouse_password,
        interface="http",
        # no session id: one client is shared by concurrent requests
        autogenerate_session_id=False,
    )


def _stringify(mapping: Dict[str, Any] | None) -> Dict[str, str]:
    return {str(k): str(v) for k, v in (mapping or {}).items()}


class ClickHouseEventStore:
    def __init__(self, client: Client, config: Settings = settings):
        self.client = client
        self.table = config.clickhouse_events_table
        self.query_settings = {
            "max_execution_time": config.clickhouse_query_timeout_seconds
        }

    def execute(self, spec: QuerySpec) -> List[Table]:
        query, params = render_query(spec, self.table)
        logger.debug(
            "Executing event query",
            extra={
                "measurement": spec.measurement,
                "group_by": spec.group_by,
                "pivot": spec.pivot,
            },
        )
        try:
            result = self.client.query(
                query, parameters=params, settings=self.query_settings
            )
        except OperationalError as e:
            logger.error(
                "Event store unreachable",
                extra={"measurement": spec.measurement, "error": str(e)},
            )
            raise StoreUnavailable(str(e)) from e
        except ClickHouseError as e:
            logger.error(
                "Event query failed",
                extra={"measurement": spec.measurement, "error": str(e)},
            )
            raise QueryError(str(e)) from e

        tables = self._to_tables(spec, result.column_names, result.result_rows)
        logger.debug(
            "Event query returned",
            extra={
                "measurement": spec.measurement,
                "tables": len(tables),
                "rows": len(result.result_rows),
            },
        )
        return tables

    def _to_tables(
        self, spec: QuerySpec, columns: Sequence[str], rows: Sequence[Sequence[Any]]
    ) -> List[Table]:
        tables: Dict[str, Table] = {}
        for row in rows:
            named = dict(zip(columns, row))
            record = self._to_record(spec, named)
            key = str(named.get(GROUP_KEY, "")) if spec.grouped else ""
            tables.setdefault(key, []).append(record)
        return list(tables.values())

    def _to_record(self, spec: QuerySpec, row: Dict[str, Any]) -> EventRecord:
        values: Dict[str, str] = {}
        if "tags" in row:
            values.update(_stringify(row["tags"]))
        if "fields" in row:
            values.update(_stringify(row["fields"]))
        for column in (Fields.FIELD, Fields.VALUE):
            if column in row:
                values[column] = str(row[column])
        if spec.grouped:
            values[spec.group_by] = str(row.get(GROUP_KEY, ""))
        return EventRecord(
            measurement=spec.measurement,
            application_token=spec.application_token,
            timestamp=row.get(Fields.TIME),
            values=values,
        )

    def ping(self) -> bool:
        return bool(self.client.ping())

    def close(self):
        """Close the ClickHouse client connection"""
        try:
            self.client.close()
        except Exception as e:
            logger.warning("Error closing ClickHouse client", extra={"error": str(e)})
