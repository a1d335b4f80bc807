from __future__ import annotations

import time
from datetime import datetime
from typing import Callable, List, Optional, TypeVar

from shared.constants import Fields
from shared.metrics import get_counter, get_histogram
from src.aggregators import average_response_time, latest_abnormal_flag, url_distribution
from src.core.logger import get_logger
from src.domain.errors import NoDataError, QueryError
from src.domain.models import (
    AbnormalResult,
    PageDistributionResult,
    ReferrerResult,
    ResponseTimeResult,
)
from src.domain.records import Table
from src.infrastructure.clickhouse.client import EventStore
from src.query.builder import (
    QuerySpec,
    abnormal_query,
    page_query,
    referrer_query,
    response_time_query,
)
from src.services.access_guard import AccessGuard
from src.utils.concurrency import run_blocking

T = TypeVar("T")

logger = get_logger("analytics_service")

QUERY_DURATION = get_histogram(
    "analytics_query_duration_seconds",
    "Time spent querying and aggregating one analytic",
    labelnames=("operation",),
)
QUERY_ERRORS = get_counter(
    "analytics_query_errors_total",
    "Analytic reads that ended in an error",
    labelnames=("operation", "kind"),
)


class AnalyticsService:
    """Entry point for the four analytics reads.

    Each read runs the access guard (fail-open), builds its query, executes
    it on the shared store handle and reduces the tables. The store and the
    guard are owned by the application lifespan, not by this service.
    """

    def __init__(self, store: EventStore, guard: AccessGuard):
        self.store = store
        self.guard = guard

    async def response_time(
        self,
        member_id: int,
        application_token: str,
        start: Optional[datetime] = None,
        stop: Optional[datetime] = None,
    ) -> ResponseTimeResult:
        average = await self._read(
            "response_time",
            member_id,
            response_time_query(application_token, start, stop),
            average_response_time,
        )
        return ResponseTimeResult(average_response_time=average)

    async def referrer_distribution(
        self,
        member_id: int,
        application_token: str,
        start: Optional[datetime] = None,
        stop: Optional[datetime] = None,
    ) -> ReferrerResult:
        entries = await self._read(
            "referrer_distribution",
            member_id,
            referrer_query(application_token, start, stop),
            lambda tables: url_distribution(tables, Fields.BEFORE_URL),
        )
        return ReferrerResult(referrers=entries)

    async def page_distribution(
        self,
        member_id: int,
        application_token: str,
        start: Optional[datetime] = None,
        stop: Optional[datetime] = None,
    ) -> PageDistributionResult:
        entries = await self._read(
            "page_distribution",
            member_id,
            page_query(application_token, start, stop),
            lambda tables: url_distribution(tables, Fields.CURRENT_URL),
        )
        return PageDistributionResult(pages=entries)

    async def abnormal_flag(
        self,
        member_id: int,
        application_token: str,
        start: Optional[datetime] = None,
        stop: Optional[datetime] = None,
    ) -> AbnormalResult:
        abnormal = await self._read(
            "abnormal",
            member_id,
            abnormal_query(application_token, start, stop),
            latest_abnormal_flag,
        )
        return AbnormalResult(abnormal=abnormal)

    async def _read(
        self,
        operation: str,
        member_id: int,
        spec: QuerySpec,
        aggregate: Callable[[List[Table]], T],
    ) -> T:
        # outcome deliberately ignored, see AccessGuard
        await self.guard.check(member_id, spec.application_token)

        start_time = time.perf_counter()
        try:
            tables = await run_blocking(self.store.execute, spec)
            return aggregate(tables)
        except NoDataError:
            QUERY_ERRORS.labels(operation=operation, kind="no_data").inc()
            logger.info(
                "No data for analytic",
                extra={"operation": operation, "member_id": member_id},
            )
            raise
        except QueryError as e:
            QUERY_ERRORS.labels(operation=operation, kind=type(e).__name__).inc()
            logger.error(
                "Analytic query failed",
                extra={
                    "operation": operation,
                    "member_id": member_id,
                    "error_type": type(e).__name__,
                    "error": str(e),
                },
            )
            raise
        finally:
            QUERY_DURATION.labels(operation=operation).observe(
                time.perf_counter() - start_time
            )
