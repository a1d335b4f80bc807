"""Query specifications for the event store.

A ``QuerySpec`` describes what to read; the store adapter decides how. Specs
are built per request and thrown away once the result is aggregated.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional

from shared.constants import Fields, Measurement


class Aggregate(str, Enum):
    COUNT = "count"


@dataclass(frozen=True)
class QuerySpec:
    measurement: str
    application_token: str
    start: Optional[datetime] = None  # None: since the beginning of retention
    stop: Optional[datetime] = None  # None: up to now
    group_by: Optional[str] = None
    aggregate: Optional[Aggregate] = None
    pivot: bool = False
    sort_by: Optional[str] = None

    @property
    def grouped(self) -> bool:
        return self.group_by is not None


def build_query(
    measurement: str,
    application_token: str,
    group_by: Optional[str] = None,
    aggregate: Optional[Aggregate] = None,
    pivot: bool = False,
    sort_by: Optional[str] = None,
    start: Optional[datetime] = None,
    stop: Optional[datetime] = None,
) -> QuerySpec:
    """Build a spec filtered to one measurement and one application token.

    Nothing is validated here: an empty token simply matches no rows.
    """
    if isinstance(measurement, Measurement):
        measurement = measurement.value
    return QuerySpec(
        measurement=measurement,
        application_token=application_token,
        start=start,
        stop=stop,
        group_by=group_by,
        aggregate=aggregate,
        pivot=pivot,
        sort_by=sort_by,
    )


def response_time_query(
    application_token: str,
    start: Optional[datetime] = None,
    stop: Optional[datetime] = None,
) -> QuerySpec:
    # pivot joins the responseTime field with the rest of its point
    return build_query(
        Measurement.DATA, application_token, pivot=True, start=start, stop=stop
    )


def referrer_query(
    application_token: str,
    start: Optional[datetime] = None,
    stop: Optional[datetime] = None,
) -> QuerySpec:
    return build_query(
        Measurement.DATA,
        application_token,
        group_by=Fields.BEFORE_URL,
        aggregate=Aggregate.COUNT,
        start=start,
        stop=stop,
    )


def page_query(
    application_token: str,
    start: Optional[datetime] = None,
    stop: Optional[datetime] = None,
) -> QuerySpec:
    return build_query(
        Measurement.DATA,
        application_token,
        group_by=Fields.CURRENT_URL,
        aggregate=Aggregate.COUNT,
        start=start,
        stop=stop,
    )


def abnormal_query(
    application_token: str,
    start: Optional[datetime] = None,
    stop: Optional[datetime] = None,
) -> QuerySpec:
    return build_query(
        Measurement.ABNORMAL,
        application_token,
        pivot=True,
        sort_by=Fields.TIME,
        start=start,
        stop=stop,
    )
