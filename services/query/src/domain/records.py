"""Typed view of rows returned by the event store."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import datetime
from typing import Mapping, Optional

from .errors import QueryError

_TRUE = "true"
_FALSE = "false"


@dataclass(frozen=True)
class EventRecord:
    """One row of a query result.

    ``values`` is sparse: only the tags and fields the query produced are
    present, always as strings. Use the ``as_*`` helpers to decode them.
    """

    measurement: str
    application_token: str
    timestamp: Optional[datetime] = None
    values: Mapping[str, str] = field(default_factory=dict)

    def has(self, name: str) -> bool:
        return name in self.values

    def raw(self, name: str) -> str:
        try:
            return self.values[name]
        except KeyError:
            raise QueryError(
                f"field '{name}' missing from {self.measurement} record"
            ) from None

    def as_int(self, name: str) -> int:
        value = self.raw(name)
        try:
            return int(value)
        except ValueError:
            # counts may come back as "3.0"
            try:
                number = float(value)
            except ValueError:
                raise QueryError(f"field '{name}' is not an integer: {value!r}") from None
            if not number.is_integer():
                raise QueryError(f"field '{name}' is not an integer: {value!r}")
            return int(number)

    def as_float(self, name: str) -> float:
        value = self.raw(name)
        try:
            number = float(value)
        except ValueError:
            raise QueryError(f"field '{name}' is not numeric: {value!r}") from None
        if not math.isfinite(number):
            raise QueryError(f"field '{name}' is not a finite number: {value!r}")
        return number

    def as_bool(self, name: str) -> bool:
        value = self.raw(name).strip().lower()
        if value == _TRUE:
            return True
        if value == _FALSE:
            return False
        raise QueryError(f"field '{name}' is not a boolean: {value!r}")


Table = list[EventRecord]
