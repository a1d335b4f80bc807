"""Error kinds raised by the read path.

``NoDataError`` and ``QueryError`` (with its ``StoreUnavailable`` subtype)
reach the caller. ``ValidationFailure`` never leaves the access guard.
"""


class AnalyticsError(Exception):
    """Base class for read path failures."""


class NoDataError(AnalyticsError):
    """No qualifying records where a non-empty set is required."""

    def __init__(self, operation: str):
        super().__init__(f"no data for {operation}")
        self.operation = operation


class QueryError(AnalyticsError):
    """The store rejected the query or returned values that do not decode."""


class StoreUnavailable(QueryError):
    """The store could not be reached."""


class ValidationFailure(AnalyticsError):
    """The member service rejected (or could not answer) a validation call."""

    def __init__(self, message: str, status: int | None = None):
        super().__init__(message)
        self.status = status
