from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock, MagicMock

import pytest
from src.domain.records import EventRecord

BASE_TIME = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def make_record():
    """Factory for store records; ``offset_s`` shifts the timestamp."""

    def _make(measurement="data", token="app-1", offset_s=None, **values):
        timestamp = None if offset_s is None else BASE_TIME + timedelta(seconds=offset_s)
        return EventRecord(
            measurement=measurement,
            application_token=token,
            timestamp=timestamp,
            values={k: str(v) for k, v in values.items()},
        )

    return _make


@pytest.fixture
def mock_store():
    """Event store double returning no tables unless told otherwise."""
    store = MagicMock()
    store.execute = MagicMock(return_value=[])
    return store


@pytest.fixture
def mock_guard():
    guard = MagicMock()
    guard.check = AsyncMock(return_value=True)
    return guard
