import asyncio
from unittest.mock import AsyncMock, MagicMock

import pytest
from src.domain.errors import ValidationFailure
from src.services.access_guard import ACCESS_GUARD_FAILURES, AccessGuard


def _validator(side_effect=None):
    validator = MagicMock()
    validator.validate = AsyncMock(side_effect=side_effect)
    return validator


def _failures(reason: str) -> float:
    return ACCESS_GUARD_FAILURES.labels(reason=reason)._value.get()


@pytest.mark.asyncio
async def test_successful_validation_returns_true():
    validator = _validator()
    guard = AccessGuard(validator, timeout_seconds=1.0)

    assert await guard.check(1, "app-1") is True
    validator.validate.assert_awaited_once_with(1, "app-1")


@pytest.mark.asyncio
async def test_rejection_is_swallowed_and_counted():
    before = _failures("ValidationFailure")
    guard = AccessGuard(
        _validator(ValidationFailure("forbidden", status=403)), timeout_seconds=1.0
    )

    assert await guard.check(1, "app-1") is False
    assert _failures("ValidationFailure") == before + 1


@pytest.mark.asyncio
async def test_network_error_is_swallowed():
    guard = AccessGuard(_validator(ConnectionError("refused")), timeout_seconds=1.0)
    assert await guard.check(1, "app-1") is False


@pytest.mark.asyncio
async def test_slow_validator_times_out():
    async def _slow(member_id, token):
        await asyncio.sleep(5)

    validator = MagicMock()
    validator.validate = _slow
    before = _failures("timeout")
    guard = AccessGuard(validator, timeout_seconds=0.01)

    assert await guard.check(1, "app-1") is False
    assert _failures("timeout") == before + 1


@pytest.mark.asyncio
async def test_cancellation_is_not_swallowed():
    guard = AccessGuard(_validator(asyncio.CancelledError()), timeout_seconds=1.0)
    with pytest.raises(asyncio.CancelledError):
        await guard.check(1, "app-1")
