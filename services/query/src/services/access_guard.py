"""Best-effort authorization in front of the analytics read path.

The guard is fail-open: a member service outage or a rejected validation is
logged and counted, and the read continues. Callers get the outcome as a
bool so the decision stays visible; the facade ignores it.
"""

from __future__ import annotations

import asyncio
from typing import Protocol

from shared.metrics import get_counter
from src.core.logger import get_logger

logger = get_logger("access_guard")

ACCESS_GUARD_FAILURES = get_counter(
    "access_guard_failures_total",
    "Validation calls that failed and were ignored",
    labelnames=("reason",),
)


class Validator(Protocol):
    async def validate(self, member_id: int, application_token: str) -> None: ...


class AccessGuard:
    def __init__(self, validator: Validator, timeout_seconds: float):
        self.validator = validator
        self.timeout_seconds = timeout_seconds

    async def check(self, member_id: int, application_token: str) -> bool:
        try:
            await asyncio.wait_for(
                self.validator.validate(member_id, application_token),
                timeout=self.timeout_seconds,
            )
        except asyncio.TimeoutError:
            ACCESS_GUARD_FAILURES.labels(reason="timeout").inc()
            logger.warning(
                "Member validation timed out, continuing",
                extra={"member_id": member_id, "timeout_s": self.timeout_seconds},
            )
            return False
        except Exception as e:  # noqa: BLE001 - fail open
            ACCESS_GUARD_FAILURES.labels(reason=type(e).__name__).inc()
            logger.warning(
                "Member validation failed, continuing",
                extra={
                    "member_id": member_id,
                    "application_token": application_token,
                    "error_type": type(e).__name__,
                    "error": str(e),
                },
            )
            return False
        return True
