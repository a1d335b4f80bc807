import asyncio
import random
from typing import Awaitable, Callable, Iterable, Optional, TypeVar

T = TypeVar("T")

OnRetry = Callable[[int, BaseException, float], Awaitable[None] | None]


def backoff_delays(
    retries: int, base_delay: float, max_delay: float, jitter: float
) -> list[float]:
    """Sleep durations between consecutive attempts (``retries - 1`` of them)."""
    delays = []
    delay = base_delay
    for _ in range(retries - 1):
        delays.append(min(delay, max_delay) + random.uniform(0, delay * jitter))
        delay = min(delay * 2, max_delay)
    return delays


async def retry_async(
    func: Callable[[], Awaitable[T]],
    retries: int = 5,
    base_delay: float = 0.5,
    max_delay: float = 10.0,
    jitter: float = 0.1,
    retry_on: Iterable[type[BaseException]] = (Exception,),
    on_retry: Optional[OnRetry] = None,
) -> T:
    """Await ``func`` until it succeeds, re-raising the last error."""
    if retries < 1:
        raise ValueError("retries must be >= 1")
    retry_on = tuple(retry_on)
    delays = backoff_delays(retries, base_delay, max_delay, jitter)
    for attempt, sleep_for in enumerate(delays, start=1):
        try:
            return await func()
        except retry_on as exc:
            if on_retry:
                result = on_retry(attempt, exc, sleep_for)
                if result is not None:
                    await result  # support async callback
            await asyncio.sleep(sleep_for)
    return await func()
