import asyncio
from typing import Callable, TypeVar

T = TypeVar("T")


async def run_blocking(func: Callable[..., T], *args, **kwargs) -> T:
    """Run blocking function in default executor.

    Store queries go through here so the event loop keeps serving other
    requests while ClickHouse answers.
    """
    return await asyncio.to_thread(func, *args, **kwargs)
