"""
Application service: per-key single-flight guard for coroutines.

While a call for a key is running, later callers for the same key await the
same task instead of starting their own. The shared task is shielded, so a
cancelled caller does not cancel the work the others are waiting on.
"""

import asyncio
from typing import Awaitable, Callable, Generic, TypeVar

T = TypeVar("T")


class SingleFlight(Generic[T]):
    def __init__(self) -> None:
        self._inflight: dict[str, asyncio.Task] = {}

    def in_flight(self, key: str) -> bool:
        return key in self._inflight

    async def run(self, key: str, factory: Callable[[], Awaitable[T]]) -> T:
        task = self._inflight.get(key)
        if task is None:
            task = asyncio.ensure_future(factory())
            self._inflight[key] = task

            def _forget(done: asyncio.Task) -> None:
                if self._inflight.get(key) is done:
                    del self._inflight[key]
                if not done.cancelled():
                    done.exception()

            task.add_done_callback(_forget)
        return await asyncio.shield(task)
