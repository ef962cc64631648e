"""
Huawei Dongle Client - Async Reader/Writer Lock

Shared lock for readers of the session state, exclusive lock for writers.
"""

import asyncio
from contextlib import asynccontextmanager
from typing import AsyncIterator


class AsyncRWLock:
    """Reader/writer lock for coroutines.

    Any number of readers may hold the lock at once. A writer waits for active
    readers to leave and blocks new readers while it waits, so a steady stream
    of reads cannot starve a token update.
    """

    def __init__(self):
        self._cond = asyncio.Condition()
        self._readers = 0
        self._writer = False
        self._writers_waiting = 0

    async def _notify(self) -> None:
        async with self._cond:
            self._cond.notify_all()

    async def _release(self) -> None:
        # State is already updated; a cancelled wake-up must still run.
        await asyncio.shield(self._notify())

    @asynccontextmanager
    async def read(self) -> AsyncIterator[None]:
        async with self._cond:
            await self._cond.wait_for(lambda: not self._writer and not self._writers_waiting)
            self._readers += 1
        try:
            yield
        finally:
            self._readers -= 1
            if not self._readers:
                await self._release()

    @asynccontextmanager
    async def write(self) -> AsyncIterator[None]:
        async with self._cond:
            self._writers_waiting += 1
            try:
                await self._cond.wait_for(lambda: not self._writer and not self._readers)
            except BaseException:
                # Cancelled while waiting: readers blocked on us may proceed.
                self._writers_waiting -= 1
                self._cond.notify_all()
                raise
            self._writers_waiting -= 1
            self._writer = True
        try:
            yield
        finally:
            self._writer = False
            await self._release()
