"""
FIFO mutual-exclusion queue for asyncio code.
"""
from __future__ import annotations
import asyncio
from typing import Optional

from .types import ReleaseFunc


class Mutex:
    """
    Hands out the lock strictly in request order.

    ``await mutex.lock()`` resolves to a release function once every earlier
    caller has released. Call it in a ``finally`` block::

        release = await mutex.lock()
        try:
            ...
        finally:
            release()
    """
    __slots__ = ('_tail', '_pending')

    def __init__(self) -> None:
        self._tail: Optional[asyncio.Future] = None
        self._pending = 0

    @property
    def locked(self) -> bool:
        """True while someone holds or waits for the lock."""
        return self._pending > 0

    async def lock(self) -> ReleaseFunc:
        previous = self._tail
        current = asyncio.get_running_loop().create_future()
        self._tail = current
        self._pending += 1

        def release() -> None:
            if current.done():
                return
            current.set_result(None)
            self._pending -= 1
            if self._tail is current:
                self._tail = None

        if previous is not None:
            try:
                await asyncio.shield(previous)
            except asyncio.CancelledError:
                # Give our turn away once the previous holder is done.
                previous.add_done_callback(lambda _: release())
                raise
        return release
