"""
Deferred writable sink for streaming puts.

A caller may start writing before the engine has been resolved. The adapter
corks those chunks, opens the engine's sink once resolution completes,
releases the corked chunks in write order, and from then on forwards writes
directly.
"""
from __future__ import annotations

import asyncio
import logging
from collections import deque
from typing import Any, Awaitable, Callable, Deque, Optional

from ..errors import StreamStateError
from .base import RELAYED_WRITE_EVENTS, WritableSink
from .events import EventEmitter

__all__ = ["WriteStreamAdapter", "PENDING", "ACTIVE", "CLOSED", "FAILED"]

logger = logging.getLogger(__name__)

PENDING = "pending"
ACTIVE = "active"
CLOSED = "closed"
FAILED = "failed"


class WriteStreamAdapter(EventEmitter):
    """
    Writable sink that becomes a pass-through once its destination exists.

    State machine: pending -> active -> closed, or pending -> failed when
    the opener raises. Must be constructed inside a running event loop; the
    opener is scheduled immediately.

    Attributes:
        integrity: Integrity reported by the backing sink, once known
        size: Size reported by the backing sink, once known
    """

    def __init__(self, opener: Callable[[], Awaitable[WritableSink]]) -> None:
        super().__init__()
        self.state = PENDING
        self.integrity: Any = None
        self.size: Optional[int] = None
        self._corked: Deque[Any] = deque()
        self._sink: Optional[WritableSink] = None
        self._error: Optional[BaseException] = None
        self._ending = False
        self._finished: Optional[asyncio.Future] = None
        self._closing: Optional[asyncio.Future] = None
        self._activation = asyncio.get_running_loop().create_task(self._activate(opener))

    async def __aenter__(self) -> "WriteStreamAdapter":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if exc_type is None:
            await self.close()
        else:
            logger.debug(f"Write stream abandoned in state {self.state}: {exc!r}")

    def write(self, chunk: Any) -> None:
        """
        Queue or forward one chunk.

        Raises:
            StreamStateError: If close() was already called
            Exception: The activation failure, if the adapter failed
        """
        if self.state == FAILED:
            raise self._error
        if self._ending:
            raise StreamStateError("write after end")

        if self.state == PENDING:
            self._corked.append(chunk)
        else:
            self._sink.write(chunk)

    async def close(self) -> None:
        """
        Signal end of input and wait until the backing sink has finished.

        Concurrent and repeated calls share one close; the backing sink is
        ended at most once.

        Raises:
            Exception: The activation failure or the backing sink's error
        """
        self._ending = True
        if self._closing is None:
            self._closing = asyncio.ensure_future(self._close())
        await asyncio.shield(self._closing)

    async def _close(self) -> None:
        await self._activation
        if self.state == FAILED:
            raise self._error

        self._sink.end()
        outcome = await self._finished
        if isinstance(outcome, BaseException):
            raise outcome

        self.state = CLOSED
        logger.debug("Write stream closed")

    async def _activate(self, opener: Callable[[], Awaitable[WritableSink]]) -> None:
        try:
            sink = await opener()
        except Exception as e:
            self._fail(e)
            self.emit("error", e)
            return

        self._finished = asyncio.get_running_loop().create_future()
        sink.on("finish", lambda *_: self._settle(None))
        sink.on("error", self._settle)
        sink.on("integrity", self._record_integrity)
        sink.on("size", self._record_size)
        for event in RELAYED_WRITE_EVENTS:
            sink.on(event, lambda *args, _event=event: self.emit(_event, *args))

        self._sink = sink
        self.state = ACTIVE
        logger.debug(f"Write stream active, releasing {len(self._corked)} corked chunk(s)")
        while self._corked:
            sink.write(self._corked.popleft())

    def _settle(self, outcome: Optional[BaseException]) -> None:
        # Failures settle as results; close() raises them
        if outcome is not None:
            self._fail(outcome)
        if not self._finished.done():
            self._finished.set_result(outcome)

    def _record_integrity(self, integrity: Any) -> None:
        self.integrity = integrity

    def _record_size(self, size: int) -> None:
        self.size = size

    def _fail(self, error: BaseException) -> None:
        self.state = FAILED
        self._error = error
        self._corked.clear()
