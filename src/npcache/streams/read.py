"""
Pull-iteration over engine read streams.

Engine streams push chunks through `data` events and may or may not support
`async for` themselves. `ensure_async_iterable` gives every stream a pull
interface without touching the stream's type, and `ReadStreamAdapter` lets a
caller hold (and listen on) a stream before the engine has been resolved.
"""
from __future__ import annotations

import asyncio
import functools
import logging
from typing import Any, AsyncIterator, Awaitable, Callable, Optional

from .base import RELAYED_READ_EVENTS, ReadableStream
from .events import EventEmitter

__all__ = [
    "supports_async_iteration",
    "ensure_async_iterable",
    "AsyncIterableStream",
    "ReadStreamAdapter",
]

logger = logging.getLogger(__name__)

_END = object()


class _Failure:
    __slots__ = ("error",)

    def __init__(self, error: BaseException) -> None:
        self.error = error


@functools.lru_cache(maxsize=None)
def _type_supports_async_iteration(cls: type) -> bool:
    return callable(getattr(cls, "__aiter__", None))


def supports_async_iteration(stream: Any) -> bool:
    """True if the stream's type natively supports `async for` (checked once per type)."""
    return _type_supports_async_iteration(type(stream))


def ensure_async_iterable(stream: Any) -> Any:
    """
    Return an object that supports `async for` over the stream's chunks.

    Natively iterable streams are returned unchanged, so calling this on its
    own result is a no-op.
    """
    if supports_async_iteration(stream):
        return stream
    return AsyncIterableStream(stream)


class AsyncIterableStream:
    """
    Pull view over a push-only readable stream.

    Chunks are queued from `data` events as they arrive and handed out by
    `__anext__` in the same order. An `error` event fails the pending (or
    next) pull; `end` finishes iteration.
    """

    def __init__(self, stream: ReadableStream) -> None:
        self._stream = stream
        self._queue: asyncio.Queue = asyncio.Queue()
        self._done = False
        stream.on("error", lambda error: self._queue.put_nowait(_Failure(error)))
        stream.on("end", lambda *_: self._queue.put_nowait(_END))
        stream.on("data", self._queue.put_nowait)

    @property
    def stream(self) -> ReadableStream:
        return self._stream

    def on(self, event: str, listener: Callable[..., Any]) -> "AsyncIterableStream":
        """Register a listener on the wrapped stream."""
        self._stream.on(event, listener)
        return self

    def __aiter__(self) -> "AsyncIterableStream":
        return self

    async def __anext__(self) -> Any:
        if self._done:
            raise StopAsyncIteration

        item = await self._queue.get()
        if item is _END:
            self._done = True
            raise StopAsyncIteration
        if isinstance(item, _Failure):
            self._done = True
            raise item.error
        return item


class ReadStreamAdapter(EventEmitter):
    """
    Readable handed out before the backing stream exists.

    Iteration is lazy: the first `async for` awaits `opener` (which resolves
    the engine and opens the backing stream), relays the side-channel events
    listed in RELAYED_READ_EVENTS onto this adapter, then yields the backing
    chunks in order and emits `end` once they are exhausted. Listeners can be
    registered at any point before that.
    """

    def __init__(self, opener: Callable[[], Awaitable[ReadableStream]]) -> None:
        super().__init__()
        self._opener = opener
        self._chunks: Optional[AsyncIterator[Any]] = None

    def __aiter__(self) -> AsyncIterator[Any]:
        if self._chunks is None:
            self._chunks = self._drain()
        return self._chunks

    async def read(self) -> bytes:
        """Collect the whole stream into one bytes object."""
        return b"".join([chunk async for chunk in self])

    async def aclose(self) -> None:
        """
        Stop reading early and release the backing stream.

        Safe to call at any point; no `end` event is emitted for a stream
        that was closed before it was drained.
        """
        if self._chunks is None:
            self._chunks = self._drain()
        await self._chunks.aclose()

    async def _drain(self) -> AsyncIterator[Any]:
        stream = await self._opener()
        for event in RELAYED_READ_EVENTS:
            stream.on(event, functools.partial(self.emit, event))

        async for chunk in ensure_async_iterable(stream):
            yield chunk

        logger.debug("Backing read stream drained")
        self.emit("end")
