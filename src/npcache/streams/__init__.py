"""
Streams package - adapters between engine streams and npcache callers.
"""
from .base import ReadableStream, WritableSink
from .events import EventEmitter
from .read import AsyncIterableStream, ReadStreamAdapter, ensure_async_iterable, supports_async_iteration
from .write import WriteStreamAdapter

__all__ = [
    "EventEmitter",
    "ReadableStream",
    "WritableSink",
    "AsyncIterableStream",
    "ReadStreamAdapter",
    "WriteStreamAdapter",
    "ensure_async_iterable",
    "supports_async_iteration",
]
