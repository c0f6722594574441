"""
Stream interfaces for the cache engine.

These protocols define the boundary between npcache's adapters and the
streams returned by the engine. Readable streams push chunks through events
and may additionally support `async for`; writable sinks accept chunks
synchronously and report completion through events.
"""
from __future__ import annotations

from typing import Any, Callable, Protocol, runtime_checkable

__all__ = ["ReadableStream", "WritableSink", "RELAYED_READ_EVENTS", "RELAYED_WRITE_EVENTS"]

# Side-channel events copied from engine streams onto npcache adapters
RELAYED_READ_EVENTS = ("error", "integrity", "metadata", "size")
RELAYED_WRITE_EVENTS = ("error", "integrity", "size")


@runtime_checkable
class ReadableStream(Protocol):
    """
    Protocol for engine read streams.

    Events:
        data(chunk): one chunk of content, in order
        end(): no more chunks
        error(exc): the stream failed; no further events follow
        integrity(sri), metadata(obj), size(n): side-channel information
    """

    def on(self, event: str, listener: Callable[..., Any]) -> Any:
        """
        Register a listener.

        Registering the first `data` listener starts the flow of chunks.
        """
        ...


@runtime_checkable
class WritableSink(Protocol):
    """
    Protocol for engine write sinks.

    Events:
        finish(): every chunk has been committed
        error(exc): the write failed
        integrity(sri), size(n): computed once the content is committed
    """

    def write(self, chunk: bytes) -> Any:
        """Accept one chunk."""
        ...

    def end(self) -> Any:
        """Signal end of input."""
        ...

    def on(self, event: str, listener: Callable[..., Any]) -> Any:
        """Register a listener."""
        ...
