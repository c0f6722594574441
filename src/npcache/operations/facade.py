"""
Npcache Facade - the public cache API.

Provides one callable per engine operation. Every call resolves the host
engine (once per process), then forwards to the engine with the cache path
inserted ahead of the caller's arguments.
"""
from __future__ import annotations

import inspect
from typing import Any, Dict, Optional, Tuple

from ..catalogue import METHODS
from ..resolver import Resolver, get_default_resolver
from ..streams.read import ReadStreamAdapter, ensure_async_iterable
from ..streams.write import WriteStreamAdapter

__all__ = ["Npcache"]


class Npcache:
    """
    Cache facade bound to a resolver.

    Design Notes: Npcache Facade

    The facade mirrors the engine's operation tree: plain operations are
    coroutine methods, grouped operations live on small namespace objects
    (`get.info`, `rm.all`, `tmp.mkdir`, ...), and a namespace that is also an
    operation itself (`ls`, `get`, `put`, `verify`, `get.stream`) is callable.

    - Arguments are opaque here and forwarded verbatim
    - Results and exceptions from the engine pass through unchanged
    - `ls.stream` returns the engine stream made pull-iterable
    - `get.stream` / `get.stream.by_digest` return a ReadStreamAdapter at
      once; resolution happens when it is first iterated
    - `put.stream` returns a WriteStreamAdapter at once; writes made before
      resolution completes are corked and released in order
    """

    def __init__(self, resolver: Optional[Resolver] = None) -> None:
        """
        Initialize the facade.

        Args:
            resolver: Resolver to use (if None, the process-wide default is
                looked up on every call)
        """
        self._resolver = resolver
        self.ls = _Ls(self)
        self.get = _Get(self)
        self.put = _Put(self)
        self.rm = _Rm(self)
        self.tmp = _Tmp(self)
        self.verify = _Verify(self)

    @property
    def resolver(self) -> Resolver:
        return self._resolver if self._resolver is not None else get_default_resolver()

    async def clear_memoized(self, *args: Any, **kwargs: Any) -> Any:
        """Drop the engine's in-memory index and content memoization."""
        return await self._invoke("clear_memoized", args, kwargs)

    async def _invoke(self, name: str, args: Tuple[Any, ...], kwargs: Dict[str, Any]) -> Any:
        context = await self.resolver.resolve()
        result = context.operation(METHODS[name])(context.cache_path, *args, **kwargs)
        if inspect.isawaitable(result):
            result = await result
        return result


class _Namespace:
    def __init__(self, facade: Npcache) -> None:
        self._facade = facade


class _Ls(_Namespace):
    async def __call__(self, *args: Any, **kwargs: Any) -> Any:
        """Return every index entry, keyed by cache key."""
        return await self._facade._invoke("ls", args, kwargs)

    async def stream(self, *args: Any, **kwargs: Any) -> Any:
        """Return a stream of index entries usable with `async for`."""
        return ensure_async_iterable(await self._facade._invoke("ls.stream", args, kwargs))


class _GetStream(_Namespace):
    def __call__(self, *args: Any, **kwargs: Any) -> ReadStreamAdapter:
        """Stream the content stored under a key."""
        return ReadStreamAdapter(lambda: self._facade._invoke("get.stream", args, kwargs))

    def by_digest(self, *args: Any, **kwargs: Any) -> ReadStreamAdapter:
        """Stream content by its integrity digest."""
        return ReadStreamAdapter(lambda: self._facade._invoke("get.stream.by_digest", args, kwargs))


class _Get(_Namespace):
    def __init__(self, facade: Npcache) -> None:
        super().__init__(facade)
        self.stream = _GetStream(facade)

    async def __call__(self, *args: Any, **kwargs: Any) -> Any:
        return await self._facade._invoke("get", args, kwargs)

    async def by_digest(self, *args: Any, **kwargs: Any) -> Any:
        return await self._facade._invoke("get.by_digest", args, kwargs)

    async def info(self, *args: Any, **kwargs: Any) -> Any:
        return await self._facade._invoke("get.info", args, kwargs)

    async def has_content(self, *args: Any, **kwargs: Any) -> Any:
        return await self._facade._invoke("get.has_content", args, kwargs)


class _Put(_Namespace):
    async def __call__(self, *args: Any, **kwargs: Any) -> Any:
        return await self._facade._invoke("put", args, kwargs)

    def stream(self, *args: Any, **kwargs: Any) -> WriteStreamAdapter:
        """
        Open a streaming put.

        Must be called from a running event loop. Chunks may be written
        immediately; `await sink.close()` finishes the put.
        """
        return WriteStreamAdapter(lambda: self._facade._invoke("put.stream", args, kwargs))


class _Rm(_Namespace):
    async def all(self, *args: Any, **kwargs: Any) -> Any:
        return await self._facade._invoke("rm.all", args, kwargs)

    async def entry(self, *args: Any, **kwargs: Any) -> Any:
        return await self._facade._invoke("rm.entry", args, kwargs)

    async def content(self, *args: Any, **kwargs: Any) -> Any:
        return await self._facade._invoke("rm.content", args, kwargs)


class _Tmp(_Namespace):
    async def mkdir(self, *args: Any, **kwargs: Any) -> Any:
        return await self._facade._invoke("tmp.mkdir", args, kwargs)

    async def fix(self, *args: Any, **kwargs: Any) -> Any:
        return await self._facade._invoke("tmp.fix", args, kwargs)

    async def with_tmp(self, *args: Any, **kwargs: Any) -> Any:
        return await self._facade._invoke("tmp.with_tmp", args, kwargs)


class _Verify(_Namespace):
    async def __call__(self, *args: Any, **kwargs: Any) -> Any:
        """Check the cache for corruption and garbage-collect unreferenced content."""
        return await self._facade._invoke("verify", args, kwargs)

    async def last_run(self, *args: Any, **kwargs: Any) -> Any:
        return await self._facade._invoke("verify.last_run", args, kwargs)
