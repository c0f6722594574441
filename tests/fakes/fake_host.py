"""
Fake host probes for testing.

Each probe can be made to fail or to take a while, and every call is
counted so tests can assert how many probe rounds ran. Attributes may be
changed between resolution attempts to simulate a host being repaired.
"""
from __future__ import annotations

import asyncio
from collections import Counter
from typing import Any, List, Optional

from npcache.host import HostProbes

__all__ = ["FakeHost"]


class FakeHost(HostProbes):
    """
    In-memory HostProbes implementation.

    This is a test double; not for production use.
    """

    def __init__(
        self,
        engine: Any = None,
        cache_root: str = "/tmp/npcache-fake",
        *,
        version: str = "9.8.1",
        engine_error: Optional[BaseException] = None,
        path_error: Optional[BaseException] = None,
        version_error: Optional[BaseException] = None,
        delay: float = 0.0,
    ) -> None:
        self.engine = engine
        self.cache_root_dir = cache_root
        self.version = version
        self.engine_error = engine_error
        self.path_error = path_error
        self.version_error = version_error
        self.delay = delay
        self.calls: Counter = Counter()
        self.completed: List[str] = []
        self.requested_minimums: List[str] = []

    async def locate_engine(self, name: str) -> Any:
        self.calls["locate_engine"] += 1
        await asyncio.sleep(self.delay)
        self.completed.append("locate_engine")
        if self.engine_error is not None:
            raise self.engine_error
        return self.engine

    async def cache_root(self) -> str:
        self.calls["cache_root"] += 1
        await asyncio.sleep(self.delay)
        self.completed.append("cache_root")
        if self.path_error is not None:
            raise self.path_error
        return self.cache_root_dir

    async def check_version(self, minimum: str) -> None:
        self.calls["check_version"] += 1
        self.requested_minimums.append(minimum)
        await asyncio.sleep(self.delay)
        self.completed.append("check_version")
        if self.version_error is not None:
            raise self.version_error
