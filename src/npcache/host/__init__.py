"""
Host package - probes against the separately installed npm CLI.

The resolver only depends on the HostProbes protocol; NpmHost is the default
implementation backed by a real npm installation.
"""
from __future__ import annotations

from types import ModuleType
from typing import Any, Protocol, runtime_checkable

from ..settings import Settings
from .cache_path import resolve_cache_root
from .locator import locate_engine
from .version import check_npm_version

__all__ = ["HostProbes", "NpmHost"]


@runtime_checkable
class HostProbes(Protocol):
    """Protocol for the three independent probes run during resolution."""

    async def locate_engine(self, name: str) -> Any:
        """
        Find and load the engine module.

        Raises:
            ModuleNotFoundError: If the host does not provide it
        """
        ...

    async def cache_root(self) -> str:
        """Return the host cache root directory (parent of the engine cache)."""
        ...

    async def check_version(self, minimum: str) -> None:
        """Raise unless the host tool is at least `minimum`."""
        ...


class NpmHost:
    """HostProbes backed by the npm CLI described by `settings`."""

    def __init__(self, settings: Settings) -> None:
        self.settings = settings

    async def locate_engine(self, name: str) -> ModuleType:
        return await locate_engine(self.settings, name)

    async def cache_root(self) -> str:
        return await resolve_cache_root(self.settings)

    async def check_version(self, minimum: str) -> None:
        await check_npm_version(self.settings, minimum)
