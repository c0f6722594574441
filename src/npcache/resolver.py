"""
Lazy, single-flight resolution of the host cache engine.

Resolution runs three independent probes against the host npm CLI (engine
module, cache directory, version gate) concurrently. A successful outcome is
memoized for the lifetime of the resolver; a failed one is not, so the next
call probes again from scratch.
"""
from __future__ import annotations

import asyncio
import logging
import os
from typing import Any, Callable, NamedTuple, Optional

from .catalogue import MethodSpec, lookup
from .errors import CachePathError, EngineNotFoundError
from .host import HostProbes, NpmHost
from .settings import create_settings_from_env

__all__ = [
    "MINIMUM_REQUIRED_NPM_VERSION",
    "ENGINE_MODULE_NAME",
    "CACHE_DIRNAME",
    "ResolvedContext",
    "Resolver",
    "get_default_resolver",
    "reset_default_resolver",
]

logger = logging.getLogger(__name__)

MINIMUM_REQUIRED_NPM_VERSION = "5.6.0"
ENGINE_MODULE_NAME = "cacache"
CACHE_DIRNAME = "_cacache"


class ResolvedContext(NamedTuple):
    """The discovered engine and the cache directory every call is bound to."""
    engine: Any
    cache_path: str

    def operation(self, spec: MethodSpec) -> Callable[..., Any]:
        return lookup(self.engine, spec)


def _probes_from_env() -> HostProbes:
    return NpmHost(create_settings_from_env())


class Resolver:
    """
    Resolves the engine at most once, sharing one attempt between callers.

    Callers that arrive while an attempt is running await the same future and
    observe the same context or the same exception. A failed attempt clears
    the in-flight slot without memoizing anything.
    """

    def __init__(self, probes_factory: Optional[Callable[[], HostProbes]] = None) -> None:
        """
        Args:
            probes_factory: Builds the probes for one attempt. Called again on
                every retry; defaults to an NpmHost configured from the
                environment at that moment.
        """
        self._probes_factory = probes_factory or _probes_from_env
        self._context: Optional[ResolvedContext] = None
        self._inflight: Optional[asyncio.Future] = None
        self.attempts = 0

    @property
    def resolved(self) -> bool:
        return self._context is not None

    async def resolve(self) -> ResolvedContext:
        """
        Return the memoized context, resolving it first if needed.

        Raises:
            EngineNotFoundError: If npm does not bundle the engine
            CachePathError: If the npm cache root is a regular file
            UnsupportedHostVersionError: If npm is too old
            Exception: Any other probe failure, unchanged
        """
        if self._context is not None:
            return self._context

        if self._inflight is None:
            self._inflight = asyncio.ensure_future(self._attempt())
            self._inflight.add_done_callback(self._settle)

        # shield: one caller being cancelled must not cancel the shared attempt
        return await asyncio.shield(self._inflight)

    def reset(self) -> None:
        """Forget the memoized context so the next call probes again."""
        self._context = None

    def _settle(self, future: asyncio.Future) -> None:
        self._inflight = None
        if future.cancelled():
            return
        if future.exception() is None:
            self._context = future.result()

    async def _attempt(self) -> ResolvedContext:
        self.attempts += 1
        probes = self._probes_factory()
        logger.debug(f"Resolving cache engine (attempt {self.attempts})")

        outcomes = await asyncio.gather(
            self._locate(probes),
            self._cache_path(probes),
            probes.check_version(MINIMUM_REQUIRED_NPM_VERSION),
            return_exceptions=True,
        )

        # First failure in declaration order wins: engine, path, version
        for outcome in outcomes:
            if isinstance(outcome, BaseException):
                logger.debug(f"Cache engine resolution failed: {outcome!r}")
                raise outcome

        engine, cache_path, _ = outcomes
        logger.info(f"Using cache engine {ENGINE_MODULE_NAME!r} at {cache_path}")
        return ResolvedContext(engine=engine, cache_path=cache_path)

    @staticmethod
    async def _locate(probes: HostProbes) -> Any:
        try:
            return await probes.locate_engine(ENGINE_MODULE_NAME)
        except EngineNotFoundError:
            raise
        except ModuleNotFoundError as e:
            raise EngineNotFoundError(ENGINE_MODULE_NAME) from e

    @staticmethod
    async def _cache_path(probes: HostProbes) -> str:
        root = await probes.cache_root()
        cache_path = os.path.join(root, CACHE_DIRNAME)
        if os.path.isfile(root):
            raise CachePathError(cache_path, root)
        return cache_path


_default_resolver: Optional[Resolver] = None


def get_default_resolver() -> Resolver:
    """Process-wide resolver used by the module-level facade."""
    global _default_resolver
    if _default_resolver is None:
        _default_resolver = Resolver()
    return _default_resolver


def reset_default_resolver() -> None:
    """Drop the process-wide resolver; the next call builds a fresh one."""
    global _default_resolver
    _default_resolver = None
