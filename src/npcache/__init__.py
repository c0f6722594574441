"""
npcache - use npm's content-addressable cache without bundling its engine.

The module-level operations are bound to a process-wide resolver:

    import npcache

    integrity = await npcache.put("my-key", b"data")
    async for chunk in npcache.get.stream("my-key"):
        ...
"""
from .errors import (
    CachePathError,
    EngineNotFoundError,
    HostCommandError,
    NpcacheError,
    StreamStateError,
    UnsupportedHostVersionError,
)
from .operations import Npcache
from .resolver import MINIMUM_REQUIRED_NPM_VERSION, ResolvedContext, Resolver

__version__ = "0.1.0"

cache = Npcache()

ls = cache.ls
get = cache.get
put = cache.put
rm = cache.rm
tmp = cache.tmp
verify = cache.verify
clear_memoized = cache.clear_memoized

__all__ = [
    "MINIMUM_REQUIRED_NPM_VERSION",
    "Npcache",
    "Resolver",
    "ResolvedContext",
    "cache",
    "ls",
    "get",
    "put",
    "rm",
    "tmp",
    "verify",
    "clear_memoized",
    "NpcacheError",
    "EngineNotFoundError",
    "CachePathError",
    "UnsupportedHostVersionError",
    "HostCommandError",
    "StreamStateError",
]
