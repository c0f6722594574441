"""
Operations package - the cache facade exposed to callers.

The facade forwards every cataloged operation to the resolved engine, adding
the cache path and routing streaming operations through the stream adapters.
"""
from .facade import Npcache

__all__ = ["Npcache"]
