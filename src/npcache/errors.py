"""
npcache error classes.

Provides a clear taxonomy of the failures this layer reports itself. Failures
raised by the backing cache engine are never wrapped; they reach the caller
exactly as the engine raised them.
"""
from __future__ import annotations

import errno
from typing import Optional, Sequence


class NpcacheError(Exception):
    """Base class for all errors raised by npcache itself."""
    pass


class EngineNotFoundError(NpcacheError, ModuleNotFoundError):
    """
    The cache engine module is not bundled with the host npm CLI.

    Raised when:
    - the npm installation cannot be found on disk
    - the npm installation has no importable engine module
    """

    def __init__(self, module_name: str):
        super().__init__(
            f"'{module_name}' module is not bundled in your npm CLI. "
            "Run the command `npm install --global npm` to reinstall a valid npm CLI.",
            name=module_name,
        )


class CachePathError(NpcacheError, NotADirectoryError):
    """
    The configured npm cache root is a regular file.

    Attributes:
        cache_path: Cache directory that would have been used
        path: The parent path that turned out to be a file
    """

    def __init__(self, cache_path: str, parent: str):
        super().__init__(
            f"The current npm CLI setting indicates {cache_path} is used as a cache "
            f"directory for npm packages, but a file exists at its parent path {parent}."
        )
        self.errno = errno.ENOTDIR
        self.path = parent
        self.cache_path = cache_path


class UnsupportedHostVersionError(NpcacheError):
    """The host npm CLI is older than the minimum supported version."""

    def __init__(self, required: str, actual: str):
        super().__init__(
            f"npm CLI {actual} is not supported. npcache requires npm {required} or later. "
            "Run the command `npm install --global npm` to update the npm CLI."
        )
        self.required = required
        self.actual = actual


class HostCommandError(NpcacheError):
    """
    The host npm CLI exited with a non-zero status while being queried.

    Attributes:
        code: Exit status of the command
        argv: Command line that was run
        stderr: Decoded standard error output
    """

    def __init__(self, argv: Sequence[str], code: int, stderr: Optional[str] = None):
        detail = f": {stderr.strip()}" if stderr and stderr.strip() else ""
        super().__init__(f"Command failed with exit code {code}: {' '.join(argv)}{detail}")
        self.argv = list(argv)
        self.code = code
        self.stderr = stderr


class StreamStateError(NpcacheError):
    """A stream adapter was used in a state that does not allow the operation."""
    pass


__all__ = [
    "NpcacheError",
    "EngineNotFoundError",
    "CachePathError",
    "UnsupportedHostVersionError",
    "HostCommandError",
    "StreamStateError",
]
