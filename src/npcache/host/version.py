"""
Version gate for the host npm CLI.
"""
from __future__ import annotations

import logging
import re

from ..errors import UnsupportedHostVersionError
from ..settings import Settings
from .process import run_npm

__all__ = ["parse_version", "is_satisfied", "check_npm_version"]

logger = logging.getLogger(__name__)

_VERSION_RE = re.compile(r"^v?(\d+)\.(\d+)\.(\d+)(?:-([0-9A-Za-z.-]+))?(?:\+[0-9A-Za-z.-]+)?$")


def parse_version(version: str) -> tuple[int, int, int, bool]:
    """
    Parse a semantic version string into a comparable tuple.

    Args:
        version: Version string (e.g., "6.14.18", "v7.0.0-beta.2")

    Returns:
        (major, minor, patch, is_release). Pre-releases sort below the
        release they precede; build metadata is ignored.

    Raises:
        ValueError: If version format is invalid
    """
    match = _VERSION_RE.match(version.strip())
    if not match:
        raise ValueError(f"Invalid version format '{version}': must be 'major.minor.patch'")

    major, minor, patch, prerelease = match.groups()
    return int(major), int(minor), int(patch), prerelease is None


def is_satisfied(actual: str, minimum: str) -> bool:
    """Return True when `actual` is the same as or newer than `minimum`."""
    return parse_version(actual) >= parse_version(minimum)


async def check_npm_version(settings: Settings, minimum: str) -> None:
    """
    Fail unless the host npm CLI is at least `minimum`.

    Raises:
        UnsupportedHostVersionError: If npm is older than `minimum`
        ValueError: If npm reports a version that cannot be parsed
        HostCommandError: If npm cannot report its version
        FileNotFoundError: If npm is not installed
    """
    actual = await run_npm(settings, "--version")
    logger.debug(f"Host npm CLI version {actual}, minimum {minimum}")

    if not is_satisfied(actual, minimum):
        raise UnsupportedHostVersionError(required=minimum, actual=actual)
