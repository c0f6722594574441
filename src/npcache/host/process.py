"""
Run the host npm CLI and capture its output.
"""
from __future__ import annotations

import asyncio
import logging

from ..errors import HostCommandError
from ..settings import Settings

__all__ = ["run_npm"]

logger = logging.getLogger(__name__)


async def run_npm(settings: Settings, *args: str) -> str:
    """
    Run the host npm CLI with the given arguments.

    Args:
        settings: Settings describing how npm is launched
        *args: Arguments passed to npm

    Returns:
        Standard output with surrounding whitespace removed

    Raises:
        FileNotFoundError: If the npm (or node) executable does not exist
        HostCommandError: If npm exits with a non-zero status
    """
    argv = [*settings.host_argv(), *args]
    logger.debug(f"Running host command: {' '.join(argv)}")

    proc = await asyncio.create_subprocess_exec(
        *argv,
        stdin=asyncio.subprocess.DEVNULL,
        stdout=asyncio.subprocess.PIPE,
        stderr=asyncio.subprocess.PIPE,
    )
    stdout, stderr = await proc.communicate()

    if proc.returncode != 0:
        raise HostCommandError(argv, proc.returncode, stderr.decode(errors="replace"))

    return stdout.decode().strip()
