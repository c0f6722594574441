"""
Resolve the npm cache root directory.
"""
from __future__ import annotations

import logging

from ..settings import Settings
from .process import run_npm

__all__ = ["resolve_cache_root"]

logger = logging.getLogger(__name__)


async def resolve_cache_root(settings: Settings) -> str:
    """
    Return the npm cache root (the directory that holds `_cacache`).

    `npm_config_cache` wins when set, matching npm's own precedence;
    otherwise npm is asked for its effective configuration.

    Raises:
        HostCommandError: If npm cannot read its configuration
        FileNotFoundError: If npm is not installed
    """
    if settings.cache_dir:
        logger.debug(f"Using npm cache root from environment: {settings.cache_dir}")
        return settings.cache_dir

    root = await run_npm(settings, "config", "get", "cache")
    logger.debug(f"npm reported cache root: {root}")
    return root
