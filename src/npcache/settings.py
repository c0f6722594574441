"""
Settings and configuration for npcache.

Centralizes how the host npm installation is located and provides validation
with fail-fast behavior. Loads settings from environment variables every time
a resolution attempt starts, so a caller that fixes its environment after a
failed attempt is picked up on the next one.
"""
from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

__all__ = ["Settings", "create_settings_from_env"]


@dataclass(frozen=True)
class Settings:
    """
    Configuration settings for locating the host npm CLI.

    Host CLI Settings:
        npm_command: Executable used to run npm when npm_execpath is unset
        node_command: Executable used to run npm_execpath when it is a script
        npm_execpath: Path of the running npm CLI entry point (set by npm itself
            for lifecycle scripts)

    Cache Settings:
        cache_dir: npm cache root; when unset, `npm config get cache` is asked
        engine_path: Extra directory searched first for the cache engine module
    """
    npm_command: str = "npm"
    node_command: str = "node"
    npm_execpath: Optional[str] = None

    cache_dir: Optional[str] = None
    engine_path: Optional[str] = None

    def __post_init__(self):
        """Validate settings on construction."""
        if not self.npm_command:
            raise ValueError("npm_command must not be empty")

        if not self.node_command:
            raise ValueError("node_command must not be empty")

        # Empty strings from the environment mean "unset" upstream, never here
        for name in ("npm_execpath", "cache_dir", "engine_path"):
            if getattr(self, name) == "":
                raise ValueError(f"{name} must be None or a non-empty path")

    def host_argv(self) -> list[str]:
        """
        Command prefix that runs the host npm CLI.

        npm exports npm_execpath pointing at its JavaScript entry point, which
        has to be run through node; a native launcher is executed directly.
        """
        if self.npm_execpath:
            if self.npm_execpath.endswith((".js", ".cjs", ".mjs")):
                return [self.node_command, self.npm_execpath]
            return [self.npm_execpath]
        return [self.npm_command]


def create_settings_from_env() -> Settings:
    """
    Load settings from environment variables.

    Environment Variables:
        - NPCACHE_NPM (default: npm)
        - NPCACHE_NODE (default: node)
        - npm_execpath (optional, exported by npm)
        - npm_config_cache (optional, npm's own cache override)
        - NPCACHE_ENGINE_PATH (optional)

    Returns:
        Settings object with validated configuration

    Raises:
        ValueError: If configuration is invalid

    Note:
        Creates a fresh Settings instance every time (no caching).
    """
    return Settings(
        npm_command=os.getenv("NPCACHE_NPM") or "npm",
        node_command=os.getenv("NPCACHE_NODE") or "node",
        npm_execpath=os.getenv("npm_execpath") or None,
        cache_dir=os.getenv("npm_config_cache") or None,
        engine_path=os.getenv("NPCACHE_ENGINE_PATH") or None,
    )
