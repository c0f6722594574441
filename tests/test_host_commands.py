"""
Tests for running the npm CLI and resolving its cache root.
"""
from __future__ import annotations

import pytest

from npcache.errors import HostCommandError
from npcache.host.cache_path import resolve_cache_root
from npcache.host.process import run_npm
from npcache.settings import Settings
from tests.helpers.fake_npm import write_npm_script


pytestmark = pytest.mark.asyncio


@pytest.mark.posix
class TestRunNpm:

    async def test_returns_stripped_stdout(self, tmp_path):
        npm = write_npm_script(tmp_path / "npm", version="9.8.1", cache_root=str(tmp_path))
        assert await run_npm(Settings(npm_command=str(npm)), "--version") == "9.8.1"

    async def test_non_zero_exit_raises(self, tmp_path):
        npm = write_npm_script(tmp_path / "npm", version="", cache_root="", exit_code=3)

        with pytest.raises(HostCommandError) as exc_info:
            await run_npm(Settings(npm_command=str(npm)), "config", "get", "cache")

        assert exc_info.value.code == 3
        assert exc_info.value.argv == [str(npm), "config", "get", "cache"]
        assert "npm is broken" in exc_info.value.stderr

    async def test_native_execpath_is_run_directly(self, tmp_path):
        npm = write_npm_script(tmp_path / "bin" / "npm-cli", version="10.1.0", cache_root=str(tmp_path))
        settings = Settings(npm_command=str(tmp_path / "unused"), npm_execpath=str(npm))
        assert await run_npm(settings, "--version") == "10.1.0"

    async def test_missing_executable(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            await run_npm(Settings(npm_command=str(tmp_path / "missing-npm")), "--version")

    async def test_missing_node_for_script_execpath(self, tmp_path):
        settings = Settings(
            npm_execpath=str(tmp_path / "npm-cli.js"),
            node_command=str(tmp_path / "missing-node"),
        )
        with pytest.raises(FileNotFoundError):
            await run_npm(settings, "--version")


class TestResolveCacheRoot:

    async def test_environment_override_skips_npm(self, tmp_path):
        settings = Settings(npm_command=str(tmp_path / "missing-npm"), cache_dir="/srv/npm-cache")
        assert await resolve_cache_root(settings) == "/srv/npm-cache"

    @pytest.mark.posix
    async def test_asks_npm_for_cache(self, tmp_path):
        npm = write_npm_script(tmp_path / "npm", version="9.8.1", cache_root="/home/someone/.npm")
        assert await resolve_cache_root(Settings(npm_command=str(npm))) == "/home/someone/.npm"

    @pytest.mark.posix
    async def test_npm_failure_propagates(self, tmp_path):
        npm = write_npm_script(tmp_path / "npm", version="", cache_root="", exit_code=1)

        with pytest.raises(HostCommandError) as exc_info:
            await resolve_cache_root(Settings(npm_command=str(npm)))

        assert exc_info.value.code == 1
