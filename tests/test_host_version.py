"""
Tests for the npm version gate.
"""
from __future__ import annotations

import pytest

from npcache.errors import HostCommandError, UnsupportedHostVersionError
from npcache.host.version import check_npm_version, is_satisfied, parse_version
from npcache.settings import Settings
from tests.helpers.fake_npm import write_npm_script


class TestParseVersion:

    @pytest.mark.parametrize("text,expected", [
        ("5.6.0", (5, 6, 0, True)),
        ("v10.2.4", (10, 2, 4, True)),
        ("7.0.0-beta.12", (7, 0, 0, False)),
        ("6.14.18+build.5", (6, 14, 18, True)),
        (" 9.8.1\n", (9, 8, 1, True)),
    ])
    def test_valid_versions(self, text, expected):
        assert parse_version(text) == expected

    @pytest.mark.parametrize("text", ["", "6", "6.1", "six.one.zero", "1.2.3.4"])
    def test_invalid_versions(self, text):
        with pytest.raises(ValueError, match="Invalid version format"):
            parse_version(text)


class TestIsSatisfied:

    @pytest.mark.parametrize("actual", ["5.6.0", "5.6.1", "5.10.0", "6.0.0", "10.0.0"])
    def test_same_or_newer(self, actual):
        assert is_satisfied(actual, "5.6.0")

    @pytest.mark.parametrize("actual", ["5.5.9", "4.99.99", "5.6.0-rc.1", "0.0.1"])
    def test_older(self, actual):
        assert not is_satisfied(actual, "5.6.0")


@pytest.mark.posix
@pytest.mark.asyncio
class TestCheckNpmVersion:

    async def test_new_enough_npm_passes(self, tmp_path):
        npm = write_npm_script(tmp_path / "npm", version="9.8.1", cache_root=str(tmp_path))
        await check_npm_version(Settings(npm_command=str(npm)), "5.6.0")

    async def test_old_npm_is_rejected(self, tmp_path):
        npm = write_npm_script(tmp_path / "npm", version="5.5.1", cache_root=str(tmp_path))

        with pytest.raises(UnsupportedHostVersionError) as exc_info:
            await check_npm_version(Settings(npm_command=str(npm)), "5.6.0")

        assert exc_info.value.actual == "5.5.1"
        assert exc_info.value.required == "5.6.0"

    async def test_broken_npm_reports_exit_code(self, tmp_path):
        npm = write_npm_script(tmp_path / "npm", version="", cache_root="", exit_code=1)

        with pytest.raises(HostCommandError) as exc_info:
            await check_npm_version(Settings(npm_command=str(npm)), "5.6.0")

        assert exc_info.value.code == 1

    async def test_missing_npm_is_enoent(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            await check_npm_version(Settings(npm_command=str(tmp_path / "no-npm")), "5.6.0")
