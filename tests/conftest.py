"""Root pytest configuration for npcache tests."""
import sys

import pytest

from npcache.operations import Npcache
from npcache.resolver import Resolver, reset_default_resolver
from .fakes.fake_cacache import FakeCacache
from .fakes.fake_host import FakeHost


# Configure pytest markers
def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers",
        "posix: mark test as needing a POSIX shell to run fake npm scripts"
    )


def pytest_collection_modifyitems(config, items):
    """Skip tests that run shell scripts on platforms without /bin/sh."""
    if not sys.platform.startswith("win"):
        return
    skip = pytest.mark.skip(reason="fake npm scripts need a POSIX shell")
    for item in items:
        if "posix" in item.keywords:
            item.add_marker(skip)


# Keep the host environment out of every test
@pytest.fixture(autouse=True)
def test_env(monkeypatch):
    """Automatically isolate npm-related environment variables, the default resolver, and loaded engines."""
    for name in ("npm_config_cache", "npm_execpath", "NPCACHE_NPM", "NPCACHE_NODE", "NPCACHE_ENGINE_PATH"):
        monkeypatch.delenv(name, raising=False)
    reset_default_resolver()
    yield
    reset_default_resolver()
    for name in [key for key in sys.modules if key == "cacache" or key.startswith("cacache.")]:
        del sys.modules[name]


# Standardized test fixtures
@pytest.fixture
def cache_root(tmp_path):
    """npm cache root directory (the parent of _cacache)."""
    root = tmp_path / "npm-cache"
    root.mkdir()
    return root


@pytest.fixture
def engine():
    """Standard fake engine with natively iterable streams."""
    return FakeCacache()


@pytest.fixture
def push_only_engine():
    """Fake engine whose streams cannot be used with `async for` directly."""
    return FakeCacache(iterable_streams=False)


@pytest.fixture
def host(engine, cache_root):
    """Fake host probes that resolve to `engine` and `cache_root`."""
    return FakeHost(engine=engine, cache_root=str(cache_root))


@pytest.fixture
def resolver(host):
    """Resolver whose every attempt uses the same fake host."""
    return Resolver(lambda: host)


@pytest.fixture
def npc(resolver):
    """Facade bound to the fake resolver."""
    return Npcache(resolver)


@pytest.fixture
def cache_path(cache_root):
    """Cache path the engine receives."""
    return str(cache_root / "_cacache")
