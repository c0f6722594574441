# Fake implementations for testing

from .fake_cacache import FakeCacache
from .fake_host import FakeHost

__all__ = ["FakeCacache", "FakeHost"]
