import os
import sys
import pytest

# ensure workspace root is on sys.path so our application packages can be imported
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from store.client import _fallback


@pytest.fixture(autouse=True)
def clear_fallback(monkeypatch):
    """Wipe the in-memory redis fallback before and after each test and override
    the redis helpers so they always operate on the in-memory store.
    """
    _fallback.clear()

    import store.client as client
    import store.baseline as bstore

    async def fake_get(key: str):
        item = _fallback.get(key)
        return item[0] if item else None

    async def fake_set(key: str, value: str, ttl=None):
        _fallback[key] = (value, None)

    async def fake_delete(key: str):
        _fallback.pop(key, None)

    fakes = {"redis_get": fake_get, "redis_set": fake_set, "redis_delete": fake_delete}
    # also update any modules that imported the helpers at import-time
    for mod in (client, bstore):
        for name, fake in fakes.items():
            if hasattr(mod, name):
                monkeypatch.setattr(mod, name, fake)

    yield

    _fallback.clear()


@pytest.fixture(autouse=True)
def reset_provider():
    import api.routes.common as common

    common.set_provider(None)
    yield
    common.set_provider(None)


class FakeClock:
    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


def pytest_ignore_collect(collection_path, config):
    if os.path.sep + "engine" + os.path.sep in str(collection_path):
        return True
