"""
Test Suite for Store Client

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

import time

import pytest

from store import client as store_client
from store.client import _fallback, redis_delete, redis_get, redis_set


async def _no_redis():
    return None


@pytest.mark.asyncio
async def test_fallback_operations(monkeypatch):
    monkeypatch.setattr(store_client, "get_redis", _no_redis)
    await redis_set("k1", "v1")
    assert await redis_get("k1") == "v1"
    await redis_delete("k1")
    assert await redis_get("k1") is None


def test_fallback_entries_expire():
    store_client._fallback_set("k", "v", ttl=5)
    assert store_client._fallback_get("k") == "v"

    _fallback["k"] = ("v", time.monotonic() - 1)
    assert store_client._fallback_get("k") is None
    assert "k" not in _fallback


def test_fallback_size_is_bounded(monkeypatch):
    monkeypatch.setattr(store_client, "_MAX_FALLBACK_SIZE", 2)
    store_client._fallback_set("a", "1", ttl=None)
    store_client._fallback_set("b", "2", ttl=None)
    store_client._fallback_set("c", "3", ttl=None)
    assert store_client._fallback_get("c") is None
    store_client._fallback_set("a", "updated", ttl=None)
    assert store_client._fallback_get("a") == "updated"
