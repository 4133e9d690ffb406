"""
Tests for the production baseline backend wiring.
"""

from __future__ import annotations

import pytest

from config import Settings
from datasources.base import BaselineBackend
from datasources.circuit import CircuitBreaker
from datasources.exceptions import (
    BackendStatusError,
    CircuitOpenError,
    DataSourceUnavailable,
    QueryTimeout,
)
from datasources.provider import BaselineProvider
from engine.enums import CircuitState

PAYLOAD = {"y": [1.0, 2.0, 3.0], "bs": 1, "be": 3, "t": 0, "s": 1, "m": "mean"}


class DummyConnector:
    def __init__(self, outcomes):
        self.outcomes = list(outcomes)
        self.calls = 0

    async def fetch(self, endpoint, payload):
        self.calls += 1
        outcome = self.outcomes.pop(0) if len(self.outcomes) > 1 else self.outcomes[0]
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


def _provider(connector, clock=None, **kwargs):
    settings = Settings(stats_retry_delay_seconds=0.0, circuit_failure_threshold=3)
    breaker = CircuitBreaker("stats", failure_threshold=3, clock=clock) if clock else None
    return BaselineProvider(settings=settings, connector=connector, breaker=breaker, **kwargs)


def test_provider_satisfies_backend_protocol():
    assert isinstance(_provider(DummyConnector(["{}"])), BaselineBackend)


@pytest.mark.asyncio
async def test_transient_failures_are_retried():
    connector = DummyConnector([DataSourceUnavailable("down"), BackendStatusError("502", 502), '{"y": []}'])
    provider = _provider(connector, use_cache=False)

    assert await provider.fetch("https://stats.example/", PAYLOAD) == '{"y": []}'
    assert connector.calls == 3
    assert provider.breaker.state is CircuitState.closed


@pytest.mark.asyncio
async def test_timeout_is_not_retried():
    connector = DummyConnector([QueryTimeout("slow")])
    provider = _provider(connector, use_cache=False)

    with pytest.raises(QueryTimeout):
        await provider.fetch("https://stats.example/", PAYLOAD)
    assert connector.calls == 1
    assert provider.breaker.failure_count == 1


@pytest.mark.asyncio
async def test_exhausted_retries_count_once_against_breaker(clock):
    connector = DummyConnector([DataSourceUnavailable("down")])
    provider = _provider(connector, clock=clock, use_cache=False)

    for _ in range(3):
        with pytest.raises(DataSourceUnavailable):
            await provider.fetch("https://stats.example/", PAYLOAD)
    assert connector.calls == 9
    assert provider.breaker.state is CircuitState.open

    with pytest.raises(CircuitOpenError):
        await provider.fetch("https://stats.example/", PAYLOAD)
    assert connector.calls == 9


@pytest.mark.asyncio
async def test_successful_fit_is_cached():
    connector = DummyConnector(['{"y": [2, 2, 2]}'])
    provider = _provider(connector)

    first = await provider.fetch("https://stats.example/", PAYLOAD)
    second = await provider.fetch("https://stats.example/", dict(PAYLOAD))

    assert first == second == '{"y": [2, 2, 2]}'
    assert connector.calls == 1


@pytest.mark.asyncio
async def test_enqueue_and_status():
    provider = _provider(DummyConnector(["{}"]))

    async def task():
        return provider.queue.active

    assert await provider.enqueue(task) == 1
    status = provider.status()
    assert status["circuit"]["state"] == "closed"
    assert status["queue"]["active"] == 0
    assert status["queue"]["max_concurrent"] == 5
