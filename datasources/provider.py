"""
Production baseline backend: outbound calls are admitted through the request queue, served from the response cache when possible, and otherwise sent through the circuit breaker with retries around the stats connector.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

import logging
from typing import Any, Awaitable, Callable, Dict, Optional, TypeVar

from config import Settings, settings as default_settings
from connectors.stats import StatsConnector
from datasources.circuit import CircuitBreaker
from datasources.exceptions import QueryTimeout, TransientBackendError
from datasources.queue import RequestQueue
from datasources.retry import retry
from store import baseline as baseline_store

log = logging.getLogger(__name__)

_T = TypeVar("_T")


class BaselineProvider:
    def __init__(
        self,
        settings: Optional[Settings] = None,
        connector: Optional[StatsConnector] = None,
        breaker: Optional[CircuitBreaker] = None,
        queue: Optional[RequestQueue] = None,
        use_cache: bool = True,
    ):
        self.settings = settings or default_settings
        s = self.settings
        self.connector = connector or StatsConnector(timeout=s.stats_timeout_seconds)
        self.breaker = breaker or CircuitBreaker(
            "stats",
            failure_threshold=s.circuit_failure_threshold,
            failure_window=s.circuit_failure_window_seconds,
            reset_timeout=s.circuit_reset_timeout_seconds,
        )
        self.queue = queue or RequestQueue(
            max_concurrent=s.queue_max_concurrent,
            queue_timeout=s.queue_timeout_seconds,
            max_size=s.queue_max_size,
        )
        self.use_cache = use_cache
        self._fetch_with_retry = retry(
            attempts=max(1, s.stats_retries + 1),
            delay=s.stats_retry_delay_seconds,
            linear=True,
            exceptions=(TransientBackendError,),
            giveup=(QueryTimeout,),
        )(self.connector.fetch)

    async def fetch(self, endpoint: str, payload: Dict[str, Any]) -> str:
        if self.use_cache:
            cached = await baseline_store.load(endpoint, payload)
            if cached is not None:
                log.debug("baseline cache hit for %s", endpoint)
                return cached

        text = await self.breaker.call(self._fetch_with_retry, endpoint, payload)

        if self.use_cache:
            await baseline_store.save(endpoint, payload, text)
        return text

    async def enqueue(self, task: Callable[[], Awaitable[_T]]) -> _T:
        return await self.queue.enqueue(task)

    def status(self) -> Dict[str, Any]:
        return {
            "circuit": self.breaker.status(),
            "queue": self.queue.stats(),
        }
