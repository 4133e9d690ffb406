"""
Circuit breaker guarding calls to the stats backend. Failures are counted in a sliding window; once the threshold is reached the circuit opens and every call fails fast until the cooldown passes, after which a single trial call decides whether it closes again.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections import deque
from typing import Any, Awaitable, Callable, Deque, Dict, Optional, TypeVar

from datasources.exceptions import CircuitOpenError
from engine.enums import CircuitState

log = logging.getLogger(__name__)

_T = TypeVar("_T")


class CircuitBreaker:
    def __init__(
        self,
        name: str,
        failure_threshold: int = 3,
        failure_window: float = 30.0,
        reset_timeout: float = 60.0,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if failure_threshold < 1:
            raise ValueError("failure_threshold must be >= 1")
        self.name = name
        self.failure_threshold = failure_threshold
        self.failure_window = failure_window
        self.reset_timeout = reset_timeout
        self._clock = clock
        self._state = CircuitState.closed
        self._failures: Deque[float] = deque()
        self._open_until: float = 0.0
        self._trial_in_flight = False

    @property
    def state(self) -> CircuitState:
        return self._state

    @property
    def failure_count(self) -> int:
        self._prune(self._clock())
        return len(self._failures)

    def _prune(self, now: float) -> None:
        while self._failures and now - self._failures[0] > self.failure_window:
            self._failures.popleft()

    def _open(self, now: float) -> None:
        self._state = CircuitState.open
        self._open_until = now + self.reset_timeout
        self._trial_in_flight = False
        log.warning(
            "circuit %s OPEN (%d failures), retry after %.1fs",
            self.name, len(self._failures), self.reset_timeout,
        )

    def _admit(self) -> bool:
        """Admit a call; returns True when it is the half-open trial."""
        now = self._clock()
        if self._state is CircuitState.open:
            if now < self._open_until:
                raise CircuitOpenError(f"circuit breaker is open for {self.name}")
            self._state = CircuitState.half_open
            self._trial_in_flight = False
            log.info("circuit %s HALF-OPEN (testing backend)", self.name)
        if self._state is CircuitState.half_open:
            if self._trial_in_flight:
                raise CircuitOpenError(f"circuit breaker for {self.name} is waiting on a trial call")
            self._trial_in_flight = True
            return True
        return False

    def record_success(self, trial: bool = False) -> None:
        # only the trial decides a half-open circuit; late results never close an open one
        if self._state is CircuitState.half_open:
            if not trial:
                return
            log.info("circuit %s CLOSED (backend recovered)", self.name)
            self._state = CircuitState.closed
            self._trial_in_flight = False
            self._failures.clear()
        elif self._state is CircuitState.closed:
            self._failures.clear()

    def record_failure(self, trial: bool = False) -> None:
        now = self._clock()
        if self._state is CircuitState.half_open:
            if trial:
                self._failures.append(now)
                self._open(now)
            return
        if self._state is CircuitState.open:
            return
        self._failures.append(now)
        self._prune(now)
        if len(self._failures) >= self.failure_threshold:
            self._open(now)

    async def call(self, func: Callable[..., Awaitable[_T]], *args: Any, **kwargs: Any) -> _T:
        trial = self._admit()
        try:
            result = await func(*args, **kwargs)
        except asyncio.CancelledError:
            if trial and self._state is CircuitState.half_open:
                self._trial_in_flight = False
            raise
        except Exception:
            self.record_failure(trial)
            raise
        self.record_success(trial)
        return result

    def is_open(self) -> bool:
        return self._state is CircuitState.open and self._clock() < self._open_until

    def status(self) -> Dict[str, Any]:
        now = self._clock()
        retry_in: Optional[float] = None
        if self._state is CircuitState.open:
            retry_in = round(max(0.0, self._open_until - now), 3)
        return {
            "name": self.name,
            "state": self._state.value,
            "failures": self.failure_count,
            "retry_in_seconds": retry_in,
            "config": {
                "failure_threshold": self.failure_threshold,
                "failure_window": self.failure_window,
                "reset_timeout": self.reset_timeout,
            },
        }

    def reset(self) -> None:
        self._state = CircuitState.closed
        self._failures.clear()
        self._open_until = 0.0
        self._trial_in_flight = False
        log.info("circuit %s manually reset to CLOSED", self.name)
