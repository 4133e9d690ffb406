"""
Bounded-concurrency admission for outbound backend calls. Callers beyond the limit wait as FIFO tickets and a released slot is handed directly to the oldest ticket.

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
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Deque, Dict, TypeVar

from datasources.exceptions import QueueClearedError, QueueFullError, QueueTimeoutError

log = logging.getLogger(__name__)

_T = TypeVar("_T")


@dataclass
class QueueTicket:
    future: asyncio.Future
    enqueued_at: float = field(default_factory=time.monotonic)


class RequestQueue:
    def __init__(
        self,
        max_concurrent: int = 5,
        queue_timeout: float = 30.0,
        max_size: int = 100,
    ) -> None:
        if max_concurrent < 1:
            raise ValueError("max_concurrent must be >= 1")
        self.max_concurrent = max_concurrent
        self.queue_timeout = queue_timeout
        self.max_size = max_size
        self._active = 0
        self._waiting: Deque[QueueTicket] = deque()

    @property
    def active(self) -> int:
        return self._active

    @property
    def queued(self) -> int:
        return len(self._waiting)

    async def enqueue(self, task: Callable[[], Awaitable[_T]]) -> _T:
        await self._acquire()
        try:
            return await task()
        finally:
            self._release()

    async def _acquire(self) -> None:
        if self._active < self.max_concurrent and not self._waiting:
            self._active += 1
            return
        if len(self._waiting) >= self.max_size:
            raise QueueFullError(f"request queue is full ({self.max_size} waiting)")

        ticket = QueueTicket(future=asyncio.get_running_loop().create_future())
        self._waiting.append(ticket)
        try:
            if self.queue_timeout and self.queue_timeout > 0:
                await asyncio.wait_for(asyncio.shield(ticket.future), self.queue_timeout)
            else:
                await ticket.future
        except asyncio.TimeoutError:
            if self._granted(ticket):
                return
            self._discard(ticket)
            waited = time.monotonic() - ticket.enqueued_at
            raise QueueTimeoutError(f"request waited {waited:.1f}s in queue") from None
        except asyncio.CancelledError:
            if self._granted(ticket):
                self._release()
            else:
                self._discard(ticket)
            raise

    @staticmethod
    def _granted(ticket: QueueTicket) -> bool:
        fut = ticket.future
        return fut.done() and not fut.cancelled() and fut.exception() is None

    def _discard(self, ticket: QueueTicket) -> None:
        try:
            self._waiting.remove(ticket)
        except ValueError:
            pass
        if not ticket.future.done():
            ticket.future.cancel()

    def _release(self) -> None:
        while self._waiting:
            ticket = self._waiting.popleft()
            if not ticket.future.done():
                # slot passes to the next ticket, active count is unchanged
                ticket.future.set_result(None)
                return
        self._active -= 1

    def stats(self) -> Dict[str, Any]:
        return {
            "active": self._active,
            "queued": len(self._waiting),
            "max_concurrent": self.max_concurrent,
            "available_slots": max(0, self.max_concurrent - self._active),
        }

    def clear(self) -> int:
        cleared = 0
        while self._waiting:
            ticket = self._waiting.popleft()
            if not ticket.future.done():
                ticket.future.set_exception(QueueClearedError("request queue was cleared"))
                cleared += 1
        if cleared:
            log.info("request queue cleared, %d waiting request(s) rejected", cleared)
        return cleared
