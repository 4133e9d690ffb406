"""
Capabilities the baseline calculator needs from its backend: fetching a baseline fit and admitting a task through the outbound queue.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from typing import Any, Awaitable, Callable, Dict, Protocol, TypeVar, runtime_checkable

_T = TypeVar("_T")


@runtime_checkable
class BaselineBackend(Protocol):
    async def fetch(self, endpoint: str, payload: Dict[str, Any]) -> str:
        """Return the raw response text of one baseline fit."""
        ...

    async def enqueue(self, task: Callable[[], Awaitable[_T]]) -> _T:
        """Run `task` once a concurrency slot is free."""
        ...
