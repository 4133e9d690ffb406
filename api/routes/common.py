"""
Shared utilities and dependencies for API route modules.

Holds the process-wide baseline provider so every request shares one circuit
breaker and one request queue, and closes it on shutdown.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from typing import Optional

from datasources.provider import BaselineProvider


_provider: Optional[BaselineProvider] = None


def get_provider() -> BaselineProvider:
    global _provider
    if _provider is None:
        _provider = BaselineProvider()
    return _provider


def set_provider(provider: Optional[BaselineProvider]) -> None:
    global _provider
    _provider = provider


async def close_providers() -> None:
    global _provider
    provider, _provider = _provider, None
    if provider is not None:
        provider.queue.clear()
