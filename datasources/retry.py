"""
Retry decorator for async connector methods.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import asyncio
import logging
from functools import wraps
from typing import Any, Callable, Type, TypeVar, Tuple, cast

F = TypeVar("F", bound=Callable[..., Any])

log = logging.getLogger(__name__)


def retry(
    *,
    attempts: int = 3,
    delay: float = 1.0,
    backoff: float = 2.0,
    linear: bool = False,
    exceptions: Tuple[Type[Exception], ...] = (Exception,),
    giveup: Tuple[Type[Exception], ...] = (),
) -> Callable[[F], F]:
    """Retry on `exceptions` up to `attempts` calls in total.

    The wait before retry n is `delay * n` when `linear`, otherwise it starts
    at `delay` and is multiplied by `backoff` after each failure. Exceptions
    in `giveup` are re-raised on first occurrence.
    """

    def _wait(attempt: int, current: float) -> float:
        return delay * attempt if linear else current

    def decorator(func: F) -> F:
        _name = getattr(func, "__name__", "call")

        @wraps(func)
        async def async_wrapper(*args: Any, **kwargs: Any) -> Any:
            _attempt = 0
            _delay = delay
            while True:
                try:
                    return await func(*args, **kwargs)
                except giveup:
                    raise
                except exceptions as exc:
                    _attempt += 1
                    if _attempt >= attempts:
                        raise
                    wait = _wait(_attempt, _delay)
                    log.debug("retry %s attempt=%d wait=%.2fs: %s", _name, _attempt, wait, exc)
                    await asyncio.sleep(wait)
                    _delay *= backoff

        return cast(F, async_wrapper)

    return decorator
