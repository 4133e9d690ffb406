"""
Centralized exception handling decorator for API route functions.

The :func:`handle_exceptions` decorator wraps an endpoint handler and converts
uncaught exceptions into :class:`fastapi.HTTPException` responses.
HTTPExceptions raised by the handler are propagated untouched. Backend
failures that escape the baseline engine become ``502``, invalid enum or
series values become ``422`` and anything else is a ``500``.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import inspect
import logging
from functools import wraps
from typing import Any, Callable, TypeVar, cast

from fastapi import HTTPException

from datasources.exceptions import DataSourceError

F = TypeVar("F", bound=Callable[..., Any])

log = logging.getLogger(__name__)


def _to_http(exc: Exception) -> HTTPException:
    if isinstance(exc, DataSourceError):
        return HTTPException(status_code=502, detail=str(exc))
    if isinstance(exc, ValueError):
        return HTTPException(status_code=422, detail=str(exc))
    log.exception("unhandled error in route")
    return HTTPException(status_code=500, detail=str(exc))


def handle_exceptions(func: F) -> F:
    """Decorator that converts uncaught exceptions to HTTP errors.

    The decorator works with both regular and async functions.
    """

    if inspect.iscoroutinefunction(func):
        @wraps(func)
        async def async_wrapper(*args: Any, **kwargs: Any) -> Any:
            try:
                return await func(*args, **kwargs)
            except HTTPException:
                raise
            except Exception as exc:
                raise _to_http(exc) from exc

        return cast(F, async_wrapper)

    @wraps(func)
    def sync_wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return func(*args, **kwargs)
        except HTTPException:
            raise
        except Exception as exc:
            raise _to_http(exc) from exc

    return cast(F, sync_wrapper)
