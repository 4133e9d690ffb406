# connectors/stats.py

import asyncio
import logging
from typing import Any, Dict, Optional

import httpx

from datasources.exceptions import BackendStatusError, DataSourceUnavailable, QueryTimeout

log = logging.getLogger(__name__)


class StatsConnector:
    """Single HTTP call to the stats backend, bounded by a hard timeout."""

    def __init__(
        self,
        timeout: float = 10.0,
        headers: Optional[Dict[str, str]] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.timeout = timeout
        self.headers = headers or {}
        self._transport = transport

    @staticmethod
    def _needs_body(payload: Dict[str, Any]) -> bool:
        return any(isinstance(v, (list, tuple)) for v in payload.values())

    async def _send(self, endpoint: str, payload: Dict[str, Any]) -> httpx.Response:
        async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
            if self._needs_body(payload):
                return await client.post(endpoint, json=payload, headers=self.headers)
            return await client.get(endpoint, params=payload, headers=self.headers)

    async def fetch(self, endpoint: str, payload: Dict[str, Any]) -> str:
        try:
            resp = await asyncio.wait_for(self._send(endpoint, payload), timeout=self.timeout)
            resp.raise_for_status()
            return resp.text
        except (asyncio.TimeoutError, httpx.TimeoutException) as e:
            raise QueryTimeout(f"baseline calculation timed out after {self.timeout}s") from e
        except httpx.HTTPStatusError as e:
            raise BackendStatusError(
                f"stats backend failed [{e.response.status_code}]: {e.response.text[:200]}",
                status_code=e.response.status_code,
            ) from e
        except httpx.RequestError as e:
            raise DataSourceUnavailable(f"Cannot reach stats backend at {endpoint}") from e
