from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from config import settings
from store.client import redis_get, redis_set
from store import keys

log = logging.getLogger(__name__)


async def load(endpoint: str, payload: Dict[str, Any]) -> Optional[str]:
    try:
        raw = await redis_get(keys.baseline_fit(endpoint, payload))
        if raw:
            return raw
    except Exception as exc:
        log.debug("Baseline cache load failed %s: %s", endpoint, exc)
    return None


async def save(endpoint: str, payload: Dict[str, Any], text: str) -> None:
    try:
        await redis_set(keys.baseline_fit(endpoint, payload), text, ttl=settings.baseline_cache_ttl)
    except Exception as exc:
        log.debug("Baseline cache save failed %s: %s", endpoint, exc)
