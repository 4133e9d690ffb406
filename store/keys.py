"""
Key-value store access layer with Redis and in-memory fallback.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import hashlib
import json
from typing import Any, Dict


def _slug(value: str) -> str:
    # Internal cache keys do not require reversibility; use strong stable hashing.
    return hashlib.sha256(value.encode()).hexdigest()[:32]


def baseline_fit(endpoint: str, payload: Dict[str, Any]) -> str:
    canonical = json.dumps(payload, sort_keys=True, separators=(",", ":"))
    return f"bl:fit:{_slug(endpoint + '|' + canonical)}"
