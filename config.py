"""
Constants and configuration for the excess-mortality baseline service.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

import os
from typing import Dict

from pydantic_settings import BaseSettings


REDIS_URL: str = os.getenv("REDIS_URL", "redis://localhost:6379/0")
BASELINE_CACHE_TTL: int = int(os.getenv("BASELINE_CACHE_TTL", "900"))

BASELINES_STATS_URL = os.getenv("BASELINES_STATS_URL", "https://stats.mortality.watch/")
BASELINES_STATS_TIMEOUT = float(os.getenv("BASELINES_STATS_TIMEOUT", "10"))
BASELINES_STATS_RETRIES = int(os.getenv("BASELINES_STATS_RETRIES", "2"))

# the cumulative variant lives under the standard endpoint
STATS_CUMULATIVE_SUFFIX = "cum"

DEFAULT_BASELINE_YEAR = 2017
SPLIT_YEAR_BASELINE_YEAR = 2016

# years of history the backend is allowed to fit per resolution family
MAX_BASELINE_YEARS: Dict[str, int] = {
    "weekly": 10,
    "monthly": 15,
    "quarterly": 15,
    "yearly": 30,
}


class Settings(BaseSettings):
    host: str = "0.0.0.0"
    port: int = 4322

    stats_url: str = BASELINES_STATS_URL
    stats_timeout_seconds: float = BASELINES_STATS_TIMEOUT
    stats_retries: int = BASELINES_STATS_RETRIES
    stats_retry_delay_seconds: float = 0.5

    # circuit breaker around the stats backend
    circuit_failure_threshold: int = 3
    circuit_failure_window_seconds: float = 30.0
    circuit_reset_timeout_seconds: float = 60.0

    # outbound admission control
    queue_max_concurrent: int = 5
    queue_timeout_seconds: float = 30.0
    queue_max_size: int = 100

    # baseline computation defaults
    baseline_data_precision: int = 4
    baseline_min_valid_points: int = 3
    baseline_pi_multiplier: float = 2.0
    baseline_max_years: Dict[str, int] = dict(MAX_BASELINE_YEARS)
    baseline_default_year: int = DEFAULT_BASELINE_YEAR
    baseline_split_year_default_year: int = SPLIT_YEAR_BASELINE_YEAR
    baseline_min_span_years: int = 3
    baseline_cache_ttl: int = BASELINE_CACHE_TTL

    store_redis_retry_cooldown_seconds: float = 10.0
    store_fallback_max_items: int = 10_000

    model_config = {
        "env_prefix": "BASELINES_",
        "extra": "ignore",
    }


settings = Settings()
