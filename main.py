"""
Entry point for the Mortality Baselines API server.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncIterator

import uvicorn
from fastapi import FastAPI

from api.routes import router
from api.routes.common import close_providers, get_provider
from config import settings

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
    stream=sys.stdout,
)
log = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    get_provider()
    log.info(
        "baseline service starting (stats=%s, queue=%d, circuit threshold=%d)",
        settings.stats_url, settings.queue_max_concurrent, settings.circuit_failure_threshold,
    )
    try:
        yield
    finally:
        await close_providers()


app = FastAPI(
    title="Mortality Baselines",
    description="Expected mortality baselines, prediction intervals and excess mortality per country and age group.",
    version="1.0.0",
    lifespan=lifespan,
)

app.include_router(router, prefix="/api/v1")


if __name__ == "__main__":
    uvicorn.run(
        "main:app",
        host=settings.host,
        port=settings.port,
        log_level="info",
        access_log=True,
    )
