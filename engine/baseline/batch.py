from __future__ import annotations

import asyncio
import logging
from typing import Callable, Dict, List, Optional, Tuple, Union

from config import Settings
from datasources.base import BaselineBackend
from engine.baseline.calculator import calculate_baseline
from engine.dataset import Dataset, DatasetEntry, iter_entries
from engine.enums import BaselineMethod, Metric, Outcome, Resolution

log = logging.getLogger(__name__)

ProgressCallback = Callable[[int, int], None]


async def calculate_baselines(
    deps: BaselineBackend,
    dataset: Dataset,
    labels: List[str],
    start_idx: int,
    end_idx: int,
    metric: Union[Metric, str],
    method: Union[BaselineMethod, str],
    resolution: Union[Resolution, str],
    cumulative: bool,
    progress_cb: Optional[ProgressCallback] = None,
    stats_url: Optional[str] = None,
    settings: Optional[Settings] = None,
) -> Dict[Tuple[str, str], Outcome]:
    """Run the per-entry calculation for every (age group, country) concurrently.

    Outbound concurrency is bounded by the backend's queue. `progress_cb`
    receives (0, total) before any work starts, then (completed, total) once
    per finished entry.
    """
    metric = Metric(metric)
    method = BaselineMethod(method)
    resolution = Resolution(resolution)

    entries: List[Tuple[str, str, DatasetEntry]] = list(iter_entries(dataset))
    total = len(entries)
    outcomes: Dict[Tuple[str, str], Outcome] = {}
    completed = 0

    async def _run(age_group: str, iso3c: str, entry: DatasetEntry) -> None:
        nonlocal completed
        outcomes[(age_group, iso3c)] = await calculate_baseline(
            deps, entry, labels, start_idx, end_idx, metric, method, resolution,
            cumulative, stats_url=stats_url, settings=settings,
        )
        completed += 1
        if progress_cb:
            progress_cb(completed, total)

    if progress_cb:
        progress_cb(0, total)
    await asyncio.gather(*[_run(ag, iso, entry) for ag, iso, entry in entries])

    fallbacks = sum(1 for o in outcomes.values() if o is Outcome.fallback)
    if fallbacks:
        log.info("baselines computed for %d entries, %d via mean fallback", total, fallbacks)
    return outcomes
