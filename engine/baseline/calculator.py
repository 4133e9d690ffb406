"""
Per-entry baseline calculation. Validates the fitting window, asks the stats backend for a fit (or uses the local mean fallback when the window is oversized or the backend fails), writes the baseline arrays and derives excess.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import logging
from typing import List, Optional, Union

from config import Settings, settings as default_settings
from datasources.base import BaselineBackend
from engine.baseline.compute import apply_fallback
from engine.baseline.payload import build_request, flatten_naive, parse_response
from engine.baseline.window import max_baseline_period
from engine.dataset import DatasetEntry, Series, count_present
from engine.enums import BaselineMethod, Metric, Outcome, Resolution
from engine.excess import calculate_excess

log = logging.getLogger(__name__)


def _fallback(
    entry: DatasetEntry,
    metric: Metric,
    values: Series,
    start_idx: int,
    end_idx: int,
    settings: Settings,
) -> Outcome:
    record = entry.metric(metric)
    apply_fallback(
        record,
        values[start_idx:end_idx + 1],
        len(values),
        end_idx,
        pi_multiplier=settings.baseline_pi_multiplier,
    )
    # the mean baseline is never a running total
    calculate_excess(entry, metric, baseline_cumulative=False, baseline_start_idx=start_idx)
    return Outcome.fallback


async def calculate_baseline(
    deps: BaselineBackend,
    entry: DatasetEntry,
    labels: List[str],
    start_idx: int,
    end_idx: int,
    metric: Union[Metric, str],
    method: Union[BaselineMethod, str],
    resolution: Union[Resolution, str],
    cumulative: bool,
    stats_url: Optional[str] = None,
    settings: Optional[Settings] = None,
) -> Outcome:
    """Compute baseline, prediction interval and excess for one entry, in place.

    `start_idx`/`end_idx` are 0-indexed inclusive positions into `labels`.
    Backend failures never propagate: they degrade to the mean fallback.
    Unknown metric, method or resolution values raise ValueError.
    """
    metric = Metric(metric)
    method = BaselineMethod(method)
    resolution = Resolution(resolution)
    s = settings or default_settings

    if method is BaselineMethod.auto:
        return Outcome.skipped

    if start_idx < 0 or end_idx < 0:
        log.warning(
            "invalid baseline indices start=%d end=%d resolution=%s labels=%d first=%s last=%s",
            start_idx, end_idx, resolution.value, len(labels),
            labels[0] if labels else None, labels[-1] if labels else None,
        )
        return Outcome.skipped

    record = entry.series.get(metric)
    if record is None:
        log.warning("no %s series for baseline iso3c=%s age_group=%s", metric.value, entry.iso3c, entry.age_group)
        return Outcome.skipped

    values: Series = list(record.primary[:len(labels)])
    window = values[start_idx:end_idx + 1]
    valid = count_present(window)
    if valid < s.baseline_min_valid_points:
        log.warning(
            "insufficient data for baseline iso3c=%s valid=%d window=%d start=%d end=%d resolution=%s",
            entry.iso3c, valid, len(window), start_idx, end_idx, resolution.value,
        )
        return Outcome.skipped

    period_length = end_idx - start_idx + 1
    max_period = max_baseline_period(resolution, s)
    if period_length > max_period:
        log.warning(
            "baseline window too large, using mean fallback iso3c=%s length=%d max=%d resolution=%s",
            entry.iso3c, period_length, max_period, resolution.value,
        )
        return _fallback(entry, metric, values, start_idx, end_idx, s)

    request = build_request(
        values, labels, start_idx, end_idx, method, resolution, cumulative, s.baseline_data_precision
    )
    endpoint = request.endpoint(stats_url or s.stats_url)
    payload = request.payload()
    log.debug(
        "baseline request iso3c=%s bs=%d be=%d method=%s s=%d n=%d endpoint=%s",
        entry.iso3c, request.bs, request.be, method.value, request.season, len(values), endpoint,
    )

    try:
        text = await deps.enqueue(lambda: deps.fetch(endpoint, payload))
        fit = parse_response(text, len(values))
    except Exception as exc:
        log.warning(
            "baseline calculation failed, using mean fallback iso3c=%s method=%s resolution=%s "
            "start=%d end=%d valid=%d: %s: %s",
            entry.iso3c, method.value, resolution.value, start_idx, end_idx, valid,
            type(exc).__name__, exc,
        )
        return _fallback(entry, metric, values, start_idx, end_idx, s)

    if method is BaselineMethod.naive:
        fit.y = flatten_naive(fit.y, end_idx)

    record.baseline = fit.y
    record.baseline_lower = fit.lower
    record.baseline_upper = fit.upper
    if fit.zscore is not None:
        record.zscore = fit.zscore

    calculate_excess(entry, metric, baseline_cumulative=request.cumulative, baseline_start_idx=start_idx)
    return Outcome.backend
