"""
Excess computation from observed and baseline arrays.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from typing import Optional, Sequence, Tuple

from engine.dataset import DatasetEntry, Series
from engine.enums import Metric


def _at(values: Sequence[Optional[float]], i: int) -> Optional[float]:
    return values[i] if i < len(values) else None


def cumulative_sum_from(values: Sequence[Optional[float]], start_idx: int) -> Series:
    """Running total starting at `start_idx`; earlier positions are None.

    A missing value adds nothing but the position still carries the total.
    """
    out: Series = []
    total = 0.0
    for i, v in enumerate(values):
        if i < start_idx:
            out.append(None)
            continue
        if v is not None:
            total += v
        out.append(total)
    return out


def excess_arrays(
    observed: Sequence[Optional[float]],
    baseline: Sequence[Optional[float]],
    baseline_lower: Sequence[Optional[float]],
    baseline_upper: Sequence[Optional[float]],
) -> Tuple[Series, Series, Series]:
    excess: Series = []
    lower: Series = []
    upper: Series = []
    for i, obs in enumerate(observed):
        base = _at(baseline, i)
        if obs is None or base is None:
            excess.append(None)
            lower.append(None)
            upper.append(None)
            continue
        lo = _at(baseline_lower, i)
        hi = _at(baseline_upper, i)
        excess.append(obs - base)
        lower.append(obs - lo if lo is not None else None)
        upper.append(obs - hi if hi is not None else None)
    return excess, lower, upper


def calculate_excess(
    entry: DatasetEntry,
    metric: Metric,
    baseline_cumulative: bool = False,
    baseline_start_idx: int = 0,
) -> None:
    record = entry.metric(metric)
    observed: Sequence[Optional[float]] = record.primary
    # a running-total baseline only compares against running-total observations
    if baseline_cumulative:
        observed = cumulative_sum_from(observed, baseline_start_idx)
    record.excess, record.excess_lower, record.excess_upper = excess_arrays(
        observed, record.baseline, record.baseline_lower, record.baseline_upper
    )
