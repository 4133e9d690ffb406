"""
Local fallback baseline: mean and population standard deviation over the fitting window, with a prediction interval reported only after the window ends, used whenever the stats backend cannot be used.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

import numpy as np

from config import settings
from engine.dataset import MetricSeries, Series


@dataclass(frozen=True)
class Baseline:
    mean: float
    std: float
    lower: float
    upper: float
    sample_count: int = 0


def compute(values: Sequence[Optional[float]], pi_multiplier: float | None = None) -> Optional[Baseline]:
    if pi_multiplier is None:
        pi_multiplier = settings.baseline_pi_multiplier
    present = [v for v in values if v is not None]
    if not present:
        return None
    arr = np.array(present, dtype=float)
    m = float(np.mean(arr))
    s = float(np.std(arr))
    return Baseline(
        mean=m,
        std=s,
        lower=m - pi_multiplier * s,
        upper=m + pi_multiplier * s,
        sample_count=len(present),
    )


def apply_fallback(
    record: MetricSeries,
    window: Sequence[Optional[float]],
    length: int,
    end_idx: int,
    pi_multiplier: float | None = None,
) -> Optional[Baseline]:
    """Write a flat mean baseline into `record`; returns None and writes nothing for an empty window."""
    baseline = compute(window, pi_multiplier)
    if baseline is None:
        return None

    lower: Series = [None] * length
    upper: Series = [None] * length
    for i in range(end_idx + 1, length):
        lower[i] = baseline.lower
        upper[i] = baseline.upper

    record.baseline = [baseline.mean] * length
    record.baseline_lower = lower
    record.baseline_upper = upper
    return baseline
