"""
Baseline window policy: default fitting range per resolution, maximum window length, validation and clamping of a requested window.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple, Union

from config import Settings, settings as default_settings
from engine.constants import PERIODS_PER_YEAR
from engine.enums import Resolution


@dataclass(frozen=True)
class BaselineRange:
    from_label: str
    to_label: str


@dataclass(frozen=True)
class BaselineValidation:
    is_valid: bool
    period_length: int
    max_period: int
    max_years: int
    exceeded_by: Optional[int] = None


def _resolution(value: Union[Resolution, str]) -> Resolution:
    return value if isinstance(value, Resolution) else Resolution(value)


def max_baseline_years(resolution: Union[Resolution, str], settings: Optional[Settings] = None) -> int:
    s = settings or default_settings
    return int(s.baseline_max_years[_resolution(resolution).family])


def max_baseline_period(resolution: Union[Resolution, str], settings: Optional[Settings] = None) -> int:
    """Longest window, in labels, the backend is asked to fit."""
    res = _resolution(resolution)
    return max_baseline_years(res, settings) * PERIODS_PER_YEAR[res.family]


def baseline_year(resolution: Union[Resolution, str], settings: Optional[Settings] = None) -> int:
    s = settings or default_settings
    if _resolution(resolution).is_split_year:
        return s.baseline_split_year_default_year
    return s.baseline_default_year


def window_indices(labels: List[str], from_label: str, to_label: str) -> Tuple[int, int]:
    """0-indexed positions of the window bounds, -1 where a label is absent."""
    start = labels.index(from_label) if from_label in labels else -1
    end = labels.index(to_label) if to_label in labels else -1
    return start, end


def default_baseline_range(
    resolution: Union[Resolution, str],
    labels: List[str],
    yearly_labels: List[str],
    settings: Optional[Settings] = None,
) -> Optional[BaselineRange]:
    if not labels:
        return None
    s = settings or default_settings
    span = s.baseline_min_span_years
    year = str(baseline_year(resolution, s))

    if not any(y == year or y.startswith(year + "/") for y in yearly_labels):
        return BaselineRange(labels[0], labels[min(len(labels) - 1, span)])

    from_idx = next((i for i, label in enumerate(labels) if label[:4] == year), -1)
    if from_idx == -1:
        return None

    boundary = str(int(year) + span)
    boundary_idx = next(
        (i for i, label in enumerate(labels) if i > from_idx and label[:4] == boundary), -1
    )
    if boundary_idx != -1:
        to_idx = boundary_idx - 1
    else:
        to_idx = min(len(labels) - 1, from_idx + span - 1)
    return BaselineRange(labels[from_idx], labels[to_idx])


def validate_baseline_period(
    resolution: Union[Resolution, str],
    labels: List[str],
    from_label: str,
    to_label: str,
    settings: Optional[Settings] = None,
) -> BaselineValidation:
    max_period = max_baseline_period(resolution, settings)
    max_years = max_baseline_years(resolution, settings)
    start, end = window_indices(labels, from_label, to_label)
    if start == -1 or end == -1:
        return BaselineValidation(False, 0, max_period, max_years)

    length = end - start + 1
    if length <= max_period:
        return BaselineValidation(True, length, max_period, max_years)
    return BaselineValidation(False, length, max_period, max_years, exceeded_by=length - max_period)


def clamp_window(
    resolution: Union[Resolution, str],
    start_idx: int,
    end_idx: int,
    n_labels: int,
    settings: Optional[Settings] = None,
) -> Tuple[int, int]:
    """Shrink the window end so its length is at most the resolution maximum; the start is kept."""
    max_period = max_baseline_period(resolution, settings)
    if end_idx - start_idx + 1 <= max_period:
        return start_idx, end_idx
    return start_idx, min(start_idx + max_period - 1, n_labels - 1)


def clamp_baseline_period(
    resolution: Union[Resolution, str],
    labels: List[str],
    from_label: str,
    to_label: str,
    settings: Optional[Settings] = None,
) -> BaselineRange:
    validation = validate_baseline_period(resolution, labels, from_label, to_label, settings)
    if validation.is_valid:
        return BaselineRange(from_label, to_label)

    start, end = window_indices(labels, from_label, to_label)
    if start == -1:
        return BaselineRange(from_label, to_label)
    if end == -1:
        end = len(labels) - 1
    _, clamped = clamp_window(resolution, start, end, len(labels), settings)
    return BaselineRange(from_label, labels[clamped])
