"""
Wire shapes exchanged with the stats backend: the request built from an entry's series and the normalized fit parsed from the response.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence

from config import STATS_CUMULATIVE_SUFFIX
from datasources.exceptions import ResponseParseError
from engine.dataset import Series, normalize_series
from engine.enums import BaselineMethod, Resolution
from engine.seasonality import label_to_xs, season_type


@dataclass(frozen=True)
class BaselineRequest:
    y: List[Optional[float]]
    bs: int
    be: int
    trend: bool
    season: int
    method: BaselineMethod
    xs: Optional[str] = None
    cumulative: bool = False

    def endpoint(self, base_url: str) -> str:
        if self.cumulative:
            return f"{base_url.rstrip('/')}/{STATS_CUMULATIVE_SUFFIX}"
        return base_url

    def payload(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {
            "y": list(self.y),
            "bs": self.bs,
            "be": self.be,
            "t": 1 if self.trend else 0,
        }
        # the cumulative endpoint takes neither seasonality nor method
        if not self.cumulative:
            body["s"] = self.season
            body["m"] = self.method.value
        if self.xs:
            body["xs"] = self.xs
        return body


@dataclass
class BaselineFit:
    y: Series
    lower: Series
    upper: Series
    zscore: Optional[Series] = None


def build_request(
    values: Sequence[Optional[float]],
    labels: Sequence[str],
    start_idx: int,
    end_idx: int,
    method: BaselineMethod,
    resolution: Resolution,
    cumulative: bool,
    precision: int,
) -> BaselineRequest:
    season = season_type(resolution)
    return BaselineRequest(
        y=[round(v, precision) if v is not None else None for v in values],
        bs=start_idx + 1,
        be=end_idx + 1,
        trend=method.has_trend,
        season=season,
        method=method,
        xs=label_to_xs(labels[0], resolution) if labels else None,
        cumulative=cumulative and season == 1,
    )


def _array(data: Dict[str, Any], key: str, length: int, required: bool = True) -> Optional[Series]:
    raw = data.get(key)
    if raw is None:
        if required:
            raise ResponseParseError(f"baseline response is missing {key!r}")
        return None
    if not isinstance(raw, list):
        raise ResponseParseError(f"baseline response field {key!r} is not an array")
    try:
        return normalize_series(raw[:length])
    except (TypeError, ValueError) as exc:
        raise ResponseParseError(f"baseline response field {key!r} has a non-numeric value") from exc


def parse_response(text: str, length: int) -> BaselineFit:
    """Parse a backend response, truncating every array to the input length."""
    try:
        data = json.loads(text)
    except (TypeError, ValueError) as exc:
        raise ResponseParseError(f"baseline response is not valid JSON: {exc}") from exc
    if not isinstance(data, dict):
        raise ResponseParseError("baseline response is not a JSON object")

    return BaselineFit(
        y=_array(data, "y", length),
        lower=_array(data, "lower", length),
        upper=_array(data, "upper", length),
        zscore=_array(data, "zscore", length, required=False),
    )


def flatten_naive(y: Series, end_idx: int) -> Series:
    """Hold the fitted value at `end_idx` across every present position."""
    value = y[end_idx] if 0 <= end_idx < len(y) else None
    if value is None:
        return y
    return [value if v is not None else None for v in y]
