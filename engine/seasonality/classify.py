"""
Seasonality classification for series resolutions.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import re
from typing import Optional, Union

from engine.constants import MONTH_TOKENS, SEASON_TYPES
from engine.enums import Resolution

_WEEKLY_RE = re.compile(r"^(\d{4})\s*W(\d{2})$")
_MONTHLY_RE = re.compile(r"^(\d{4})\s+(\w{3})$")
_QUARTERLY_RE = re.compile(r"^(\d{4})\s*Q(\d)$")
_SPLIT_YEAR_RE = re.compile(r"^(\d{4})/\d{2}$")
_YEARLY_RE = re.compile(r"^(\d{4})$")


def _resolution(value: Union[Resolution, str]) -> Resolution:
    return value if isinstance(value, Resolution) else Resolution(value)


def season_type(resolution: Union[Resolution, str]) -> int:
    """Seasonality period `s` for the backend: 4 weekly, 3 monthly, 2 quarterly, 1 otherwise."""
    return SEASON_TYPES[_resolution(resolution).family]


def label_to_xs(label: Optional[str], resolution: Union[Resolution, str]) -> Optional[str]:
    """Convert a period label to the backend start token.

    "2020 W01" -> "2020W01", "2020 Jan" -> "2020-01", "2020 Q1" -> "2020Q1",
    "2019/20" -> "2019" for split years and "2020" -> "2020". Returns None
    when the label does not match the resolution's format.
    """
    if not label:
        return None
    res = _resolution(resolution)

    if res.family == "weekly":
        m = _WEEKLY_RE.match(label)
        return f"{m.group(1)}W{m.group(2)}" if m else None

    if res is Resolution.monthly:
        m = _MONTHLY_RE.match(label)
        if m and m.group(2) in MONTH_TOKENS:
            return f"{m.group(1)}-{MONTH_TOKENS[m.group(2)]}"
        return None

    if res is Resolution.quarterly:
        m = _QUARTERLY_RE.match(label)
        return f"{m.group(1)}Q{m.group(2)}" if m else None

    if res.is_split_year:
        m = _SPLIT_YEAR_RE.match(label)
        return m.group(1) if m else None

    m = _YEARLY_RE.match(label)
    return m.group(1) if m else None
