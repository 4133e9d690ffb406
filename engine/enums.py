"""
Enumerations for Resolutions, Metrics, Baseline Methods, Circuit States and Outcomes

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from enum import Enum


class Resolution(str, Enum):
    weekly = "weekly"
    weekly_13w_sma = "weekly_13w_sma"
    weekly_26w_sma = "weekly_26w_sma"
    weekly_52w_sma = "weekly_52w_sma"
    weekly_104w_sma = "weekly_104w_sma"
    monthly = "monthly"
    quarterly = "quarterly"
    yearly = "yearly"
    fluseason = "fluseason"
    midyear = "midyear"

    @property
    def family(self) -> str:
        if self.value.startswith("weekly"):
            return "weekly"
        if self in (Resolution.monthly, Resolution.quarterly):
            return self.value
        return "yearly"

    @property
    def is_split_year(self) -> bool:
        return self in (Resolution.fluseason, Resolution.midyear)


class Metric(str, Enum):
    deaths = "deaths"
    cmr = "cmr"
    asmr_who = "asmr_who"
    asmr_esp = "asmr_esp"
    asmr_usa = "asmr_usa"
    asmr_country = "asmr_country"
    le = "le"


class BaselineMethod(str, Enum):
    auto = "auto"
    naive = "naive"
    mean = "mean"
    lin_reg = "lin_reg"
    exp = "exp"

    @property
    def has_trend(self) -> bool:
        return self is BaselineMethod.lin_reg


class CircuitState(str, Enum):
    closed = "closed"
    open = "open"
    half_open = "half-open"


class Outcome(str, Enum):
    skipped = "skipped"
    backend = "backend"
    fallback = "fallback"
