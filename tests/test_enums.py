"""
Test cases for enums used by the baseline engine, including Resolution, Metric, BaselineMethod and Outcome, validating their properties.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

import pytest

from engine.enums import BaselineMethod, CircuitState, Metric, Outcome, Resolution


def test_resolution_family():
    assert Resolution.weekly_13w_sma.family == "weekly"
    assert Resolution.monthly.family == "monthly"
    assert Resolution.quarterly.family == "quarterly"
    assert Resolution.fluseason.family == "yearly"
    assert Resolution.midyear.is_split_year
    assert not Resolution.yearly.is_split_year


def test_only_linear_regression_has_trend():
    assert [m for m in BaselineMethod if m.has_trend] == [BaselineMethod.lin_reg]


def test_string_values():
    assert Metric("asmr_who") is Metric.asmr_who
    assert CircuitState.half_open.value == "half-open"
    assert Outcome.fallback.value == "fallback"
    with pytest.raises(ValueError):
        Resolution("daily")
