"""
Baseline computation for mortality series: per-entry calculation against the stats backend with a local mean fallback, batch fan-out across a dataset, and window policy helpers.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from engine.baseline.batch import calculate_baselines
from engine.baseline.calculator import calculate_baseline
from engine.baseline.compute import Baseline, apply_fallback, compute
from engine.baseline.window import (
    BaselineRange,
    BaselineValidation,
    clamp_baseline_period,
    clamp_window,
    default_baseline_range,
    max_baseline_period,
    validate_baseline_period,
)

__all__ = [
    "Baseline",
    "BaselineRange",
    "BaselineValidation",
    "apply_fallback",
    "calculate_baseline",
    "calculate_baselines",
    "clamp_baseline_period",
    "clamp_window",
    "compute",
    "default_baseline_range",
    "max_baseline_period",
    "validate_baseline_period",
]
