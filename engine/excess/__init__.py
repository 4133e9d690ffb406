"""
Excess computation: observed minus baseline with strict missing-value propagation, including cumulative alignment against running-total baselines.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from engine.excess.compute import calculate_excess, cumulative_sum_from, excess_arrays

__all__ = ["calculate_excess", "cumulative_sum_from", "excess_arrays"]
