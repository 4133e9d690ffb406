"""
Seasonality classification for series resolutions: the backend seasonality period and the compact start-period token used for seasonal phase alignment.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from engine.seasonality.classify import label_to_xs, season_type

__all__ = ["label_to_xs", "season_type"]
