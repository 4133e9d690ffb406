"""
Response models for API endpoints.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from engine.enums import BaselineMethod, Metric, Outcome, Resolution


class BaselineWindow(BaseModel):
    start_idx: int
    end_idx: int
    from_label: Optional[str] = None
    to_label: Optional[str] = None
    clamped: bool = False


class OutcomeSummary(BaseModel):
    total: int = 0
    backend: int = 0
    fallback: int = 0
    skipped: int = 0


class BaselinesResponse(BaseModel):
    metric: Metric
    method: BaselineMethod
    resolution: Resolution
    window: BaselineWindow
    data: Dict[str, Dict[str, Dict[str, List[Optional[float]]]]]
    outcomes: Dict[str, Dict[str, Outcome]] = Field(default_factory=dict)
    summary: OutcomeSummary = Field(default_factory=OutcomeSummary)


class BackendStatus(BaseModel):
    circuit: Dict[str, Any]
    queue: Dict[str, Any]
    store: str
