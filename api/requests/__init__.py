from __future__ import annotations

from typing import Dict, List, Optional, Union

from pydantic import BaseModel, Field, model_validator

from engine.enums import BaselineMethod, Metric, Resolution

RawValue = Optional[Union[float, str]]
RawEntry = Dict[str, List[RawValue]]


class BaselinesRequest(BaseModel):
    labels: List[str] = Field(min_length=1)
    # age group -> iso3c -> flat entry keyed "{metric}" / "{metric}_{suffix}"
    data: Dict[str, Dict[str, RawEntry]]
    metric: Metric = Metric.deaths
    method: BaselineMethod = BaselineMethod.mean
    resolution: Resolution = Resolution.yearly
    cumulative: bool = False
    start_idx: Optional[int] = Field(default=None, ge=0)
    end_idx: Optional[int] = Field(default=None, ge=0)
    baseline_from: Optional[str] = None
    baseline_to: Optional[str] = None
    yearly_labels: Optional[List[str]] = None
    clamp: bool = False
    stats_url: Optional[str] = None

    @model_validator(mode="after")
    def _check_window(self) -> "BaselinesRequest":
        if (self.start_idx is None) != (self.end_idx is None):
            raise ValueError("start_idx and end_idx must be given together")
        if (self.baseline_from is None) != (self.baseline_to is None):
            raise ValueError("baseline_from and baseline_to must be given together")
        if self.start_idx is not None and self.end_idx is not None and self.start_idx > self.end_idx:
            raise ValueError("start_idx must not exceed end_idx")
        return self
