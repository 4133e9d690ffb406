"""
Baseline routes: compute baselines, prediction intervals and excess for a dataset, and report stats backend protection state.

Copyright (c) 2026 Stefan Kumarasinghe
Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

import logging
from typing import Dict, Tuple

from fastapi import APIRouter, HTTPException

from api.requests import BaselinesRequest
from api.responses import BackendStatus, BaselinesResponse, BaselineWindow, OutcomeSummary
from api.routes.common import get_provider
from api.routes.exception import handle_exceptions
from engine.baseline import calculate_baselines, clamp_window, default_baseline_range
from engine.baseline.window import window_indices
from engine.dataset import dataset_from_raw, dataset_to_raw
from engine.enums import Outcome
from store.client import is_using_fallback

log = logging.getLogger(__name__)

router = APIRouter(tags=["Baselines"])


def _resolve_window(req: BaselinesRequest) -> BaselineWindow:
    labels = req.labels
    if req.start_idx is not None and req.end_idx is not None:
        start, end = req.start_idx, req.end_idx
        if end >= len(labels):
            raise HTTPException(status_code=422, detail=f"end_idx {end} is outside the {len(labels)} labels")
    else:
        if req.baseline_from is not None and req.baseline_to is not None:
            from_label, to_label = req.baseline_from, req.baseline_to
        else:
            yearly = req.yearly_labels or list(dict.fromkeys(label[:4] for label in labels))
            default = default_baseline_range(req.resolution, labels, yearly)
            if default is None:
                raise HTTPException(status_code=422, detail="no default baseline period for these labels")
            from_label, to_label = default.from_label, default.to_label
        start, end = window_indices(labels, from_label, to_label)
        if start == -1 or end == -1:
            raise HTTPException(
                status_code=422,
                detail=f"baseline period {from_label!r}..{to_label!r} is not within labels",
            )
        if start > end:
            raise HTTPException(status_code=422, detail="baseline period ends before it starts")

    clamped = False
    if req.clamp:
        new_start, new_end = clamp_window(req.resolution, start, end, len(labels))
        clamped = (new_start, new_end) != (start, end)
        start, end = new_start, new_end
    return BaselineWindow(
        start_idx=start,
        end_idx=end,
        from_label=labels[start],
        to_label=labels[end],
        clamped=clamped,
    )


def _summarize(outcomes: Dict[Tuple[str, str], Outcome]) -> OutcomeSummary:
    summary = OutcomeSummary(total=len(outcomes))
    for outcome in outcomes.values():
        setattr(summary, outcome.value, getattr(summary, outcome.value) + 1)
    return summary


@router.post("/baselines", summary="Baselines, prediction intervals and excess per entry")
@handle_exceptions
async def compute_baselines(req: BaselinesRequest) -> BaselinesResponse:
    window = _resolve_window(req)
    try:
        dataset = dataset_from_raw(req.data)
    except (TypeError, ValueError) as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc

    outcomes = await calculate_baselines(
        get_provider(),
        dataset,
        req.labels,
        window.start_idx,
        window.end_idx,
        req.metric,
        req.method,
        req.resolution,
        req.cumulative,
        stats_url=req.stats_url,
    )

    nested: Dict[str, Dict[str, Outcome]] = {}
    for (age_group, iso3c), outcome in outcomes.items():
        nested.setdefault(age_group, {})[iso3c] = outcome

    return BaselinesResponse(
        metric=req.metric,
        method=req.method,
        resolution=req.resolution,
        window=window,
        data=dataset_to_raw(dataset),
        outcomes=nested,
        summary=_summarize(outcomes),
    )


@router.get("/baselines/status", summary="Circuit breaker and request queue state")
@handle_exceptions
async def baselines_status() -> BackendStatus:
    status = get_provider().status()
    return BackendStatus(
        circuit=status["circuit"],
        queue=status["queue"],
        store="fallback" if is_using_fallback() else "redis",
    )
