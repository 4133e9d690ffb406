"""
Tests for dataset-wide baseline fan-out.
"""

from __future__ import annotations

import asyncio
import json

import pytest

from datasources.exceptions import DataSourceUnavailable
from datasources.queue import RequestQueue
from engine.baseline import calculate_baselines
from engine.dataset import dataset_from_raw, dataset_to_raw
from engine.enums import Metric, Outcome

LABELS = ["2015", "2016", "2017", "2018", "2019"]


class DummyBackend:
    def __init__(self, fail_for=(), queue=None):
        self.fail_for = set(fail_for)
        self.queue = queue
        self.in_flight = 0
        self.peak = 0

    async def fetch(self, endpoint, payload):
        self.in_flight += 1
        self.peak = max(self.peak, self.in_flight)
        try:
            await asyncio.sleep(0.01)
            if payload["y"][0] in self.fail_for:
                raise DataSourceUnavailable("connection refused")
            n = len(payload["y"])
            return json.dumps({"y": [payload["y"][0]] * n, "lower": [None] * n, "upper": [None] * n})
        finally:
            self.in_flight -= 1

    async def enqueue(self, task):
        if self.queue is None:
            return await task()
        return await self.queue.enqueue(task)


def _dataset():
    return dataset_from_raw({
        "all": {
            "USA": {"deaths": [1, 2, 3, 4, 5]},
            "SWE": {"deaths": [10, 20, 30, 40, 50]},
        },
        "0-64": {
            "USA": {"deaths": [7, None, None, 8, 9]},
        },
    })


@pytest.mark.asyncio
async def test_every_entry_gets_an_outcome_and_progress_is_reported():
    dataset = _dataset()
    progress = []

    outcomes = await calculate_baselines(
        DummyBackend(), dataset, LABELS, 0, 2, "deaths", "mean", "yearly", False,
        progress_cb=lambda done, total: progress.append((done, total)),
    )

    assert outcomes == {
        ("all", "USA"): Outcome.backend,
        ("all", "SWE"): Outcome.backend,
        ("0-64", "USA"): Outcome.skipped,
    }
    assert progress[0] == (0, 3)
    assert progress[-1] == (3, 3)
    assert [done for done, _ in progress] == [0, 1, 2, 3]
    assert dataset["all"]["SWE"].series[Metric.deaths].baseline == [10] * 5


@pytest.mark.asyncio
async def test_one_failing_entry_does_not_affect_others():
    dataset = _dataset()

    outcomes = await calculate_baselines(
        DummyBackend(fail_for={10}), dataset, LABELS, 0, 2, Metric.deaths, "mean", "yearly", False
    )

    assert outcomes[("all", "SWE")] is Outcome.fallback
    assert outcomes[("all", "USA")] is Outcome.backend
    assert dataset["all"]["SWE"].series[Metric.deaths].baseline == [20.0] * 5
    assert dataset["all"]["USA"].series[Metric.deaths].baseline == [1] * 5


@pytest.mark.asyncio
async def test_outbound_concurrency_bounded_by_queue():
    raw = {"all": {f"C{i:02d}": {"deaths": [i + 1, 2, 3, 4, 5]} for i in range(12)}}
    dataset = dataset_from_raw(raw)
    backend = DummyBackend(queue=RequestQueue(max_concurrent=3, queue_timeout=5.0))

    outcomes = await calculate_baselines(
        backend, dataset, LABELS, 0, 2, "deaths", "mean", "yearly", False
    )

    assert set(outcomes.values()) == {Outcome.backend}
    assert backend.peak <= 3


@pytest.mark.asyncio
async def test_empty_dataset_reports_zero_total():
    progress = []
    outcomes = await calculate_baselines(
        DummyBackend(), {}, LABELS, 0, 2, "deaths", "mean", "yearly", False,
        progress_cb=lambda done, total: progress.append((done, total)),
    )
    assert outcomes == {}
    assert progress == [(0, 0)]


@pytest.mark.asyncio
async def test_unknown_resolution_rejected_before_any_work():
    progress = []
    with pytest.raises(ValueError):
        await calculate_baselines(
            DummyBackend(), _dataset(), LABELS, 0, 2, "deaths", "mean", "daily", False,
            progress_cb=lambda done, total: progress.append((done, total)),
        )
    assert progress == []


@pytest.mark.asyncio
async def test_missing_metric_adds_no_arrays_to_output():
    dataset = dataset_from_raw({"all": {"USA": {"deaths": [1, 2, 3, 4]}}})

    outcomes = await calculate_baselines(
        DummyBackend(), dataset, LABELS[:4], 0, 2, "cmr", "mean", "yearly", False
    )

    assert outcomes == {("all", "USA"): Outcome.skipped}
    assert dataset_to_raw(dataset) == {"all": {"USA": {"deaths": [1.0, 2.0, 3.0, 4.0]}}}
