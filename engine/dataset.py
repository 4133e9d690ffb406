"""
Dataset model for per-country, per-age-group mortality series: one record of parallel arrays per tracked metric, with a single canonical missing marker (None) applied at ingestion.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Iterator, List, Optional, Tuple

from engine.constants import NA_SENTINEL
from engine.enums import Metric

Series = List[Optional[float]]

_DERIVED_FIELDS: Tuple[str, ...] = (
    "baseline",
    "baseline_lower",
    "baseline_upper",
    "excess",
    "excess_lower",
    "excess_upper",
    "zscore",
)


def _coerce_value(value: Any) -> Optional[float]:
    if value is None:
        return None
    if isinstance(value, bool):
        raise ValueError(f"boolean is not a series value: {value!r}")
    if isinstance(value, str):
        text = value.strip()
        if not text or text == NA_SENTINEL:
            return None
        value = text
    numeric = float(value)
    if math.isnan(numeric):
        return None
    return numeric


def normalize_series(values: Optional[Iterable[Any]]) -> Series:
    """Map None, NaN and "NA" to None and every number to float."""
    if values is None:
        return []
    return [_coerce_value(v) for v in values]


def count_present(values: Iterable[Optional[float]]) -> int:
    return sum(1 for v in values if v is not None)


@dataclass
class MetricSeries:
    primary: Series = field(default_factory=list)
    baseline: Series = field(default_factory=list)
    baseline_lower: Series = field(default_factory=list)
    baseline_upper: Series = field(default_factory=list)
    excess: Series = field(default_factory=list)
    excess_lower: Series = field(default_factory=list)
    excess_upper: Series = field(default_factory=list)
    zscore: Optional[Series] = None


@dataclass
class DatasetEntry:
    iso3c: str = ""
    age_group: str = ""
    series: Dict[Metric, MetricSeries] = field(default_factory=dict)

    def metric(self, metric: Metric) -> MetricSeries:
        record = self.series.get(metric)
        if record is None:
            record = MetricSeries()
            self.series[metric] = record
        return record


Dataset = Dict[str, Dict[str, DatasetEntry]]


def iter_entries(dataset: Dataset) -> Iterator[Tuple[str, str, DatasetEntry]]:
    for age_group, countries in (dataset or {}).items():
        for iso3c, entry in (countries or {}).items():
            yield age_group, iso3c, entry


def entry_from_raw(age_group: str, iso3c: str, raw: Dict[str, Any]) -> DatasetEntry:
    entry = DatasetEntry(iso3c=iso3c, age_group=age_group)
    for metric in Metric:
        if metric.value not in raw:
            continue
        record = entry.metric(metric)
        record.primary = normalize_series(raw[metric.value])
        for name in _DERIVED_FIELDS:
            key = f"{metric.value}_{name}"
            if key in raw:
                setattr(record, name, normalize_series(raw[key]))
    return entry


def dataset_from_raw(raw: Dict[str, Dict[str, Dict[str, Any]]]) -> Dataset:
    return {
        age_group: {
            iso3c: entry_from_raw(age_group, iso3c, arrays or {})
            for iso3c, arrays in (countries or {}).items()
        }
        for age_group, countries in (raw or {}).items()
    }


def entry_to_raw(entry: DatasetEntry) -> Dict[str, Series]:
    out: Dict[str, Series] = {}
    for metric, record in entry.series.items():
        out[metric.value] = list(record.primary)
        for name in _DERIVED_FIELDS:
            values = getattr(record, name)
            if values:
                out[f"{metric.value}_{name}"] = list(values)
    return out


def dataset_to_raw(dataset: Dataset) -> Dict[str, Dict[str, Dict[str, Series]]]:
    out: Dict[str, Dict[str, Dict[str, Series]]] = {}
    for age_group, iso3c, entry in iter_entries(dataset):
        out.setdefault(age_group, {})[iso3c] = entry_to_raw(entry)
    return out
