"""
Statistics over run histories.

Records are grouped by a key function and reduced per numeric field to
mean, min, max and population standard deviation. Nothing is cached: every
call recomputes from the records it is given.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, Hashable, Iterable, Mapping, Optional, Sequence

import numpy as np
import pandas as pd

from kb_runner.services.history import NUMERIC_FIELDS, RunRecord


KeyFunction = Callable[[RunRecord], Hashable]


def by_size_and_type(record: RunRecord) -> tuple[int, str]:
    return (record.input_size, record.input_type)


def by_size(record: RunRecord) -> int:
    return record.input_size


def by_algorithm_size_and_type(record: RunRecord) -> tuple[str, int, str]:
    return (record.algorithm, record.input_size, record.input_type)


@dataclass(frozen=True)
class FieldStats:
    """Summary of one numeric field across a group."""

    mean: float
    min: float
    max: float
    stddev: float

    @classmethod
    def from_values(cls, values: Sequence[float]) -> "FieldStats":
        data = np.asarray(values, dtype=float)
        return cls(
            mean=float(np.mean(data)),
            min=float(np.min(data)),
            max=float(np.max(data)),
            stddev=float(np.std(data, ddof=0)),
        )


@dataclass(frozen=True)
class AggregateStats:
    """Per-group statistics derived from a set of RunRecords."""

    key: Hashable
    count: int
    algorithms: tuple[str, ...]
    fields: Mapping[str, FieldStats]

    def __getitem__(self, field_name: str) -> FieldStats:
        return self.fields[field_name]

    @property
    def algorithm(self) -> str:
        return "+".join(self.algorithms)

    @property
    def comparisons(self) -> FieldStats:
        return self.fields["comparisons"]

    @property
    def element_accesses(self) -> FieldStats:
        return self.fields["element_accesses"]

    @property
    def allocations(self) -> FieldStats:
        return self.fields["allocations"]

    @property
    def elapsed_nanos(self) -> FieldStats:
        return self.fields["elapsed_nanos"]

    @property
    def elapsed_millis(self) -> FieldStats:
        return self.fields["elapsed_millis"]

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"key": self.key, "count": self.count, "algorithm": self.algorithm}
        for name, stats in self.fields.items():
            payload[f"{name}_mean"] = stats.mean
            payload[f"{name}_min"] = stats.min
            payload[f"{name}_max"] = stats.max
            payload[f"{name}_stddev"] = stats.stddev
        return payload


def _reduce(key: Hashable, records: Sequence[RunRecord]) -> AggregateStats:
    algorithms = tuple(dict.fromkeys(record.algorithm for record in records))
    fields = {
        name: FieldStats.from_values([getattr(record, name) for record in records])
        for name in NUMERIC_FIELDS
    }
    return AggregateStats(key=key, count=len(records), algorithms=algorithms, fields=fields)


def aggregate(
    records: Iterable[RunRecord],
    key_fn: KeyFunction = by_size_and_type,
) -> Dict[Hashable, AggregateStats]:
    """Group ``records`` by ``key_fn`` and reduce every group.

    Groups appear in order of their first record. No records gives ``{}``.
    """
    groups: Dict[Hashable, list[RunRecord]] = {}
    for record in records:
        groups.setdefault(key_fn(record), []).append(record)
    return {key: _reduce(key, members) for key, members in groups.items()}


def summarize(records: Iterable[RunRecord]) -> Optional[AggregateStats]:
    """Reduce all records into a single group, or None when there are none."""
    materialized = list(records)
    if not materialized:
        return None
    return _reduce(None, materialized)


def records_to_frame(records: Iterable[RunRecord]) -> pd.DataFrame:
    """Tabulate records, one row each, in history order."""
    rows = [record.to_dict() for record in records]
    columns = [
        "algorithm",
        "timestamp_ms",
        "input_size",
        "input_type",
        *NUMERIC_FIELDS,
    ]
    return pd.DataFrame(rows, columns=columns)


SUMMARY_COLUMNS: tuple[str, ...] = (
    "algorithm",
    "inputSize",
    "inputType",
    "count",
    "avgComparisons",
    "avgAccesses",
    "avgAllocations",
    "avgTimeMillis",
    "minTimeMillis",
    "maxTimeMillis",
)

DETAIL_COLUMNS: tuple[str, ...] = (
    "size",
    "distribution",
    "avgTimeMillis",
    "minTimeMillis",
    "maxTimeMillis",
    "stdDevMillis",
    "avgComparisons",
    "avgAccesses",
)


def _size_and_type(key: Hashable) -> tuple[int, str]:
    if not (isinstance(key, tuple) and len(key) == 2):
        raise ValueError(
            f"Expected groups keyed by (input_size, input_type), got {key!r}; "
            "aggregate with by_size_and_type"
        )
    return key


def summary_frame(stats: Mapping[Hashable, AggregateStats]) -> pd.DataFrame:
    """One row per ``(input_size, input_type)`` group, in group order."""
    rows = []
    for key, group in stats.items():
        input_size, input_type = _size_and_type(key)
        rows.append(
            {
                "algorithm": group.algorithm,
                "inputSize": input_size,
                "inputType": input_type,
                "count": group.count,
                "avgComparisons": group.comparisons.mean,
                "avgAccesses": group.element_accesses.mean,
                "avgAllocations": group.allocations.mean,
                "avgTimeMillis": group.elapsed_millis.mean,
                "minTimeMillis": group.elapsed_millis.min,
                "maxTimeMillis": group.elapsed_millis.max,
            }
        )
    return pd.DataFrame(rows, columns=list(SUMMARY_COLUMNS))


def details_frame(stats: Mapping[Hashable, AggregateStats]) -> pd.DataFrame:
    """Per-configuration timing detail, in group order.

    Like :func:`summary_frame`, expects groups from :func:`by_size_and_type`.
    """
    rows = []
    for key, group in stats.items():
        input_size, input_type = _size_and_type(key)
        rows.append(
            {
                "size": input_size,
                "distribution": input_type,
                "avgTimeMillis": group.elapsed_millis.mean,
                "minTimeMillis": group.elapsed_millis.min,
                "maxTimeMillis": group.elapsed_millis.max,
                "stdDevMillis": group.elapsed_millis.stddev,
                "avgComparisons": group.comparisons.mean,
                "avgAccesses": group.element_accesses.mean,
            }
        )
    return pd.DataFrame(rows, columns=list(DETAIL_COLUMNS))
