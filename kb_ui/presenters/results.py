"""Presenters for scan results, grouped statistics and growth tables."""

from __future__ import annotations

import math
from typing import Hashable, Mapping, Optional, Sequence

import pandas as pd

from kb_analytics.aggregators.stats import AggregateStats
from kb_core.models import SubarrayResult
from kb_ui.presenters.tables import TableModel


def _fmt(value: float, digits: int = 3) -> str:
    if value is None or (isinstance(value, float) and math.isnan(value)):
        return "-"
    return f"{value:,.{digits}f}"


def _fmt_key(key: Hashable) -> list[str]:
    if isinstance(key, tuple):
        return [str(part) for part in key]
    return [str(key)]


def build_scan_table(
    result: SubarrayResult, sequence: Sequence[int], counters: str
) -> TableModel:
    subarray = result.extract(sequence) or []
    return TableModel(
        title="Maximum Subarray",
        columns=["Field", "Value"],
        rows=[
            ["Max sum", str(result.max_sum)],
            ["Range", f"[{result.start_index}, {result.end_index}]"],
            ["Length", str(result.length)],
            ["Subarray", ", ".join(str(value) for value in subarray)],
            ["Counters", counters],
        ],
        label_columns=2,
    )


def build_summary_table(
    stats: Mapping[Hashable, AggregateStats],
    key_columns: Sequence[str] = ("Size", "Distribution"),
    title: str = "Benchmark Summary",
) -> TableModel:
    """One row per group with timing spread and average counters."""
    rows = []
    for key, group in stats.items():
        rows.append(
            [
                *_fmt_key(key),
                str(group.count),
                _fmt(group.elapsed_millis.mean),
                _fmt(group.elapsed_millis.min),
                _fmt(group.elapsed_millis.max),
                _fmt(group.elapsed_millis.stddev),
                _fmt(group.comparisons.mean, 1),
                _fmt(group.element_accesses.mean, 1),
            ]
        )
    return TableModel(
        title=title,
        columns=[
            *key_columns,
            "Runs",
            "Avg ms",
            "Min ms",
            "Max ms",
            "Std ms",
            "Avg comparisons",
            "Avg accesses",
        ],
        rows=rows,
        label_columns=len(key_columns),
    )


def build_complexity_table(
    table: pd.DataFrame, exponent: Optional[float] = None
) -> TableModel:
    """Growth table; the fitted exponent, when known, goes in the title."""
    title = "Complexity"
    if exponent is not None:
        title = f"Complexity (fitted exponent {exponent:.2f})"
    rows = [
        [
            str(int(row.size)),
            _fmt(row.avgTimeMillis),
            _fmt(row.timePerElementNanos, 2),
            _fmt(row.growthRatio, 2),
            _fmt(row.avgComparisons, 1),
            str(int(row.theoreticalComparisons)),
            _fmt(row.comparisonRatio, 2),
        ]
        for row in table.itertuples(index=False)
    ]
    return TableModel(
        title=title,
        columns=[
            "Size",
            "Avg ms",
            "ns/element",
            "Growth",
            "Avg comparisons",
            "2(n-1)",
            "Ratio",
        ],
        rows=rows,
    )
