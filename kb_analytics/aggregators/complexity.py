"""Empirical growth analysis across input sizes."""

from __future__ import annotations

import math
from typing import Iterable, Optional

import numpy as np
import pandas as pd

from kb_analytics.aggregators.stats import aggregate, by_size
from kb_runner.services.history import RunRecord

COMPLEXITY_COLUMNS: tuple[str, ...] = (
    "size",
    "avgTimeMillis",
    "timePerElementNanos",
    "growthRatio",
    "avgComparisons",
    "theoreticalComparisons",
    "comparisonRatio",
)


def theoretical_comparisons(size: int) -> int:
    """Two comparisons per element after the first."""
    return 2 * (size - 1)


def complexity_table(records: Iterable[RunRecord]) -> pd.DataFrame:
    """
    Per-size growth table, ascending by size.

    ``growthRatio`` compares time-per-element with the previous size (NaN for
    the smallest); a value near 1.0 means linear scaling. ``comparisonRatio``
    is actual over theoretical comparisons.
    """
    groups = aggregate(records, key_fn=by_size)
    rows = []
    previous_per_element: Optional[float] = None
    for size in sorted(groups):
        group = groups[size]
        per_element = group.elapsed_nanos.mean / size
        expected = theoretical_comparisons(size)
        actual = group.comparisons.mean
        if expected:
            comparison_ratio = actual / expected
        else:
            comparison_ratio = 1.0 if actual == 0 else math.inf
        if previous_per_element:
            growth = per_element / previous_per_element
        else:
            growth = math.nan
        rows.append(
            {
                "size": size,
                "avgTimeMillis": group.elapsed_millis.mean,
                "timePerElementNanos": per_element,
                "growthRatio": growth,
                "avgComparisons": actual,
                "theoreticalComparisons": expected,
                "comparisonRatio": comparison_ratio,
            }
        )
        previous_per_element = per_element
    return pd.DataFrame(rows, columns=list(COMPLEXITY_COLUMNS))


def fit_growth_exponent(table: pd.DataFrame) -> Optional[float]:
    """Fit ``log(time) = k * log(size) + c`` and return ``k``.

    Rows with a non-positive time are ignored. Returns None with fewer than
    two distinct sizes left.
    """
    usable = table[(table["size"] > 0) & (table["avgTimeMillis"] > 0)]
    if usable["size"].nunique() < 2:
        return None
    slope, _ = np.polyfit(
        np.log(usable["size"].to_numpy(dtype=float)),
        np.log(usable["avgTimeMillis"].to_numpy(dtype=float)),
        1,
    )
    return float(slope)
