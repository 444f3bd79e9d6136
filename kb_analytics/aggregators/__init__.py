"""Aggregators for run histories."""

from kb_analytics.aggregators.complexity import complexity_table, fit_growth_exponent
from kb_analytics.aggregators.stats import (
    AggregateStats,
    FieldStats,
    aggregate,
    by_algorithm_size_and_type,
    by_size,
    by_size_and_type,
    summarize,
)

__all__ = [
    "AggregateStats",
    "FieldStats",
    "aggregate",
    "by_algorithm_size_and_type",
    "by_size",
    "by_size_and_type",
    "complexity_table",
    "fit_growth_exponent",
    "summarize",
]
