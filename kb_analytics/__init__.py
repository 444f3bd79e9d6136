"""Analytics package: statistics, growth analysis and CSV export of run histories."""

from kb_analytics.api import (  # noqa: F401
    AggregateStats,
    CsvExporter,
    aggregate,
    complexity_table,
    load_runs_csv,
    summarize,
)

__all__ = [
    "AggregateStats",
    "CsvExporter",
    "aggregate",
    "complexity_table",
    "load_runs_csv",
    "summarize",
]
