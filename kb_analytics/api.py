"""Public API surface for kb_analytics."""

from kb_analytics.aggregators.complexity import (
    COMPLEXITY_COLUMNS,
    complexity_table,
    fit_growth_exponent,
    theoretical_comparisons,
)
from kb_analytics.aggregators.stats import (
    DETAIL_COLUMNS,
    SUMMARY_COLUMNS,
    AggregateStats,
    FieldStats,
    aggregate,
    by_algorithm_size_and_type,
    by_size,
    by_size_and_type,
    details_frame,
    records_to_frame,
    summarize,
    summary_frame,
)
from kb_analytics.exporters.csv_export import (
    RUNS_COLUMNS,
    CsvExporter,
    export_complexity_csv,
    export_details_csv,
    export_runs_csv,
    export_summary_csv,
    load_runs_csv,
)

__all__ = [
    "AggregateStats",
    "COMPLEXITY_COLUMNS",
    "CsvExporter",
    "DETAIL_COLUMNS",
    "FieldStats",
    "RUNS_COLUMNS",
    "SUMMARY_COLUMNS",
    "aggregate",
    "by_algorithm_size_and_type",
    "by_size",
    "by_size_and_type",
    "complexity_table",
    "details_frame",
    "export_complexity_csv",
    "export_details_csv",
    "export_runs_csv",
    "export_summary_csv",
    "fit_growth_exponent",
    "load_runs_csv",
    "records_to_frame",
    "summarize",
    "summary_frame",
    "theoretical_comparisons",
]
