"""Exporters for run histories."""

from kb_analytics.exporters.csv_export import (
    RUNS_COLUMNS,
    CsvExporter,
    export_complexity_csv,
    export_details_csv,
    export_runs_csv,
    export_summary_csv,
    load_runs_csv,
    write_csv_rows,
)

__all__ = [
    "CsvExporter",
    "RUNS_COLUMNS",
    "export_complexity_csv",
    "export_details_csv",
    "export_runs_csv",
    "export_summary_csv",
    "load_runs_csv",
    "write_csv_rows",
]
