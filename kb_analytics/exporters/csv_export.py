"""CSV export and import of run histories."""

from __future__ import annotations

import csv
import logging
from pathlib import Path
from typing import Any, Iterable, Mapping, Sequence

import pandas as pd

from kb_analytics.aggregators.complexity import complexity_table
from kb_analytics.aggregators.stats import aggregate, details_frame, summary_frame
from kb_common.errors import ExportError
from kb_runner.services.history import RunRecord

logger = logging.getLogger(__name__)

RUNS_COLUMNS: tuple[str, ...] = (
    "algorithm",
    "timestamp",
    "inputSize",
    "inputType",
    "comparisons",
    "elementAccesses",
    "allocations",
    "elapsedNanos",
    "elapsedMillis",
)

RUNS_FILENAME = "runs.csv"
SUMMARY_FILENAME = "summary.csv"
DETAILS_FILENAME = "details.csv"
COMPLEXITY_FILENAME = "complexity.csv"


def write_csv_rows(
    rows: Iterable[Mapping[str, Any]],
    output_path: Path,
    columns: Sequence[str],
) -> Path:
    """Write rows to CSV using the provided column order."""
    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        with output_path.open("w", newline="") as handle:
            writer = csv.DictWriter(handle, fieldnames=list(columns))
            writer.writeheader()
            for row in rows:
                writer.writerow({col: row.get(col, "") for col in columns})
    except OSError as exc:
        raise ExportError(
            f"Cannot write CSV file: {output_path}", context={"path": output_path}, cause=exc
        ) from exc
    return output_path


def _write_frame(frame: pd.DataFrame, output_path: Path) -> Path:
    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        frame.to_csv(output_path, index=False)
    except OSError as exc:
        raise ExportError(
            f"Cannot write CSV file: {output_path}", context={"path": output_path}, cause=exc
        ) from exc
    return output_path


def export_runs_csv(records: Iterable[RunRecord], output_path: Path) -> Path:
    """One row per record, in history order."""
    path = write_csv_rows((record.to_row() for record in records), Path(output_path), RUNS_COLUMNS)
    logger.info("Wrote runs CSV to %s", path)
    return path


def export_summary_csv(records: Iterable[RunRecord], output_path: Path) -> Path:
    """One row per ``(inputSize, inputType)`` group."""
    path = _write_frame(summary_frame(aggregate(records)), Path(output_path))
    logger.info("Wrote summary CSV to %s", path)
    return path


def export_details_csv(records: Iterable[RunRecord], output_path: Path) -> Path:
    """Timing spread per size/distribution configuration."""
    path = _write_frame(details_frame(aggregate(records)), Path(output_path))
    logger.info("Wrote details CSV to %s", path)
    return path


def export_complexity_csv(records: Iterable[RunRecord], output_path: Path) -> Path:
    path = _write_frame(complexity_table(records), Path(output_path))
    logger.info("Wrote complexity CSV to %s", path)
    return path


def load_runs_csv(path: Path) -> list[RunRecord]:
    """Rebuild RunRecords from a runs CSV written by ``export_runs_csv``."""
    try:
        frame = pd.read_csv(path)
    except (OSError, pd.errors.ParserError, pd.errors.EmptyDataError) as exc:
        raise ExportError(
            f"Cannot read runs CSV: {path}", context={"path": path}, cause=exc
        ) from exc

    missing = [column for column in RUNS_COLUMNS if column not in frame.columns]
    if missing:
        raise ExportError(
            f"Runs CSV is missing columns: {', '.join(missing)}",
            context={"path": path, "missing": missing},
        )

    return [
        RunRecord(
            algorithm=str(row.algorithm),
            timestamp_ms=int(row.timestamp),
            input_size=int(row.inputSize),
            input_type=str(row.inputType),
            comparisons=int(row.comparisons),
            element_accesses=int(row.elementAccesses),
            allocations=int(row.allocations),
            elapsed_nanos=int(row.elapsedNanos),
        )
        for row in frame.itertuples(index=False)
    ]


class CsvExporter:
    """Writes the runs, summary, details and complexity CSVs of one run."""

    def export(self, run_dir: Path, records: Sequence[RunRecord]) -> list[Path]:
        run_dir = Path(run_dir)
        return [
            export_runs_csv(records, run_dir / RUNS_FILENAME),
            export_summary_csv(records, run_dir / SUMMARY_FILENAME),
            export_details_csv(records, run_dir / DETAILS_FILENAME),
            export_complexity_csv(records, run_dir / COMPLEXITY_FILENAME),
        ]
