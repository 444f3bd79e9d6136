"""
Command-line interface for kadane-bench.

Exposes the benchmark runner, a one-off scan of literal values, and offline
analysis of an exported runs CSV.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Dict, List, Optional

import typer
from rich.console import Console
from rich.progress import BarColumn, MofNCompleteColumn, Progress, TextColumn

from kb_analytics.aggregators.complexity import complexity_table, fit_growth_exponent
from kb_analytics.aggregators.stats import aggregate
from kb_analytics.exporters.csv_export import CsvExporter, export_summary_csv, load_runs_csv
from kb_common.errors import ConfigurationError, InvalidInputError, KBError, error_to_payload
from kb_common.logging import configure_logging
from kb_core.engine import get_algorithm
from kb_runner.engine.metrics import RunMetrics
from kb_runner.engine.progress import BenchmarkEvent
from kb_runner.engine.runner import BenchmarkRunner
from kb_runner.models.config import BenchmarkConfig
from kb_runner.stop_token import StopToken
from kb_ui.presenters.results import (
    build_complexity_table,
    build_scan_table,
    build_summary_table,
)
from kb_ui.presenters.tables import TableModel, build_rich_table

logger = logging.getLogger(__name__)

EXIT_FAILURE = KBError.exit_code
EXIT_CONFIG = ConfigurationError.exit_code

app = typer.Typer(
    help="Maximum-subarray engine with instrumentation and benchmarking.",
    no_args_is_help=True,
)


@app.callback()
def entry(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
    json_logs: bool = typer.Option(False, "--json-logs", help="Emit logs as JSON lines."),
) -> None:
    """Configure logging once for every command."""
    level = "DEBUG" if verbose else os.environ.get("KB_LOG_LEVEL", "WARNING")
    configure_logging(level=level, json=json_logs or None, force=True)


def _show(console: Console, model: TableModel) -> None:
    console.print(build_rich_table(model))


def _fail(console: Console, exc: KBError) -> typer.Exit:
    logger.debug("Command failed: %s", error_to_payload(exc))
    console.print(f"[bold red]{exc.error_type}:[/bold red] {exc}")
    return typer.Exit(exc.exit_code)


def _build_config(config_file: Optional[Path], overrides: Dict[str, Any]) -> BenchmarkConfig:
    """File values first, then KB_* environment, then explicit flags."""
    base = BenchmarkConfig.load(config_file) if config_file else BenchmarkConfig()
    base = base.with_env_overrides()
    explicit = {key: value for key, value in overrides.items() if value is not None}
    if not explicit:
        return base
    return BenchmarkConfig.from_dict({**base.model_dump(), **explicit})


@app.command("run")
def run_benchmark(
    config_file: Optional[Path] = typer.Option(
        None, "--config", "-c", help="JSON configuration file.", exists=True, dir_okay=False
    ),
    sizes: Optional[str] = typer.Option(None, "--sizes", help="Comma-separated input sizes."),
    distributions: Optional[str] = typer.Option(
        None, "--distributions", help="Comma-separated distribution labels."
    ),
    iterations: Optional[int] = typer.Option(None, "--iterations", help="Measured calls per configuration."),
    warmup_iterations: Optional[int] = typer.Option(None, "--warmup-iterations", help="Warmup rounds."),
    warmup_sizes: Optional[str] = typer.Option(None, "--warmup-sizes", help="Comma-separated warmup sizes."),
    algorithm: Optional[str] = typer.Option(None, "--algorithm", help="kadane or kadane_optimized."),
    accumulator: Optional[str] = typer.Option(None, "--accumulator", help="int32 or int64."),
    seed: Optional[int] = typer.Option(None, "--seed", help="Generator seed."),
    output_dir: Optional[Path] = typer.Option(None, "--output-dir", help="Root directory for CSV output."),
    max_duration: Optional[float] = typer.Option(
        None, "--max-duration", help="Wall-clock budget in seconds."
    ),
    export: Optional[bool] = typer.Option(None, "--export/--no-export", help="Write CSV files."),
    validate: Optional[bool] = typer.Option(
        None, "--validate/--no-validate", help="Check every result against its slice."
    ),
) -> None:
    """Run the benchmark matrix and print the summary."""
    console = Console()
    try:
        config = _build_config(
            config_file,
            {
                "sizes": sizes,
                "distributions": distributions,
                "iterations": iterations,
                "warmup_iterations": warmup_iterations,
                "warmup_sizes": warmup_sizes,
                "algorithm": algorithm,
                "accumulator": accumulator,
                "seed": seed,
                "output_dir": output_dir,
                "max_duration_seconds": max_duration,
                "export_csv": export,
                "validate_results": validate,
            },
        )
    except ConfigurationError as exc:
        raise _fail(console, exc)

    with StopToken(max_duration_seconds=config.max_duration_seconds) as stop_token:
        with Progress(
            TextColumn("{task.description}"),
            BarColumn(),
            MofNCompleteColumn(),
            console=console,
            transient=True,
        ) as progress:
            task = progress.add_task("Benchmark", total=config.total_measured_runs)

            def _on_event(event: BenchmarkEvent) -> None:
                if event.phase == "measure" and event.status == "done":
                    progress.update(
                        task,
                        advance=1,
                        description=f"n={event.input_size} {event.input_type}",
                    )

            runner = BenchmarkRunner(
                config,
                exporter=CsvExporter(),
                progress_callback=_on_event,
                stop_token=stop_token,
            )
            try:
                outcome = runner.run()
            except KBError as exc:
                raise _fail(console, exc)

    _show(console, build_summary_table(aggregate(outcome.records)))
    table = complexity_table(outcome.records)
    _show(console, build_complexity_table(table, fit_growth_exponent(table)))

    if outcome.stopped:
        console.print(
            f"[yellow]Stopped ({outcome.stop_reason}) after "
            f"{outcome.completed_runs} of {outcome.planned_runs} runs.[/yellow]"
        )
    for path in outcome.exported:
        console.print(f"Wrote {path}")
    console.print(f"Run {outcome.run_id}: {outcome.completed_runs} runs recorded.")


@app.command(
    "scan",
    context_settings={"ignore_unknown_options": True, "allow_interspersed_args": False},
)
def scan_values(
    values: List[int] = typer.Argument(..., help="Integers to scan."),
    width: str = typer.Option("int32", "--width", help="Accumulator width (int32 or int64)."),
    optimized: bool = typer.Option(False, "--optimized", help="Use the optimized variant."),
) -> None:
    """Find the maximum-sum contiguous subarray of VALUES."""
    console = Console()
    scan_fn = get_algorithm("kadane_optimized" if optimized else "kadane")
    metrics = RunMetrics()
    try:
        result = scan_fn(values, metrics, width=width)
    except (InvalidInputError, ConfigurationError) as exc:
        raise _fail(console, exc)
    _show(console, build_scan_table(result, values, str(metrics)))


@app.command("analyze")
def analyze_runs(
    runs_csv: Path = typer.Argument(..., help="Runs CSV written by `kb run`.", exists=True, dir_okay=False),
    summary_out: Optional[Path] = typer.Option(
        None, "--summary-out", help="Also write the summary CSV here."
    ),
) -> None:
    """Recompute statistics and growth from an exported runs CSV."""
    console = Console()
    try:
        records = load_runs_csv(runs_csv)
        if summary_out is not None:
            export_summary_csv(records, summary_out)
    except KBError as exc:
        raise _fail(console, exc)

    if not records:
        console.print("No runs found.")
        return
    _show(console, build_summary_table(aggregate(records)))
    table = complexity_table(records)
    _show(console, build_complexity_table(table, fit_growth_exponent(table)))
    if summary_out is not None:
        console.print(f"Wrote {summary_out}")


def main() -> None:
    """Console script entrypoint (Typer app)."""
    app()


if __name__ == "__main__":
    main()
