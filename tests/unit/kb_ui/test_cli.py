"""CLI unit tests for run, scan and analyze."""

from __future__ import annotations

from pathlib import Path

import pytest
from typer.testing import CliRunner

import kb_ui.cli as cli
from kb_analytics.exporters.csv_export import export_runs_csv
from kb_runner.models.config import BenchmarkConfig
from kb_runner.services.history import RunRecord

pytestmark = [pytest.mark.unit_ui]


@pytest.fixture(autouse=True)
def _quiet_logging(monkeypatch: pytest.MonkeyPatch) -> None:
    # Handlers bound to CliRunner's captured streams outlive the invocation.
    monkeypatch.setattr(cli, "configure_logging", lambda **kwargs: None)
    for name in ("KB_SEED", "KB_ITERATIONS", "KB_MAX_DURATION", "KB_DISTRIBUTIONS", "KB_VALIDATE_RESULTS"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


def test_scan_prints_sum_and_range(runner: CliRunner) -> None:
    result = runner.invoke(cli.app, ["scan", "--", "-2", "1", "-3", "4", "-1", "2", "1", "-5", "4"])
    assert result.exit_code == 0, result.output
    assert "Max sum" in result.output
    assert "[3, 6]" in result.output
    assert "4, -1, 2, 1" in result.output


def test_scan_with_wide_accumulator(runner: CliRunner) -> None:
    result = runner.invoke(cli.app, ["scan", "--width", "int64", "2147483647", "2147483647"])
    assert result.exit_code == 0, result.output
    assert "4294967294" in result.output
    assert "[0, 1]" in result.output


def test_scan_optimized_all_negative(runner: CliRunner) -> None:
    result = runner.invoke(cli.app, ["scan", "--optimized", "--", "-3", "-1", "-2"])
    assert result.exit_code == 0, result.output
    assert "[1, 1]" in result.output


def test_scan_rejects_out_of_range_values(runner: CliRunner) -> None:
    result = runner.invoke(cli.app, ["scan", "1", "2147483648"])
    assert result.exit_code == cli.EXIT_CONFIG
    assert "InvalidInputError" in result.output


def test_scan_rejects_unknown_width(runner: CliRunner) -> None:
    result = runner.invoke(cli.app, ["scan", "--width", "int8", "1"])
    assert result.exit_code == cli.EXIT_CONFIG
    assert "ConfigurationError" in result.output


def test_run_writes_csv_files(runner: CliRunner, tmp_path: Path) -> None:
    out = tmp_path / "results"
    result = runner.invoke(
        cli.app,
        [
            "run",
            "--sizes",
            "5,10",
            "--distributions",
            "random,sorted",
            "--iterations",
            "2",
            "--warmup-iterations",
            "0",
            "--seed",
            "1",
            "--output-dir",
            str(out),
        ],
    )
    assert result.exit_code == 0, result.output
    assert "Benchmark Summary" in result.output
    assert "8 runs recorded" in result.output
    [run_dir] = list(out.iterdir())
    assert run_dir.name.startswith("run-")
    assert sorted(p.name for p in run_dir.iterdir()) == [
        "complexity.csv",
        "details.csv",
        "runs.csv",
        "summary.csv",
    ]


def test_run_reads_config_file_and_flags_override(runner: CliRunner, tmp_path: Path) -> None:
    config_path = tmp_path / "config.json"
    BenchmarkConfig.create(
        sizes=[4],
        distributions=["alternating"],
        iterations=3,
        warmup_iterations=0,
        output_dir=tmp_path / "from-file",
    ).save(config_path)

    result = runner.invoke(
        cli.app, ["run", "--config", str(config_path), "--iterations", "1", "--no-export"]
    )

    assert result.exit_code == 0, result.output
    assert "1 runs recorded" in result.output
    assert not (tmp_path / "from-file").exists()


def test_run_rejects_bad_sizes(runner: CliRunner) -> None:
    result = runner.invoke(cli.app, ["run", "--sizes", "100,abc", "--no-export"])
    assert result.exit_code == cli.EXIT_CONFIG
    assert "ConfigurationError" in result.output


def test_run_rejects_unknown_distribution(runner: CliRunner) -> None:
    result = runner.invoke(cli.app, ["run", "--distributions", "gaussian", "--no-export"])
    assert result.exit_code == cli.EXIT_CONFIG


def _write_runs(path: Path) -> Path:
    records = [
        RunRecord("kadane", 1_700_000_000_000, size, "random", 2 * (size - 1), size, 1, size * 100)
        for size in (10, 100, 1000)
    ]
    return export_runs_csv(records, path)


def test_analyze_prints_tables_and_writes_summary(runner: CliRunner, tmp_path: Path) -> None:
    runs_csv = _write_runs(tmp_path / "runs.csv")
    summary = tmp_path / "summary.csv"

    result = runner.invoke(cli.app, ["analyze", str(runs_csv), "--summary-out", str(summary)])

    assert result.exit_code == 0, result.output
    assert "Benchmark Summary" in result.output
    assert "Complexity" in result.output
    assert summary.read_text().startswith("algorithm,inputSize,inputType,count")


def test_analyze_rejects_foreign_csv(runner: CliRunner, tmp_path: Path) -> None:
    path = tmp_path / "other.csv"
    path.write_text("a,b\n1,2\n")
    result = runner.invoke(cli.app, ["analyze", str(path)])
    assert result.exit_code == cli.EXIT_FAILURE
    assert "ExportError" in result.output


def test_analyze_empty_runs(runner: CliRunner, tmp_path: Path) -> None:
    path = tmp_path / "runs.csv"
    export_runs_csv([], path)
    result = runner.invoke(cli.app, ["analyze", str(path)])
    assert result.exit_code == 0
    assert "No runs found." in result.output
