"""
Benchmark orchestrator.

Runs the warmup phase, then the measured matrix of sizes x distributions x
iterations, validating each result and recording one RunRecord per call.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Optional, Protocol, Sequence

from kb_common.errors import ExportError, wrap_error
from kb_common.logging import bound_run
from kb_core.engine import get_algorithm
from kb_core.validation import verify_result
from kb_runner.engine.executor import measure
from kb_runner.engine.metrics import RunMetrics
from kb_runner.engine.planning import build_plan, generate_run_id, warmup_sizes
from kb_runner.engine.progress import BenchmarkEvent, RunProgressEmitter
from kb_runner.generators import Distribution, SequenceFactory
from kb_runner.models.config import BenchmarkConfig
from kb_runner.services.history import RunHistory, RunRecord, RunRecorder
from kb_runner.stop_token import StopToken

logger = logging.getLogger(__name__)

WARMUP_INPUT_TYPE = "warmup"


class ResultExporter(Protocol):
    """Writes the records of one benchmark run below ``run_dir``."""

    def export(self, run_dir: Path, records: Sequence[RunRecord]) -> list[Path]:
        ...


@dataclass
class BenchmarkOutcome:
    """What a benchmark run produced."""

    run_id: str
    records: tuple[RunRecord, ...]
    planned_runs: int
    stopped: bool = False
    stop_reason: Optional[str] = None
    run_dir: Optional[Path] = None
    exported: list[Path] = field(default_factory=list)

    @property
    def completed_runs(self) -> int:
        return len(self.records)


class BenchmarkRunner:
    """Drives the engine over the configured matrix."""

    def __init__(
        self,
        config: BenchmarkConfig,
        *,
        history: RunHistory | None = None,
        exporter: ResultExporter | None = None,
        progress_callback: Optional[Callable[[BenchmarkEvent], None]] = None,
        stop_token: StopToken | None = None,
        metrics: RunMetrics | None = None,
    ) -> None:
        self.config = config
        self.history = history if history is not None else RunHistory()
        self.metrics = metrics or RunMetrics()
        self.recorder = RunRecorder(self.history, config.algorithm)
        self._exporter = exporter
        self._progress = RunProgressEmitter(callback=progress_callback)
        self._stop_token = stop_token or StopToken(
            enable_signals=False,
            max_duration_seconds=config.max_duration_seconds,
        )
        self._algorithm = get_algorithm(config.algorithm)
        self._width = config.width

    def run(self, run_id: str | None = None) -> BenchmarkOutcome:
        run_id = run_id or generate_run_id()
        self._progress.set_run_id(run_id)
        factory = SequenceFactory(self.config.seed)
        logger.info(
            "Starting benchmark %s: algorithm=%s accumulator=%s runs=%d",
            run_id,
            self.config.algorithm,
            self.config.accumulator,
            self.config.total_measured_runs,
        )

        with bound_run(run_id):
            if not self._warmup(factory):
                return self._finish(run_id, stopped=True)
            stopped = self._measure_matrix(factory)
            return self._finish(run_id, stopped=stopped)

    def _warmup(self, factory: SequenceFactory) -> bool:
        """Exercise the engine and discard the records; False when stopped."""
        sizes = list(warmup_sizes(self.config))
        if not sizes:
            return True
        logger.info("Warmup: %d calls", len(sizes))
        for position, size in enumerate(sizes, start=1):
            if self._stop_token.should_stop():
                self.recorder.clear()
                return False
            sequence = factory.generate(size, Distribution.RANDOM)
            measure(
                self._algorithm,
                sequence,
                metrics=self.metrics,
                recorder=self.recorder,
                input_type=WARMUP_INPUT_TYPE,
                width=self._width,
            )
            self._progress.emit("warmup", size, WARMUP_INPUT_TYPE, position, len(sizes), "done")
        self.recorder.clear()
        return True

    def _measure_matrix(self, factory: SequenceFactory) -> bool:
        """Run every plan cell; True when the stop token tripped."""
        for entry in build_plan(self.config):
            label = entry.distribution.value
            for iteration in range(1, entry.iterations + 1):
                if self._stop_token.should_stop():
                    self._progress.emit(
                        "measure",
                        entry.size,
                        label,
                        iteration,
                        entry.iterations,
                        "stopped",
                        message=self._stop_token.reason or "",
                    )
                    return True
                sequence = factory.generate(entry.size, entry.distribution)
                measurement = measure(
                    self._algorithm,
                    sequence,
                    metrics=self.metrics,
                    recorder=self.recorder,
                    input_type=label,
                    width=self._width,
                )
                if self.config.validate_results:
                    verify_result(sequence, measurement.result, self._width)
                self._progress.emit(
                    "measure", entry.size, label, iteration, entry.iterations, "done"
                )
            logger.debug("Completed %s", entry.label)
        return False

    def _finish(self, run_id: str, *, stopped: bool) -> BenchmarkOutcome:
        records = self.history.snapshot()
        outcome = BenchmarkOutcome(
            run_id=run_id,
            records=records,
            planned_runs=self.config.total_measured_runs,
            stopped=stopped,
            stop_reason=self._stop_token.reason if stopped else None,
        )
        if stopped:
            logger.warning(
                "Benchmark %s stopped after %d of %d runs (%s)",
                run_id,
                outcome.completed_runs,
                outcome.planned_runs,
                outcome.stop_reason,
            )
        else:
            logger.info("Benchmark %s completed %d runs", run_id, outcome.completed_runs)

        if self.config.export_csv and self._exporter is not None and records:
            run_dir = self.config.output_dir / run_id
            try:
                run_dir.mkdir(parents=True, exist_ok=True)
            except OSError as exc:
                raise wrap_error(
                    ExportError,
                    f"Cannot create output directory: {run_dir}",
                    context={"path": run_dir},
                    cause=exc,
                ) from exc
            outcome.run_dir = run_dir
            outcome.exported = self._exporter.export(run_dir, records)
            logger.info("Exported %d files to %s", len(outcome.exported), run_dir)
        return outcome
