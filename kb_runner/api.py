"""Stable runner API surface."""

from kb_runner.engine.executor import Measurement, measure, run_batch
from kb_runner.engine.metrics import MetricsSnapshot, RunMetrics
from kb_runner.engine.planning import PlanEntry, build_plan, generate_run_id
from kb_runner.engine.progress import BenchmarkEvent, RunProgressEmitter
from kb_runner.engine.runner import BenchmarkOutcome, BenchmarkRunner, ResultExporter
from kb_runner.generators import (
    DEFAULT_DISTRIBUTIONS,
    Distribution,
    SequenceFactory,
    generate_sequence,
)
from kb_runner.models.config import BenchmarkConfig, parse_distributions, parse_sizes
from kb_runner.services.history import NUMERIC_FIELDS, RunHistory, RunRecord, RunRecorder
from kb_runner.stop_token import StopToken

__all__ = [
    "BenchmarkConfig",
    "BenchmarkEvent",
    "BenchmarkOutcome",
    "BenchmarkRunner",
    "DEFAULT_DISTRIBUTIONS",
    "Distribution",
    "Measurement",
    "MetricsSnapshot",
    "NUMERIC_FIELDS",
    "PlanEntry",
    "ResultExporter",
    "RunHistory",
    "RunMetrics",
    "RunProgressEmitter",
    "RunRecord",
    "RunRecorder",
    "SequenceFactory",
    "StopToken",
    "build_plan",
    "generate_run_id",
    "generate_sequence",
    "measure",
    "parse_distributions",
    "parse_sizes",
    "run_batch",
]
