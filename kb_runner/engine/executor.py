"""
Executor for single measured engine calls.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Sequence

from kb_common.errors import ConfigurationError
from kb_core.arithmetic import AccumulatorWidth
from kb_core.engine import ScanFunction
from kb_core.models import SubarrayResult
from kb_runner.engine.metrics import RunMetrics
from kb_runner.services.history import RunRecord, RunRecorder

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Measurement:
    """Engine result paired with the record it produced."""

    result: SubarrayResult
    record: RunRecord


def measure(
    algorithm_fn: ScanFunction,
    sequence: Sequence[int],
    *,
    metrics: RunMetrics,
    recorder: RunRecorder,
    input_type: str,
    width: AccumulatorWidth | str = AccumulatorWidth.INT32,
    algorithm: Optional[str] = None,
) -> Measurement:
    """
    Run one engine call and record its counters.

    The engine validates its input before touching ``metrics``, so an
    InvalidInputError propagates with nothing appended to the history.
    """
    result = algorithm_fn(sequence, metrics, width=width)
    record = recorder.record(metrics, len(sequence), input_type, algorithm=algorithm)
    return Measurement(result=result, record=record)


def run_batch(
    sequences: Sequence[Sequence[int]],
    input_types: Sequence[str],
    *,
    algorithm_fn: ScanFunction,
    metrics: RunMetrics,
    recorder: RunRecorder,
    width: AccumulatorWidth | str = AccumulatorWidth.INT32,
) -> list[Measurement]:
    """Measure each sequence with its paired input-type label."""
    if len(sequences) != len(input_types):
        raise ConfigurationError(
            "Sequences and input types must have the same length",
            context={"sequences": len(sequences), "input_types": len(input_types)},
        )
    measurements = [
        measure(
            algorithm_fn,
            sequence,
            metrics=metrics,
            recorder=recorder,
            input_type=input_type,
            width=width,
        )
        for sequence, input_type in zip(sequences, input_types)
    ]
    logger.debug("Measured batch of %d sequences", len(measurements))
    return measurements
