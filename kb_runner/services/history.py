"""Run records and the append-only history they are collected in."""

from __future__ import annotations

import logging
import threading
import time
from dataclasses import asdict, dataclass
from typing import Any, Callable, Iterator, Optional

from kb_runner.engine.metrics import RunMetrics

logger = logging.getLogger(__name__)

NUMERIC_FIELDS: tuple[str, ...] = (
    "comparisons",
    "element_accesses",
    "allocations",
    "elapsed_nanos",
    "elapsed_millis",
)


@dataclass(frozen=True)
class RunRecord:
    """Immutable snapshot of one engine call."""

    algorithm: str
    timestamp_ms: int
    input_size: int
    input_type: str
    comparisons: int
    element_accesses: int
    allocations: int
    elapsed_nanos: int

    @property
    def elapsed_millis(self) -> float:
        return self.elapsed_nanos / 1_000_000

    def to_dict(self) -> dict[str, Any]:
        payload = asdict(self)
        payload["elapsed_millis"] = self.elapsed_millis
        return payload

    def to_row(self) -> dict[str, Any]:
        """Mapping keyed by the runs CSV column names."""
        return {
            "algorithm": self.algorithm,
            "timestamp": self.timestamp_ms,
            "inputSize": self.input_size,
            "inputType": self.input_type,
            "comparisons": self.comparisons,
            "elementAccesses": self.element_accesses,
            "allocations": self.allocations,
            "elapsedNanos": self.elapsed_nanos,
            "elapsedMillis": self.elapsed_millis,
        }


class RunHistory:
    """Ordered, append-only collection of RunRecords.

    Writers are serialized by an internal lock; readers work on snapshots so
    aggregation and export never observe a history that is being mutated.
    """

    def __init__(self) -> None:
        self._records: list[RunRecord] = []
        self._lock = threading.Lock()

    def append(self, record: RunRecord) -> None:
        with self._lock:
            self._records.append(record)

    def clear(self) -> int:
        """Drop every record and return how many were discarded."""
        with self._lock:
            dropped = len(self._records)
            self._records.clear()
        if dropped:
            logger.debug("Cleared %d run records", dropped)
        return dropped

    def snapshot(self) -> tuple[RunRecord, ...]:
        with self._lock:
            return tuple(self._records)

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)

    def __iter__(self) -> Iterator[RunRecord]:
        return iter(self.snapshot())

    def __bool__(self) -> bool:
        return len(self) > 0


class RunRecorder:
    """Freeze RunMetrics into RunRecords and append them to a RunHistory."""

    def __init__(
        self,
        history: RunHistory,
        algorithm: str,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.history = history
        self.algorithm = algorithm
        self._clock = clock

    def record(
        self,
        metrics: RunMetrics,
        input_size: int,
        input_type: str,
        algorithm: Optional[str] = None,
    ) -> RunRecord:
        """Append one record built from ``metrics`` and reset the counter."""
        snap = metrics.snapshot()
        record = RunRecord(
            algorithm=algorithm or self.algorithm,
            timestamp_ms=int(self._clock() * 1000),
            input_size=input_size,
            input_type=input_type,
            comparisons=snap.comparisons,
            element_accesses=snap.element_accesses,
            allocations=snap.allocations,
            elapsed_nanos=snap.elapsed_nanos,
        )
        self.history.append(record)
        metrics.reset()
        return record

    def clear(self) -> int:
        return self.history.clear()
