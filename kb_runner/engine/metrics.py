"""
Per-run operation counters and timer.
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Callable

from kb_core.instrumentation import MetricKind


@dataclass(frozen=True)
class MetricsSnapshot:
    """Immutable copy of the counters at a point in time."""

    comparisons: int
    element_accesses: int
    allocations: int
    elapsed_nanos: int


class RunMetrics:
    """Mutable counters for a single engine call.

    Counters only grow between resets. The timer uses a monotonic clock; an
    unstarted or inverted start/stop pair reports zero elapsed time.
    """

    def __init__(self, clock: Callable[[], int] = time.perf_counter_ns) -> None:
        self._clock = clock
        self.comparisons = 0
        self.element_accesses = 0
        self.allocations = 0
        self._start_ns: int | None = None
        self._stop_ns: int | None = None

    def reset(self) -> None:
        self.comparisons = 0
        self.element_accesses = 0
        self.allocations = 0
        self._start_ns = None
        self._stop_ns = None

    def increment(self, kind: MetricKind, n: int = 1) -> None:
        if n < 0:
            raise ValueError(f"Counters are additive only, got n={n}")
        if kind is MetricKind.COMPARISON:
            self.comparisons += n
        elif kind is MetricKind.ELEMENT_ACCESS:
            self.element_accesses += n
        elif kind is MetricKind.ALLOCATION:
            self.allocations += n
        else:
            raise ValueError(f"Unknown metric kind: {kind!r}")

    def start_timer(self) -> None:
        self._start_ns = self._clock()
        self._stop_ns = None

    def stop_timer(self) -> None:
        self._stop_ns = self._clock()

    @property
    def elapsed_nanos(self) -> int:
        if self._start_ns is None or self._stop_ns is None:
            return 0
        return max(0, self._stop_ns - self._start_ns)

    @property
    def elapsed_millis(self) -> float:
        return self.elapsed_nanos / 1_000_000

    def snapshot(self) -> MetricsSnapshot:
        return MetricsSnapshot(
            comparisons=self.comparisons,
            element_accesses=self.element_accesses,
            allocations=self.allocations,
            elapsed_nanos=self.elapsed_nanos,
        )

    def __str__(self) -> str:
        return (
            f"comparisons={self.comparisons} element_accesses={self.element_accesses} "
            f"allocations={self.allocations} time={self.elapsed_millis:.3f}ms"
        )
