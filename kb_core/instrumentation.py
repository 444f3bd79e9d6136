"""Instrumentation port driven by the engine.

The engine only talks to this interface. Callers that want numbers pass a
concrete counter (see ``kb_runner.engine.metrics.RunMetrics``); everyone else
gets ``NullMetrics`` and pays nothing beyond a method call.
"""

from __future__ import annotations

from enum import Enum
from typing import Protocol, runtime_checkable


class MetricKind(str, Enum):
    """Primitive operations counted during a scan."""

    COMPARISON = "comparisons"
    ELEMENT_ACCESS = "element_accesses"
    ALLOCATION = "allocations"


@runtime_checkable
class MetricsPort(Protocol):
    """Capability interface for per-call operation counting and timing."""

    def reset(self) -> None: ...

    def increment(self, kind: MetricKind, n: int = 1) -> None: ...

    def start_timer(self) -> None: ...

    def stop_timer(self) -> None: ...


class NullMetrics:
    """Metrics port that records nothing."""

    def reset(self) -> None:
        return None

    def increment(self, kind: MetricKind, n: int = 1) -> None:
        return None

    def start_timer(self) -> None:
        return None

    def stop_timer(self) -> None:
        return None


NULL_METRICS = NullMetrics()
