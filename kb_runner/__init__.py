"""Runner facade for kadane-bench.

Re-exports the types most callers need to measure the engine and run a
benchmark session.
"""

from kb_runner.api import (
    BenchmarkConfig,
    BenchmarkRunner,
    RunHistory,
    RunMetrics,
    RunRecord,
    RunRecorder,
    measure,
)

__all__ = [
    "BenchmarkConfig",
    "BenchmarkRunner",
    "RunHistory",
    "RunMetrics",
    "RunRecord",
    "RunRecorder",
    "measure",
]
