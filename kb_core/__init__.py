"""Maximum-subarray engine and its value types."""

from kb_core.api import (  # noqa: F401
    AccumulatorWidth,
    MetricKind,
    SubarrayResult,
    get_algorithm,
    scan,
    scan_optimized,
    verify_result,
)

__all__ = [
    "AccumulatorWidth",
    "MetricKind",
    "SubarrayResult",
    "get_algorithm",
    "scan",
    "scan_optimized",
    "verify_result",
]
