"""Public API surface for kb_core."""

from kb_core.arithmetic import ELEMENT_WIDTH, AccumulatorWidth
from kb_core.engine import ALGORITHMS, ScanFunction, get_algorithm, scan, scan_optimized
from kb_core.instrumentation import NULL_METRICS, MetricKind, MetricsPort, NullMetrics
from kb_core.models import SubarrayResult
from kb_core.validation import subarray_sum, verify_result

__all__ = [
    "ALGORITHMS",
    "AccumulatorWidth",
    "ELEMENT_WIDTH",
    "MetricKind",
    "MetricsPort",
    "NULL_METRICS",
    "NullMetrics",
    "ScanFunction",
    "SubarrayResult",
    "get_algorithm",
    "scan",
    "scan_optimized",
    "subarray_sum",
    "verify_result",
]
