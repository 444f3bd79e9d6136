"""Post-scan checks on engine results."""

from __future__ import annotations

from typing import Sequence

from kb_common.errors import ResultValidationError
from kb_core.arithmetic import AccumulatorWidth
from kb_core.models import SubarrayResult


def subarray_sum(
    sequence: Sequence[int],
    start: int,
    end: int,
    width: AccumulatorWidth = AccumulatorWidth.INT32,
) -> int:
    """Sum ``sequence[start..end]`` inclusive using the accumulator's wraparound."""
    total = 0
    for index in range(start, end + 1):
        total = width.wrap(total + int(sequence[index]))
    return total


def verify_result(
    sequence: Sequence[int],
    result: SubarrayResult,
    width: AccumulatorWidth | str = AccumulatorWidth.INT32,
) -> None:
    """Raise ResultValidationError unless ``result`` describes a real subarray of ``sequence``."""
    width = AccumulatorWidth.parse(width)
    size = len(sequence)
    context = {
        "size": size,
        "start_index": result.start_index,
        "end_index": result.end_index,
        "max_sum": result.max_sum,
    }
    if not 0 <= result.start_index < size:
        raise ResultValidationError(
            f"Invalid start index: {result.start_index}", context=context
        )
    if not result.start_index <= result.end_index < size:
        raise ResultValidationError(
            f"Invalid end index: {result.end_index}", context=context
        )
    actual = subarray_sum(sequence, result.start_index, result.end_index, width)
    if actual != result.max_sum:
        raise ResultValidationError(
            f"Sum validation failed: expected {result.max_sum}, got {actual}",
            context={**context, "actual_sum": actual},
        )
