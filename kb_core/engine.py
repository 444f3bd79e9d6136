"""
Maximum-subarray engine.

Single-pass Kadane scan with position tracking. Two variants are provided:

- ``scan``: the reference path, one instrumentation call per logical
  operation.
- ``scan_optimized``: same decisions and same counter totals, with counters
  flushed once per call and an all-negative fast path.

Tie-breaking is part of the contract: the running range extends on ties
(restart only when the element alone is strictly larger), and the best range
only moves on a strictly larger sum, so the earliest range wins.
"""

from __future__ import annotations

import numbers
from itertools import islice
from typing import Callable, Dict, Optional, Sequence

import numpy as np

from kb_common.errors import ConfigurationError, InvalidInputError
from kb_core.arithmetic import ELEMENT_WIDTH, AccumulatorWidth
from kb_core.instrumentation import NULL_METRICS, MetricKind, MetricsPort
from kb_core.models import SubarrayResult


ScanFunction = Callable[..., SubarrayResult]


def _validate_sequence(sequence: Optional[Sequence[int]]) -> tuple[int, int]:
    """Check the engine input and return its ``(min, max)`` values."""
    if sequence is None:
        raise InvalidInputError("Input sequence cannot be None")
    try:
        size = len(sequence)
    except TypeError as exc:
        raise InvalidInputError(
            "Input must be a sized sequence of integers",
            context={"type": type(sequence).__name__},
            cause=exc,
        ) from exc
    if size == 0:
        raise InvalidInputError("Input sequence cannot be empty")

    if isinstance(sequence, np.ndarray):
        if sequence.ndim != 1 or sequence.dtype.kind not in "iu":
            raise InvalidInputError(
                "Input array must be one-dimensional with an integer dtype",
                context={"ndim": sequence.ndim, "dtype": str(sequence.dtype)},
            )
        lo, hi = int(sequence.min()), int(sequence.max())
    else:
        for position, value in enumerate(sequence):
            if isinstance(value, bool) or not isinstance(value, numbers.Integral):
                raise InvalidInputError(
                    "Input sequence must contain only integers",
                    context={"index": position, "value": repr(value)},
                )
        lo, hi = int(min(sequence)), int(max(sequence))

    if not (ELEMENT_WIDTH.contains(lo) and ELEMENT_WIDTH.contains(hi)):
        raise InvalidInputError(
            "Input values must fit in a signed 32-bit integer",
            context={"min": lo, "max": hi},
        )
    return lo, hi


def scan(
    sequence: Sequence[int],
    metrics: Optional[MetricsPort] = None,
    *,
    width: AccumulatorWidth | str = AccumulatorWidth.INT32,
) -> SubarrayResult:
    """
    Find the maximum-sum contiguous subarray of ``sequence``.

    Args:
        sequence: Non-empty sequence of signed 32-bit integers.
        metrics: Optional instrumentation port; reset and timed by this call.
        width: Accumulator width. Running sums wrap around silently.

    Returns:
        SubarrayResult with the best sum and its inclusive index range.

    Raises:
        InvalidInputError: if the sequence is None, empty or malformed.
    """
    _validate_sequence(sequence)
    width = AccumulatorWidth.parse(width)
    port = metrics if metrics is not None else NULL_METRICS

    port.reset()
    port.start_timer()

    size = len(sequence)
    port.increment(MetricKind.ELEMENT_ACCESS)
    running = best = int(sequence[0])
    running_start = best_start = best_end = 0

    for index in range(1, size):
        value = int(sequence[index])
        port.increment(MetricKind.ELEMENT_ACCESS)

        extended = width.wrap(running + value)
        port.increment(MetricKind.COMPARISON)
        if value > extended:
            running = value
            running_start = index
        else:
            running = extended

        port.increment(MetricKind.COMPARISON)
        if running > best:
            best = running
            best_start = running_start
            best_end = index

    result = SubarrayResult(best, best_start, best_end)
    port.increment(MetricKind.ALLOCATION)
    port.stop_timer()
    return result


def _first_index_of(sequence: Sequence[int], target: int) -> int:
    if isinstance(sequence, np.ndarray):
        return int(np.argmax(sequence))
    if isinstance(sequence, (list, tuple)):
        return sequence.index(target)
    for index, value in enumerate(sequence):
        if value == target:
            return index
    raise InvalidInputError("Sequence changed while being scanned")


def _scan_locals(sequence: Sequence[int], width: AccumulatorWidth) -> SubarrayResult:
    lo_bound = width.min_value
    hi_bound = width.max_value
    wrap = width.wrap

    running = best = int(sequence[0])
    running_start = best_start = best_end = 0
    for index, raw in enumerate(islice(sequence, 1, None), start=1):
        value = int(raw)
        extended = running + value
        if extended < lo_bound or extended > hi_bound:
            extended = wrap(extended)
        if value > extended:
            running = value
            running_start = index
        else:
            running = extended
        if running > best:
            best = running
            best_start = running_start
            best_end = index
    return SubarrayResult(best, best_start, best_end)


def scan_optimized(
    sequence: Sequence[int],
    metrics: Optional[MetricsPort] = None,
    *,
    width: AccumulatorWidth | str = AccumulatorWidth.INT32,
) -> SubarrayResult:
    """
    Numerically identical variant of ``scan``.

    When every element is negative and no pair of elements can overflow the
    accumulator, every extension is strictly worse than restarting, so the
    answer is the first occurrence of the largest element.
    """
    lo, hi = _validate_sequence(sequence)
    width = AccumulatorWidth.parse(width)
    port = metrics if metrics is not None else NULL_METRICS

    port.reset()
    port.start_timer()

    size = len(sequence)
    if hi < 0 and 2 * lo >= width.min_value:
        position = _first_index_of(sequence, hi)
        result = SubarrayResult(hi, position, position)
    else:
        result = _scan_locals(sequence, width)

    port.increment(MetricKind.ELEMENT_ACCESS, size)
    port.increment(MetricKind.COMPARISON, 2 * (size - 1))
    port.increment(MetricKind.ALLOCATION)
    port.stop_timer()
    return result


ALGORITHMS: Dict[str, ScanFunction] = {
    "kadane": scan,
    "kadane_optimized": scan_optimized,
}


def get_algorithm(name: str) -> ScanFunction:
    """Resolve an algorithm label to its scan function."""
    try:
        return ALGORITHMS[name]
    except KeyError:
        raise ConfigurationError(
            f"Unknown algorithm: {name}",
            context={"choices": sorted(ALGORITHMS)},
        ) from None
