"""Tests for fixed-width accumulators."""

from __future__ import annotations

import pytest

from kb_common.errors import ConfigurationError
from kb_core.arithmetic import ELEMENT_WIDTH, AccumulatorWidth


pytestmark = pytest.mark.unit_core


def test_bounds() -> None:
    assert AccumulatorWidth.INT32.min_value == -(2**31)
    assert AccumulatorWidth.INT32.max_value == 2**31 - 1
    assert AccumulatorWidth.INT64.min_value == -(2**63)
    assert AccumulatorWidth.INT64.max_value == 2**63 - 1
    assert ELEMENT_WIDTH is AccumulatorWidth.INT32


@pytest.mark.parametrize(
    ("width", "value", "expected"),
    [
        (AccumulatorWidth.INT32, 2**31, -(2**31)),
        (AccumulatorWidth.INT32, -(2**31) - 1, 2**31 - 1),
        (AccumulatorWidth.INT32, 2 * (2**31 - 1), -2),
        (AccumulatorWidth.INT32, -(2**32), 0),
        (AccumulatorWidth.INT32, 12345, 12345),
        (AccumulatorWidth.INT64, 2**63, -(2**63)),
        (AccumulatorWidth.INT64, 2 * (2**31 - 1), 4294967294),
    ],
)
def test_wrap(width: AccumulatorWidth, value: int, expected: int) -> None:
    assert width.wrap(value) == expected


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("int32", AccumulatorWidth.INT32),
        (" INT64 ", AccumulatorWidth.INT64),
        ("64", AccumulatorWidth.INT64),
        (32, AccumulatorWidth.INT32),
        (AccumulatorWidth.INT64, AccumulatorWidth.INT64),
    ],
)
def test_parse(raw, expected: AccumulatorWidth) -> None:
    assert AccumulatorWidth.parse(raw) is expected


@pytest.mark.parametrize("raw", ["int16", "", 16, "float"])
def test_parse_rejects_unknown_widths(raw) -> None:
    with pytest.raises(ConfigurationError):
        AccumulatorWidth.parse(raw)


def test_contains() -> None:
    assert AccumulatorWidth.INT32.contains(2**31 - 1)
    assert not AccumulatorWidth.INT32.contains(2**31)
    assert AccumulatorWidth.INT64.contains(2**31)
