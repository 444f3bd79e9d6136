"""Tests for environment variable parsers."""

from __future__ import annotations

import pytest

from kb_common.config import parse_bool_env, parse_csv_env, parse_float_env, parse_int_env


pytestmark = pytest.mark.unit_common


@pytest.mark.parametrize(
    ("raw", "expected"),
    [(None, None), ("1", True), ("Yes", True), (" on ", True), ("0", False), ("off", False), ("maybe", None)],
)
def test_parse_bool_env(raw, expected) -> None:
    assert parse_bool_env(raw) is expected


def test_parse_int_env() -> None:
    assert parse_int_env("42") == 42
    assert parse_int_env("4.2") is None
    assert parse_int_env(None) is None
    assert parse_int_env("  ") is None
    assert parse_int_env(" 7 ") == 7


def test_parse_float_env() -> None:
    assert parse_float_env("2.5") == 2.5
    assert parse_float_env("soon") is None
    assert parse_float_env(None) is None


def test_parse_csv_env() -> None:
    assert parse_csv_env("random, sorted,,") == ["random", "sorted"]
    assert parse_csv_env("") == []
    assert parse_csv_env(None) == []
