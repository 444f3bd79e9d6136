"""Tests for shared error helpers."""

from __future__ import annotations

from enum import Enum
from pathlib import Path

import numpy as np
import pytest

from kb_common.errors import (
    ConfigurationError,
    ExportError,
    InvalidInputError,
    KBError,
    ResultValidationError,
    error_to_payload,
    wrap_error,
)


pytestmark = pytest.mark.unit_common


class Width(str, Enum):
    WIDE = "int64"


def test_error_to_payload_normalizes_context() -> None:
    err = ExportError(
        "boom",
        context={
            "path": Path("/tmp/test"),
            "count": 3,
            "nested": {"value": Path("nested")},
            "items": [Path("a"), "b"],
        },
    )
    payload = error_to_payload(err)
    assert payload["error_type"] == "ExportError"
    assert payload["error"] == "boom"
    assert payload["error_context"]["path"].endswith("test")
    assert payload["error_context"]["count"] == 3
    assert payload["error_context"]["nested"]["value"] == "nested"
    assert payload["error_context"]["items"] == ["a", "b"]


def test_wrap_error_keeps_cause() -> None:
    cause = OSError("disk full")
    err = wrap_error(ExportError, "write failed", context={"path": "x"}, cause=cause)
    assert isinstance(err, ExportError)
    assert err.__cause__ is cause
    assert err.to_dict() == {
        "type": "ExportError",
        "message": "write failed",
        "context": {"path": "x"},
    }


@pytest.mark.parametrize("error_cls", [InvalidInputError, ConfigurationError])
def test_input_and_config_errors_are_value_errors(error_cls) -> None:
    err = error_cls("bad")
    assert isinstance(err, ValueError)
    assert isinstance(err, KBError)


def test_validation_error_is_not_a_value_error() -> None:
    assert not isinstance(ResultValidationError("bad"), ValueError)
    assert ResultValidationError("bad").context == {}


def test_context_flattens_enums_and_numpy_scalars() -> None:
    err = ConfigurationError(
        "bad", context={"width": Width.WIDE, "size": np.int64(5), "tags": {"a"}}
    )
    assert err.context == {"width": "int64", "size": 5, "tags": ["a"]}


@pytest.mark.parametrize(
    ("error_cls", "code"),
    [
        (InvalidInputError, 2),
        (ConfigurationError, 2),
        (ResultValidationError, 1),
        (ExportError, 1),
    ],
)
def test_exit_codes_follow_error_kind(error_cls, code) -> None:
    err = error_cls("x")
    assert err.exit_code == code
    assert error_to_payload(err)["exit_code"] == code


def test_payload_includes_cause() -> None:
    err = wrap_error(ExportError, "write failed", cause=OSError("disk full"))
    assert error_to_payload(err)["error_cause"] == "OSError('disk full')"
