"""
Error types shared by the engine, the benchmark runner and the CLI.

Every failure the project raises on purpose is a ``KBError``. Errors carry a
``context`` mapping that is safe to log or dump as JSON, and an ``exit_code``
the CLI uses when the error ends a command.
"""

from __future__ import annotations

from enum import Enum
from pathlib import PurePath
from typing import Any, ClassVar, Mapping, TypeVar


def _jsonable(value: Any) -> Any:
    if isinstance(value, Enum):
        return _jsonable(value.value)
    if value is None or isinstance(value, (bool, int, float, str)):
        return value
    if isinstance(value, PurePath):
        return str(value)
    if isinstance(value, Mapping):
        return {str(key): _jsonable(item) for key, item in value.items()}
    if isinstance(value, (list, tuple, set, frozenset)):
        return [_jsonable(item) for item in value]
    # numpy scalars and 0-d arrays
    if getattr(value, "shape", None) == ():
        return _jsonable(value.item())
    return str(value)


def normalize_context(context: Mapping[str, Any]) -> dict[str, Any]:
    """Return a JSON-friendly copy of an error context mapping."""
    return {str(key): _jsonable(value) for key, value in context.items()}


class KBError(Exception):
    """Base class for kadane-bench failures."""

    exit_code: ClassVar[int] = 1

    def __init__(
        self,
        message: str,
        *,
        context: Mapping[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.context = normalize_context(context or {})
        if cause is not None:
            self.__cause__ = cause

    @property
    def error_type(self) -> str:
        return type(self).__name__

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.error_type, "message": str(self), "context": self.context}


class InvalidInputError(KBError, ValueError):
    """The sequence handed to the engine is absent, empty or malformed."""

    exit_code = 2


class ConfigurationError(KBError, ValueError):
    """Benchmark settings, CLI values or env overrides are unusable."""

    exit_code = 2


class ResultValidationError(KBError):
    """A measured result does not satisfy the subarray invariant."""


class ExportError(KBError):
    """A run directory or CSV file could not be written or read back."""


E = TypeVar("E", bound=KBError)


def wrap_error(
    error_cls: type[E],
    message: str,
    *,
    context: Mapping[str, Any] | None = None,
    cause: Exception | None = None,
) -> E:
    """Build ``error_cls`` around a lower-level exception."""
    return error_cls(message, context=context, cause=cause)


def error_to_payload(error: KBError) -> dict[str, Any]:
    """Flatten an error into log fields."""
    payload: dict[str, Any] = {
        "error_type": error.error_type,
        "error": str(error),
        "error_context": error.context,
        "exit_code": error.exit_code,
    }
    if error.__cause__ is not None:
        payload["error_cause"] = repr(error.__cause__)
    return payload
