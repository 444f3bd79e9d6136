"""Public API surface for kb_common."""

from kb_common.errors import (
    ConfigurationError,
    ExportError,
    InvalidInputError,
    KBError,
    ResultValidationError,
    error_to_payload,
    wrap_error,
)
from kb_common.logging import bound_run, configure_logging

__all__ = [
    "bound_run",
    "configure_logging",
    "ConfigurationError",
    "ExportError",
    "InvalidInputError",
    "KBError",
    "ResultValidationError",
    "error_to_payload",
    "wrap_error",
]
