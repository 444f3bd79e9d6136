"""Shared helpers for kadane-bench."""

from kb_common.api import KBError, configure_logging

__all__ = ["configure_logging", "KBError"]
