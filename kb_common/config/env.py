"""Parsers for the ``KB_*`` environment variables.

Every parser returns ``None`` (or an empty list) when the variable is unset
or unusable, so callers can keep their current value.
"""

from __future__ import annotations

_TRUE = frozenset({"1", "true", "yes", "on"})
_FALSE = frozenset({"0", "false", "no", "off"})


def parse_bool_env(value: str | None) -> bool | None:
    """``"yes"``/``"on"``/``"1"``/``"true"`` and their negatives; else None."""
    if value is None:
        return None
    token = value.strip().lower()
    if token in _TRUE:
        return True
    if token in _FALSE:
        return False
    return None


def _parse_number(value: str | None, kind: type) -> int | float | None:
    if value is None or not value.strip():
        return None
    try:
        return kind(value.strip())
    except ValueError:
        return None


def parse_int_env(value: str | None) -> int | None:
    return _parse_number(value, int)


def parse_float_env(value: str | None) -> float | None:
    return _parse_number(value, float)


def parse_csv_env(value: str | None) -> list[str]:
    """Split ``"random, sorted,,"`` into ``["random", "sorted"]``."""
    if not value:
        return []
    return [token for token in (part.strip() for part in value.split(",")) if token]
