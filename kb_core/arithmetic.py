"""Fixed-width integer accumulators with two's-complement wraparound."""

from __future__ import annotations

from enum import Enum

from kb_common.errors import ConfigurationError


class AccumulatorWidth(Enum):
    """Width of the running-sum accumulator used by the engine."""

    INT32 = 32
    INT64 = 64

    @property
    def bits(self) -> int:
        return self.value

    @property
    def min_value(self) -> int:
        return -(1 << (self.value - 1))

    @property
    def max_value(self) -> int:
        return (1 << (self.value - 1)) - 1

    def wrap(self, value: int) -> int:
        """Reduce ``value`` into this width, wrapping like native arithmetic."""
        if self.min_value <= value <= self.max_value:
            return value
        span = 1 << self.value
        value &= span - 1
        if value > self.max_value:
            value -= span
        return value

    def contains(self, value: int) -> bool:
        return self.min_value <= value <= self.max_value

    @classmethod
    def parse(cls, value: "str | int | AccumulatorWidth") -> "AccumulatorWidth":
        """Resolve ``"int32"``, ``"int64"``, ``32`` or ``64`` to a width."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            key = value.strip().upper()
            if key in cls.__members__:
                return cls[key]
            if key.isdigit():
                value = int(key)
        if isinstance(value, int):
            for member in cls:
                if member.value == value:
                    return member
        raise ConfigurationError(
            f"Unsupported accumulator width: {value!r}",
            context={"choices": [member.name.lower() for member in cls]},
        )


#: Range every input element must fall into, whatever the accumulator width.
ELEMENT_WIDTH = AccumulatorWidth.INT32
