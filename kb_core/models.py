"""Value types produced by the maximum-subarray engine."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Optional, Sequence


@dataclass(frozen=True)
class SubarrayResult:
    """Maximum sum and the inclusive index range that achieves it."""

    max_sum: int
    start_index: int
    end_index: int

    @property
    def length(self) -> int:
        return self.end_index - self.start_index + 1

    def extract(self, sequence: Optional[Sequence[int]]) -> Optional[list[int]]:
        """Return ``sequence[start..end]`` inclusive, or None without a sequence."""
        if sequence is None:
            return None
        return [int(value) for value in sequence[self.start_index : self.end_index + 1]]

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)
