from __future__ import annotations

from typing import Callable

import pytest

from kb_runner.services.history import RunRecord


@pytest.fixture
def make_record() -> Callable[..., RunRecord]:
    def _make(**overrides) -> RunRecord:
        values = dict(
            algorithm="kadane",
            timestamp_ms=1_700_000_000_000,
            input_size=10,
            input_type="random",
            comparisons=18,
            element_accesses=10,
            allocations=1,
            elapsed_nanos=1_000_000,
        )
        values.update(overrides)
        return RunRecord(**values)

    return _make
