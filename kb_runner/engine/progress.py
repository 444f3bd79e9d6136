"""Helpers for emitting structured benchmark progress events."""

from __future__ import annotations

import json
import logging
import time
from dataclasses import asdict, dataclass
from typing import Any, Callable


logger = logging.getLogger(__name__)


@dataclass
class BenchmarkEvent:
    """A structured event emitted while the benchmark matrix runs."""

    run_id: str
    phase: str  # warmup | measure
    input_size: int
    input_type: str
    iteration: int
    total_iterations: int
    status: str  # running | done | failed | stopped
    message: str = ""
    timestamp: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    def to_json(self) -> str:
        return json.dumps(self.to_dict())


class RunProgressEmitter:
    """Emit progress events to an optional callback and the module logger."""

    def __init__(
        self,
        callback: Callable[[BenchmarkEvent], None] | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._callback = callback
        self._clock = clock
        self._run_id = ""

    def set_run_id(self, run_id: str) -> None:
        """Set the active run identifier for emitted events."""
        self._run_id = run_id

    def emit(
        self,
        phase: str,
        input_size: int,
        input_type: str,
        iteration: int,
        total_iterations: int,
        status: str,
        message: str = "",
    ) -> BenchmarkEvent:
        event = BenchmarkEvent(
            run_id=self._run_id,
            phase=phase,
            input_size=input_size,
            input_type=input_type,
            iteration=iteration,
            total_iterations=total_iterations,
            status=status,
            message=message,
            timestamp=self._clock(),
        )
        logger.debug("Progress %s", event.to_json())
        if self._callback:
            self._callback(event)
        return event
