"""Stop token for graceful interruption between engine calls."""

from __future__ import annotations

import logging
import signal
import time
from pathlib import Path
from typing import Callable, Dict, Optional


logger = logging.getLogger(__name__)


class StopToken:
    """
    Cooperative stop controller checked between engine calls.

    It trips on SIGINT/SIGTERM, on the presence of a stop file, or once a
    wall-clock budget has elapsed. A scan in progress is never interrupted;
    consumers call `should_stop()` before starting the next one.
    """

    def __init__(
        self,
        stop_file: Optional[Path] = None,
        enable_signals: bool = True,
        on_stop: Optional[Callable[[], None]] = None,
        max_duration_seconds: Optional[float] = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.stop_file = stop_file
        self._on_stop = on_stop
        self._clock = clock
        self._deadline = (
            clock() + max_duration_seconds if max_duration_seconds is not None else None
        )
        self._stop_requested = False
        self.reason: Optional[str] = None
        self._prev_handlers: Dict[int, Callable] = {}
        if enable_signals:
            self._install_signal_handlers()

    def _install_signal_handlers(self) -> None:
        for sig in (signal.SIGINT, signal.SIGTERM):
            try:
                self._prev_handlers[sig] = signal.getsignal(sig)
                signal.signal(sig, self._handle_signal)  # type: ignore[arg-type]
            except ValueError:
                # Handlers can only be installed from the main thread.
                logger.debug("Cannot install handler for signal %s", sig)

    def _handle_signal(self, signum: int, frame) -> None:  # type: ignore[override]
        self.request_stop(f"signal {signal.Signals(signum).name}")

    def request_stop(self, reason: str = "requested") -> None:
        """Mark the token as stopped and trigger the callback once."""
        if self._stop_requested:
            return
        self._stop_requested = True
        self.reason = reason
        logger.info("Stop requested: %s", reason)
        if self._on_stop:
            self._on_stop()

    def should_stop(self) -> bool:
        """Return True when a stop was requested, the stop file exists or the budget ran out."""
        if self._stop_requested:
            return True
        if self.stop_file and self.stop_file.exists():
            self.request_stop(f"stop file {self.stop_file}")
            return True
        if self._deadline is not None and self._clock() >= self._deadline:
            self.request_stop("time budget exhausted")
            return True
        return False

    def restore(self) -> None:
        """Restore original signal handlers."""
        for sig, handler in self._prev_handlers.items():
            signal.signal(sig, handler)  # type: ignore[arg-type]
        self._prev_handlers.clear()

    def __enter__(self) -> "StopToken":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.restore()
