"""Helpers for run identifiers and benchmark matrix planning."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Iterable

from kb_runner.generators import Distribution
from kb_runner.models.config import BenchmarkConfig


def generate_run_id() -> str:
    """Generate a timestamp-based run id."""
    return datetime.now(UTC).strftime("run-%Y%m%d-%H%M%S")


@dataclass(frozen=True)
class PlanEntry:
    """One size/distribution cell of the measured matrix."""

    size: int
    distribution: Distribution
    iterations: int

    @property
    def label(self) -> str:
        return f"n={self.size} {self.distribution.value}"


def build_plan(config: BenchmarkConfig) -> list[PlanEntry]:
    """Expand the configuration into matrix cells, sizes outermost."""
    return [
        PlanEntry(size=size, distribution=distribution, iterations=config.iterations)
        for size in config.sizes
        for distribution in config.distributions
    ]


def warmup_sizes(config: BenchmarkConfig) -> Iterable[int]:
    """Yield warmup sizes round by round."""
    for _ in range(config.warmup_iterations):
        yield from config.warmup_sizes
