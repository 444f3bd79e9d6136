"""Benchmark configuration (canonical runner definition)."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

from pydantic import BaseModel, Field, ValidationError, field_validator

from kb_common.config.env import (
    parse_bool_env,
    parse_csv_env,
    parse_float_env,
    parse_int_env,
)
from kb_common.errors import ConfigurationError
from kb_core.arithmetic import AccumulatorWidth
from kb_core.engine import ALGORITHMS
from kb_runner.generators import DEFAULT_DISTRIBUTIONS, Distribution


def parse_sizes(value: str) -> list[int]:
    """Parse a comma-separated list of positive sizes, e.g. ``"100,1000"``."""
    sizes: list[int] = []
    for token in value.split(","):
        token = token.strip()
        if not token:
            continue
        try:
            size = int(token)
        except ValueError:
            raise ConfigurationError(
                f"Invalid size: {token!r}", context={"value": value}
            ) from None
        if size <= 0:
            raise ConfigurationError(
                f"Sizes must be positive, got {size}", context={"value": value}
            )
        sizes.append(size)
    if not sizes:
        raise ConfigurationError("At least one size is required", context={"value": value})
    return sizes


def parse_distributions(value: str) -> list[Distribution]:
    """Parse a comma-separated list of distribution labels."""
    labels = parse_csv_env(value)
    if not labels:
        raise ConfigurationError(
            "At least one distribution is required", context={"value": value}
        )
    return [Distribution.parse(label) for label in labels]


def _format_validation_error(exc: ValidationError) -> str:
    problems = []
    for item in exc.errors():
        location = ".".join(str(part) for part in item.get("loc", ())) or "config"
        problems.append(f"{location}: {item.get('msg', 'invalid value')}")
    return "Invalid benchmark configuration: " + "; ".join(problems)


class BenchmarkConfig(BaseModel):
    """Main configuration for a benchmark session."""

    # Measured matrix
    sizes: List[int] = Field(
        default_factory=lambda: [100, 1000, 10000, 100000],
        description="Input sizes to benchmark",
    )
    distributions: List[Distribution] = Field(
        default_factory=lambda: list(DEFAULT_DISTRIBUTIONS),
        description="Input distributions to benchmark",
    )
    iterations: int = Field(default=5, gt=0, description="Measured calls per size/distribution pair")

    # Warmup
    warmup_iterations: int = Field(default=3, ge=0, description="Warmup rounds, discarded from history")
    warmup_sizes: List[int] = Field(
        default_factory=lambda: [1000, 5000, 10000],
        description="Sizes used during warmup (random distribution)",
    )

    # Engine
    algorithm: str = Field(default="kadane", description="Engine variant label")
    accumulator: str = Field(default="int32", description="Accumulator width (int32 or int64)")
    seed: Optional[int] = Field(default=42, description="Seed for the input generators")
    validate_results: bool = Field(default=True, description="Check every measured result against its slice")

    # Output
    export_csv: bool = Field(default=True, description="Write CSV files at the end of the run")
    output_dir: Path = Field(default=Path("./benchmark_results"), description="Root directory for benchmark output")

    # Budget
    max_duration_seconds: Optional[float] = Field(
        default=None, gt=0, description="Stop the measured matrix after this wall-clock budget"
    )

    @field_validator("sizes", mode="before")
    @classmethod
    def _coerce_sizes(cls, value: Any) -> Any:
        if isinstance(value, str):
            return parse_sizes(value)
        return value

    @field_validator("sizes")
    @classmethod
    def _validate_sizes(cls, value: List[int]) -> List[int]:
        if not value:
            raise ValueError("at least one size is required")
        if any(size <= 0 for size in value):
            raise ValueError("sizes must be positive")
        return value

    @field_validator("warmup_sizes", mode="before")
    @classmethod
    def _coerce_warmup_sizes(cls, value: Any) -> Any:
        if isinstance(value, str):
            return parse_sizes(value) if value.strip() else []
        return value

    @field_validator("warmup_sizes")
    @classmethod
    def _validate_warmup_sizes(cls, value: List[int]) -> List[int]:
        if any(size <= 0 for size in value):
            raise ValueError("warmup sizes must be positive")
        return value

    @field_validator("distributions", mode="before")
    @classmethod
    def _coerce_distributions(cls, value: Any) -> Any:
        if isinstance(value, str):
            value = parse_csv_env(value)
        if isinstance(value, (list, tuple)):
            return [Distribution.parse(item) for item in value]
        return value

    @field_validator("distributions")
    @classmethod
    def _validate_distributions(cls, value: List[Distribution]) -> List[Distribution]:
        if not value:
            raise ValueError("at least one distribution is required")
        return value

    @field_validator("algorithm")
    @classmethod
    def _validate_algorithm(cls, value: str) -> str:
        if value not in ALGORITHMS:
            raise ValueError(
                f"unknown algorithm {value!r} (choices: {', '.join(sorted(ALGORITHMS))})"
            )
        return value

    @field_validator("accumulator", mode="before")
    @classmethod
    def _validate_accumulator(cls, value: Any) -> str:
        return AccumulatorWidth.parse(value).name.lower()

    @property
    def width(self) -> AccumulatorWidth:
        return AccumulatorWidth.parse(self.accumulator)

    @property
    def total_measured_runs(self) -> int:
        return len(self.sizes) * len(self.distributions) * self.iterations

    def with_env_overrides(self, environ: Mapping[str, str] | None = None) -> "BenchmarkConfig":
        """Return a copy updated from ``KB_*`` environment variables.

        Recognised: ``KB_SEED``, ``KB_ITERATIONS``, ``KB_MAX_DURATION``,
        ``KB_DISTRIBUTIONS``, ``KB_VALIDATE_RESULTS``. Malformed numeric values
        are ignored.
        """
        env = os.environ if environ is None else environ
        updates: Dict[str, Any] = {}

        seed = parse_int_env(env.get("KB_SEED"))
        if seed is not None:
            updates["seed"] = seed
        iterations = parse_int_env(env.get("KB_ITERATIONS"))
        if iterations is not None:
            updates["iterations"] = iterations
        budget = parse_float_env(env.get("KB_MAX_DURATION"))
        if budget is not None:
            updates["max_duration_seconds"] = budget
        distributions = parse_csv_env(env.get("KB_DISTRIBUTIONS"))
        if distributions:
            updates["distributions"] = distributions
        validate = parse_bool_env(env.get("KB_VALIDATE_RESULTS"))
        if validate is not None:
            updates["validate_results"] = validate

        if not updates:
            return self
        return self.from_dict({**self.model_dump(), **updates})

    @classmethod
    def create(cls, **values: Any) -> "BenchmarkConfig":
        return cls.from_dict(values)

    @classmethod
    def from_json(cls, json_str: str) -> "BenchmarkConfig":
        try:
            return cls.model_validate_json(json_str)
        except ValidationError as exc:
            raise ConfigurationError(_format_validation_error(exc), cause=exc) from exc

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "BenchmarkConfig":
        try:
            return cls.model_validate(data)
        except ValidationError as exc:
            raise ConfigurationError(_format_validation_error(exc), cause=exc) from exc

    def save(self, filepath: Path) -> None:
        filepath.write_text(self.model_dump_json(indent=2))

    @classmethod
    def load(cls, filepath: Path) -> "BenchmarkConfig":
        try:
            text = Path(filepath).read_text()
        except OSError as exc:
            raise ConfigurationError(
                f"Cannot read config file: {filepath}", context={"path": filepath}, cause=exc
            ) from exc
        return cls.from_json(text)
