"""Tests for the benchmark configuration model."""

from __future__ import annotations

from pathlib import Path

import pytest

from kb_common.errors import ConfigurationError
from kb_core.arithmetic import AccumulatorWidth
from kb_runner.generators import DEFAULT_DISTRIBUTIONS, Distribution
from kb_runner.models.config import BenchmarkConfig, parse_distributions, parse_sizes


pytestmark = pytest.mark.unit_runner


def test_defaults() -> None:
    config = BenchmarkConfig()
    assert config.sizes == [100, 1000, 10000, 100000]
    assert config.distributions == list(DEFAULT_DISTRIBUTIONS)
    assert config.warmup_iterations == 3
    assert config.warmup_sizes == [1000, 5000, 10000]
    assert config.iterations == 5
    assert config.algorithm == "kadane"
    assert config.width is AccumulatorWidth.INT32
    assert config.seed == 42
    assert config.export_csv is True
    assert config.output_dir == Path("./benchmark_results")
    assert config.validate_results is True
    assert config.max_duration_seconds is None
    assert config.total_measured_runs == 4 * 6 * 5


def test_parse_sizes() -> None:
    assert parse_sizes(" 10, 20 ,") == [10, 20]


@pytest.mark.parametrize("raw", ["100,abc", "0", "10,-5", " , "])
def test_parse_sizes_rejects_bad_lists(raw: str) -> None:
    with pytest.raises(ConfigurationError):
        parse_sizes(raw)


def test_parse_distributions() -> None:
    assert parse_distributions("random, all_negative") == [
        Distribution.RANDOM,
        Distribution.ALL_NEGATIVE,
    ]
    with pytest.raises(ConfigurationError):
        parse_distributions("random,bogus")
    with pytest.raises(ConfigurationError):
        parse_distributions("")


def test_comma_strings_are_accepted_as_field_values() -> None:
    config = BenchmarkConfig.create(
        sizes="10,20", distributions="sorted,alternating", warmup_sizes=""
    )
    assert config.sizes == [10, 20]
    assert config.distributions == [Distribution.SORTED, Distribution.ALTERNATING]
    assert config.warmup_sizes == []


@pytest.mark.parametrize(
    "values",
    [
        {"sizes": "100,abc"},
        {"sizes": []},
        {"sizes": [10, 0]},
        {"distributions": ["bogus"]},
        {"distributions": []},
        {"iterations": 0},
        {"warmup_iterations": -1},
        {"algorithm": "bubble"},
        {"accumulator": "int16"},
        {"max_duration_seconds": 0},
    ],
)
def test_invalid_values_raise_configuration_error(values: dict) -> None:
    with pytest.raises(ConfigurationError, match="Invalid benchmark configuration"):
        BenchmarkConfig.from_dict(values)


def test_configuration_error_is_a_value_error() -> None:
    with pytest.raises(ValueError):
        BenchmarkConfig.from_dict({"iterations": 0})


def test_accumulator_is_normalized() -> None:
    config = BenchmarkConfig.create(accumulator="INT64")
    assert config.accumulator == "int64"
    assert config.width is AccumulatorWidth.INT64


def test_save_and_load_round_trip(tmp_path: Path) -> None:
    config = BenchmarkConfig.create(
        sizes=[5, 50],
        distributions=["sparse_positive"],
        algorithm="kadane_optimized",
        seed=None,
        output_dir=tmp_path / "out",
        max_duration_seconds=2.5,
    )
    path = tmp_path / "config.json"
    config.save(path)
    assert BenchmarkConfig.load(path) == config


def test_load_missing_file(tmp_path: Path) -> None:
    with pytest.raises(ConfigurationError, match="Cannot read config file"):
        BenchmarkConfig.load(tmp_path / "missing.json")


def test_from_json_rejects_malformed_json() -> None:
    with pytest.raises(ConfigurationError):
        BenchmarkConfig.from_json("{not json")


def test_env_overrides() -> None:
    config = BenchmarkConfig().with_env_overrides(
        {
            "KB_SEED": "7",
            "KB_ITERATIONS": "many",
            "KB_MAX_DURATION": "1.5",
            "KB_DISTRIBUTIONS": "sorted, alternating",
            "KB_VALIDATE_RESULTS": "no",
        }
    )
    assert config.seed == 7
    assert config.iterations == 5
    assert config.max_duration_seconds == 1.5
    assert config.distributions == [Distribution.SORTED, Distribution.ALTERNATING]
    assert config.validate_results is False


def test_env_overrides_without_variables_returns_same_config() -> None:
    config = BenchmarkConfig()
    assert config.with_env_overrides({}) is config


def test_invalid_env_override_raises() -> None:
    with pytest.raises(ConfigurationError):
        BenchmarkConfig().with_env_overrides({"KB_ITERATIONS": "0"})
