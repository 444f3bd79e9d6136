"""Configuration helpers shared across kadane-bench packages."""

from kb_common.config.env import (
    parse_bool_env,
    parse_csv_env,
    parse_float_env,
    parse_int_env,
)

__all__ = ["parse_bool_env", "parse_csv_env", "parse_float_env", "parse_int_env"]
