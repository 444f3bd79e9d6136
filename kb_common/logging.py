"""
Logging setup for kadane-bench.

Modules log through ``logging.getLogger(__name__)``; ``configure_logging``
routes those records through a structlog ``ProcessorFormatter`` so console
and JSON output share timestamps, levels and any bound run context.
"""

from __future__ import annotations

import logging
import os
import sys
from contextlib import contextmanager
from typing import Iterator

import structlog

from kb_common.config.env import parse_bool_env

_SHARED_PROCESSORS: list[structlog.types.Processor] = [
    structlog.contextvars.merge_contextvars,
    structlog.processors.add_log_level,
    structlog.processors.TimeStamper(fmt="iso", utc=True),
]


def _level_from(value: str | int | None) -> int:
    if value is None:
        return logging.INFO
    if isinstance(value, int):
        return value
    token = value.strip()
    if token.isdigit():
        return int(token)
    return logging.getLevelNamesMapping().get(token.upper(), logging.INFO)


def _formatter(json_output: bool) -> structlog.stdlib.ProcessorFormatter:
    renderer: structlog.types.Processor
    if json_output:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())
    return structlog.stdlib.ProcessorFormatter(
        processor=renderer,
        foreign_pre_chain=_SHARED_PROCESSORS,
    )


def _configure_structlog() -> None:
    structlog.configure(
        processors=[
            *_SHARED_PROCESSORS,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


def configure_logging(
    *,
    level: str | int | None = None,
    debug: bool = False,
    log_file: str | None = None,
    json: bool | None = None,
    force: bool = False,
) -> None:
    """Install the shared formatter on the root logger.

    Explicit arguments win over ``KB_LOG_LEVEL``, ``KB_LOG_JSON`` and
    ``KB_LOG_FILE``. When the root logger already has handlers and ``force``
    is False only structlog is (re)configured.
    """
    _configure_structlog()
    root = logging.getLogger()
    if root.handlers and not force:
        return

    if json is None:
        json = bool(parse_bool_env(os.environ.get("KB_LOG_JSON")))
    if log_file is None:
        log_file = os.environ.get("KB_LOG_FILE")
    resolved_level = logging.DEBUG if debug else _level_from(level or os.environ.get("KB_LOG_LEVEL"))

    formatter = _formatter(json)
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file:
        handlers.append(logging.FileHandler(log_file))

    if force:
        root.handlers.clear()
    root.setLevel(resolved_level)
    for handler in handlers:
        handler.setFormatter(formatter)
        root.addHandler(handler)


@contextmanager
def bound_run(run_id: str) -> Iterator[None]:
    """Attach ``run_id`` to every log record emitted inside the block."""
    with structlog.contextvars.bound_contextvars(run_id=run_id):
        yield
