"""Structlog helpers.

Library modules log through structlog loggers that wrap stdlib loggers, so
nothing is emitted until an application (or the CLI) configures logging.
"""

from __future__ import annotations

import logging as std_logging
import sys
from typing import Any

import structlog


def get_logger(name: str) -> Any:
    return structlog.wrap_logger(std_logging.getLogger(name))


def _level_from_verbosity(verbosity: int) -> int:
    if verbosity <= 0:
        return std_logging.WARNING
    if verbosity == 1:
        return std_logging.INFO
    return std_logging.DEBUG


def configure_logging(json_mode: bool = False, verbosity: int = 0) -> None:
    """Configure structlog for the CLI; ``verbosity`` is the ``-v`` count."""

    level = _level_from_verbosity(verbosity)
    # stdout carries the printed object only.
    handler = std_logging.StreamHandler(sys.stderr)
    handler.setFormatter(std_logging.Formatter("%(message)s"))
    std_logging.basicConfig(level=level, handlers=[handler], force=True)

    renderer: structlog.typing.Processor = (
        structlog.processors.JSONRenderer() if json_mode else structlog.dev.ConsoleRenderer(colors=False)
    )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        cache_logger_on_first_use=False,
    )
