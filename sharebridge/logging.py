"""structlog setup shared by library code and tests."""

from __future__ import annotations

import logging
import sys

import structlog

from .config import Config, get_config

log = structlog.get_logger()


def configure_logging(level: str | None = None, json: bool | None = None,
                      config: Config | None = None) -> list[str]:
    """Configure structlog and log any config warnings. Returns the warnings."""
    config = config or get_config()
    level_name = (level or config.log_level).upper()
    numeric = getattr(logging, level_name, logging.INFO)
    use_json = config.log_json if json is None else json

    renderer = structlog.processors.JSONRenderer() if use_json else structlog.dev.ConsoleRenderer()
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(numeric),
        logger_factory=structlog.PrintLoggerFactory(sys.stderr),
        cache_logger_on_first_use=True,
    )

    warnings = config.validate()
    for w in warnings:
        log.warning("config_warning", msg=w)
    return warnings
