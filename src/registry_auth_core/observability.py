"""Logging setup for registry auth components.

Every module obtains its logger with ``structlog.get_logger(__name__)``. The
host integration calls :func:`configure_logging` once per build.
"""

import logging

import structlog


def configure_logging(log_level: str = "INFO", dev_mode: bool = False) -> None:
    """Configure structlog for the current process.

    Args:
        log_level: Minimum level name to emit (e.g. "DEBUG", "INFO").
        dev_mode: Render human-readable console output instead of JSON.
    """
    level = logging.getLevelName(log_level.upper())
    if not isinstance(level, int):
        level = logging.INFO

    renderer: structlog.types.Processor
    if dev_mode:
        renderer = structlog.dev.ConsoleRenderer()
    else:
        renderer = structlog.processors.JSONRenderer()

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        cache_logger_on_first_use=False,
    )
