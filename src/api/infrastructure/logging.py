"""Structlog configuration for the application.

Colored console output for development, JSON lines everywhere else.
"""

import logging
import os
import sys

import structlog


def configure_logging(environment: str = "development", debug: bool = False) -> None:
    """Configure structlog with appropriate processors.

    Console rendering is used when FORCE_COLOR is set or stdout is a TTY,
    unless the service runs in production. Debug mode lowers the level
    filter so probe debug events (cache hits, ignored change events) show.
    """
    force_color = os.environ.get("FORCE_COLOR", "").lower() in ("1", "true", "yes")
    use_colors = environment != "production" and (force_color or sys.stdout.isatty())

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
    ]

    if use_colors:
        processors: list[structlog.types.Processor] = [
            *shared_processors,
            structlog.dev.ConsoleRenderer(colors=True),
        ]
    else:
        processors = [
            *shared_processors,
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.DEBUG if debug else logging.INFO
        ),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )
