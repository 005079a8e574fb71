"""
Structured logging setup using structlog.
Outputs JSON-formatted logs so the add-on log viewer stays parseable.
"""

import logging
import os
import sys

import structlog


def setup_logging():
    """
    Configure structlog for JSON-formatted logging.

    Log levels:
    - DEBUG: Per-poll translation details
    - INFO: Startup, shutdown and dispatched commands
    - WARNING: Failed polls and failed hub service calls
    - ERROR: Configuration errors and unexpected failures

    The level comes from LOG_LEVEL. Standard library loggers share the same
    level so HAP-python and uvicorn output is filtered alongside ours.
    """
    log_level = os.getenv("LOG_LEVEL", "INFO").upper()
    level = getattr(logging, log_level, logging.INFO)

    # HAP-python and uvicorn log through the standard library
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=level,
    )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.dev.set_exc_info,
            structlog.processors.format_exc_info,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.JSONRenderer()
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str = None) -> structlog.BoundLogger:
    """Module logger; the name is bound as the first positional logger arg."""
    return structlog.get_logger(name) if name else structlog.get_logger()
