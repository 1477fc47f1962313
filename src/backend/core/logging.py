"""
Structured logging setup.

Development gets key-value console lines, everything else gets JSON.
Request-scoped context (request_id) is merged in from structlog contextvars.
"""

import logging
import sys

import structlog


def configure_logging(is_development: bool = False, log_level: str = "INFO") -> None:
    """Configure structlog and the stdlib root logger."""
    numeric_level = getattr(logging, log_level.upper(), logging.INFO)

    shared_processors = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if is_development:
        renderer = structlog.processors.KeyValueRenderer(key_order=["event"], drop_missing=True)
    else:
        renderer = structlog.processors.JSONRenderer()

    structlog.configure(
        processors=shared_processors + [renderer],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=numeric_level,
    )
