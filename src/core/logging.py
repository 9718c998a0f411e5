"""Logging support for neo4j-rest-traversal.

Library modules log through ``logging.getLogger(__name__)`` under the
``src`` logger and never configure handlers on import. Applications that
want JSON log lines call ``configure_logging()``.

The correlation ID set here is attached to every log record by
CorrelationIdFilter and sent to the server as X-Request-ID by the HTTP
client, so one ID ties client logs to server requests.
"""

import json
import logging
import os
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from datetime import datetime, timezone
from typing import IO, Any


SERVICE_NAME = "neo4j-traversal"
LIBRARY_LOGGER = "src"
LOG_LEVEL_ENV = "NEO4J_TRAVERSAL_LOG_LEVEL"

_correlation_id: ContextVar[str | None] = ContextVar("correlation_id", default=None)


# =============================================================================
# Correlation ID
# =============================================================================


def set_correlation_id(correlation_id: str) -> None:
    """Set the correlation ID for the current context."""
    _correlation_id.set(correlation_id)


def get_correlation_id() -> str | None:
    """Get the current correlation ID from context."""
    return _correlation_id.get()


def clear_correlation_id() -> None:
    """Clear the correlation ID from context."""
    _correlation_id.set(None)


@contextmanager
def correlation_scope(correlation_id: str) -> Iterator[str]:
    """Use ``correlation_id`` for the duration of a block.

    The previous ID (or none) is restored on exit, also when the block
    raises.
    """
    token = _correlation_id.set(correlation_id)
    try:
        yield correlation_id
    finally:
        _correlation_id.reset(token)


# =============================================================================
# Formatting
# =============================================================================


class JSONFormatter(logging.Formatter):
    """One JSON object per log line.

    Fields: timestamp, level, service, correlation_id, logger, message,
    and exception when the record carries one.
    """

    def __init__(self, service_name: str = SERVICE_NAME, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self.service_name = service_name

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "service": self.service_name,
            "correlation_id": getattr(record, "correlation_id", "-"),
            "logger": record.name,
            "message": record.getMessage(),
        }

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, ensure_ascii=False)


class CorrelationIdFilter(logging.Filter):
    """Filter that adds correlation ID to log records."""

    def filter(self, record: logging.LogRecord) -> bool:
        correlation_id = get_correlation_id()
        record.correlation_id = correlation_id if correlation_id else "-"
        return True


# =============================================================================
# Setup
# =============================================================================


def get_log_level_from_env(env_var: str = LOG_LEVEL_ENV) -> int:
    """Log level named by ``env_var``; INFO when unset or unknown."""
    level_str = os.environ.get(env_var, "INFO").upper()
    level = getattr(logging, level_str, None)
    return level if isinstance(level, int) else logging.INFO


def configure_logging(
    log_level: int | None = None,
    stream: IO[str] | None = None,
    service_name: str = SERVICE_NAME,
) -> logging.Logger:
    """Send the library's log records to ``stream`` as JSON lines.

    Replaces any handlers previously installed on the library logger, so
    calling it twice does not duplicate output.

    Args:
        log_level: Level for the library logger; read from
            NEO4J_TRAVERSAL_LOG_LEVEL when None
        stream: Where to write; stderr when None
        service_name: Value of the ``service`` field

    Returns:
        The configured library logger
    """
    if log_level is None:
        log_level = get_log_level_from_env()

    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setFormatter(JSONFormatter(service_name=service_name))
    handler.addFilter(CorrelationIdFilter())

    logger = logging.getLogger(LIBRARY_LOGGER)
    logger.setLevel(log_level)
    logger.handlers.clear()
    logger.addHandler(handler)
    logger.propagate = False
    return logger
