"""
Centralized logging configuration for the solar deployment tool.

All components log through structlog so that singleton materialization,
repository access, RPC traffic and reporter lifecycle events share one
structured format. Logs are written to stderr; stdout is reserved for
task output.
"""
import logging
import sys
from typing import Any, Optional

import structlog
from structlog.types import FilteringBoundLogger


def configure_logging(level: str = "WARNING", format_json: bool = False) -> None:
    """
    Configure structlog for the entire application.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format_json: If True, output JSON format; otherwise human-readable
    """
    log_level = getattr(logging, level.upper())

    logging.basicConfig(
        level=log_level,
        stream=sys.stderr,
        format="%(message)s",
        force=True,
    )

    processors = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.processors.TimeStamper(fmt="iso"),
    ]

    if format_json:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty()))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> FilteringBoundLogger:
    """
    Get a configured structlog logger instance.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured structlog logger instance
    """
    return structlog.get_logger(name)


def get_rpc_logger(name: str, platform: str, url: str) -> FilteringBoundLogger:
    """
    Get a logger bound to a backend RPC endpoint.

    The URL is logged without credentials.

    Args:
        name: Logger name (typically __name__)
        platform: Backend platform name
        url: Endpoint URL, credentials already stripped

    Returns:
        Configured structlog logger for RPC traffic
    """
    return get_logger(name).bind(
        subsystem="rpc",
        platform=platform,
        endpoint=url,
    )


def log_singleton_materialized(
    logger: FilteringBoundLogger,
    field: str,
    context: Optional[dict[str, Any]] = None
) -> None:
    """
    Log the one-time construction of a lazily materialized context field.

    Args:
        logger: Structlog logger instance
        field: Name of the context field that was materialized
        context: Additional context data
    """
    bound_logger = logger.bind(field=field, lifecycle="materialized")

    if context:
        bound_logger = bound_logger.bind(**context)

    bound_logger.info("Context field materialized")
