"""
Centralized logging configuration for the governance analysis engine.

This module provides standardized logging configuration using structlog
for all components. Execution-status resolutions and failed chain reads are
logged through the helpers below so every event carries the same fields.
"""
import logging
import sys
from typing import Any, Optional

import structlog
from structlog.types import FilteringBoundLogger


def configure_logging(
    level: str = "INFO",
    format_json: bool = False,
    include_timestamp: bool = True,
    include_caller: bool = False,
    extra_processors: Optional[list] = None
) -> None:
    """
    Configure structlog for the entire application.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format_json: If True, output JSON format; otherwise human-readable
        include_timestamp: Include timestamp in log output
        include_caller: Include caller information (filename, line number)
        extra_processors: Additional structlog processors to include
    """
    log_level = getattr(logging, level.upper())

    logging.basicConfig(
        level=log_level,
        stream=sys.stdout,
        format="%(message)s"  # structlog will handle formatting
    )

    processors = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    if include_timestamp:
        processors.append(structlog.processors.TimeStamper(fmt="iso"))

    if include_caller:
        processors.append(structlog.processors.CallsiteParameterAdder(
            parameters=[structlog.processors.CallsiteParameter.FILENAME,
                        structlog.processors.CallsiteParameter.LINENO]
        ))

    if extra_processors:
        processors.extend(extra_processors)

    if format_json:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=True))

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


def get_execution_logger(name: str) -> FilteringBoundLogger:
    """
    Get a logger bound for upgrade execution resolution.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured structlog logger for execution status decisions
    """
    logger = get_logger(name)

    return logger.bind(
        subsystem="execution_resolver",
        audit_trail=True
    )


def get_chain_logger(name: str) -> FilteringBoundLogger:
    """Get a logger bound for external chain reads."""
    return get_logger(name).bind(subsystem="chain_reads")


def log_execution_resolution(
    logger: FilteringBoundLogger,
    proposal_id: str,
    status: str,
    trigger: str,
    context: Optional[dict[str, Any]] = None
) -> None:
    """
    Log an execution status resolution with standardized format.

    Args:
        logger: Structlog logger instance
        proposal_id: ID of the proposal being resolved
        status: Resolved execution status value
        trigger: Rule that produced the status
        context: Additional context data (heights, timestamps)
    """
    bound_logger = logger.bind(
        proposal_id=proposal_id,
        execution_status=status,
        trigger=trigger,
    )

    if context:
        bound_logger = bound_logger.bind(context=context)

    bound_logger.info("Execution status resolved")


def log_read_failure(
    logger: FilteringBoundLogger,
    read_name: str,
    error: BaseException,
    context: Optional[dict[str, Any]] = None
) -> None:
    """
    Log a failed collaborator read. The failure is never re-raised.

    Args:
        logger: Structlog logger instance
        read_name: Name of the chain read that failed
        error: Exception raised by the collaborator
        context: Additional context data (requested height)
    """
    bound_logger = logger.bind(
        read_name=read_name,
        error=str(error),
        error_type=type(error).__name__,
    )

    if context:
        bound_logger = bound_logger.bind(context=context)

    bound_logger.warning("Chain read failed")
