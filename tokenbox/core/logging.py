"""
Standardized Logging Configuration

Wires the stdlib root handler and structlog together so every
``structlog.get_logger(__name__)`` in the package renders consistently.
JSON output for production, colored console output for development.
"""

import logging
import sys
from enum import Enum
from typing import Any, List, Optional

import structlog

from tokenbox.config import get_settings


# =============================================================================
# Configuration
# =============================================================================


class LogLevel(str, Enum):
    """Log levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LogFormat(str, Enum):
    """Log output formats."""

    JSON = "json"
    PRETTY = "pretty"


# =============================================================================
# Logger Setup
# =============================================================================


def _shared_processors() -> List[Any]:
    return [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]


def setup_logging(
    level: Optional[str] = None,
    log_format: Optional[str] = None,
) -> None:
    """
    Configure logging for the application.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL); defaults to settings
        log_format: Log format (json, pretty); defaults to settings
    """
    settings = get_settings()
    level = LogLevel((level or settings.log_level).upper())
    log_format = LogFormat((log_format or settings.log_format).lower())

    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, level.value))

    # Remove existing handlers
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(getattr(logging, level.value))
    handler.setFormatter(logging.Formatter("%(message)s"))
    root_logger.addHandler(handler)

    if log_format == LogFormat.JSON:
        renderer: Any = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer()

    structlog.configure(
        processors=_shared_processors() + [renderer],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    structlog.get_logger(__name__).debug(
        "logging_configured",
        level=level.value,
        format=log_format.value,
    )

