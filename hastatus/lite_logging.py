"""
Central logging configuration for hastatus.

Keeps hastatus' own loggers at INFO (DEBUG on request) while suppressing the
chatty third-party loggers of the HTTP stack.
"""

import logging
import os
from typing import Optional

from .api.middleware import get_request_id

_TRUTHY = ("1", "true", "yes", "on")
_LEVEL_NAMES = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

# Third-party loggers that flood the console at DEBUG.
NOISY_LOGGERS: dict[str, int] = {
    "aiohttp.access": logging.WARNING,
    "aiohttp.server": logging.WARNING,
    "aiohttp.web": logging.INFO,
    "aiohttp.web_log": logging.WARNING,
    "httpx": logging.WARNING,
    "httpcore": logging.WARNING,
    "asyncio": logging.WARNING,
    "PIL": logging.INFO,
}

PACKAGE_LOGGERS = (
    "hastatus",
    "hastatus.api",
    "hastatus.core",
    "hastatus.render",
)


class CorrelationIdFilter(logging.Filter):
    """Add the current request id to every log record."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = get_request_id()
        return True


def debug_requested() -> bool:
    """True when HASTATUS_DEBUG holds a truthy value."""
    return os.getenv("HASTATUS_DEBUG", "").strip().lower() in _TRUTHY


def configure_logging(
    debug_mode: bool = False,
    force_debug: Optional[bool] = None,
    log_level: Optional[str] = None,
) -> None:
    """
    Configure logger levels for hastatus and its dependencies.

    Args:
        debug_mode: Whether to enable debug logging for hastatus modules
        force_debug: Override debug mode setting (None to use env var detection)
        log_level: Resolved root level from Config; replaces HASTATUS_LOG_LEVEL
            detection and yields to forced debug

    Environment Variables:
        HASTATUS_DEBUG: Set to '1', 'true', 'yes' to force debug logging
        HASTATUS_LOG_LEVEL: Override root log level (DEBUG, INFO, WARNING, ERROR)
    """
    if force_debug is not None:
        final_debug = force_debug
    else:
        final_debug = debug_requested() or debug_mode

    root_level = logging.DEBUG if final_debug else logging.INFO
    if log_level is None:
        requested = os.getenv("HASTATUS_LOG_LEVEL", "").upper()
    else:
        requested = "" if final_debug else log_level.strip().upper()
    if requested in _LEVEL_NAMES:
        root_level = getattr(logging, requested)

    root_logger = logging.getLogger()
    root_logger.setLevel(root_level)

    correlation_filter = CorrelationIdFilter()
    if not root_logger.handlers:
        handler = logging.StreamHandler()
        handler.setLevel(root_level)
        handler.setFormatter(
            logging.Formatter("[%(asctime)s] [%(request_id)s] %(levelname)s - %(name)s - %(message)s")
        )
        handler.addFilter(correlation_filter)
        root_logger.addHandler(handler)
    else:
        # Keep the colored handler from _init_logging
        for existing_handler in root_logger.handlers:
            if not any(isinstance(f, CorrelationIdFilter) for f in existing_handler.filters):
                existing_handler.addFilter(correlation_filter)

    logger_config = dict(NOISY_LOGGERS)
    package_level = logging.DEBUG if final_debug else logging.INFO
    for name in PACKAGE_LOGGERS:
        logger_config[name] = package_level

    for logger_name, level in logger_config.items():
        logging.getLogger(logger_name).setLevel(level)

    if final_debug:
        root_logger.info("Debug logging enabled for hastatus; third-party debug logs suppressed")
    else:
        root_logger.debug("Production logging configuration applied")


def get_logging_status() -> dict[str, str]:
    """Map key logger names to their current level names."""
    status = {"root": logging.getLevelName(logging.getLogger().level)}
    for logger_name in ("hastatus", "aiohttp.access", "httpx", "asyncio"):
        status[logger_name] = logging.getLevelName(logging.getLogger(logger_name).level)
    return status
