"""
Theme Park Wait Summary - Structured Logging
Provides JSON-formatted logging for feed fetches and aggregation runs.
"""

import logging
import sys
from pythonjsonlogger import jsonlogger

from .config import LOG_LEVEL, config


def setup_logger(name: str = __name__) -> logging.Logger:
    """
    Configure structured JSON logger.

    Args:
        name: Logger name (typically __name__ from calling module)

    Returns:
        Configured logger instance

    Example:
        >>> logger = setup_logger(__name__)
        >>> logger.info("Feed fetched", extra={
        ...     "park": "disneyland",
        ...     "duration_seconds": 0.42
        ... })
    """
    logger = logging.getLogger(name)

    # Prevent duplicate handlers
    if logger.handlers:
        return logger

    level = getattr(logging, LOG_LEVEL.upper(), logging.INFO)
    logger.setLevel(level)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)

    formatter = jsonlogger.JsonFormatter(
        '%(asctime)s %(name)s %(levelname)s %(message)s',
        datefmt='%Y-%m-%dT%H:%M:%S'
    )
    handler.setFormatter(formatter)

    logger.addHandler(handler)

    # Don't propagate to root logger
    logger.propagate = False

    return logger


# Global logger instance
logger = setup_logger('themepark_waits')


def log_feed_fetch_start(park: str, feed_url: str):
    """Log the start of a feed download."""
    logger.info("Feed fetch started", extra={
        "event_type": "feed_fetch_start",
        "park": park,
        "feed_url": feed_url,
        "environment": config.environment
    })


def log_feed_fetch_complete(park: str, duration_seconds: float, bytes_received: int):
    """Log a successful feed download."""
    logger.info("Feed fetch completed", extra={
        "event_type": "feed_fetch_complete",
        "park": park,
        "duration_seconds": duration_seconds,
        "bytes_received": bytes_received
    })


def log_feed_fetch_error(error: Exception, park: str = None):
    """Log a failed feed download with context."""
    logger.error("Feed fetch failed", extra={
        "event_type": "feed_fetch_error",
        "error_type": type(error).__name__,
        "error_message": str(error),
        "park": park
    }, exc_info=True)


def log_aggregation_complete(park: str, rides_tracked: int, latest_timestamp: str = None):
    """Log the outcome of one CSV-to-summary aggregation."""
    logger.info("Aggregation completed", extra={
        "event_type": "aggregation_complete",
        "park": park,
        "rides_tracked": rides_tracked,
        "latest_timestamp": latest_timestamp
    })
