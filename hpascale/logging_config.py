"""
Structured Logging Configuration
JSON or plain-text logging on stderr, keeping stdout for command output
"""

import logging
import sys
from typing import Optional

from pythonjsonlogger import jsonlogger


def setup_structured_logging(
    log_level: str = "INFO",
    json_format: bool = False,
    extra_fields: Optional[dict] = None
) -> logging.Logger:
    """
    Setup structured logging

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
        json_format: Emit one JSON object per line instead of plain text
        extra_fields: Static fields added to every JSON log entry

    Returns:
        Configured root logger
    """
    level = getattr(logging, log_level.upper(), logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    # Remove existing handlers
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)

    if json_format:
        formatter = jsonlogger.JsonFormatter(
            '%(timestamp)s %(levelname)s %(name)s %(message)s',
            timestamp=True,
            static_fields=extra_fields or {}
        )
    else:
        formatter = logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )
    handler.setFormatter(formatter)

    root_logger.addHandler(handler)

    # The kubernetes client is chatty at DEBUG
    logging.getLogger("urllib3").setLevel(max(level, logging.WARNING))

    return root_logger


def get_logger(name: str, extra_context: Optional[dict] = None) -> logging.Logger:
    """
    Get a logger with optional extra context

    Args:
        name: Logger name (usually __name__)
        extra_context: Additional context to include in all log messages

    Returns:
        Logger instance
    """
    logger = logging.getLogger(name)

    if extra_context:
        class ContextAdapter(logging.LoggerAdapter):
            def process(self, msg, kwargs):
                kwargs.setdefault('extra', {}).update(self.extra)
                return msg, kwargs

        logger = ContextAdapter(logger, extra_context)

    return logger
