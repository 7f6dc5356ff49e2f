"""
Logging configuration for fsignore.

Provides environment-aware logging that:
- Writes to stderr so walk output on stdout stays clean
- Outputs JSON when FSIGNORE_LOG_JSON is set
- Includes custom TRACE level for per-rule cascade tracing
"""

import sys
import logging
import json
import os
from datetime import datetime, timezone
from typing import Optional, Any

# Define TRACE level (lower number = more detailed)
TRACE_LEVEL = 5
logging.addLevelName(TRACE_LEVEL, "TRACE")


def trace(self, message, *args, **kwargs):
    if self.isEnabledFor(TRACE_LEVEL):
        self._log(TRACE_LEVEL, message, args, **kwargs)


def add_trace_to_logger():
    """Ensure trace method is available on all logger instances"""
    if not hasattr(logging.Logger, 'trace'):
        logging.Logger.trace = trace


add_trace_to_logger()


class JsonFormatter(logging.Formatter):
    """JSON formatter for machine-read logs"""

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            'timestamp': datetime.now(timezone.utc).isoformat(),
            'level': record.levelname,
            'component': record.name,
            'message': record.getMessage(),
            'pid': os.getpid(),
        }

        # Add any extra fields
        if hasattr(record, 'extra'):
            log_data.update(record.extra)

        if record.exc_info:
            log_data['exception'] = self.formatException(record.exc_info)

        return json.dumps(log_data)


def _resolve_level(level_str: str) -> int:
    if level_str.upper() == 'TRACE':
        return TRACE_LEVEL
    return getattr(logging, level_str.upper(), logging.INFO)


def configure_logging(log_level: Optional[str] = None, json_output: Optional[bool] = None) -> None:
    """
    Configure logging based on environment.

    Args:
        log_level: Override log level (defaults to FSIGNORE_LOG_LEVEL, then LOG_LEVEL, then WARNING)
        json_output: Force JSON output (defaults to FSIGNORE_LOG_JSON env var)
    """
    add_trace_to_logger()
    level_str = log_level or os.environ.get('FSIGNORE_LOG_LEVEL') or os.environ.get('LOG_LEVEL', 'WARNING')
    level = _resolve_level(level_str)

    if json_output is None:
        json_output = os.environ.get('FSIGNORE_LOG_JSON', '').lower() == 'true'

    logger = logging.getLogger('fsignore')
    logger.handlers = []

    handler = logging.StreamHandler(sys.stderr)
    if json_output:
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
        ))

    logger.addHandler(handler)
    logger.setLevel(level)
    logger.debug(f"Logging configured - Level: {level_str.upper()}, JSON: {json_output}")


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance with the given name.

    Args:
        name: Logger name (usually __name__)

    Returns:
        Logger instance with the trace method available
    """
    add_trace_to_logger()
    return logging.getLogger(name)


def log_with_context(
    logger: logging.Logger,
    level: int,
    message: str,
    **context: Any
) -> None:
    """
    Log a message with additional context fields.

    Args:
        logger: Logger instance
        level: Log level (e.g., logging.INFO)
        message: Log message
        **context: Additional fields to include in structured logs
    """
    extra = {'extra': context} if context else {}
    logger.log(level, message, extra=extra)
