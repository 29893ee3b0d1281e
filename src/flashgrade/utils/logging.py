"""
Logging Configuration

Centralized logging setup with configurable levels, file rotation,
and structured logging for the grading system.
"""

import json
import logging
import logging.handlers
import sys
from datetime import datetime, timezone
from pathlib import Path

from ..core.config import get_config


class JSONFormatter(logging.Formatter):
    """Custom JSON formatter for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON."""
        log_entry = {
            'timestamp': datetime.now(timezone.utc).isoformat(),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
            'module': record.module,
            'function': record.funcName,
            'line': record.lineno
        }

        # Add extra fields if present
        if hasattr(record, 'card_id'):
            log_entry['card_id'] = record.card_id
        if hasattr(record, 'match_type'):
            log_entry['match_type'] = record.match_type

        # Add exception info if present
        if record.exc_info:
            log_entry['exception'] = self.formatException(record.exc_info)

        return json.dumps(log_entry, ensure_ascii=False)


def setup_logging(config=None, enable_json: bool = False) -> None:
    """
    Set up logging configuration for the application.

    Args:
        config: Optional configuration object (uses default if None)
        enable_json: Enable JSON formatted logging
    """
    if config is None:
        config = get_config()

    # Ensure logs directory exists
    log_file = Path(config.logging.file)
    log_file.parent.mkdir(parents=True, exist_ok=True)

    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, config.logging.level.upper()))

    # Clear any existing handlers
    root_logger.handlers.clear()

    # Console handler - use console_level for reduced terminal output
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(getattr(logging, config.logging.console_level.upper()))

    # File handler with rotation - use main level for comprehensive file logging
    file_handler = logging.handlers.RotatingFileHandler(
        filename=log_file,
        maxBytes=_parse_size(config.logging.max_size),
        backupCount=config.logging.backup_count,
        encoding='utf-8'
    )
    file_handler.setLevel(getattr(logging, config.logging.level.upper()))

    if enable_json:
        json_formatter = JSONFormatter()
        console_handler.setFormatter(json_formatter)
        file_handler.setFormatter(json_formatter)
    else:
        console_handler.setFormatter(logging.Formatter(config.logging.format))
        file_handler.setFormatter(logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(module)s:%(funcName)s:%(lineno)d - %(message)s'
        ))

    root_logger.addHandler(console_handler)
    root_logger.addHandler(file_handler)

    logger = logging.getLogger(__name__)
    logger.info(f"Logging configured - Console: {config.logging.console_level}, File: {config.logging.level}, Path: {log_file}")


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance for the given name.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured logger instance
    """
    return logging.getLogger(name)


def _parse_size(size_str: str) -> int:
    """
    Parse size string (e.g., '10MB') to bytes.

    Args:
        size_str: Size string like '10MB', '1GB', etc.

    Returns:
        Size in bytes
    """
    size_str = size_str.upper().strip()

    # Longest suffix first so 'MB' is not read as 'B'
    multipliers = [
        ('GB', 1024 ** 3),
        ('MB', 1024 ** 2),
        ('KB', 1024),
        ('B', 1),
    ]

    for unit, multiplier in multipliers:
        if size_str.endswith(unit):
            number_str = size_str[:-len(unit)].strip()
            try:
                return int(float(number_str) * multiplier)
            except ValueError:
                break

    # Default to 10MB if parsing fails
    return 10 * 1024 * 1024


class PerformanceTimer:
    """Context manager for timing operations."""

    def __init__(self, operation: str, logger: logging.Logger = None):
        """
        Initialize performance timer.

        Args:
            operation: Description of the operation being timed
            logger: Logger instance to use
        """
        self.operation = operation
        self.logger = logger or get_logger(__name__)
        self.start_time = None
        self.duration = 0.0

    def __enter__(self):
        """Start timing."""
        self.start_time = datetime.now()
        self.logger.debug(f"Started {self.operation}")
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """End timing and log duration."""
        self.duration = (datetime.now() - self.start_time).total_seconds()

        if exc_type is None:
            self.logger.info(f"Completed {self.operation} in {self.duration:.3f}s")
        else:
            self.logger.error(f"Failed {self.operation} after {self.duration:.3f}s: {exc_val}")
