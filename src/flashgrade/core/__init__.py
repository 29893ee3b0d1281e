"""
Core Module

Configuration management and custom exceptions used across the package.
"""

from .config import get_config, set_config, reload_config, AppConfig, GradingConfig, LoggingConfig
from .exceptions import (
    FlashGradeException,
    ConfigurationError,
    RuleValidationError,
    CardDataError,
    GradingError,
)

__all__ = [
    "get_config",
    "set_config",
    "reload_config",
    "AppConfig",
    "GradingConfig",
    "LoggingConfig",
    "FlashGradeException",
    "ConfigurationError",
    "RuleValidationError",
    "CardDataError",
    "GradingError",
]
