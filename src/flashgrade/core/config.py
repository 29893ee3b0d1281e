"""
Configuration Management

Centralized configuration management with YAML file support
and environment variable overrides.
"""

import copy
import os
from dataclasses import dataclass, field, asdict
from pathlib import Path
from typing import Optional, Dict, Any

import yaml
from dotenv import load_dotenv

from .exceptions import ConfigurationError

# Load .env file if it exists
load_dotenv()


@dataclass
class GradingConfig:
    """Answer grading settings."""
    default_ngram_threshold: float = 0.75
    ngram_size: int = 3
    min_substring_length: int = 3  # input must be longer than this for the substring fallback
    number_word: str = "en"


@dataclass
class LoggingConfig:
    """Logging configuration."""
    level: str = "INFO"
    console_level: str = "WARNING"  # Separate level for console output
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    file: str = "logs/flashgrade.log"
    max_size: str = "10MB"
    backup_count: int = 5


@dataclass
class AppConfig:
    """Main application configuration."""
    name: str = "flashgrade"
    version: str = "1.0.0"
    environment: str = "production"
    debug: bool = False

    grading: GradingConfig = field(default_factory=GradingConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def from_yaml(cls, config_path: Path) -> "AppConfig":
        """Load configuration from YAML file."""
        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                config_data = yaml.safe_load(f) or {}
        except (yaml.YAMLError, UnicodeDecodeError) as e:
            raise ConfigurationError(f"Invalid YAML in {config_path}: {e}")
        except OSError as e:
            raise ConfigurationError(f"Could not read configuration file {config_path}: {e}")

        if not isinstance(config_data, dict):
            raise ConfigurationError(f"Configuration root must be a mapping: {config_path}")

        return cls.from_dict(config_data)

    @classmethod
    def from_dict(cls, config_data: Dict[str, Any]) -> "AppConfig":
        """Build configuration from a plain dictionary."""
        # Apply environment variable overrides
        config_data = cls._apply_env_overrides(copy.deepcopy(config_data))

        # Handle nested app configuration structure
        if 'app' in config_data:
            app_config = config_data.pop('app')
            config_data.update(app_config)

        try:
            if 'grading' in config_data and isinstance(config_data['grading'], dict):
                config_data['grading'] = GradingConfig(**config_data['grading'])

            if 'logging' in config_data and isinstance(config_data['logging'], dict):
                config_data['logging'] = LoggingConfig(**config_data['logging'])

            config = cls(**config_data)
        except TypeError as e:
            raise ConfigurationError(f"Unknown configuration key: {e}")

        config._coerce_types()
        config.validate()
        return config

    @staticmethod
    def _apply_env_overrides(config_data: Dict[str, Any]) -> Dict[str, Any]:
        """Apply environment variable overrides to configuration."""
        env_mappings = {
            'FLASHGRADE_LOG_LEVEL': ['logging', 'level'],
            'FLASHGRADE_NGRAM_THRESHOLD': ['grading', 'default_ngram_threshold'],
            'FLASHGRADE_NUMBER_WORD': ['grading', 'number_word'],
            'DEBUG': ['debug'],
            'ENVIRONMENT': ['environment'],
        }

        for env_var, config_path in env_mappings.items():
            env_value = os.getenv(env_var)
            if env_value:
                current = config_data
                for key in config_path[:-1]:
                    current = current.setdefault(key, {})
                current[config_path[-1]] = env_value

        return config_data

    def _coerce_types(self) -> None:
        """Convert string values coming from environment overrides."""
        if isinstance(self.debug, str):
            self.debug = self.debug.strip().lower() in ('1', 'true', 'yes', 'on')
        try:
            self.grading.default_ngram_threshold = float(self.grading.default_ngram_threshold)
            self.grading.ngram_size = int(self.grading.ngram_size)
            self.grading.min_substring_length = int(self.grading.min_substring_length)
        except (TypeError, ValueError) as e:
            raise ConfigurationError(f"Invalid grading setting: {e}")

    def validate(self) -> None:
        """Check value ranges, raising ConfigurationError on the first problem."""
        grading = self.grading
        if not 0.0 <= grading.default_ngram_threshold <= 1.0:
            raise ConfigurationError(
                "grading.default_ngram_threshold must be between 0 and 1",
                {'value': grading.default_ngram_threshold}
            )
        if grading.ngram_size < 1:
            raise ConfigurationError("grading.ngram_size must be positive",
                                     {'value': grading.ngram_size})
        if grading.min_substring_length < 0:
            raise ConfigurationError("grading.min_substring_length cannot be negative",
                                     {'value': grading.min_substring_length})
        if not grading.number_word or not grading.number_word.strip():
            raise ConfigurationError("grading.number_word cannot be empty")

        valid_levels = ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL')
        for name in ('level', 'console_level'):
            value = getattr(self.logging, name)
            if str(value).upper() not in valid_levels:
                raise ConfigurationError(f"logging.{name} must be one of {valid_levels}",
                                         {'value': value})

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to a plain dictionary."""
        return asdict(self)


# Global configuration instance
_config: Optional[AppConfig] = None


def get_config(config_path: Optional[Path] = None) -> AppConfig:
    """Get the application configuration instance."""
    global _config

    if _config is None:
        if config_path is None:
            # Default configuration path
            config_path = Path("config/default.yaml")

        if config_path.exists():
            _config = AppConfig.from_yaml(config_path)
        else:
            # Use default configuration if file doesn't exist
            _config = AppConfig.from_dict({})

    return _config


def set_config(config: AppConfig) -> None:
    """Set the global configuration instance (useful for testing)."""
    global _config
    _config = config


def reload_config(config_path: Optional[Path] = None) -> AppConfig:
    """Reload configuration from file."""
    global _config
    _config = None
    return get_config(config_path)
