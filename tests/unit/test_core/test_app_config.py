"""
Unit tests for AppConfig and the global configuration helpers.
"""

from pathlib import Path

import pytest
import yaml

from flashgrade.core.config import (
    AppConfig, GradingConfig, LoggingConfig, get_config, set_config, reload_config
)
from flashgrade.core.exceptions import ConfigurationError, FlashGradeException


class TestAppConfig:
    """Test cases for AppConfig."""

    def test_defaults(self):
        config = AppConfig()
        assert config.grading == GradingConfig()
        assert config.grading.default_ngram_threshold == 0.75
        assert config.grading.ngram_size == 3
        assert config.grading.min_substring_length == 3
        assert config.grading.number_word == "en"
        assert config.logging.level == "INFO"

    def test_from_yaml(self, temp_dir):
        path = temp_dir / "config.yaml"
        path.write_text(yaml.safe_dump({
            'app': {'name': 'Test', 'environment': 'test'},
            'grading': {'default_ngram_threshold': 0.6, 'number_word': 'one'},
            'logging': {'level': 'DEBUG', 'file': str(temp_dir / 'test.log')},
        }), encoding='utf-8')

        config = AppConfig.from_yaml(path)
        assert config.name == 'Test'
        assert config.environment == 'test'
        assert config.grading.default_ngram_threshold == 0.6
        assert config.grading.number_word == 'one'
        assert config.grading.ngram_size == 3
        assert config.logging == LoggingConfig(level='DEBUG', file=str(temp_dir / 'test.log'))

    def test_repository_default_file(self):
        path = Path(__file__).parent.parent.parent.parent / "config" / "default.yaml"
        config = AppConfig.from_yaml(path)
        assert config.grading == GradingConfig()

    def test_empty_yaml(self, temp_dir):
        path = temp_dir / "config.yaml"
        path.write_text("", encoding='utf-8')
        assert AppConfig.from_yaml(path).grading == GradingConfig()

    def test_invalid_yaml(self, temp_dir):
        path = temp_dir / "config.yaml"
        path.write_text("grading: [unclosed", encoding='utf-8')
        with pytest.raises(ConfigurationError):
            AppConfig.from_yaml(path)

    def test_invalid_utf8_yaml(self, temp_dir):
        path = temp_dir / "config.yaml"
        path.write_bytes(b"app:\n  name: Fl\xe4shgrade\n")
        with pytest.raises(ConfigurationError):
            AppConfig.from_yaml(path)

    def test_unknown_key(self):
        with pytest.raises(ConfigurationError):
            AppConfig.from_dict({'grading': {'fuzzy_threshold': 0.8}})

    @pytest.mark.parametrize("grading", [
        {'default_ngram_threshold': 1.2},
        {'default_ngram_threshold': 'high'},
        {'ngram_size': 0},
        {'min_substring_length': -1},
        {'number_word': ' '},
    ])
    def test_invalid_grading_values(self, grading):
        with pytest.raises(ConfigurationError):
            AppConfig.from_dict({'grading': grading})

    def test_invalid_log_level(self):
        with pytest.raises(ConfigurationError):
            AppConfig.from_dict({'logging': {'level': 'LOUD'}})

    def test_configuration_error_is_flashgrade_exception(self):
        with pytest.raises(FlashGradeException):
            AppConfig.from_dict({'grading': {'ngram_size': 0}})

    def test_from_dict_does_not_mutate_input(self):
        data = {'grading': {'default_ngram_threshold': 0.6}}
        AppConfig.from_dict(data)
        assert data == {'grading': {'default_ngram_threshold': 0.6}}

    def test_env_overrides(self, monkeypatch):
        monkeypatch.setenv('FLASHGRADE_NGRAM_THRESHOLD', '0.5')
        monkeypatch.setenv('FLASHGRADE_NUMBER_WORD', 'one')
        monkeypatch.setenv('FLASHGRADE_LOG_LEVEL', 'DEBUG')
        monkeypatch.setenv('DEBUG', 'true')

        config = AppConfig.from_dict({'grading': {'default_ngram_threshold': 0.9}})
        assert config.grading.default_ngram_threshold == 0.5
        assert config.grading.number_word == 'one'
        assert config.logging.level == 'DEBUG'
        assert config.debug is True

    def test_to_dict(self):
        data = AppConfig().to_dict()
        assert data['grading']['default_ngram_threshold'] == 0.75
        assert data['logging']['file'] == "logs/flashgrade.log"


class TestGlobalConfig:
    """Test cases for get_config, set_config and reload_config."""

    def test_get_config_missing_file_uses_defaults(self, temp_dir):
        config = get_config(temp_dir / "missing.yaml")
        assert config.grading == GradingConfig()

    def test_get_config_is_cached(self, temp_dir):
        first = get_config(temp_dir / "missing.yaml")
        assert get_config() is first

    def test_set_config(self):
        custom = AppConfig(name="custom")
        set_config(custom)
        assert get_config() is custom

    def test_reload_config(self, temp_dir):
        set_config(AppConfig(name="old"))
        path = temp_dir / "config.yaml"
        path.write_text(yaml.safe_dump({'app': {'name': 'new'}}), encoding='utf-8')
        assert reload_config(path).name == "new"
