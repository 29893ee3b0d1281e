"""
Pytest Configuration

Global test configuration and fixtures for the flashgrade test suite.
"""

import logging
import sys
import tempfile
from pathlib import Path

import pytest

# Add src to Python path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from flashgrade.core import config as config_module
from flashgrade.evaluation.matcher import AnswerMatcher
from flashgrade.evaluation.rules import GradingRule

ENV_OVERRIDES = (
    'FLASHGRADE_LOG_LEVEL',
    'FLASHGRADE_NGRAM_THRESHOLD',
    'FLASHGRADE_NUMBER_WORD',
    'DEBUG',
    'ENVIRONMENT',
)

EXAMPLE_DECK = Path(__file__).parent.parent / "examples" / "cards.yaml"


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Remove configuration overrides and reset the global configuration."""
    for name in ENV_OVERRIDES:
        monkeypatch.delenv(name, raising=False)
    config_module.set_config(None)
    yield
    config_module.set_config(None)


@pytest.fixture(autouse=True)
def restore_root_logger():
    """Undo handler changes made by setup_logging."""
    root_logger = logging.getLogger()
    handlers = list(root_logger.handlers)
    level = root_logger.level
    yield
    for handler in list(root_logger.handlers):
        if handler not in handlers:
            root_logger.removeHandler(handler)
            handler.close()
    for handler in handlers:
        if handler not in root_logger.handlers:
            root_logger.addHandler(handler)
    root_logger.setLevel(level)


@pytest.fixture
def temp_dir():
    """Provide a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as temp_dir:
        yield Path(temp_dir)


@pytest.fixture
def matcher():
    """Matcher with the default settings."""
    return AnswerMatcher()


@pytest.fixture
def monotheism_rule():
    return GradingRule(
        accepted=['Tron på en enda Gud', 'Tro på en gud'],
        concept_groups=[['tro', 'tron', 'finns'], ['en', 'enda', 'bara'], ['gud']],
        ngram_threshold=0.7,
    )


@pytest.fixture
def abraham_rule():
    return GradingRule(accepted=['Abraham', 'Abram', 'Ibrahim'], ngram_threshold=0.6)


@pytest.fixture
def middle_east_rule():
    return GradingRule(
        accepted=['Mellanöstern', 'Mellan östern', 'Främre orienten'],
        ngram_threshold=0.8,
    )


@pytest.fixture
def chanukka_rule():
    return GradingRule(
        accepted=['Chanukka', 'Chanukkah', 'Hanukka', 'Channukka', 'Ljusfesten'],
        ngram_threshold=0.6,
    )


@pytest.fixture
def example_deck_path():
    return EXAMPLE_DECK
