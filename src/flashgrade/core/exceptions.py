"""
Custom Exception Classes

Application-specific exception classes raised at the edges of the grading
system: configuration loading, rule validation and card deck loading.
Grading itself never raises on string input.
"""

from typing import Optional, Any, Dict


class FlashGradeException(Exception):
    """Base exception class for all flashgrade errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} - Details: {self.details}"
        return self.message


class ConfigurationError(FlashGradeException):
    """Raised when there's an issue with configuration setup or validation."""
    pass


class RuleValidationError(FlashGradeException):
    """Raised when a grading rule is malformed."""

    def __init__(self, message: str, field_name: Optional[str] = None,
                 invalid_value: Optional[Any] = None, **kwargs):
        super().__init__(message, kwargs)
        self.field_name = field_name
        self.invalid_value = invalid_value


class CardDataError(FlashGradeException):
    """Raised when a card deck cannot be loaded."""

    def __init__(self, message: str, file_path: Optional[str] = None,
                 card_id: Optional[str] = None, **kwargs):
        super().__init__(message, kwargs)
        self.file_path = file_path
        self.card_id = card_id


class GradingError(FlashGradeException):
    """Raised when a grading request itself is malformed."""

    def __init__(self, message: str, card_id: Optional[str] = None,
                 user_input: Optional[str] = None, **kwargs):
        super().__init__(message, kwargs)
        self.card_id = card_id
        self.user_input = user_input
