"""
Exception classes for the competition results system.

Centralized location for all custom exceptions to avoid circular imports.
"""

from typing import Any


class ResultStoreError(Exception):
    """Base exception for all result store errors."""
    pass


class ValidationError(ResultStoreError):
    """Submission rejected because a field is malformed or out of range."""

    def __init__(self, message: str, field: str | None = None, value: Any = None):
        super().__init__(message)
        self.field = field
        self.value = value


class ConflictError(ResultStoreError):
    """Results already exist for the competition/judge pair."""
    pass


class NotFoundError(ResultStoreError):
    """No results exist for the competition/judge pair."""
    pass


class ConfigurationError(Exception):
    """Base exception for configuration-related errors."""
    pass
