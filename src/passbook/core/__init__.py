"""Core passbook infrastructure: exceptions and settings."""

from .exceptions import (
    PassbookError,
    ExtractionError,
    InvalidInputError,
    ConfigurationError,
)
from .settings import ParserSettings, DEFAULT_SETTINGS, SETTINGS_ENV_VAR

__all__ = [
    "PassbookError",
    "ExtractionError",
    "InvalidInputError",
    "ConfigurationError",
    "ParserSettings",
    "DEFAULT_SETTINGS",
    "SETTINGS_ENV_VAR",
]
