"""
Custom exceptions for the passbook parser.

All passbook-specific exceptions inherit from PassbookError for easy catching.
"""


class PassbookError(Exception):
    """Base exception for all passbook errors."""

    def __init__(self, message: str, code: str = None):
        super().__init__(message)
        self.message = message
        self.code = code


class ExtractionError(PassbookError):
    """Raised when text cannot be extracted from a passbook document."""

    def __init__(self, message: str, source: str = None, code: str = "EXTRACTION_ERROR"):
        super().__init__(message, code)
        self.source = source


class InvalidInputError(PassbookError, TypeError):
    """Raised when the parser is handed something other than decoded text."""

    def __init__(self, received: type, expected: str = "str", code: str = "INVALID_INPUT"):
        super().__init__(
            f"Expected {expected}, got {received.__name__}",
            code
        )
        self.received = received
        self.expected = expected


class ConfigurationError(PassbookError):
    """Settings file missing or malformed."""

    def __init__(self, message: str, path: str = None, code: str = "CONFIG_ERROR"):
        super().__init__(message, code)
        self.path = path
