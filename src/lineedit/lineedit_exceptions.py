"""Custom exceptions for line edit operations."""

from typing import Any


class LineEditError(Exception):
    """Base exception for line edit operations."""

    def __init__(self, message: str, error_details: dict[str, Any] | None = None):
        """
        Initialize the exception.

        Args:
            message: Error message
            error_details: Optional dictionary with detailed error information
        """
        super().__init__(message)
        self.error_details = error_details


class LineEditParseError(LineEditError):
    """Raised when an edit batch cannot be parsed from its wire format."""


class LineEditValidationError(LineEditError):
    """Raised when an edit batch is structurally invalid."""


class LineEditApplicationError(LineEditError):
    """Raised when a document surface rejects a range edit."""


class LineEditConfigError(LineEditError):
    """Raised when settings or history files cannot be loaded."""


class LineEditStaleDocumentError(LineEditError):
    """Raised when a document changed after edits were requested for it."""
