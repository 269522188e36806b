"""Custom exceptions for loading and parsing documents."""

from typing import Any


class DocumentError(Exception):
    """Base exception for document operations."""

    def __init__(self, message: str, error_details: dict[str, Any] | None = None):
        """
        Initialize the exception.

        Args:
            message: Error message
            error_details: Optional dictionary with detailed error information
        """
        super().__init__(message)
        self.error_details = error_details


class ParseError(DocumentError):
    """Raised when source text cannot be interpreted as a document."""


class DocumentIoError(DocumentError):
    """Raised when the source file cannot be read."""
