"""Custom exceptions for text patch operations."""

from typing import Any


class TextPatchError(Exception):
    """Base exception for text patch operations."""

    def __init__(self, message: str, error_details: dict[str, Any] | None = None):
        """
        Initialize the exception.

        Args:
            message: Error message
            error_details: Optional dictionary with detailed error information
        """
        super().__init__(message)
        self.error_details = error_details


class TextPatchAnchorError(TextPatchError):
    """Raised when a rule's anchor cannot be found and strict mode is enabled."""
