"""Custom exceptions for the portable patcher."""

from typing import Any


class PortablePatchError(Exception):
    """Base exception for portable patch operations."""

    def __init__(self, message: str, error_details: dict[str, Any] | None = None):
        """
        Initialize the exception.

        Args:
            message: Error message
            error_details: Optional dictionary with detailed error information
        """
        super().__init__(message)
        self.error_details = error_details


class AppLayoutError(PortablePatchError):
    """Raised when the application directory layout is not what we expect."""


class BackupMissingError(PortablePatchError):
    """Raised when a revert is requested but there is no backup to restore."""


class PortablePatchConfigError(PortablePatchError):
    """Raised when a configuration file cannot be loaded."""
