"""Exception classes for memomark operations."""

from typing import Any, Dict


class MemomarkError(Exception):
    """Base class for memomark exceptions."""

    def __init__(self, message: str, details: Dict[str, Any] | None = None) -> None:
        """
        Initialize the exception.

        Args:
            message: Error message
            details: Optional dictionary of additional error details
        """
        super().__init__(message)
        self.details = details or {}


class ImageResolutionError(MemomarkError):
    """Raised when an image reference cannot be resolved to image bytes."""


class MemomarkSettingsError(MemomarkError):
    """Raised when settings cannot be loaded."""
