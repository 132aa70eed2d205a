"""Custom exceptions for recyclip."""

from __future__ import annotations

from typing import Optional


DISPLAY_UNAVAILABLE_MESSAGE = (
    "Display not available. Please start your X or Wayland session before running recyclip"
)


class RecyclipError(Exception):
    """Base exception for all recyclip errors."""

    def __init__(self, message: str, original_error: Optional[BaseException] = None) -> None:
        super().__init__(message)
        self.original_error = original_error

    def __str__(self) -> str:
        base_msg = super().__str__()
        if self.original_error:
            return f"{base_msg} (Caused by: {type(self.original_error).__name__}: {self.original_error})"
        return base_msg


class DisplayUnavailableError(RecyclipError):
    """The display/session backing the selection buffers cannot be reached."""

    def __init__(self, message: str = DISPLAY_UNAVAILABLE_MESSAGE,
                 original_error: Optional[BaseException] = None) -> None:
        super().__init__(message, original_error)


class ConfigurationError(RecyclipError):
    """Raised when settings.ini holds an unusable value."""
    pass
