"""
Fetch Error Handler - User-facing messages for failed fetches

Turns FetchError instances (or any unexpected exception raised while reading a
file) into a short title, a message naming the file, and the engine detail.
"""

from dataclasses import dataclass

from ..core.errors import (
    EngineConnectionError,
    ExecutionError,
    FetchError,
    InvalidPageError,
    PrepareError,
    UnsupportedFileTypeError,
)

import logging
logger = logging.getLogger(__name__)


@dataclass
class FetchErrorInfo:
    """Structured fetch error information."""
    title: str  # Short error title
    message: str  # User-friendly message naming the file
    detail: str  # Engine error text for debugging

    def format_full(self) -> str:
        """Format complete error message for display."""
        parts = [self.title, "", self.message]
        if self.detail:
            parts.extend(["", "Details:", self.detail])
        return "\n".join(parts)

    def format_short(self) -> str:
        """Format short error message."""
        return self.message


# (error type, title), most specific first
_TITLES = [
    (InvalidPageError, "Invalid page"),
    (UnsupportedFileTypeError, "Unsupported file type"),
    (EngineConnectionError, "Engine unavailable"),
    (PrepareError, "Query could not be prepared"),
    (ExecutionError, "Query failed"),
    (FetchError, "Error reading file"),
]


def format_fetch_error(error: Exception, file_path: str = "") -> FetchErrorInfo:
    """
    Build display information for a failed fetch.

    Args:
        error: Exception raised by fetch()
        file_path: File being read (defaults to the path carried by the error)

    Returns:
        FetchErrorInfo whose short form is "Error reading file '<path>'"
    """
    path = file_path or getattr(error, "file_path", "")
    title = "Unexpected error"
    for error_type, error_title in _TITLES:
        if isinstance(error, error_type):
            title = error_title
            break

    if isinstance(error, FetchError):
        detail = error.message
    else:
        detail = f"{type(error).__name__}: {error}"
        logger.debug(f"Unexpected error while reading '{path}': {detail}")

    return FetchErrorInfo(
        title=title,
        message=f"Error reading file '{path}'",
        detail=detail,
    )
