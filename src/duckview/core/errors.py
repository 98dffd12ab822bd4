"""
Fetch Errors - Exceptions raised while fetching a page.

Every error carries the path of the file being read so the viewer can tell the
user which file failed. Statement-level errors also name the statement.
"""

from enum import Enum
from typing import Optional


class StatementKind(Enum):
    """The three statements run for every fetch."""
    DATA = "data"
    SCHEMA = "schema"
    COUNT = "count"


class FetchError(Exception):
    """Base class for all fetch failures."""

    def __init__(self, message: str, file_path: str = ""):
        super().__init__(message)
        self.message = message
        self.file_path = file_path


class InvalidPageError(FetchError):
    """Page number (or page size) is below 1."""


class UnsupportedFileTypeError(FetchError):
    """The file extension has no registered scan function."""

    def __init__(self, file_path: str, extension: str = ""):
        shown = f".{extension}" if extension else "(none)"
        super().__init__(f"Unsupported or unknown file type {shown}", file_path)
        self.extension = extension


class EngineConnectionError(FetchError):
    """The in-memory engine session could not be opened."""


class StatementError(FetchError):
    """A failure attributed to one of the three statements."""

    action = "run"

    def __init__(self, statement: StatementKind, file_path: str, detail: str,
                 sql: Optional[str] = None):
        super().__init__(
            f"Failed to {self.action} {statement.value} query on '{file_path}': {detail}",
            file_path,
        )
        self.statement = statement
        self.detail = detail
        self.sql = sql


class PrepareError(StatementError):
    """A statement failed to compile (parse or bind)."""

    action = "prepare"


class ExecutionError(StatementError):
    """A statement failed while executing or while its rows were read."""

    action = "execute"


class RowCountUnavailable(FetchError):
    """The count query returned no row. Not fatal: the total becomes -1."""
