"""
Query Builder - Renders the three statements of a page fetch.

For a FetchRequest the builder produces:
- the page data statement (optional ORDER BY, LIMIT/OFFSET)
- the schema sample statement (LIMIT 1), used only for column names and types
- the row count statement over the whole file

The file path is embedded as a SQL string literal, so single quotes are
doubled before interpolation.
"""

import logging
from dataclasses import dataclass

from ..constants import SCAN_FUNCTIONS
from ..utils.file_helpers import get_file_extension
from .errors import InvalidPageError, StatementKind, UnsupportedFileTypeError
from .models import FetchRequest

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Statement:
    """One SQL statement and the role it plays in a fetch."""
    kind: StatementKind
    sql: str


@dataclass(frozen=True)
class QueryPlan:
    """The statements needed to answer one FetchRequest."""
    scan_function: str
    data: Statement
    schema: Statement
    count: Statement


def quote_literal(value: str) -> str:
    """Render value as a single-quoted SQL string literal."""
    return "'" + value.replace("'", "''") + "'"


def resolve_scan_function(file_path: str) -> str:
    """
    Return the table function able to scan file_path.

    Raises:
        UnsupportedFileTypeError: if the extension is not registered
    """
    extension = get_file_extension(file_path)
    scan_function = SCAN_FUNCTIONS.get(extension)
    if scan_function is None:
        raise UnsupportedFileTypeError(file_path, extension)
    return scan_function


def validate_request(request: FetchRequest) -> None:
    """Reject requests that cannot describe a page."""
    if request.page_number < 1:
        raise InvalidPageError(
            f"Page number must be greater than 0 (got {request.page_number})",
            request.file_path,
        )
    if request.page_size < 1:
        raise InvalidPageError(
            f"Page size must be greater than 0 (got {request.page_size})",
            request.file_path,
        )


def build_statements(request: FetchRequest) -> QueryPlan:
    """
    Validate a request and render its statements.

    Args:
        request: Page to fetch

    Returns:
        QueryPlan with the data, schema and count statements

    Raises:
        InvalidPageError: if page number or page size is below 1
        UnsupportedFileTypeError: if the file type is not recognized
    """
    validate_request(request)
    scan_function = resolve_scan_function(request.file_path)
    source = f"{scan_function}({quote_literal(request.file_path)})"

    data_sql = f"SELECT * FROM {source}"
    # A column index of 0 or below means "unsorted", whatever the direction
    if request.is_sorted:
        order = f"{request.sort_column_index} {request.sort_direction.sql}".rstrip()
        data_sql += f" ORDER BY {order}"
    data_sql += f" LIMIT {request.page_size} OFFSET {request.offset}"

    plan = QueryPlan(
        scan_function=scan_function,
        data=Statement(StatementKind.DATA, data_sql),
        schema=Statement(StatementKind.SCHEMA, f"SELECT * FROM {source} LIMIT 1"),
        count=Statement(StatementKind.COUNT, f"SELECT count(1) FROM {source}"),
    )
    logger.debug(f"Built statements for '{request.file_path}': {plan.data.sql}")
    return plan
