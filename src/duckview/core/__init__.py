"""
Core module - Paginated query and type projection.

Architecture:
    FetchRequest
           ↓
    query_builder.py → data / schema / count statements
           ↓
    query_executor.py → DuckDB session, Arrow results
           ↓
    arrow_values.py + value_formatter.py → display strings
           ↓
    page_loader.py → FetchResult
"""

from .models import (
    ColumnDescriptor,
    FetchRequest,
    FetchResult,
    SortDirection,
)

from .errors import (
    FetchError,
    InvalidPageError,
    UnsupportedFileTypeError,
    EngineConnectionError,
    PrepareError,
    ExecutionError,
    RowCountUnavailable,
    StatementKind,
)

from .query_builder import QueryPlan, Statement, build_statements

from .value_formatter import CellValue, ValueKind, format_value

from .page_loader import compute_page_count, fetch, fetch_page

__all__ = [
    # Models
    "ColumnDescriptor",
    "FetchRequest",
    "FetchResult",
    "SortDirection",
    # Errors
    "FetchError",
    "InvalidPageError",
    "UnsupportedFileTypeError",
    "EngineConnectionError",
    "PrepareError",
    "ExecutionError",
    "RowCountUnavailable",
    "StatementKind",
    # Query building
    "QueryPlan",
    "Statement",
    "build_statements",
    # Formatting
    "CellValue",
    "ValueKind",
    "format_value",
    # Fetching
    "compute_page_count",
    "fetch",
    "fetch_page",
]
