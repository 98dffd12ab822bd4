"""
Page Loader - Fetches one page of a Parquet or CSV file.

fetch() is the entry point used by the viewer. It is synchronous and blocking
(engine I/O plus formatting), so GUI callers run it on a worker thread (see
duckview.ui.workers.fetch_worker). Each call builds its statements, opens its
own engine session and returns either a complete FetchResult or raises a
FetchError; no partial result is ever returned.
"""

import logging

from ..constants import UNKNOWN_ROW_COUNT
from .errors import RowCountUnavailable
from .models import FetchRequest, FetchResult, SortDirection
from .query_builder import build_statements
from .query_executor import QueryExecutor

logger = logging.getLogger(__name__)


def compute_page_count(total_row_count: int, page_size: int) -> int:
    """
    Number of pages reported to the viewer.

    This is total // page_size + 1, so an exact multiple reports one extra
    (empty) last page; an unknown total (-1) reports a single page.
    """
    return max(total_row_count, 0) // page_size + 1


def fetch_page(request: FetchRequest) -> FetchResult:
    """
    Fetch the page described by request.

    Args:
        request: File, page and sort parameters

    Returns:
        FetchResult with columns, formatted rows, total row count and timing

    Raises:
        InvalidPageError: page number or page size below 1 (nothing is run)
        UnsupportedFileTypeError: file is neither .parquet nor .csv
        EngineConnectionError: the engine session could not be opened
        PrepareError: a statement failed to compile
        ExecutionError: a statement failed while running or reading rows
    """
    plan = build_statements(request)
    executor = QueryExecutor(request.file_path)

    with executor.open_session() as conn:
        columns = executor.fetch_schema(conn, plan.schema)
        page = executor.fetch_rows(conn, plan.data, len(columns))
        try:
            total = executor.fetch_count(conn, plan.count)
        except RowCountUnavailable as e:
            logger.warning(f"{e.message} for '{request.file_path}'")
            total = UNKNOWN_ROW_COUNT

    result = FetchResult(
        columns=tuple(columns),
        rows=page.rows,
        total_row_count=total,
        query_duration=page.duration,
        file_path=request.file_path,
        page_number=request.page_number,
        page_size=request.page_size,
        page_count=compute_page_count(total, request.page_size),
    )
    logger.info(
        f"Fetched page {request.page_number}/{result.page_count} of '{request.file_path}' "
        f"({len(result.rows)} rows, {total} total)"
    )
    return result


def fetch(file_path: str, page_number: int, page_size: int,
          sort_column_index: int = -1,
          sort_direction: SortDirection = SortDirection.NONE) -> FetchResult:
    """
    Fetch one page of a data file.

    Args:
        file_path: Path of the .parquet or .csv file
        page_number: 1-based page number
        page_size: Rows per page
        sort_column_index: 1-based column to sort on, 0 or negative for none
        sort_direction: Sort direction (ignored when not sorting)

    Example:
        result = fetch("data.parquet", 1, 20, sort_column_index=1,
                       sort_direction=SortDirection.DESCENDING)
    """
    return fetch_page(FetchRequest(
        file_path=file_path,
        page_number=page_number,
        page_size=page_size,
        sort_column_index=sort_column_index,
        sort_direction=sort_direction,
    ))
