"""
Page View State - What the viewer window displays for the open file.

The window binds its widgets to one PageViewState. Fetch results and fetch
errors are applied to it on the GUI thread; the state never runs queries
itself.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional

from ..constants import (
    DEFAULT_PAGE_NUMBER,
    DEFAULT_PAGE_SIZE,
    DEFAULT_RECORD_COUNT,
    DEFAULT_SORT_INDEX,
)
from ..core.models import FetchRequest, FetchResult, Row, SortDirection

logger = logging.getLogger(__name__)


def format_duration(seconds: float) -> str:
    """
    Human-readable duration of a query.

    Example:
        >>> format_duration(0.012345)
        '12.345ms'
    """
    if seconds < 0.001:
        return f"{seconds * 1_000_000:.3f}µs"
    if seconds < 1:
        return f"{seconds * 1_000:.3f}ms"
    return f"{seconds:.3f}s"


@dataclass
class PageViewState:
    """
    Display state of the viewer.

    Attributes:
        filename: File currently shown ('' when none)
        page_number: Current 1-based page
        page_size: Rows per page
        sort_column_index: 1-based sort column (-1 = unsorted)
        sort_direction: Sort direction
        column_headers: Rendered headers ("name\\n(type)")
        rows: Formatted rows of the current page
        record_count: Total rows in the file
        max_pages: Number of pages offered by the pager
        pagination_enabled: Whether the pager accepts input
        page_loading: True while a fetch is running
        duration_text: Duration of the last page query
        error_message: Message of the last failure ('' when none)
        error_detail: Engine detail of the last failure
        has_error: True when error_message should be shown
    """
    filename: str = ""
    page_number: int = DEFAULT_PAGE_NUMBER
    page_size: int = DEFAULT_PAGE_SIZE
    sort_column_index: int = DEFAULT_SORT_INDEX
    sort_direction: SortDirection = SortDirection.NONE
    column_headers: List[str] = field(default_factory=list)
    rows: List[Row] = field(default_factory=list)
    record_count: int = DEFAULT_RECORD_COUNT
    max_pages: int = 1
    pagination_enabled: bool = False
    page_loading: bool = False
    duration_text: str = ""
    error_message: str = ""
    error_detail: str = ""
    has_error: bool = False

    def reset(self) -> None:
        """Clear everything shown for the previous file (page size is kept)."""
        self.page_loading = True
        self.filename = ""
        self.pagination_enabled = False
        self.record_count = DEFAULT_RECORD_COUNT
        self.sort_column_index = DEFAULT_SORT_INDEX
        self.sort_direction = SortDirection.NONE
        self.max_pages = 1
        self.page_number = DEFAULT_PAGE_NUMBER
        self.clear_error()
        self.column_headers = []
        self.rows = []

    def clear_error(self) -> None:
        self.error_message = ""
        self.error_detail = ""
        self.has_error = False

    def to_request(self, file_path: Optional[str] = None) -> FetchRequest:
        """Build the FetchRequest for the page currently selected."""
        return FetchRequest(
            file_path=file_path if file_path is not None else self.filename,
            page_number=self.page_number,
            page_size=self.page_size,
            sort_column_index=self.sort_column_index,
            sort_direction=self.sort_direction,
        )

    def go_to_page(self, page_number: int) -> bool:
        """
        Select a page, clamped to [1, max_pages].

        Returns:
            True if the selected page changed
        """
        target = min(max(page_number, 1), max(self.max_pages, 1))
        changed = target != self.page_number
        self.page_number = target
        return changed

    def set_sort(self, column_index: int, direction: SortDirection) -> None:
        """Sort on a 1-based column; a new sort starts again from page 1."""
        self.sort_column_index = column_index
        self.sort_direction = direction
        self.page_number = DEFAULT_PAGE_NUMBER

    def apply_result(self, result: FetchResult, load_columns: bool) -> None:
        """
        Show a fetched page.

        Args:
            result: Page returned by fetch()
            load_columns: Replace the column headers (only when a file is opened)
        """
        if load_columns:
            self.column_headers = list(result.column_headers)
        self.rows = list(result.rows)
        self.record_count = result.total_row_count
        self.pagination_enabled = True
        self.max_pages = result.page_count
        self.duration_text = format_duration(result.query_duration)
        self.filename = result.file_path
        self.page_loading = False
        self.clear_error()

    def apply_error(self, message: str, detail: str = "") -> None:
        """Show a failure; the rows of the previous page are left untouched."""
        logger.debug(f"Showing fetch error: {message}")
        self.page_loading = False
        self.error_message = message
        self.error_detail = detail
        self.has_error = True
