"""
Fetch Models - Request and result types for one page of a data file.

A fetch is described by a FetchRequest and answered by a FetchResult. Both are
immutable and created fresh for every call: there is no cache and no state
shared between fetches.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Tuple, TYPE_CHECKING

if TYPE_CHECKING:
    import pandas as pd


Row = Tuple[str, ...]


class SortDirection(Enum):
    """Sort direction of the page query (codes match the viewer's sort order)."""
    NONE = 0
    ASCENDING = 1
    DESCENDING = 2

    @classmethod
    def from_code(cls, code: int) -> "SortDirection":
        """Map a sort-order code (0 unsorted, 1 ascending, 2 descending)."""
        try:
            return cls(code)
        except ValueError:
            return cls.NONE

    @property
    def sql(self) -> str:
        """SQL keyword for ORDER BY ('' when unsorted)."""
        if self is SortDirection.ASCENDING:
            return "ASC"
        if self is SortDirection.DESCENDING:
            return "DESC"
        return ""


@dataclass(frozen=True)
class FetchRequest:
    """
    Parameters of one page fetch.

    Attributes:
        file_path: Path of the Parquet or CSV file
        page_number: 1-based page number
        page_size: Number of rows per page
        sort_column_index: 1-based column to sort on (0 or negative = no sort)
        sort_direction: Direction used when sort_column_index > 0
    """
    file_path: str
    page_number: int
    page_size: int
    sort_column_index: int = -1
    sort_direction: SortDirection = SortDirection.NONE

    @property
    def offset(self) -> int:
        """Number of rows skipped before this page."""
        return (self.page_number - 1) * self.page_size

    @property
    def is_sorted(self) -> bool:
        return self.sort_column_index > 0


@dataclass(frozen=True)
class ColumnDescriptor:
    """Column metadata taken from the schema sample query."""
    display_name: str
    engine_type_name: str

    @property
    def rendered_header(self) -> str:
        """Header text: column name over its type, e.g. 'id\\n(Int32)'."""
        return f"{self.display_name}\n({self.engine_type_name})"


@dataclass(frozen=True)
class FetchResult:
    """
    One page of formatted data.

    Attributes:
        columns: Column descriptors in engine order
        rows: Formatted rows, each with one cell per column
        total_row_count: Rows in the whole file (-1 if the count is unavailable)
        query_duration: Seconds spent executing and draining the page query
        file_path: File the page was read from
        page_number: Page that was fetched
        page_size: Requested rows per page
        page_count: Number of pages reported to the viewer
    """
    columns: Tuple[ColumnDescriptor, ...]
    rows: Tuple[Row, ...]
    total_row_count: int
    query_duration: float
    file_path: str = ""
    page_number: int = 1
    page_size: int = 1
    page_count: int = 1
    column_headers: Tuple[str, ...] = field(init=False, repr=False)

    def __post_init__(self):
        object.__setattr__(
            self, "column_headers", tuple(c.rendered_header for c in self.columns)
        )

    @property
    def column_names(self) -> List[str]:
        return [c.display_name for c in self.columns]

    def to_dataframe(self) -> "pd.DataFrame":
        """Return the formatted page as a DataFrame of strings."""
        import pandas as pd

        return pd.DataFrame(list(self.rows), columns=self.column_names, dtype=str)
