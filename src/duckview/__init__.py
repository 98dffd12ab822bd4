"""
duckview - Paginated viewer for Parquet and CSV files
DuckDB Edition
"""

from importlib.metadata import version, PackageNotFoundError

try:
    __version__ = version("duckview")
except PackageNotFoundError:
    # Package not installed, fallback to the pyproject.toml version
    __version__ = "0.1.0"

from .core.models import FetchRequest, FetchResult, ColumnDescriptor, SortDirection
from .core.errors import FetchError
from .core.page_loader import fetch, fetch_page

__all__ = [
    "fetch",
    "fetch_page",
    "FetchRequest",
    "FetchResult",
    "ColumnDescriptor",
    "SortDirection",
    "FetchError",
    "__version__",
]
