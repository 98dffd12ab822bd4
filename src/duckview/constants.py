"""
Centralized constants for duckview.

Eliminates magic numbers scattered across the codebase.
Import from here instead of hardcoding values.
"""

# ===========================================================================
# Engine
# ===========================================================================
IN_MEMORY_DATABASE = ":memory:"  # Every fetch opens its own transient session

# File extension (lower-case, no dot) -> DuckDB table function scanning it
SCAN_FUNCTIONS = {
    "parquet": "parquet_scan",
    "csv": "read_csv_auto",
}

# ===========================================================================
# Pagination defaults (values used when a file is opened)
# ===========================================================================
DEFAULT_PAGE_NUMBER = 1
DEFAULT_PAGE_SIZE = 20
DEFAULT_RECORD_COUNT = 10       # Shown until the first count query returns
DEFAULT_SORT_INDEX = -1         # No sort
UNKNOWN_ROW_COUNT = -1          # Count query returned no row

# ===========================================================================
# Cell formatting
# ===========================================================================
NULL_TEXT = "NULL"
BLOB_PREVIEW_CHARS = 25         # base64 characters shown before "..."
BLOB_ELLIPSIS = "..."
INTERVAL_TEXT = "Interval"
INVALID_TIME_TEXT = "Invalid Time"
INVALID_DATE_TEXT = "Invalid Date"
ERROR_PREFIX = "Error: "

# ===========================================================================
# UI
# ===========================================================================
WORKER_STOP_TIMEOUT_MS = 1000   # Max wait for worker thread shutdown
TOOLTIP_MIN_CHARS = 50          # Cells longer than this get a tooltip
