"""
File Helpers - Path checks used before a file is opened
"""

from pathlib import Path


def file_exists(filename: str) -> bool:
    """Return True if filename points to an existing regular file."""
    return Path(filename).is_file()


def get_file_extension(filename: str) -> str:
    """
    Extract the lower-case extension of a filename or path.

    Args:
        filename: File name or path

    Returns:
        Extension without the dot, or '' when there is none
        (no dot at all, or a name ending with a dot)

    Example:
        >>> get_file_extension("/path/to/file.CSV")
        'csv'
    """
    if "." not in filename or filename.endswith("."):
        return ""
    return filename.rsplit(".", 1)[1].lower()
