"""
Reusable widgets and models for the viewer.
"""

from .fetch_result_model import FetchResultTableModel, NUMERIC_TYPES

__all__ = [
    "FetchResultTableModel",
    "NUMERIC_TYPES",
]
