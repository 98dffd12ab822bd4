"""
UI Workers - Background workers for async operations.
"""

from .fetch_worker import FetchWorker

__all__ = [
    "FetchWorker",
]
