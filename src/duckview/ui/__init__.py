"""
UI layer - State, background dispatch and table model of the viewer.
"""

from .page_controller import PageController
from .page_state import PageViewState, format_duration

__all__ = [
    "PageController",
    "PageViewState",
    "format_duration",
]
