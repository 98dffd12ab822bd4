"""
Fetch Worker - Background thread for page fetches.

Runs fetch_page() off the GUI thread so the window stays responsive; the
result (or the error) comes back to the GUI thread through a signal.
"""

import logging

from PySide6.QtCore import QThread, Signal

from ...core.models import FetchRequest
from ...core.page_loader import fetch_page
from ...utils.fetch_error_handler import format_fetch_error

logger = logging.getLogger(__name__)


class FetchWorker(QThread):
    """
    Worker thread for one page fetch.

    Signals:
        fetch_success: Emitted with (generation, FetchResult) on success
        fetch_error: Emitted with (generation, FetchErrorInfo) on failure

    The generation is an opaque number chosen by the caller so it can tell
    results of superseded requests apart. cancel() only suppresses the
    signals; a query that is already running completes.
    """

    fetch_success = Signal(int, object)  # generation, FetchResult
    fetch_error = Signal(int, object)    # generation, FetchErrorInfo

    def __init__(self, request: FetchRequest, generation: int = 0, parent=None):
        super().__init__(parent)
        self.request = request
        self.generation = generation
        self._cancelled = False

    def run(self):
        """Execute the fetch in background thread."""
        if self._cancelled:
            return

        try:
            result = fetch_page(self.request)
        except Exception as e:
            logger.error(f"Fetch error for '{self.request.file_path}': {e}")
            if not self._cancelled:
                info = format_fetch_error(e, self.request.file_path)
                self.fetch_error.emit(self.generation, info)
            return

        if self._cancelled:
            logger.debug(f"Discarding cancelled fetch of '{self.request.file_path}'")
            return
        self.fetch_success.emit(self.generation, result)

    def cancel(self):
        """Request cancellation."""
        self._cancelled = True

    @property
    def is_cancelled(self) -> bool:
        return self._cancelled
