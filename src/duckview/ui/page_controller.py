"""
Page Controller - Dispatches page fetches and applies their results.

The controller owns the PageViewState and the table model of the viewer. Each
request runs on its own FetchWorker and is numbered with an increasing
generation; when results arrive out of order (rapid paging), only the result
of the latest generation is applied and older ones are dropped.
"""

import logging
from typing import Dict

from PySide6.QtCore import QObject, Signal

from ..constants import WORKER_STOP_TIMEOUT_MS
from ..core.models import FetchRequest, FetchResult, SortDirection
from ..utils.fetch_error_handler import FetchErrorInfo
from ..utils.file_helpers import file_exists
from .page_state import PageViewState
from .widgets.fetch_result_model import FetchResultTableModel
from .workers.fetch_worker import FetchWorker

logger = logging.getLogger(__name__)


class PageController(QObject):
    """
    Drives the viewer: open a file, page through it, sort it.

    Signals:
        state_changed: Emitted after the state was updated by a fetch
        error_occurred: Emitted with the message of a failed fetch
    """

    state_changed = Signal()
    error_occurred = Signal(str)

    def __init__(self, state: PageViewState = None, parent=None):
        super().__init__(parent)
        self.state = state if state is not None else PageViewState()
        self.model = FetchResultTableModel(self)
        self._generation = 0
        self._load_columns = False
        self._file_path = ""  # File being shown or still loading
        self._workers: Dict[int, FetchWorker] = {}
        self._shutting_down = False

    # ==================== Requests ====================

    def open_file(self, file_path: str) -> bool:
        """
        Show the first page of a file, replacing whatever was displayed.

        Returns:
            False if the file does not exist (nothing is fetched)
        """
        if not file_exists(file_path):
            message = f"File '{file_path}' does not exist."
            logger.warning(message)
            self.state.apply_error(message)
            self.error_occurred.emit(message)
            return False

        self.state.reset()
        self.model.clear()
        self._file_path = file_path
        self._start_fetch(self.state.to_request(file_path), load_columns=True)
        return True

    def refresh(self) -> None:
        """
        Fetch the page currently selected in the state.

        Also valid while the first page of a file is still loading: the new
        request supersedes the opening one and loads the headers instead.
        """
        if not self._file_path:
            return
        self._start_fetch(self.state.to_request(self._file_path),
                          load_columns=not self.state.column_headers)

    def go_to_page(self, page_number: int) -> None:
        if self.state.go_to_page(page_number):
            self.refresh()

    def next_page(self) -> None:
        self.go_to_page(self.state.page_number + 1)

    def previous_page(self) -> None:
        self.go_to_page(self.state.page_number - 1)

    def sort_by(self, column_index: int, direction: SortDirection) -> None:
        """Sort on a 1-based column and show the first page."""
        self.state.set_sort(column_index, direction)
        self.refresh()

    # ==================== Workers ====================

    def _start_fetch(self, request: FetchRequest, load_columns: bool) -> None:
        if self._shutting_down:
            return

        self._generation += 1
        self._load_columns = load_columns
        self.state.page_loading = True

        worker = FetchWorker(request, self._generation)
        worker.fetch_success.connect(self._on_fetch_success)
        worker.fetch_error.connect(self._on_fetch_error)
        worker.finished.connect(lambda g=self._generation: self._on_worker_finished(g))
        self._workers[self._generation] = worker

        logger.debug(f"Starting fetch #{self._generation}: {request}")
        worker.start()

    def _is_current(self, generation: int) -> bool:
        if generation != self._generation:
            logger.debug(f"Dropping result of superseded fetch #{generation}")
            return False
        return True

    def _on_fetch_success(self, generation: int, result: FetchResult) -> None:
        if not self._is_current(generation):
            return
        self.state.apply_result(result, self._load_columns)
        self.model.set_result(result)
        self.state_changed.emit()

    def _on_fetch_error(self, generation: int, info: FetchErrorInfo) -> None:
        if not self._is_current(generation):
            return
        self.state.apply_error(info.format_short(), info.detail)
        self.state_changed.emit()
        self.error_occurred.emit(info.format_short())

    def _on_worker_finished(self, generation: int) -> None:
        worker = self._workers.pop(generation, None)
        if worker is not None:
            worker.deleteLater()

    @property
    def pending_fetches(self) -> int:
        return len(self._workers)

    def shutdown(self) -> None:
        """
        Stop accepting requests and wait for running workers.

        Called when the application quits instead of exiting the process
        under running fetches.
        """
        self._shutting_down = True
        for worker in list(self._workers.values()):
            worker.cancel()
        for generation, worker in list(self._workers.items()):
            if worker.isRunning() and not worker.wait(WORKER_STOP_TIMEOUT_MS):
                logger.warning(f"Fetch #{generation} still running at shutdown")
        self._workers.clear()
