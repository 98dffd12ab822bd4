"""
Fetch Result Table Model.

Provides a QAbstractTableModel over one FetchResult. Cells are already
formatted strings, so data() only looks them up; numeric columns are
right-aligned based on the engine type shown in the header.
"""
from typing import Any, Optional

from PySide6.QtCore import Qt, QAbstractTableModel, QModelIndex

from ...constants import TOOLTIP_MIN_CHARS
from ...core.models import FetchResult

# Engine types rendered right-aligned
NUMERIC_TYPES = frozenset({
    "Int8", "Int16", "Int32", "Int64",
    "UInt8", "UInt16", "UInt32", "UInt64",
    "Float16", "Float32", "Float64",
    "Decimal128", "Decimal256",
})


class FetchResultTableModel(QAbstractTableModel):
    """
    Read-only table model showing one page of a file.

    Vertical headers number rows from the start of the file, so the first row
    of page 3 with 20 rows per page is row 41.
    """

    def __init__(self, parent=None):
        super().__init__(parent)
        self._result: Optional[FetchResult] = None
        self._row_offset: int = 0

    def set_result(self, result: FetchResult) -> None:
        """
        Set the page to display.

        Args:
            result: FetchResult returned by fetch()
        """
        self.beginResetModel()
        self._result = result
        self._row_offset = (result.page_number - 1) * result.page_size
        self.endResetModel()

    def clear(self) -> None:
        """Clear the model data."""
        self.beginResetModel()
        self._result = None
        self._row_offset = 0
        self.endResetModel()

    @property
    def result(self) -> Optional[FetchResult]:
        """Get the page currently shown."""
        return self._result

    # -------------------------------------------------------------------------
    # QAbstractTableModel interface
    # -------------------------------------------------------------------------

    def rowCount(self, parent: QModelIndex = QModelIndex()) -> int:
        """Return number of rows."""
        if parent.isValid() or self._result is None:
            return 0
        return len(self._result.rows)

    def columnCount(self, parent: QModelIndex = QModelIndex()) -> int:
        """Return number of columns."""
        if parent.isValid() or self._result is None:
            return 0
        return len(self._result.columns)

    def data(self, index: QModelIndex, role: int = Qt.ItemDataRole.DisplayRole) -> Any:
        """Return data for the given index and role."""
        if not index.isValid() or self._result is None:
            return None

        row = index.row()
        col = index.column()

        if row < 0 or row >= self.rowCount():
            return None
        if col < 0 or col >= self.columnCount():
            return None

        if role == Qt.ItemDataRole.DisplayRole:
            return self._result.rows[row][col]

        elif role == Qt.ItemDataRole.TextAlignmentRole:
            if self._result.columns[col].engine_type_name in NUMERIC_TYPES:
                return Qt.AlignmentFlag.AlignRight | Qt.AlignmentFlag.AlignVCenter
            return Qt.AlignmentFlag.AlignLeft | Qt.AlignmentFlag.AlignVCenter

        elif role == Qt.ItemDataRole.ToolTipRole:
            # Full text for cells likely to be cut by the column width
            text = self._result.rows[row][col]
            if len(text) > TOOLTIP_MIN_CHARS:
                return text

        return None

    def headerData(self, section: int, orientation: Qt.Orientation,
                   role: int = Qt.ItemDataRole.DisplayRole) -> Any:
        """Return header data."""
        if role != Qt.ItemDataRole.DisplayRole:
            return None

        if orientation == Qt.Orientation.Horizontal:
            if self._result is not None and 0 <= section < len(self._result.columns):
                return self._result.column_headers[section]
            return None

        # Row numbers (1-based, counted from the start of the file)
        return str(self._row_offset + section + 1)

    def flags(self, index: QModelIndex) -> Qt.ItemFlag:
        """Return item flags (read-only)."""
        if not index.isValid():
            return Qt.ItemFlag.NoItemFlags
        return Qt.ItemFlag.ItemIsEnabled | Qt.ItemFlag.ItemIsSelectable

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def get_cell_value(self, row: int, col: int) -> Optional[str]:
        """Return the text at (row, col), or None when out of range."""
        if self._result is None:
            return None
        if 0 <= row < len(self._result.rows) and 0 <= col < len(self._result.columns):
            return self._result.rows[row][col]
        return None
