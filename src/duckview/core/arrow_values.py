"""
Arrow Values - Projects engine result columns into tagged cell values.

Query results are read from the engine as Arrow data, which keeps the engine's
native representation: dates stay day offsets, timestamps and times stay
integers with an explicit unit, decimals keep their scale. This module maps
each Arrow type to a ValueKind (and to the type name shown in column headers)
and converts a whole column into CellValue instances.
"""

import logging
from typing import Callable, List, Optional, Tuple, Union

import pyarrow as pa

from ..utils.temporal import TimeUnit
from .value_formatter import CellValue, NULL_VALUE, ValueKind

logger = logging.getLogger(__name__)

ArrowColumn = Union[pa.Array, pa.ChunkedArray]

MILLIS_PER_DAY = 86_400_000

# (predicate, engine type name, value kind), first match wins
_TYPE_RULES: List[Tuple[Callable[[pa.DataType], bool], str, ValueKind]] = [
    (pa.types.is_null, "Null", ValueKind.NULL),
    (pa.types.is_boolean, "Boolean", ValueKind.BOOLEAN),
    (pa.types.is_int8, "Int8", ValueKind.INTEGER),
    (pa.types.is_int16, "Int16", ValueKind.INTEGER),
    (pa.types.is_int32, "Int32", ValueKind.INTEGER),
    (pa.types.is_int64, "Int64", ValueKind.INTEGER),
    (pa.types.is_uint8, "UInt8", ValueKind.INTEGER),
    (pa.types.is_uint16, "UInt16", ValueKind.INTEGER),
    (pa.types.is_uint32, "UInt32", ValueKind.INTEGER),
    (pa.types.is_uint64, "UInt64", ValueKind.INTEGER),
    (pa.types.is_float16, "Float16", ValueKind.FLOAT32),
    (pa.types.is_float32, "Float32", ValueKind.FLOAT32),
    (pa.types.is_float64, "Float64", ValueKind.FLOAT),
    (pa.types.is_decimal128, "Decimal128", ValueKind.DECIMAL),
    (pa.types.is_decimal256, "Decimal256", ValueKind.DECIMAL),
    (pa.types.is_string, "Utf8", ValueKind.TEXT),
    (pa.types.is_large_string, "LargeUtf8", ValueKind.TEXT),
    (pa.types.is_binary, "Binary", ValueKind.BLOB),
    (pa.types.is_large_binary, "LargeBinary", ValueKind.BLOB),
    (pa.types.is_fixed_size_binary, "FixedSizeBinary", ValueKind.BLOB),
    (pa.types.is_date32, "Date32", ValueKind.DATE),
    (pa.types.is_date64, "Date64", ValueKind.DATE),
    (pa.types.is_timestamp, "Timestamp", ValueKind.TIMESTAMP),
    (pa.types.is_time32, "Time32", ValueKind.TIME),
    (pa.types.is_time64, "Time64", ValueKind.TIME),
    (pa.types.is_interval, "Interval", ValueKind.INTERVAL),
    (pa.types.is_duration, "Duration", ValueKind.OTHER),
    (pa.types.is_list, "List", ValueKind.LIST),
    (pa.types.is_large_list, "LargeList", ValueKind.LIST),
    (pa.types.is_fixed_size_list, "FixedSizeList", ValueKind.ARRAY),
    (pa.types.is_map, "Map", ValueKind.MAP),
    (pa.types.is_struct, "Struct", ValueKind.STRUCT),
    (pa.types.is_union, "Union", ValueKind.UNION),
    (pa.types.is_dictionary, "Dictionary", ValueKind.ENUM),
]


def _classify(data_type: pa.DataType) -> Tuple[str, ValueKind]:
    for predicate, name, kind in _TYPE_RULES:
        if predicate(data_type):
            return name, kind
    # Unlisted types (extension types, views): first token of the Arrow name
    name = str(data_type)
    for sep in "([<":
        name = name.split(sep)[0]
    return name.strip().title().replace("_", ""), ValueKind.OTHER


def engine_type_name(data_type: pa.DataType) -> str:
    """
    Name of an Arrow type without its parameters.

    Example:
        >>> engine_type_name(pa.decimal128(4, 2))
        'Decimal128'
    """
    return _classify(data_type)[0]


def value_kind(data_type: pa.DataType) -> ValueKind:
    """ValueKind used for every cell of a column of this type."""
    return _classify(data_type)[1]


def _storage_type(data_type: pa.DataType) -> Optional[pa.DataType]:
    """Integer type holding the raw ticks of a temporal type."""
    if pa.types.is_date32(data_type) or pa.types.is_time32(data_type):
        return pa.int32()
    if (pa.types.is_date64(data_type) or pa.types.is_time64(data_type)
            or pa.types.is_timestamp(data_type)):
        return pa.int64()
    return None


def _time_unit(data_type: pa.DataType) -> Optional[TimeUnit]:
    if pa.types.is_timestamp(data_type) or pa.types.is_time(data_type):
        return TimeUnit.from_arrow(data_type.unit)
    return None


def _scalars_one_by_one(column: ArrowColumn) -> List[object]:
    """Convert cells one at a time so a bad cell only spoils itself."""
    values: List[object] = []
    for index in range(len(column)):
        try:
            values.append(column[index].as_py())
        except (pa.ArrowException, ValueError, TypeError, OverflowError) as e:
            values.append(CellValue(ValueKind.ERROR, str(e)))
    return values


def column_values(column: ArrowColumn) -> List[CellValue]:
    """
    Convert an Arrow column into tagged values, one per row.

    Args:
        column: Column of a query result

    Returns:
        CellValue list; cells that could not be read are ERROR values
    """
    data_type = column.type
    kind = value_kind(data_type)
    unit = _time_unit(data_type)
    storage = _storage_type(data_type)

    if storage is not None:
        try:
            column = column.cast(storage)
        except (pa.ArrowException, ValueError, TypeError) as e:
            logger.warning(f"Could not read {data_type} column as integers: {e}")
            return [CellValue(ValueKind.ERROR, str(e))] * len(column)

    try:
        values = column.to_pylist()
    except (pa.ArrowException, ValueError, TypeError, OverflowError) as e:
        logger.debug(f"Falling back to per-cell conversion for {data_type}: {e}")
        values = _scalars_one_by_one(column)

    if pa.types.is_date64(data_type):
        values = [v // MILLIS_PER_DAY if isinstance(v, int) else v for v in values]

    cells: List[CellValue] = []
    for value in values:
        if value is None:
            cells.append(NULL_VALUE)
        elif isinstance(value, CellValue):
            cells.append(value)
        else:
            cells.append(CellValue(kind, value, unit))
    return cells


def table_columns(table: pa.Table) -> List[List[CellValue]]:
    """Convert every column of an Arrow table, in schema order."""
    return [column_values(table.column(i)) for i in range(table.num_columns)]
