"""
Unit tests for Arrow column projection
"""
from datetime import date, datetime, time
from decimal import Decimal

import pyarrow as pa
import pytest

from duckview.core.arrow_values import (
    column_values,
    engine_type_name,
    table_columns,
    value_kind,
)
from duckview.core.value_formatter import NULL_VALUE, ValueKind, format_value
from duckview.utils.temporal import TimeUnit


def formatted(array):
    return [format_value(v) for v in column_values(array)]


class TestTypeNames:
    """Header type names follow the Arrow logical type names"""

    @pytest.mark.parametrize("data_type,expected", [
        (pa.int32(), "Int32"),
        (pa.int64(), "Int64"),
        (pa.uint8(), "UInt8"),
        (pa.float64(), "Float64"),
        (pa.string(), "Utf8"),
        (pa.large_string(), "LargeUtf8"),
        (pa.binary(), "Binary"),
        (pa.decimal128(4, 2), "Decimal128"),
        (pa.date32(), "Date32"),
        (pa.timestamp("us", tz="UTC"), "Timestamp"),
        (pa.time64("us"), "Time64"),
        (pa.list_(pa.int32()), "List"),
        (pa.struct([("a", pa.int32())]), "Struct"),
        (pa.map_(pa.string(), pa.int32()), "Map"),
        (pa.dictionary(pa.int8(), pa.string()), "Dictionary"),
        (pa.month_day_nano_interval(), "Interval"),
    ])
    def test_engine_type_name(self, data_type, expected):
        assert engine_type_name(data_type) == expected

    @pytest.mark.parametrize("data_type,kind", [
        (pa.bool_(), ValueKind.BOOLEAN),
        (pa.int16(), ValueKind.INTEGER),
        (pa.float32(), ValueKind.FLOAT32),
        (pa.float64(), ValueKind.FLOAT),
        (pa.decimal128(38, 0), ValueKind.DECIMAL),
        (pa.string(), ValueKind.TEXT),
        (pa.large_binary(), ValueKind.BLOB),
        (pa.date32(), ValueKind.DATE),
        (pa.timestamp("ns"), ValueKind.TIMESTAMP),
        (pa.time32("ms"), ValueKind.TIME),
        (pa.month_day_nano_interval(), ValueKind.INTERVAL),
        (pa.list_(pa.int32()), ValueKind.LIST),
        (pa.list_(pa.int32(), 2), ValueKind.ARRAY),
        (pa.struct([("a", pa.int32())]), ValueKind.STRUCT),
        (pa.map_(pa.string(), pa.int32()), ValueKind.MAP),
        (pa.dictionary(pa.int8(), pa.string()), ValueKind.ENUM),
        (pa.duration("s"), ValueKind.OTHER),
    ])
    def test_value_kind(self, data_type, kind):
        assert value_kind(data_type) is kind


class TestColumnValues:
    """Whole columns convert into tagged values"""

    def test_integers_with_null(self):
        values = column_values(pa.array([1, None, 3], pa.int32()))

        assert values[0].kind is ValueKind.INTEGER
        assert values[0].payload == 1
        assert values[1] is NULL_VALUE
        assert formatted(pa.array([1, None, 3], pa.int32())) == ["1", "NULL", "3"]

    def test_timestamp_keeps_ticks_and_unit(self):
        array = pa.array([datetime(2021, 3, 3, 9, 44, 21)], pa.timestamp("ms"))
        value = column_values(array)[0]

        assert value.kind is ValueKind.TIMESTAMP
        assert value.payload == 1_614_764_661_000
        assert value.unit is TimeUnit.MILLISECOND
        assert format_value(value) == "2021-03-03T09:44:21.000+00:00"

    def test_timestamp_with_zone_renders_utc(self):
        array = pa.array([0], pa.int64()).cast(pa.timestamp("s", tz="America/New_York"))

        assert formatted(array) == ["1970-01-01T00:00:00+00:00"]

    def test_date32_days(self):
        array = pa.array([date(2022, 10, 10), date(1969, 12, 31)], pa.date32())

        assert [v.payload for v in column_values(array)] == [19275, -1]
        assert formatted(array) == ["2022-10-10", "1969-12-31"]

    def test_date64_converted_to_days(self):
        array = pa.array([date(2022, 10, 10)], pa.date64())

        assert formatted(array) == ["2022-10-10"]

    def test_times(self):
        assert formatted(pa.array([time(1, 1, 1)], pa.time64("us"))) == ["01:01:01.000000"]
        assert formatted(pa.array([time(23, 59, 59, 999000)], pa.time32("ms"))) == ["23:59:59.999"]

    def test_decimal_and_float32(self):
        assert formatted(pa.array([Decimal("19.99")], pa.decimal128(4, 2))) == ["19.99"]
        assert formatted(pa.array([0.1], pa.float32())) == ["0.1"]

    def test_small_decimals_stay_positional(self):
        array = pa.array([Decimal("0"), Decimal("0.0000001")], pa.decimal128(18, 10))

        assert formatted(array) == ["0.0000000000", "0.0000001000"]
        assert formatted(pa.array([Decimal("0.0000001")], pa.decimal128(18, 7))) == ["0.0000001"]

    def test_dictionary_decodes_labels(self):
        array = pa.array(["low", "high", "low"]).dictionary_encode()

        assert formatted(array) == ["low", "high", "low"]

    def test_binary(self):
        assert formatted(pa.array([b"abc", None], pa.binary())) == ["YWJj", "NULL"]

    def test_nested(self):
        assert formatted(pa.array([[1, 2], [3]])) == ["[1,2]", "[3]"]
        struct = pa.array([{"a": 1, "b": "x y"}], pa.struct([("a", pa.int32()), ("b", pa.string())]))
        assert formatted(struct) == ["{'a':1,'b':'xy'}"]

    def test_chunked_array(self):
        chunked = pa.chunked_array([[1, 2], [3]], pa.int64())

        assert formatted(chunked) == ["1", "2", "3"]

    def test_table_columns(self):
        table = pa.table({"id": [1, 2], "name": ["a", "b"]})
        columns = table_columns(table)

        assert len(columns) == 2
        assert [format_value(v) for v in columns[1]] == ["a", "b"]
