"""
Unit tests for cell value formatting
"""
from decimal import Decimal

import pytest

from duckview.core.value_formatter import (
    CellValue,
    NULL_VALUE,
    ValueKind,
    _FORMATTERS,
    format_blob,
    format_value,
)
from duckview.utils.temporal import TimeUnit


def fmt(kind, payload=None, unit=None):
    return format_value(CellValue(kind, payload, unit))


class TestScalars:
    """Null, boolean, numeric and text values"""

    def test_null(self):
        assert format_value(NULL_VALUE) == "NULL"

    def test_booleans(self):
        assert fmt(ValueKind.BOOLEAN, True) == "true"
        assert fmt(ValueKind.BOOLEAN, False) == "false"

    @pytest.mark.parametrize("value,expected", [
        (0, "0"),
        (-128, "-128"),
        (2**63 - 1, "9223372036854775807"),
        (2**64 - 1, "18446744073709551615"),
        (-(2**127), "-170141183460469231731687303715884105728"),
    ])
    def test_integers(self, value, expected):
        assert fmt(ValueKind.INTEGER, value) == expected

    def test_floats(self):
        assert fmt(ValueKind.FLOAT, 19.99) == "19.99"
        assert fmt(ValueKind.FLOAT, -0.5) == "-0.5"
        assert fmt(ValueKind.FLOAT, 1e-07) == "1e-07"
        assert fmt(ValueKind.FLOAT32, 0.10000000149011612) == "0.1"

    def test_decimals_keep_scale(self):
        assert fmt(ValueKind.DECIMAL, Decimal("19.99")) == "19.99"
        assert fmt(ValueKind.DECIMAL, Decimal("1.50")) == "1.50"
        assert fmt(ValueKind.DECIMAL, Decimal("1E-7")) == "0.0000001"
        assert fmt(ValueKind.DECIMAL, Decimal("0E-10")) == "0.0000000000"
        assert fmt(ValueKind.DECIMAL, Decimal("-5E-8")) == "-0.00000005"

    def test_text_and_enum(self):
        assert fmt(ValueKind.TEXT, "Product A") == "Product A"
        assert fmt(ValueKind.TEXT, "") == ""
        assert fmt(ValueKind.ENUM, "medium") == "medium"

    def test_interval_placeholder(self):
        assert fmt(ValueKind.INTERVAL, (1, 2, 3)) == "Interval"


class TestBlobs:
    """Base64 rendering with truncation after 25 characters"""

    def test_short_blob_unmodified(self):
        assert format_blob(b"abc") == "YWJj"

    def test_blob_at_limit_unmodified(self):
        # 18 bytes encode to 24 characters
        assert format_blob(bytes(18)) == "A" * 24

    def test_long_blob_truncated(self):
        # 19 bytes encode to 28 characters
        assert format_blob(bytes(19)) == "A" * 25 + "..."

    def test_blob_kind(self):
        assert fmt(ValueKind.BLOB, b"\xff\xfe") == "//4="


class TestTemporal:
    """Dates, timestamps and times through the formatter"""

    def test_dates(self):
        assert fmt(ValueKind.DATE, 19275) == "2022-10-10"
        assert fmt(ValueKind.DATE, 0) == "1970-01-01"
        assert fmt(ValueKind.DATE, -1) == "1969-12-31"

    def test_timestamps(self):
        assert fmt(ValueKind.TIMESTAMP, 0, TimeUnit.SECOND) == "1970-01-01T00:00:00+00:00"
        assert fmt(ValueKind.TIMESTAMP, 0, TimeUnit.MILLISECOND) == "1970-01-01T00:00:00.000+00:00"

    def test_times(self):
        assert fmt(ValueKind.TIME, 3661, TimeUnit.SECOND) == "01:01:01"
        assert fmt(ValueKind.TIME, 86399999, TimeUnit.MILLISECOND) == "23:59:59.999"


class TestNested:
    """Composite values render as compact single-line text"""

    @pytest.mark.parametrize("kind", [
        ValueKind.LIST, ValueKind.ARRAY, ValueKind.STRUCT, ValueKind.MAP, ValueKind.UNION,
    ])
    def test_whitespace_removed(self, kind):
        text = fmt(kind, {"name": "a b", "values": [1, 2, None]})

        assert text == "{'name':'ab','values':[1,2,None]}"
        assert "\n" not in text
        assert " " not in text

    def test_deterministic(self):
        value = [{"a": [1, 2]}, {"a": []}]

        assert fmt(ValueKind.LIST, value) == fmt(ValueKind.LIST, value)
        assert fmt(ValueKind.LIST, value) == "[{'a':[1,2]},{'a':[]}]"

    def test_map_pairs(self):
        assert fmt(ValueKind.MAP, [("k", 1), ("v", 2)]) == "[('k',1),('v',2)]"


class TestErrors:
    """Formatting never raises"""

    def test_error_cell(self):
        assert fmt(ValueKind.ERROR, "Conversion failed") == "Error: Conversion failed"

    def test_failing_branch_renders_error(self):
        text = fmt(ValueKind.DATE, "not a day count")

        assert text.startswith("Error: ")

    def test_other_kind_collapses_whitespace(self):
        assert fmt(ValueKind.OTHER, "1 day,\n 0:00:00") == "1 day, 0:00:00"

    def test_every_kind_has_a_formatter(self):
        assert set(_FORMATTERS) == set(ValueKind)
