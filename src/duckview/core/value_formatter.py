"""
Value Formatter - Turns one engine value into the text shown in a cell.

Engine values arrive as CellValue instances: a ValueKind tag plus the raw
payload (and, for temporal kinds, the TimeUnit of the integer payload). Each
kind has exactly one formatting function in _FORMATTERS; format_value never
raises, a failing branch renders as "Error: <message>" so rows keep their
alignment.

Rules:
- NULL renders as "NULL", booleans as "true"/"false"
- integers of every width render in decimal
- floats use the shortest round-trip text for their precision; this is
  Python's repr, not the engine's own text, so very small or large doubles
  use exponent notation ("1e-07", "1e+20")
- decimals render in positional notation and keep their scale ("19.99",
  "1.50", "0.0000001", "0.0000000000")
- blobs are base64 encoded and cut to 25 characters plus "..."
- dates, timestamps and times of day use fixed ISO-like layouts (UTC)
- nested values (list, array, struct, map, union) render as their compact
  repr with all whitespace removed
"""

import base64
import logging
import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, Optional

import numpy as np

from ..constants import (
    BLOB_ELLIPSIS,
    BLOB_PREVIEW_CHARS,
    ERROR_PREFIX,
    INTERVAL_TEXT,
    NULL_TEXT,
)
from ..utils.temporal import TimeUnit, date32_to_ymd, time_to_hms, timestamp_to_ymd_hms

logger = logging.getLogger(__name__)

_WHITESPACE = re.compile(r"\s+")


class ValueKind(Enum):
    """Tag of an engine value."""
    NULL = "null"
    BOOLEAN = "boolean"
    INTEGER = "integer"
    FLOAT32 = "float32"
    FLOAT = "float"
    DECIMAL = "decimal"
    TEXT = "text"
    ENUM = "enum"
    BLOB = "blob"
    DATE = "date"
    TIMESTAMP = "timestamp"
    TIME = "time"
    INTERVAL = "interval"
    LIST = "list"
    ARRAY = "array"
    STRUCT = "struct"
    MAP = "map"
    UNION = "union"
    OTHER = "other"
    ERROR = "error"


@dataclass(frozen=True)
class CellValue:
    """
    A single engine value.

    Attributes:
        kind: Value tag
        payload: Raw value (int for DATE/TIMESTAMP/TIME, message for ERROR)
        unit: Resolution of TIMESTAMP and TIME payloads
    """
    kind: ValueKind
    payload: Any = None
    unit: Optional[TimeUnit] = None


NULL_VALUE = CellValue(ValueKind.NULL)


def format_blob(data: bytes) -> str:
    """Base64 encode data, keeping at most BLOB_PREVIEW_CHARS characters."""
    encoded = base64.b64encode(bytes(data)).decode("ascii")
    if len(encoded) > BLOB_PREVIEW_CHARS:
        return encoded[:BLOB_PREVIEW_CHARS] + BLOB_ELLIPSIS
    return encoded


def format_nested(value: Any) -> str:
    """Compact repr of a nested value, without spaces or newlines."""
    return _WHITESPACE.sub("", repr(value))


def _format_boolean(value: CellValue) -> str:
    return "true" if value.payload else "false"


def _format_float32(value: CellValue) -> str:
    return str(np.float32(value.payload))


def _format_float(value: CellValue) -> str:
    return repr(float(value.payload))


def _format_other(value: CellValue) -> str:
    return _WHITESPACE.sub(" ", str(value.payload)).strip()


_FORMATTERS: Dict[ValueKind, Callable[[CellValue], str]] = {
    ValueKind.NULL: lambda v: NULL_TEXT,
    ValueKind.BOOLEAN: _format_boolean,
    ValueKind.INTEGER: lambda v: str(int(v.payload)),
    ValueKind.FLOAT32: _format_float32,
    ValueKind.FLOAT: _format_float,
    ValueKind.DECIMAL: lambda v: format(v.payload, "f"),
    ValueKind.TEXT: lambda v: v.payload,
    ValueKind.ENUM: lambda v: str(v.payload),
    ValueKind.BLOB: lambda v: format_blob(v.payload),
    ValueKind.DATE: lambda v: date32_to_ymd(v.payload),
    ValueKind.TIMESTAMP: lambda v: timestamp_to_ymd_hms(v.payload, v.unit),
    ValueKind.TIME: lambda v: time_to_hms(v.payload, v.unit),
    ValueKind.INTERVAL: lambda v: INTERVAL_TEXT,
    ValueKind.LIST: lambda v: format_nested(v.payload),
    ValueKind.ARRAY: lambda v: format_nested(v.payload),
    ValueKind.STRUCT: lambda v: format_nested(v.payload),
    ValueKind.MAP: lambda v: format_nested(v.payload),
    ValueKind.UNION: lambda v: format_nested(v.payload),
    ValueKind.OTHER: _format_other,
    ValueKind.ERROR: lambda v: f"{ERROR_PREFIX}{v.payload}",
}


def format_value(value: CellValue) -> str:
    """
    Format one engine value for display.

    Args:
        value: Tagged engine value

    Returns:
        Display text; never raises
    """
    try:
        return _FORMATTERS[value.kind](value)
    except Exception as e:
        logger.debug(f"Could not format {value.kind.value} value {value.payload!r}: {e}")
        return f"{ERROR_PREFIX}{e}"
