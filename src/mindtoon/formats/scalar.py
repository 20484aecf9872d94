"""Value classification and scalar rendering."""

from __future__ import annotations

import math
import weakref
from collections.abc import Mapping
from decimal import Decimal
from enum import Enum
from typing import Any

from mindtoon.escape import escape
from mindtoon.schema import schema_for

NULL = "null"


class Shape(Enum):
    """Render strategy selected for a value."""

    NULL = "null"
    SCALAR = "scalar"
    SEQUENCE = "sequence"
    MAPPING = "mapping"
    RECORD = "record"
    OTHER = "other"


def unwrap(value: Any) -> Any:
    """Resolve weak references; a dead reference resolves to None."""
    while isinstance(value, weakref.ref):
        value = value()
    return value


def classify(value: Any) -> Shape:
    """Classify an already-unwrapped value.

    Never raises: anything unrecognised is `Shape.OTHER`.
    """
    if value is None:
        return Shape.NULL
    if isinstance(value, (str, bool, int, float)):
        return Shape.SCALAR
    if schema_for(type(value)) is not None:
        return Shape.RECORD
    if isinstance(value, (list, tuple, set, frozenset)):
        return Shape.SEQUENCE
    if isinstance(value, Mapping):
        return Shape.MAPPING
    return Shape.OTHER


def is_primitive(value: Any) -> bool:
    """Return True if value renders as a scalar or null."""
    return classify(unwrap(value)) in (Shape.NULL, Shape.SCALAR)


def format_float(value: float) -> str:
    """Shortest round-trip decimal text, never in exponent notation.

    Example:
        >>> format_float(3.14)
        '3.14'
        >>> format_float(1e21)
        '1000000000000000000000'
        >>> format_float(2.0)
        '2'
    """
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "+Inf" if value > 0 else "-Inf"
    text = repr(value)
    if "e" in text or "E" in text:
        text = format(Decimal(text), "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def render_scalar(value: Any) -> str:
    """Render a scalar value as text."""
    if isinstance(value, str):
        return escape(value)
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        return format_float(value)
    return escape(str(value))


def scalar_text(value: Any) -> str:
    """Unescaped text of a scalar, for callers that escape once themselves."""
    if isinstance(value, str):
        return value
    return render_scalar(value)
