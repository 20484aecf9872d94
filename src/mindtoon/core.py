"""TOON Protocol.

TOON (Token-Oriented Object Notation) renders Python values into a dense,
line-oriented text for LLM prompt context.

Core features:
    - Block form: indented `key: value` / `- item` lines for nested data.
    - Primitive arrays: `[N]: a,b,c` on one line.
    - Tabular form: uniform record arrays become one header plus CSV-like rows.
    - Encode-only and total: every input produces text, nothing raises.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import Any, cast

import orjson

from mindtoon.encoding import DEFAULT_ENCODING, count_tokens
from mindtoon.escape import escape, split_cells, split_row
from mindtoon.formats import Shape, auto_tabulate, classify, encode_block, tabulate, unwrap
from mindtoon.schema import RecordSchema, schema_for

_HINT = (
    "Data is TOON: `key: value` lines, 2-space nesting, `[N]: a,b` arrays, "
    'tables as `name[N]{cols}:` then one comma row each; "quoted" cells double inner quotes.'
)


@dataclass(frozen=True)
class EncodingResult:
    """TOON text alongside its compact-JSON baseline and token counts."""

    text: str
    json_text: str
    tokens: int
    json_tokens: int

    @property
    def savings(self) -> float:
        """Fraction of baseline tokens saved (negative when TOON is larger)."""
        return 1.0 - (self.tokens / max(1, self.json_tokens))

    def __str__(self) -> str:
        return self.text


def _jsonable(value: Any) -> Any:
    """Convert a value into orjson-native types, honouring record schemas."""
    value = unwrap(value)
    shape = classify(value)
    if shape in (Shape.NULL, Shape.SCALAR):
        # orjson only serializes integers within 64 bits
        if isinstance(value, int) and not -(2**63) <= value < 2**64:
            return str(value)
        return value
    if shape is Shape.SEQUENCE:
        return [_jsonable(v) for v in value]
    if shape is Shape.MAPPING:
        return {str(k): _jsonable(v) for k, v in value.items()}
    if shape is Shape.RECORD:
        schema = cast(RecordSchema, schema_for(type(value)))
        return {spec.name: _jsonable(v) for spec, v in schema.emitted(value)}
    return str(value)


class TOON:
    """Encoder facade for the TOON notation.

    Formats:
        - block: generic nested layout (`encode`)
        - tabular: header plus rows for uniform records (`tabulate`,
          `auto_tabulate`), also chosen automatically inside `encode`

    All methods are pure and safe to call concurrently.
    """

    @staticmethod
    def encode(value: Any) -> str:
        """Encode any value to TOON text.

        Args:
            value: Scalar, sequence, mapping, record, or anything else (which
                falls back to its escaped `str`).

        Returns:
            TOON text. Never raises for acyclic input.

        Example:
            >>> TOON.encode([{"id": 1, "name": "Alice"}, {"id": 2, "name": "Bob"}])
            '[2]{id,name}:\\n  1,Alice\\n  2,Bob'
        """
        return encode_block(value)

    @staticmethod
    def tabulate(name: str, rows: Iterable[Any], fields: Sequence[str] | None = None) -> str:
        """Encode rows as `name[N]{fields}:` followed by one line per row."""
        return tabulate(name, rows, fields)

    @staticmethod
    def auto_tabulate(name: str, rows: Iterable[Any], fields: Sequence[str] | None = None) -> str:
        """Like `tabulate`, discovering columns from the first row when none are given."""
        return auto_tabulate(name, rows, fields)

    @staticmethod
    def escape(s: str) -> str:
        """Quote a string if it contains structural characters."""
        return escape(s)

    @staticmethod
    def split_cells(text: str) -> list[str]:
        """Split comma-joined cells, undoing `escape`."""
        return split_cells(text)

    @staticmethod
    def split_row(line: str) -> list[str]:
        """Split one indented table row into raw cells."""
        return split_row(line)

    @staticmethod
    def compare(value: Any, *, encoding: str | None = DEFAULT_ENCODING) -> EncodingResult:
        """Encode a value and measure it against compact JSON.

        Args:
            value: Value to encode.
            encoding: Tiktoken encoding for token counting, or None for the
                fast byte-length estimate.

        Returns:
            EncodingResult with both texts and their token counts.
        """
        text = encode_block(value)
        json_text = orjson.dumps(_jsonable(value)).decode()
        return EncodingResult(
            text=text,
            json_text=json_text,
            tokens=count_tokens(text, encoding=encoding),
            json_tokens=count_tokens(json_text, encoding=encoding),
        )

    @staticmethod
    def hint() -> str:
        """Short description of the notation for an LLM system prompt."""
        return _HINT

    @staticmethod
    def count_tokens(text: str, *, encoding: str | None = DEFAULT_ENCODING) -> int:
        """Count tokens in text using the specified encoding."""
        return count_tokens(text, encoding=encoding)
