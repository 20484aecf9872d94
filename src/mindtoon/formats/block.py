"""Block form: the indented `key: value` / `- item` layout.

Every block-shaped result carries its own indentation, so a child rendered
at `depth + 1` can be appended under its parent's line unchanged. Scalars,
`[]`, `{}` and primitive arrays are inline and stay on the parent's line.

Example:
    >>> print(encode_block({"user": {"id": 1, "tags": ["a", "b"]}, "ok": True}))
    user:
      id: 1
      tags: [2]: a,b
    ok: true
"""

from __future__ import annotations

from typing import Any, cast

from mindtoon.escape import escape, needs_quoting
from mindtoon.formats.scalar import NULL, Shape, classify, is_primitive, render_scalar, unwrap
from mindtoon.formats.tabular import is_tabulable, render_table
from mindtoon.schema import RecordSchema, schema_for

INDENT = "  "


def encode_block(value: Any, depth: int = 0) -> str:
    """Encode any value in block form at the given nesting depth."""
    text, _ = _encode(value, depth)
    return text


def _encode(value: Any, depth: int) -> tuple[str, bool]:
    """Return (text, is_block) for a value."""
    value = unwrap(value)
    shape = classify(value)

    if shape is Shape.NULL:
        return NULL, False
    if shape is Shape.SCALAR:
        return render_scalar(value), False
    if shape is Shape.SEQUENCE:
        return _encode_sequence(list(value), depth)
    if shape is Shape.MAPPING:
        return _encode_pairs([(str(k), v) for k, v in value.items()], depth)
    if shape is Shape.RECORD:
        schema = cast(RecordSchema, schema_for(type(value)))
        return _encode_pairs([(spec.name, v) for spec, v in schema.emitted(value)], depth)
    return escape(str(value)), False


def key_text(key: str) -> str:
    """Mapping key as written before `:`; the empty key is `""`."""
    return escape(key) if key else '""'


def _try_table(name: str, items: list[Any], depth: int) -> str | None:
    fields = is_tabulable(items)
    if fields is None:
        return None
    return render_table(name, fields, items, depth)


def _encode_sequence(items: list[Any], depth: int) -> tuple[str, bool]:
    if not items:
        return "[]", False

    if all(is_primitive(item) for item in items):
        return f"[{len(items)}]: " + ",".join(encode_block(item) for item in items), False

    if (table := _try_table("", items, depth)) is not None:
        return table, True

    pad = INDENT * depth
    lines: list[str] = []
    for item in items:
        text, block = _encode(item, depth + 1)
        if block:
            lines.append(f"{pad}-")
            lines.append(text)
        else:
            lines.append(f"{pad}- {text}")
    return "\n".join(lines), True


def _encode_pairs(pairs: list[tuple[str, Any]], depth: int) -> tuple[str, bool]:
    if not pairs:
        return "{}", False

    pad = INDENT * depth
    lines: list[str] = []
    for key, value in pairs:
        value = unwrap(value)

        # Uniform record arrays collapse to a named table at the key's depth.
        # Only a non-empty key that needs no quoting can name a table.
        if key and not needs_quoting(key) and classify(value) is Shape.SEQUENCE:
            table = _try_table(key, list(value), depth)
            if table is not None:
                lines.append(table)
                continue

        text, block = _encode(value, depth + 1)
        if block:
            lines.append(f"{pad}{key_text(key)}:")
            lines.append(text)
        else:
            lines.append(f"{pad}{key_text(key)}: {text}")
    return "\n".join(lines), True
