"""Tabular form for uniform record arrays.

Rows that share one field list are written as a single header followed by
one comma-joined line per row:

    users[2]{id,name,active}:
      1,Alice,true
      2,Bob,false

Columns come from the caller, or from the first row: a record's schema fields
in declaration order (omitempty fields that are empty in that row are left
out), or a mapping's keys. A field missing from a row is an empty cell.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from typing import Any, cast

from mindtoon.escape import ROW_PREFIX, escape, needs_quoting
from mindtoon.formats import block
from mindtoon.formats.scalar import Shape, classify, is_primitive, scalar_text, unwrap
from mindtoon.schema import RecordSchema, schema_for

logger = logging.getLogger(__name__)


def table_header(name: str, count: int, fields: Sequence[str]) -> str:
    """Header line: `name[count]{f1,f2,...}:`."""
    return f"{name}[{count}]{{{','.join(fields)}}}:"


def _row_pairs(row: Any) -> list[tuple[str, Any]] | None:
    """(field, value) pairs of a record or mapping row, None for anything else."""
    row = unwrap(row)
    shape = classify(row)
    if shape is Shape.RECORD:
        schema = cast(RecordSchema, schema_for(type(row)))
        return [(spec.name, value) for spec, value in schema.emitted(row)]
    if shape is Shape.MAPPING:
        return [(str(k), v) for k, v in row.items()]
    return None


def discover_fields(row: Any) -> list[str]:
    """Column names derived from one representative row.

    Records yield their schema fields in declaration order, dropping
    omitempty fields that are empty in this row. Mappings yield their keys.
    Anything else yields no columns.
    """
    pairs = _row_pairs(row)
    if pairs is None:
        return []
    return [name for name, _ in pairs]


def is_tabulable(items: Sequence[Any]) -> list[str] | None:
    """Return the shared field list if items can be rendered as one table.

    Every item must be a record or mapping emitting the same field names in
    the same order, every value must be a scalar or null, and every field
    name must be usable in a header unquoted.
    """
    if not items:
        return None

    fields: list[str] | None = None
    for item in items:
        pairs = _row_pairs(item)
        if not pairs:
            return None
        names = [name for name, _ in pairs]
        if fields is None:
            if any(not name or needs_quoting(name) for name in names):
                return None
            fields = names
        elif names != fields:
            return None
        if not all(is_primitive(value) for _, value in pairs):
            return None
    return fields


def cell_text(value: Any) -> str:
    """Unescaped text of one cell.

    Null is empty. A record with a string display label collapses to that
    label; any other composite falls back to its block rendering.
    """
    value = unwrap(value)
    shape = classify(value)
    if shape is Shape.NULL:
        return ""
    if shape is Shape.SCALAR:
        return scalar_text(value)
    if shape is Shape.RECORD:
        schema = cast(RecordSchema, schema_for(type(value)))
        if (label := schema.label_of(value)) is not None:
            return label
    if shape is Shape.OTHER:
        return str(value)
    return block.encode_block(value)


def row_cells(row: Any, fields: Sequence[str]) -> list[str]:
    """Escaped cells of one row in field order."""
    row = unwrap(row)
    shape = classify(row)
    if shape is Shape.RECORD:
        schema = cast(RecordSchema, schema_for(type(row)))
        values = []
        for name in fields:
            spec = schema.field(name)
            values.append(spec.get(row) if spec is not None else None)
    elif shape is Shape.MAPPING:
        values = [row.get(name) for name in fields]
    else:
        logger.debug("Row of type %s is not a record or mapping; emitting empty cells", type(row).__name__)
        values = [None] * len(fields)
    return [escape(cell_text(value)) for value in values]


def render_table(name: str, fields: Sequence[str], rows: Sequence[Any], depth: int = 0) -> str:
    """Render a header plus rows, the header indented at depth."""
    pad = block.INDENT * depth
    lines = [pad + table_header(name, len(rows), fields)]
    lines.extend(pad + ROW_PREFIX + ",".join(row_cells(row, fields)) for row in rows)
    return "\n".join(lines)


def tabulate(name: str, rows: Iterable[Any], fields: Sequence[str] | None = None) -> str:
    """Encode rows as a table.

    Args:
        name: Table name written before the row count.
        rows: Records or field-name mappings.
        fields: Column names in order. Discovered from the first row when
            omitted.

    Returns:
        The table text with no trailing newline. With no rows this is just
        the header, e.g. `items[0]{a,b}:`.

    Example:
        >>> tabulate("facts", [{"subject": "Alice", "predicate": "likes", "object": "Bob"}])
        'facts[1]{subject,predicate,object}:\\n  Alice,likes,Bob'
    """
    rows = list(rows)
    if fields is None:
        fields = discover_fields(rows[0]) if rows else []
        logger.debug("Discovered columns for %s: %s", name, fields)
    return render_table(name, list(fields), rows)


def auto_tabulate(name: str, rows: Iterable[Any], fields: Sequence[str] | None = None) -> str:
    """Encode typed rows as a table, discovering columns when none are given.

    Unlike `tabulate`, an empty `fields` also triggers discovery. Columns are
    fixed by the first row; pass `fields` explicitly when rows differ in
    which omitempty fields are set.
    """
    rows = list(rows)
    if not fields:
        fields = discover_fields(rows[0]) if rows else []
        logger.debug("Discovered columns for %s: %s", name, fields)
    return tabulate(name, rows, fields)
