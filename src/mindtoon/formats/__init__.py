"""TOON renderers: scalar, block and tabular forms."""

from mindtoon.formats.block import INDENT, encode_block
from mindtoon.formats.scalar import Shape, classify, format_float, render_scalar, unwrap
from mindtoon.formats.tabular import (
    auto_tabulate,
    cell_text,
    discover_fields,
    is_tabulable,
    tabulate,
)

__all__ = [
    "INDENT",
    "Shape",
    "auto_tabulate",
    "cell_text",
    "classify",
    "discover_fields",
    "encode_block",
    "format_float",
    "is_tabulable",
    "render_scalar",
    "tabulate",
    "unwrap",
]
