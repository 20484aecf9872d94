"""mindtoon - Token-Oriented Object Notation for LLM prompt context.

A compact, human-readable rendering of Python values that spends fewer
tokens than JSON, especially for uniform arrays of records.
"""

from mindtoon.core import TOON, EncodingResult
from mindtoon.errors import ToonDecodeError, ToonError, ToonSchemaError
from mindtoon.facts import Entity, Fact, format_facts_as_context
from mindtoon.schema import FieldSpec, RecordSchema, register_record, schema_for, toon_field

encode = TOON.encode
tabulate = TOON.tabulate
auto_tabulate = TOON.auto_tabulate
escape = TOON.escape

__all__ = [
    "TOON",
    "EncodingResult",
    "Entity",
    "Fact",
    "FieldSpec",
    "RecordSchema",
    "ToonDecodeError",
    "ToonError",
    "ToonSchemaError",
    "auto_tabulate",
    "encode",
    "escape",
    "format_facts_as_context",
    "register_record",
    "schema_for",
    "tabulate",
    "toon_field",
]
__version__ = "0.1.0"
