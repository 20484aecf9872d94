"""TOON error hierarchy.

Encoding itself never raises; these cover record registration, row reading,
and token counting.
"""

from __future__ import annotations


class ToonError(Exception):
    """Base error for mindtoon."""


class ToonSchemaError(ToonError):
    """Raised when a record type cannot be described by a field schema."""


class ToonDecodeError(ToonError):
    """Raised when a tabular row cannot be split into cells."""
