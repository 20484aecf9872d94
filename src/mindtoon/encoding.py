"""Token counting helpers.

`encoding=None` uses a fast byte-length estimate; a tiktoken encoding name
gives an exact count for that vocabulary.
"""

from __future__ import annotations

import math
from functools import lru_cache
from typing import TYPE_CHECKING

import tiktoken

from mindtoon.errors import ToonError

if TYPE_CHECKING:
    from tiktoken import Encoding  # pragma: no cover

DEFAULT_ENCODING: str | None = None

# Rough average for English text across OpenAI vocabularies.
BYTES_PER_TOKEN = 4


@lru_cache(maxsize=8)
def _get_encoding(name: str) -> Encoding:
    try:
        return tiktoken.get_encoding(name)
    except ValueError as e:
        raise ToonError(f"Unknown tiktoken encoding: {name}") from e


def estimate_tokens(text: str) -> int:
    """Estimate tokens from UTF-8 byte length."""
    return math.ceil(len(text.encode("utf-8")) / BYTES_PER_TOKEN)


def count_tokens(text: str, *, encoding: str | None = DEFAULT_ENCODING) -> int:
    """Count tokens in text.

    Args:
        text: Text to measure.
        encoding: Tiktoken encoding name (e.g. "o200k_base"), or None for the
            fast byte-length estimate.

    Raises:
        ToonError: If the encoding name is unknown.
    """
    if encoding is None:
        return estimate_tokens(text)
    return len(_get_encoding(encoding).encode(text, disallowed_special=()))
