"""Tests for cell escaping and row splitting."""

from __future__ import annotations

import pytest

from mindtoon import TOON, ToonDecodeError, escape
from mindtoon.escape import SPECIAL_CHARS, split_cells, split_row


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("simple", "simple"),
        ("", ""),
        ("hello world", "hello world"),
        ("has,comma", '"has,comma"'),
        ('has"quote', '"has""quote"'),
        ("has\nnewline", '"has\nnewline"'),
        ("has\rreturn", '"has\rreturn"'),
        ("has:colon", '"has:colon"'),
        ("has[bracket", '"has[bracket"'),
        ("has]bracket", '"has]bracket"'),
        ("has{brace", '"has{brace"'),
        ("has}brace", '"has}brace"'),
        ('Say "Hello"', '"Say ""Hello"""'),
        ("Smith, John", '"Smith, John"'),
    ],
)
def test_escape(value: str, expected: str) -> None:
    assert escape(value) == expected


@pytest.mark.parametrize("value", ["plain", "with spaces", "tab\there", "ünïcödé", "a-b_c.d/e", "  padded  "])
def test_escape_leaves_safe_strings_unchanged(value: str) -> None:
    assert not set(value) & SPECIAL_CHARS
    assert escape(value) == value


@pytest.mark.parametrize(
    "value",
    ["", "plain", "a,b", '"', '""', 'x"y,z', "multi\nline: yes", "[1]{a}:", ",,,", '",'],
)
def test_split_cells_reverses_escape(value: str) -> None:
    assert split_cells(escape(value)) == [value]


def test_split_cells_multiple_cells() -> None:
    values = ["Smith, John", "", 'Say "Hello"', "plain"]
    line = ",".join(escape(v) for v in values)
    assert split_cells(line) == values


def test_split_cells_trailing_empty_cell() -> None:
    assert split_cells("a,") == ["a", ""]
    assert split_cells(",") == ["", ""]


def test_split_row_strips_row_prefix() -> None:
    assert split_row('  Alice,"Smith, John",') == ["Alice", "Smith, John", ""]


def test_split_cells_unterminated_quote_raises() -> None:
    with pytest.raises(ToonDecodeError, match="Unterminated"):
        split_cells('"open,cell')


def test_split_cells_garbage_after_quote_raises() -> None:
    with pytest.raises(ToonDecodeError, match="Unexpected character"):
        split_cells('"quoted"tail,x')


def test_facade_delegates() -> None:
    assert TOON.escape("a:b") == '"a:b"'
    assert TOON.split_cells('"a:b",c') == ["a:b", "c"]
    assert TOON.split_row("  1,2") == ["1", "2"]
