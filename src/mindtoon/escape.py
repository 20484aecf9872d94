"""Cell escaping for TOON text.

A value that contains any of the format's structural characters is wrapped in
double quotes with embedded quotes doubled. There are no backslash escapes.
"""

from __future__ import annotations

from mindtoon.errors import ToonDecodeError

SPECIAL_CHARS = frozenset(',"\n\r:[]{}')

ROW_PREFIX = "  "


def needs_quoting(s: str) -> bool:
    """Return True if s contains a structural character."""
    return any(c in SPECIAL_CHARS for c in s)


def escape(s: str) -> str:
    """Escape a string for use as one tabular cell or inline scalar.

    Example:
        >>> escape("Smith, John")
        '"Smith, John"'
        >>> escape('a "b" c')
        '"a ""b"" c"'
    """
    if not s or not needs_quoting(s):
        return s
    return '"' + s.replace('"', '""') + '"'


def split_cells(line: str) -> list[str]:
    """Split comma-joined cells back into raw cell strings.

    Commas inside a quoted span do not split, and doubled quotes inside a
    quoted span collapse to one.

    Raises:
        ToonDecodeError: If a quoted cell is not terminated, or a closing
            quote is followed by anything other than a comma.
    """
    cells: list[str] = []
    buf: list[str] = []
    i = 0
    n = len(line)
    while True:
        if i < n and line[i] == '"':
            i += 1
            while True:
                j = line.find('"', i)
                if j < 0:
                    raise ToonDecodeError(f"Unterminated quoted cell in row: {line!r}")
                buf.append(line[i:j])
                if j + 1 < n and line[j + 1] == '"':
                    buf.append('"')
                    i = j + 2
                    continue
                i = j + 1
                break
            if i < n and line[i] != ",":
                raise ToonDecodeError(f"Unexpected character after quoted cell at {i}: {line!r}")
        else:
            j = line.find(",", i)
            end = n if j < 0 else j
            buf.append(line[i:end])
            i = end

        cells.append("".join(buf))
        buf.clear()
        if i >= n:
            return cells
        i += 1  # skip comma


def split_row(line: str) -> list[str]:
    """Split one tabular row line, dropping its two-space row prefix."""
    if line.startswith(ROW_PREFIX):
        line = line[len(ROW_PREFIX) :]
    return split_cells(line)
