"""
Column letter <-> index conversion.

Spreadsheet columns are a base-26 numeral system without a zero digit:
A=1, ..., Z=26, AA=27.  The grid itself is addressed zero-based, so the
``column_key`` / ``column_position`` helpers shift by one.
"""

import re

from .errors import InvalidColumnIndex, InvalidColumnLetter

_LETTERS_RE = re.compile(r"^[A-Za-z]+$")


def col_letter_to_index(col_str):
    """Convert column letter(s) to 1-based index. A=1, B=2, ..., Z=26, AA=27."""
    if not isinstance(col_str, str) or not _LETTERS_RE.match(col_str):
        raise InvalidColumnLetter(f"Invalid column letters: {col_str!r}")
    result = 0
    for char in col_str.upper():
        result = result * 26 + (ord(char) - ord('A') + 1)
    return result


def index_to_col_letter(index):
    """Convert 1-based column index to letter(s). 1=A, 2=B, ..., 26=Z, 27=AA."""
    if isinstance(index, bool) or not isinstance(index, int) or index < 0:
        raise InvalidColumnIndex(f"Invalid column index: {index!r}")
    result = ""
    while index > 0:
        index, remainder = divmod(index - 1, 26)
        result = chr(65 + remainder) + result
    return result


def column_key(col_idx):
    """Letter key for a zero-based grid column (0 -> 'A')."""
    if isinstance(col_idx, int) and col_idx < 0:
        raise InvalidColumnIndex(f"Invalid column index: {col_idx!r}")
    return index_to_col_letter(col_idx + 1)


def column_position(col_str):
    """Zero-based grid column for letter(s) ('A' -> 0)."""
    return col_letter_to_index(col_str) - 1
