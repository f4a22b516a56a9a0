"""Parsing of unsigned decimal numbers at the start of a string."""

from __future__ import annotations

_ULONG_WRAP = 1 << 64
_UINT_WRAP = 1 << 32


def scan_ulong(text: str) -> tuple[int, int]:
    """Read ASCII decimal digits from the start of text.

    Returns the value, reduced modulo 2**64 as an unsigned long would be,
    and the number of characters consumed. No digits gives (0, 0).
    """
    value = 0
    length = 0
    for ch in text:
        if not "0" <= ch <= "9":
            break
        value = (value * 10 + ord(ch) - ord("0")) % _ULONG_WRAP
        length += 1
    return value, length


def scan_uint(text: str) -> tuple[int, int]:
    """Like scan_ulong, with the value truncated to 32 bits."""
    value, length = scan_ulong(text)
    return value % _UINT_WRAP, length