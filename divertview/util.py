"""
Hex codec and byte helpers used for fixtures and debug dumps.
"""

from __future__ import annotations

import string

from divertview.exceptions import MalformedInputError


_HEX_DIGITS = frozenset(string.hexdigits)


def parse_hex_binary(s: str) -> bytes:
    """
    Convert a hex string into bytes.

    Args:
        s: Even-length string of [0-9a-fA-F] characters

    Returns:
        The decoded bytes

    Raises:
        MalformedInputError: If s has odd length or a non-hex character
    """
    if len(s) % 2 != 0:
        raise MalformedInputError(f"hexBinary needs to be even-length: {s}")
    if not _HEX_DIGITS.issuperset(s):
        raise MalformedInputError(f"contains illegal character for hexBinary: {s}")
    return bytes.fromhex(s)


def print_hex_binary(data: bytes | bytearray | memoryview) -> str:
    """Convert bytes into an uppercase hex string."""
    return bytes(data).hex().upper()


def zero_pad(data: bytes, size: int) -> bytes:
    """Pad data with zeroes up to size, truncating it if longer."""
    return bytes(data[:size]).ljust(size, b'\x00')
