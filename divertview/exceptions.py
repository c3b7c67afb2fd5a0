"""
Exception types raised by divertview.

Every error derives from DivertViewError and from the builtin exception a
generic caller would expect (IndexError for bounds, ValueError for bad input).
"""

from __future__ import annotations


class DivertViewError(Exception):
    """Base class for all divertview errors."""


class OutOfRangeError(DivertViewError, IndexError):
    """Offset or length exceeds the capacity of the packet buffer."""

    def __init__(self, offset: int, length: int, capacity: int):
        super().__init__(
            f"Access [{offset}, {offset + length}) out of range for buffer of {capacity} bytes"
        )
        self.offset = offset
        self.length = length
        self.capacity = capacity


class UnknownProtocolError(DivertViewError, ValueError):
    """Protocol number is not in the recognized protocol table."""

    def __init__(self, value: int):
        super().__init__(f"Protocol {value} is not recognized")
        self.value = value


class InvalidStateError(DivertViewError, RuntimeError):
    """A structural precondition of the header or packet is violated."""


class NoSuchFieldError(InvalidStateError):
    """The packet lacks the header that carries the requested field."""

    def __init__(self, field: str, reason: str | None = None):
        super().__init__(reason or f"Packet has no header carrying field {field!r}")
        self.field = field


class MalformedInputError(DivertViewError, ValueError):
    """Input to the hex codec is not a valid even-length hex string."""


class ChecksumError(DivertViewError):
    """The external checksum helper failed."""
