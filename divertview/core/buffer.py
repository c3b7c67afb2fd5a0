"""
ByteView - mutable big-endian window over a shared packet buffer.

Several views may alias the same bytearray, each with its own start offset.
None of them owns the storage; the Packet does.
"""

from __future__ import annotations

import struct

from divertview.exceptions import OutOfRangeError


# struct formats for the integer widths carried by IP/TCP/UDP/ICMP headers
_FORMATS = {
    1: struct.Struct('>B'),
    2: struct.Struct('>H'),
    4: struct.Struct('>I'),
}


class ByteView:
    """
    Big-endian accessor over a shared bytearray.

    All get/set methods take ABSOLUTE offsets into the buffer. Use
    local() to turn a header-local offset into an absolute one.

    Bounds are checked before any byte is written, so a failed call
    leaves the buffer untouched. Sequences of calls are not atomic:
    callers sharing a buffer across threads must hold their own lock
    around multi-field updates.
    """

    __slots__ = ('_buf', 'start')

    def __init__(self, buf: bytearray, start: int = 0):
        if not isinstance(buf, bytearray):
            raise TypeError(f"ByteView requires a bytearray, got {type(buf).__name__}")
        self._buf = buf
        self.start = start

    @property
    def buffer(self) -> bytearray:
        """The underlying shared storage."""
        return self._buf

    @property
    def capacity(self) -> int:
        return len(self._buf)

    def duplicate(self, start: int | None = None) -> ByteView:
        """Return a new view over the same storage with an independent start."""
        return ByteView(self._buf, self.start if start is None else start)

    def local(self, offset: int) -> int:
        """Convert a header-local offset to an absolute buffer offset."""
        return self.start + offset

    def check_range(self, offset: int, length: int) -> None:
        if offset < 0 or length < 0 or offset + length > len(self._buf):
            raise OutOfRangeError(offset, length, len(self._buf))

    def get(self, offset: int, width: int) -> int:
        """Read an unsigned big-endian integer of 1, 2 or 4 bytes."""
        fmt = _struct_for(width)
        self.check_range(offset, width)
        return fmt.unpack_from(self._buf, offset)[0]

    def set(self, offset: int, width: int, value: int) -> None:
        """Write an unsigned big-endian integer of 1, 2 or 4 bytes."""
        fmt = _struct_for(width)
        if not 0 <= value < (1 << (8 * width)):
            raise ValueError(f"Value {value} does not fit in {width} byte(s)")
        self.check_range(offset, width)
        fmt.pack_into(self._buf, offset, value)

    def get_flag(self, offset: int, bit: int) -> bool:
        """Read a single bit (0 = least significant) of the byte at offset."""
        return bool(self.get(offset, 1) & (1 << bit))

    def set_flag(self, offset: int, bit: int, value: bool) -> None:
        byte = self.get(offset, 1)
        if value:
            byte |= 1 << bit
        else:
            byte &= ~(1 << bit) & 0xFF
        self._buf[offset] = byte

    def get_bytes(self, offset: int, length: int) -> bytes:
        """Copy length bytes out of the buffer."""
        self.check_range(offset, length)
        return bytes(self._buf[offset:offset + length])

    def set_bytes(self, offset: int, data: bytes, length: int | None = None) -> None:
        """Copy the first length bytes of data into the buffer (all of it by default)."""
        if length is None:
            length = len(data)
        if length > len(data):
            raise ValueError(f"Cannot write {length} bytes from {len(data)}-byte data")
        self.check_range(offset, length)
        self._buf[offset:offset + length] = data[:length]

    def __len__(self) -> int:
        return len(self._buf)

    def __repr__(self) -> str:
        return f"ByteView(start={self.start}, capacity={len(self._buf)})"


def _struct_for(width: int) -> struct.Struct:
    try:
        return _FORMATS[width]
    except KeyError:
        raise ValueError(f"Unsupported width {width}") from None
