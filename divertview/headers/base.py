"""
Header base classes.

A header is a view onto [start, start + header_length) of a shared packet
buffer. Accessors in header classes take offsets relative to the header
start; the underlying ByteView works with absolute offsets.
"""

from __future__ import annotations

import socket
from abc import ABC, abstractmethod
from typing import Any, ClassVar

from divertview.core.buffer import ByteView
from divertview.core.enums import Protocol
from divertview.exceptions import InvalidStateError, OutOfRangeError
from divertview.util import zero_pad


class Header(ABC):
    """
    Abstract base class for protocol header views.

    header_length is always recomputed from the buffer, never cached,
    so mutating a length field is immediately visible. Equality and hash
    are defined over the raw header bytes.
    """

    # Protocol name used in repr and exports
    name: ClassVar[str] = ""

    # Smallest well-formed header, checked only in strict decoding
    min_length: ClassVar[int] = 0

    # Field names listed by to_dict() and repr()
    _FIELDS: ClassVar[tuple[str, ...]] = ()

    def __init__(self, buf: bytearray | ByteView, start: int = 0):
        if isinstance(buf, ByteView):
            self._view = buf.duplicate(start)
        else:
            self._view = ByteView(buf, start)

    @property
    def start(self) -> int:
        """Absolute offset of this header in the packet buffer."""
        return self._view.start

    @property
    def view(self) -> ByteView:
        return self._view

    @property
    def buffer(self) -> bytearray:
        return self._view.buffer

    @property
    @abstractmethod
    def header_length(self) -> int:
        """Header length in bytes, computed from current buffer contents."""

    @property
    def raw_header_bytes(self) -> bytes:
        """Copy of this header's bytes only."""
        return self._view.get_bytes(self.start, self.header_length)

    # Header-local accessors

    def _get(self, offset: int, width: int) -> int:
        return self._view.get(self._view.local(offset), width)

    def _set(self, offset: int, width: int, value: int) -> None:
        self._view.set(self._view.local(offset), width, value)

    def _get_bytes(self, offset: int, length: int) -> bytes:
        return self._view.get_bytes(self._view.local(offset), length)

    def _set_bytes(self, offset: int, data: bytes, length: int | None = None) -> None:
        self._view.set_bytes(self._view.local(offset), data, length)

    def _get_bit(self, offset: int, bit: int) -> bool:
        return self._view.get_flag(self._view.local(offset), bit)

    def _set_bit(self, offset: int, bit: int, value: bool) -> None:
        self._view.set_flag(self._view.local(offset), bit, value)

    def _get_options(self, fixed: int) -> bytes | None:
        """Bytes in [fixed, header_length), or None when the header has none."""
        extra = self.header_length - fixed
        if extra > 0:
            return self._get_bytes(fixed, extra)
        return None

    def _set_options(self, fixed: int, options: bytes) -> None:
        extra = self.header_length - fixed
        if extra <= 0:
            raise InvalidStateError(
                f"{self.name} header is too short for options; grow its length field first"
            )
        self._set_bytes(fixed, zero_pad(options, extra))

    def check_complete(self) -> None:
        """Raise OutOfRangeError if the buffer does not hold the whole header."""
        length = max(self.header_length, self.min_length)
        self._view.check_range(self.start, length)

    def to_dict(self) -> dict[str, Any]:
        """Decoded fields as a plain dict."""
        return {name: getattr(self, name) for name in self._FIELDS}

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if type(self) is not type(other):
            return NotImplemented
        return self.raw_header_bytes == other.raw_header_bytes

    def __hash__(self) -> int:
        return hash((type(self).__name__, self.raw_header_bytes))

    def __repr__(self) -> str:
        fields = ", ".join(f"{k}={v!r}" for k, v in self.to_dict().items())
        return f"{type(self).__name__}({fields})"


class IPHeader(Header):
    """Network layer header carrying addresses and a next-protocol number."""

    address_family: ClassVar[int] = socket.AF_INET
    addr_len: ClassVar[int] = 4
    src_addr_offset: ClassVar[int] = 12
    dst_addr_offset: ClassVar[int] = 16

    @staticmethod
    def get_version(buf: bytearray | bytes) -> int:
        """Read the IP version nibble of a raw packet."""
        if not buf:
            raise OutOfRangeError(0, 1, 0)
        return buf[0] >> 4

    @property
    def version(self) -> int:
        return self._get(0, 1) >> 4

    @property
    @abstractmethod
    def next_header_number(self) -> int:
        """Raw protocol number of the header that follows."""

    @property
    def next_header_protocol(self) -> Protocol:
        """Protocol of the following header; raises UnknownProtocolError if unrecognized."""
        return Protocol.from_value(self.next_header_number)

    def _get_addr(self, offset: int) -> str:
        return socket.inet_ntop(self.address_family, self._get_bytes(offset, self.addr_len))

    def _set_addr(self, offset: int, address: str) -> None:
        try:
            packed = socket.inet_pton(self.address_family, address)
        except OSError as exc:
            raise ValueError(f"Invalid {self.name} address: {address!r}") from exc
        self._set_bytes(offset, packed)

    @property
    def src_addr(self) -> str:
        return self._get_addr(self.src_addr_offset)

    @src_addr.setter
    def src_addr(self, address: str) -> None:
        self._set_addr(self.src_addr_offset, address)

    @property
    def dst_addr(self) -> str:
        return self._get_addr(self.dst_addr_offset)

    @dst_addr.setter
    def dst_addr(self, address: str) -> None:
        self._set_addr(self.dst_addr_offset, address)

    @property
    def src_addr_bytes(self) -> bytes:
        return self._get_bytes(self.src_addr_offset, self.addr_len)

    @src_addr_bytes.setter
    def src_addr_bytes(self, packed: bytes) -> None:
        self._set_packed_addr(self.src_addr_offset, packed)

    @property
    def dst_addr_bytes(self) -> bytes:
        return self._get_bytes(self.dst_addr_offset, self.addr_len)

    @dst_addr_bytes.setter
    def dst_addr_bytes(self, packed: bytes) -> None:
        self._set_packed_addr(self.dst_addr_offset, packed)

    def _set_packed_addr(self, offset: int, packed: bytes) -> None:
        if len(packed) != self.addr_len:
            raise ValueError(f"{self.name} address must be {self.addr_len} bytes, got {len(packed)}")
        self._set_bytes(offset, packed)


class TransportHeader(Header):
    """Transport layer header with source and destination ports."""

    @property
    def src_port(self) -> int:
        return self._get(0, 2)

    @src_port.setter
    def src_port(self, port: int) -> None:
        self._set(0, 2, port)

    @property
    def dst_port(self) -> int:
        return self._get(2, 2)

    @dst_port.setter
    def dst_port(self, port: int) -> None:
        self._set(2, 2, port)


class ControlHeader(Header):
    """ICMP-style header: type, code, checksum and a 4-byte opaque body."""

    min_length = 8

    @property
    def header_length(self) -> int:
        return 4

    @property
    def type(self) -> int:
        return self._get(0, 1)

    @type.setter
    def type(self, value: int) -> None:
        self._set(0, 1, value)

    @property
    def code(self) -> int:
        return self._get(1, 1)

    @code.setter
    def code(self, value: int) -> None:
        self._set(1, 1, value)

    @property
    def checksum(self) -> int:
        return self._get(2, 2)

    @checksum.setter
    def checksum(self, value: int) -> None:
        self._set(2, 2, value)

    def _get_body(self) -> bytes:
        return self._get_bytes(4, 4)

    def _set_body(self, data: bytes) -> None:
        self._set_bytes(4, zero_pad(data, 4))
