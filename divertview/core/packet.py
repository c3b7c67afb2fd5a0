"""
Packet facade.

Composes one IP header and at most one transport or control header over a
single packet buffer, together with the capture metadata (interface and
direction) needed to reinject it.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Sequence

from divertview.core.enums import CalcChecksumsOption, Direction, LOOPBACK_IF_IDX
from divertview.exceptions import ChecksumError, NoSuchFieldError
from divertview.headers.base import ControlHeader, Header, IPHeader, TransportHeader
from divertview.headers.control import ICMPv4Header, ICMPv6Header
from divertview.headers.factory import build_headers
from divertview.headers.network import IPv4Header, IPv6Header
from divertview.headers.transport import TCPHeader, UDPHeader
from divertview.util import print_hex_binary

if TYPE_CHECKING:
    from divertview.checksum import ChecksumHelper

logger = logging.getLogger(__name__)


@dataclass
class PacketConfig:
    """Configuration for packet decoding."""
    loopback_if_idx: int = LOOPBACK_IF_IDX
    strict: bool = False
    checksum_helper: ChecksumHelper | None = None


@dataclass(frozen=True)
class DivertAddress:
    """Capture/inject metadata: network interface and direction."""
    if_idx: int = 0
    sub_if_idx: int = 0
    direction: Direction = Direction.OUTBOUND

    def __post_init__(self):
        object.__setattr__(self, 'direction', Direction.from_value(self.direction))


class Packet:
    """
    A single diverted packet: IP header, optional transport or control
    header, and payload.

    Headers are views onto the packet buffer, so setting a header field
    changes the bytes returned by raw. A bytes input is copied once into
    a bytearray owned by the packet; a bytearray input is used in place.

    Not thread-safe: callers sharing a Packet across threads must hold a
    lock for the duration of any multi-field update.

    Example:
        >>> pkt = Packet(raw, interface=(2, 0), direction=Direction.OUTBOUND)
        >>> if pkt.is_tcp and pkt.dst_port == 443:
        ...     pkt.dst_port = 8443
        ...     pkt.recalculate_checksum()
        >>> driver_send(pkt.raw, pkt.address)
    """

    def __init__(
        self,
        raw: bytes | bytearray,
        interface: Sequence[int] = (0, 0),
        direction: Direction = Direction.OUTBOUND,
        config: PacketConfig | None = None,
    ):
        if len(interface) != 2:
            raise ValueError("interface must be an (if_idx, sub_if_idx) pair")

        self.config = config or PacketConfig()
        self._buf = raw if isinstance(raw, bytearray) else bytearray(raw)
        self.interface = (int(interface[0]), int(interface[1]))
        self.direction = Direction.from_value(direction)

        self._ip_hdr, second = build_headers(self._buf, strict=self.config.strict)
        self._transport_hdr: TransportHeader | None = None
        self._control_hdr: ControlHeader | None = None
        if isinstance(second, TransportHeader):
            self._transport_hdr = second
        elif isinstance(second, ControlHeader):
            self._control_hdr = second

    @classmethod
    def from_address(
        cls,
        raw: bytes | bytearray,
        address: DivertAddress,
        config: PacketConfig | None = None,
    ) -> Packet:
        """Build a packet from driver metadata."""
        return cls(raw, (address.if_idx, address.sub_if_idx), address.direction, config)

    # Direction and interface

    @property
    def is_outbound(self) -> bool:
        return self.direction == Direction.OUTBOUND

    @property
    def is_inbound(self) -> bool:
        return self.direction == Direction.INBOUND

    @property
    def is_loopback(self) -> bool:
        return self.interface[0] == self.config.loopback_if_idx

    @property
    def address(self) -> DivertAddress:
        """Metadata to hand back to the driver on reinjection."""
        return DivertAddress(self.interface[0], self.interface[1], self.direction)

    # Protocol predicates

    @property
    def is_ipv4(self) -> bool:
        return isinstance(self._ip_hdr, IPv4Header)

    @property
    def is_ipv6(self) -> bool:
        return isinstance(self._ip_hdr, IPv6Header)

    @property
    def is_tcp(self) -> bool:
        return isinstance(self._transport_hdr, TCPHeader)

    @property
    def is_udp(self) -> bool:
        return isinstance(self._transport_hdr, UDPHeader)

    @property
    def is_icmpv4(self) -> bool:
        return isinstance(self._control_hdr, ICMPv4Header)

    @property
    def is_icmpv6(self) -> bool:
        return isinstance(self._control_hdr, ICMPv6Header)

    # Header access

    @property
    def ip_header(self) -> IPHeader:
        return self._ip_hdr

    @property
    def transport_header(self) -> TransportHeader | None:
        return self._transport_hdr

    @property
    def control_header(self) -> ControlHeader | None:
        return self._control_hdr

    @property
    def headers(self) -> tuple[Header, ...]:
        """Decoded headers in wire order."""
        second = self._transport_hdr or self._control_hdr
        return (self._ip_hdr,) if second is None else (self._ip_hdr, second)

    @property
    def ipv4(self) -> IPv4Header | None:
        return self._ip_hdr if self.is_ipv4 else None

    @property
    def ipv6(self) -> IPv6Header | None:
        return self._ip_hdr if self.is_ipv6 else None

    @property
    def tcp(self) -> TCPHeader | None:
        return self._transport_hdr if self.is_tcp else None

    @property
    def udp(self) -> UDPHeader | None:
        return self._transport_hdr if self.is_udp else None

    @property
    def icmpv4(self) -> ICMPv4Header | None:
        return self._control_hdr if self.is_icmpv4 else None

    @property
    def icmpv6(self) -> ICMPv6Header | None:
        return self._control_hdr if self.is_icmpv6 else None

    # Convenience field access

    @property
    def src_addr(self) -> str:
        return self._ip_hdr.src_addr

    @src_addr.setter
    def src_addr(self, address: str) -> None:
        self._ip_hdr.src_addr = address

    @property
    def dst_addr(self) -> str:
        return self._ip_hdr.dst_addr

    @dst_addr.setter
    def dst_addr(self, address: str) -> None:
        self._ip_hdr.dst_addr = address

    def _require_transport(self, field: str) -> TransportHeader:
        if self._transport_hdr is None:
            raise NoSuchFieldError(field, f"Packet has no TCP/UDP header, {field} is unavailable")
        return self._transport_hdr

    @property
    def src_port(self) -> int:
        return self._require_transport('src_port').src_port

    @src_port.setter
    def src_port(self, port: int) -> None:
        self._require_transport('src_port').src_port = port

    @property
    def dst_port(self) -> int:
        return self._require_transport('dst_port').dst_port

    @dst_port.setter
    def dst_port(self, port: int) -> None:
        self._require_transport('dst_port').dst_port = port

    # Payload and serialization

    @property
    def headers_length(self) -> int:
        """Bytes taken by the decoded headers, recomputed on every call."""
        return sum(h.header_length for h in self.headers)

    @property
    def payload(self) -> bytes:
        """Bytes after the decoded headers up to the end of the buffer."""
        return bytes(self._buf[self.headers_length:])

    @payload.setter
    def payload(self, payload: bytes) -> None:
        # Overwrites in place; neither the buffer nor any length field is resized
        offset = self.headers_length
        self._ip_hdr.view.set_bytes(offset, payload)

    @property
    def raw(self) -> bytes:
        """Copy of the current packet bytes."""
        return bytes(self._buf)

    def __bytes__(self) -> bytes:
        return self.raw

    def __len__(self) -> int:
        return len(self._buf)

    def recalculate_checksum(
        self,
        *options: CalcChecksumsOption,
        helper: ChecksumHelper | None = None,
    ) -> None:
        """
        Recalculate checksum fields in place.

        Args:
            *options: Checksums to leave untouched
            helper: Checksum helper to delegate to; defaults to the configured
                helper, then to DpktChecksumHelper

        Raises:
            ChecksumError: If the helper fails or returns a different length
        """
        flags = CalcChecksumsOption(0)
        for option in options:
            flags |= option

        if helper is None:
            helper = self.config.checksum_helper
        if helper is None:
            from divertview.checksum import DpktChecksumHelper
            helper = DpktChecksumHelper()

        raw = self.raw
        try:
            fixed = helper.calc_checksums(raw, int(flags))
        except Exception as exc:
            raise ChecksumError(f"Checksum helper {type(helper).__name__} failed: {exc}") from exc

        if len(fixed) != len(raw):
            raise ChecksumError(
                f"Checksum helper returned {len(fixed)} bytes for a {len(raw)}-byte packet"
            )
        self._buf[:] = fixed
        logger.debug("Recalculated checksums with flags=%d", int(flags))

    def to_dict(self) -> dict:
        """Decoded fields of every header plus metadata and raw hex."""
        result = {
            'direction': self.direction.name,
            'if_idx': self.interface[0],
            'sub_if_idx': self.interface[1],
        }
        for hdr in self.headers:
            for key, value in hdr.to_dict().items():
                result[f'{hdr.name}.{key}'] = print_hex_binary(value) if isinstance(value, bytes) else value
        result['payload_length'] = len(self._buf) - self.headers_length
        result['raw'] = print_hex_binary(self._buf)
        return result

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if not isinstance(other, Packet):
            return NotImplemented
        return self._buf == other._buf and self.address == other.address

    def __hash__(self) -> int:
        return hash((bytes(self._buf), self.address))

    def __repr__(self) -> str:
        second = self._transport_hdr or self._control_hdr
        return (f"Packet({self._ip_hdr!r}, {second!r}, direction={self.direction.name}, "
                f"interface={self.interface}, raw={print_hex_binary(self._buf)})")
