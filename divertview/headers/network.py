"""
Network layer headers (IPv4, IPv6).
"""

from __future__ import annotations

import socket
from enum import IntFlag

from divertview.core.enums import Protocol
from divertview.headers.base import IPHeader


class IPv4Flag(IntFlag):
    """IPv4 flags as the 3-bit value above the fragment offset."""
    MF = 0x1
    DF = 0x2
    RESERVED = 0x4


class IPv4Header(IPHeader):
    """
    IPv4 header view.

    Flags occupy the 3 most significant bits of the 16-bit word at
    offset 6 and the fragment offset the remaining 13 bits.
    """

    name = "ipv4"
    min_length = 20
    address_family = socket.AF_INET
    addr_len = 4
    src_addr_offset = 12
    dst_addr_offset = 16

    _FIELDS = ('version', 'ihl', 'dscp', 'ecn', 'total_length', 'ident', 'flags',
               'frag_offset', 'ttl', 'protocol_number', 'checksum', 'src_addr', 'dst_addr')

    @property
    def header_length(self) -> int:
        return self.ihl * 4

    @IPHeader.version.setter
    def version(self, version: int) -> None:
        if not 0 <= version <= 0xF:
            raise ValueError(f"IP version must fit in 4 bits, got {version}")
        self._set(0, 1, (version << 4) | self.ihl)

    @property
    def ihl(self) -> int:
        """Header length in 32-bit words."""
        return self._get(0, 1) & 0x0F

    @ihl.setter
    def ihl(self, words: int) -> None:
        # Values below 5 are accepted and leave the header inconsistent
        if not 0 <= words <= 0xF:
            raise ValueError(f"IHL must fit in 4 bits, got {words}")
        self._set(0, 1, (self.version << 4) | words)

    @property
    def tos(self) -> int:
        return self._get(1, 1)

    @tos.setter
    def tos(self, value: int) -> None:
        self._set(1, 1, value)

    @property
    def dscp(self) -> int:
        return self._get(1, 1) >> 2

    @dscp.setter
    def dscp(self, value: int) -> None:
        if not 0 <= value <= 0x3F:
            raise ValueError(f"DSCP must fit in 6 bits, got {value}")
        self._set(1, 1, (value << 2) | self.ecn)

    @property
    def ecn(self) -> int:
        return self._get(1, 1) & 0x03

    @ecn.setter
    def ecn(self, value: int) -> None:
        if not 0 <= value <= 0x3:
            raise ValueError(f"ECN must fit in 2 bits, got {value}")
        self._set(1, 1, (self.dscp << 2) | value)

    @property
    def diff_serv(self) -> int:
        return self.dscp

    @diff_serv.setter
    def diff_serv(self, value: int) -> None:
        self.dscp = value

    @property
    def total_length(self) -> int:
        return self._get(2, 2)

    @total_length.setter
    def total_length(self, length: int) -> None:
        self._set(2, 2, length)

    @property
    def ident(self) -> int:
        return self._get(4, 2)

    @ident.setter
    def ident(self, value: int) -> None:
        self._set(4, 2, value)

    @property
    def flags(self) -> IPv4Flag:
        return IPv4Flag(self._get(6, 2) >> 13)

    @flags.setter
    def flags(self, flags: int) -> None:
        if not 0 <= flags <= 0x7:
            raise ValueError(f"IPv4 flags must fit in 3 bits, got {flags}")
        self._set(6, 2, (int(flags) << 13) | self.frag_offset)

    @property
    def frag_offset(self) -> int:
        return self._get(6, 2) & 0x1FFF

    @frag_offset.setter
    def frag_offset(self, offset: int) -> None:
        if not 0 <= offset <= 0x1FFF:
            raise ValueError(f"Fragment offset must fit in 13 bits, got {offset}")
        self._set(6, 2, (self._get(6, 2) & 0xE000) | offset)

    def get_flag(self, flag: IPv4Flag) -> bool:
        return bool(self.flags & flag)

    def set_flag(self, flag: IPv4Flag, value: bool) -> None:
        current = self.flags
        self.flags = (current | flag) if value else (current & ~IPv4Flag(flag))

    @property
    def ttl(self) -> int:
        return self._get(8, 1)

    @ttl.setter
    def ttl(self, value: int) -> None:
        self._set(8, 1, value)

    @property
    def protocol_number(self) -> int:
        return self._get(9, 1)

    @protocol_number.setter
    def protocol_number(self, value: int) -> None:
        self._set(9, 1, value)

    @property
    def protocol(self) -> Protocol:
        return Protocol.from_value(self.protocol_number)

    @protocol.setter
    def protocol(self, protocol: Protocol) -> None:
        self.protocol_number = Protocol.from_value(int(protocol)).value

    @property
    def next_header_number(self) -> int:
        return self.protocol_number

    @property
    def checksum(self) -> int:
        return self._get(10, 2)

    @checksum.setter
    def checksum(self, value: int) -> None:
        self._set(10, 2, value)

    @property
    def options(self) -> bytes | None:
        """Option bytes in [20, header_length), None when IHL is 5 or less."""
        return self._get_options(20)

    @options.setter
    def options(self, options: bytes) -> None:
        self._set_options(20, options)


class IPv6Header(IPHeader):
    """IPv6 fixed header view (40 bytes, no options, no checksum)."""

    name = "ipv6"
    min_length = 40
    address_family = socket.AF_INET6
    addr_len = 16
    src_addr_offset = 8
    dst_addr_offset = 24

    _FIELDS = ('version', 'traffic_class', 'flow_label', 'payload_length',
               'next_header_number', 'hop_limit', 'src_addr', 'dst_addr')

    @property
    def header_length(self) -> int:
        return 40

    @IPHeader.version.setter
    def version(self, version: int) -> None:
        if not 0 <= version <= 0xF:
            raise ValueError(f"IP version must fit in 4 bits, got {version}")
        self._set(0, 1, (version << 4) | (self._get(0, 1) & 0x0F))

    @property
    def traffic_class(self) -> int:
        return (self._get(0, 2) >> 4) & 0xFF

    @traffic_class.setter
    def traffic_class(self, value: int) -> None:
        if not 0 <= value <= 0xFF:
            raise ValueError(f"Traffic class must fit in 8 bits, got {value}")
        word = self._get(0, 2)
        self._set(0, 2, (word & 0xF00F) | (value << 4))

    @property
    def flow_label(self) -> int:
        return self._get(0, 4) & 0xFFFFF

    @flow_label.setter
    def flow_label(self, value: int) -> None:
        if not 0 <= value <= 0xFFFFF:
            raise ValueError(f"Flow label must fit in 20 bits, got {value}")
        word = self._get(0, 4)
        self._set(0, 4, (word & 0xFFF00000) | value)

    @property
    def payload_length(self) -> int:
        """Bytes following this header."""
        return self._get(4, 2)

    @payload_length.setter
    def payload_length(self, length: int) -> None:
        self._set(4, 2, length)

    @property
    def next_header_number(self) -> int:
        return self._get(6, 1)

    @next_header_number.setter
    def next_header_number(self, value: int) -> None:
        self._set(6, 1, value)

    @property
    def next_header(self) -> Protocol:
        return Protocol.from_value(self.next_header_number)

    @next_header.setter
    def next_header(self, protocol: Protocol) -> None:
        self.next_header_number = Protocol.from_value(int(protocol)).value

    @property
    def hop_limit(self) -> int:
        return self._get(7, 1)

    @hop_limit.setter
    def hop_limit(self, value: int) -> None:
        self._set(7, 1, value)
