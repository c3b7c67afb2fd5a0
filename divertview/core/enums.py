"""
Constant tables: protocol numbers, packet direction, checksum options.
"""

from __future__ import annotations

from enum import IntEnum, IntFlag

from divertview.exceptions import UnknownProtocolError


# Interface index the diversion driver reports for loopback traffic
LOOPBACK_IF_IDX = 1


class Protocol(IntEnum):
    """IANA protocol numbers recognized after an IPv4/IPv6 header."""
    HOPOPT = 0
    ICMP = 1
    TCP = 6
    UDP = 17
    ROUTING = 43
    FRAGMENT = 44
    AH = 51
    ICMPV6 = 58
    NONE = 59
    DSTOPTS = 60

    @classmethod
    def from_value(cls, value: int) -> Protocol:
        """Look up a protocol number, raising UnknownProtocolError if absent."""
        try:
            return cls(value)
        except ValueError:
            raise UnknownProtocolError(value) from None


class Direction(IntEnum):
    """Packet direction as reported by the capture driver."""
    OUTBOUND = 0
    INBOUND = 1

    @classmethod
    def from_value(cls, value: int) -> Direction:
        return cls(value)


class CalcChecksumsOption(IntFlag):
    """Checksums the external helper must leave untouched."""
    NO_IP_CHECKSUM = 1
    NO_ICMP_CHECKSUM = 2
    NO_ICMPV6_CHECKSUM = 4
    NO_TCP_CHECKSUM = 8
    NO_UDP_CHECKSUM = 16
