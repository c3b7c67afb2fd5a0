"""
divertview - Zero-copy views over diverted IP packets

Decodes and edits IPv4/IPv6, TCP, UDP, ICMPv4 and ICMPv6 headers directly
in the packet buffer handed over by a packet diversion driver, so edited
bytes can be reinjected without re-serialization.

Example usage:
    from divertview import Packet, Direction

    pkt = Packet(raw, interface=(2, 0), direction=Direction.OUTBOUND)
    if pkt.is_tcp and pkt.dst_port == 80:
        pkt.dst_addr = "10.0.0.5"
        pkt.recalculate_checksum()
    reinject(pkt.raw, pkt.address)
"""

import logging

from divertview.core.buffer import ByteView
from divertview.core.enums import Protocol, Direction, CalcChecksumsOption, LOOPBACK_IF_IDX
from divertview.core.packet import Packet, PacketConfig, DivertAddress
from divertview.headers import (
    Header,
    IPHeader,
    TransportHeader,
    ControlHeader,
    IPv4Header,
    IPv6Header,
    IPv4Flag,
    TCPHeader,
    UDPHeader,
    TCPFlag,
    ICMPv4Header,
    ICMPv6Header,
    register_header,
    get_global_registry,
    HeaderRegistry,
    build_headers,
)
from divertview.checksum import ChecksumHelper, DpktChecksumHelper
from divertview.exceptions import (
    DivertViewError,
    OutOfRangeError,
    UnknownProtocolError,
    InvalidStateError,
    NoSuchFieldError,
    MalformedInputError,
    ChecksumError,
)
from divertview.util import parse_hex_binary, print_hex_binary, zero_pad
from divertview.exporters import to_dataframe, to_dict, to_json

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.1.0"

__all__ = [
    # Packet facade
    'Packet',
    'PacketConfig',
    'DivertAddress',

    # Buffer and constants
    'ByteView',
    'Protocol',
    'Direction',
    'CalcChecksumsOption',
    'LOOPBACK_IF_IDX',

    # Headers
    'Header',
    'IPHeader',
    'TransportHeader',
    'ControlHeader',
    'IPv4Header',
    'IPv6Header',
    'IPv4Flag',
    'TCPHeader',
    'UDPHeader',
    'TCPFlag',
    'ICMPv4Header',
    'ICMPv6Header',
    'register_header',
    'get_global_registry',
    'HeaderRegistry',
    'build_headers',

    # Checksums
    'ChecksumHelper',
    'DpktChecksumHelper',

    # Errors
    'DivertViewError',
    'OutOfRangeError',
    'UnknownProtocolError',
    'InvalidStateError',
    'NoSuchFieldError',
    'MalformedInputError',
    'ChecksumError',

    # Utilities
    'parse_hex_binary',
    'print_hex_binary',
    'zero_pad',

    # Export
    'to_dataframe',
    'to_dict',
    'to_json',
]
