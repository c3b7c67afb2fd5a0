"""Protocol header views."""

from divertview.headers.base import (
    Header,
    IPHeader,
    TransportHeader,
    ControlHeader,
)
from divertview.headers.network import IPv4Header, IPv6Header, IPv4Flag
from divertview.headers.transport import TCPHeader, UDPHeader, TCPFlag
from divertview.headers.control import ICMPv4Header, ICMPv6Header
from divertview.headers.registry import (
    register_header,
    get_global_registry,
    HeaderRegistry,
)
from divertview.headers.factory import build_headers

__all__ = [
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
]
