"""
Control message headers (ICMPv4, ICMPv6).
"""

from __future__ import annotations

from divertview.core.enums import Protocol
from divertview.headers.base import ControlHeader
from divertview.headers.registry import register_header


@register_header(Protocol.ICMP)
class ICMPv4Header(ControlHeader):
    """ICMPv4 header view: type, code, checksum, rest of header."""

    name = "icmpv4"

    _FIELDS = ('type', 'code', 'checksum', 'rest_of_header')

    @property
    def rest_of_header(self) -> bytes:
        """Type-specific 4 bytes following the checksum, kept opaque."""
        return self._get_body()

    @rest_of_header.setter
    def rest_of_header(self, data: bytes) -> None:
        self._set_body(data)


@register_header(Protocol.ICMPV6)
class ICMPv6Header(ControlHeader):
    """ICMPv6 header view: type, code, checksum, message body."""

    name = "icmpv6"

    _FIELDS = ('type', 'code', 'checksum', 'message_body')

    @property
    def message_body(self) -> bytes:
        return self._get_body()

    @message_body.setter
    def message_body(self, data: bytes) -> None:
        self._set_body(data)
