"""
Header dispatcher: decode the IP header and the header that follows it.
"""

from __future__ import annotations

import logging

from divertview.core.buffer import ByteView
from divertview.headers.base import Header, IPHeader
from divertview.headers.network import IPv4Header, IPv6Header
from divertview.headers.registry import HeaderRegistry, get_global_registry

# Imported for their @register_header side effect
from divertview.headers import control as _control  # noqa: F401
from divertview.headers import transport as _transport  # noqa: F401

logger = logging.getLogger(__name__)


def build_headers(
    data: bytearray | ByteView,
    strict: bool = False,
    registry: HeaderRegistry | None = None
) -> tuple[IPHeader, Header | None]:
    """
    Build the header pair for a raw IP packet.

    Version nibble 4 selects IPv4; any other value is decoded as IPv6.
    The second header is chosen by the IP next-protocol number; numbers
    without a registered header class leave the second slot empty.

    Args:
        data: Packet buffer, shared with the returned headers
        strict: Fail with OutOfRangeError if the buffer does not hold every
            decoded header completely; otherwise short buffers only fail
            when an out-of-range field is accessed
        registry: Header registry to dispatch with (defaults to global)

    Returns:
        (ip_header, transport_or_control_header_or_None)
    """
    if registry is None:
        registry = get_global_registry()

    view = data if isinstance(data, ByteView) else ByteView(data)
    version = IPHeader.get_version(view.buffer)

    ip_hdr: IPHeader
    if version == 4:
        ip_hdr = IPv4Header(view, 0)
    else:
        if version != 6:
            logger.debug("IP version nibble %d, decoding as IPv6", version)
        ip_hdr = IPv6Header(view, 0)

    if strict:
        ip_hdr.check_complete()

    number = ip_hdr.next_header_number
    header_cls = registry.get(number)
    if header_cls is None:
        logger.debug("No header class for protocol %d, %s only", number, ip_hdr.name)
        return ip_hdr, None

    next_hdr = header_cls(view, ip_hdr.header_length)
    if strict:
        next_hdr.check_complete()

    return ip_hdr, next_hdr
