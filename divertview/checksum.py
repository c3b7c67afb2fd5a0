"""
Checksum recalculation boundary.

divertview does not implement checksum arithmetic. A ChecksumHelper takes
the serialized packet and a CalcChecksumsOption bitmask and returns the
packet with corrected checksum fields. The default helper delegates the
ones-complement arithmetic to dpkt.
"""

from __future__ import annotations

import logging
import struct
from abc import ABC, abstractmethod

import dpkt

from divertview.core.enums import CalcChecksumsOption, Protocol
from divertview.headers.factory import build_headers
from divertview.headers.network import IPv4Header

logger = logging.getLogger(__name__)


# Option bit that disables recalculation for each second-layer protocol
_SKIP_OPTION = {
    Protocol.TCP: CalcChecksumsOption.NO_TCP_CHECKSUM,
    Protocol.UDP: CalcChecksumsOption.NO_UDP_CHECKSUM,
    Protocol.ICMP: CalcChecksumsOption.NO_ICMP_CHECKSUM,
    Protocol.ICMPV6: CalcChecksumsOption.NO_ICMPV6_CHECKSUM,
}


class ChecksumHelper(ABC):
    """External collaborator that fixes checksum fields of a raw packet."""

    @abstractmethod
    def calc_checksums(self, raw: bytes, flags: int) -> bytes:
        """
        Recalculate checksums of a serialized packet.

        Args:
            raw: Packet bytes starting at the IP header
            flags: Bitmask of CalcChecksumsOption values to skip

        Returns:
            Packet bytes of the same length with checksums rewritten
        """
        pass


class DpktChecksumHelper(ChecksumHelper):
    """
    Checksum helper backed by dpkt's in_cksum routines.

    IPv4 header, TCP, UDP, ICMPv4 and ICMPv6 checksums are covered.
    Transport checksums of non-first IPv4 fragments are left untouched.
    """

    def calc_checksums(self, raw: bytes, flags: int) -> bytes:
        flags = CalcChecksumsOption(flags)
        buf = bytearray(raw)
        ip_hdr, next_hdr = build_headers(buf, strict=True)

        if isinstance(ip_hdr, IPv4Header) and not flags & CalcChecksumsOption.NO_IP_CHECKSUM:
            ip_hdr.checksum = 0
            ip_hdr.checksum = dpkt.in_cksum(ip_hdr.raw_header_bytes)

        if next_hdr is None:
            return bytes(buf)

        protocol = Protocol(ip_hdr.next_header_number)
        skip = _SKIP_OPTION.get(protocol)
        if skip is None or flags & skip:
            return bytes(buf)

        if isinstance(ip_hdr, IPv4Header):
            if ip_hdr.frag_offset or ip_hdr.flags & 0x1:
                logger.debug("Skipping %s checksum of IPv4 fragment", next_hdr.name)
                return bytes(buf)
            end = ip_hdr.total_length
        else:
            end = ip_hdr.header_length + ip_hdr.payload_length
        end = min(end, len(buf))

        next_hdr.checksum = 0
        segment = bytes(buf[next_hdr.start:end])

        if protocol == Protocol.ICMP:
            s = 0
        elif isinstance(ip_hdr, IPv4Header):
            pseudo = ip_hdr.src_addr_bytes + ip_hdr.dst_addr_bytes + struct.pack(
                '>xBH', protocol, len(segment))
            s = dpkt.in_cksum_add(0, pseudo)
        else:
            pseudo = ip_hdr.src_addr_bytes + ip_hdr.dst_addr_bytes + struct.pack(
                '>I3xB', len(segment), protocol)
            s = dpkt.in_cksum_add(0, pseudo)

        checksum = dpkt.in_cksum_done(dpkt.in_cksum_add(s, segment))
        if protocol == Protocol.UDP and checksum == 0:
            checksum = 0xFFFF  # RFC 768
        next_hdr.checksum = checksum

        return bytes(buf)
