"""
Transport layer headers (TCP, UDP).
"""

from __future__ import annotations

from enum import Enum

from divertview.core.enums import Protocol
from divertview.exceptions import InvalidStateError
from divertview.headers.base import TransportHeader
from divertview.headers.registry import register_header


class TCPFlag(Enum):
    """TCP control bits as (byte offset, bit position) in the header."""
    NS = (12, 0)
    CWR = (13, 7)
    ECE = (13, 6)
    URG = (13, 5)
    ACK = (13, 4)
    PSH = (13, 3)
    RST = (13, 2)
    SYN = (13, 1)
    FIN = (13, 0)

    @property
    def offset(self) -> int:
        return self.value[0]

    @property
    def bit(self) -> int:
        return self.value[1]


def _flag_property(flag: TCPFlag) -> property:
    def getter(self) -> bool:
        return self.get_flag(flag)

    def setter(self, value: bool) -> None:
        self.set_flag(flag, value)

    return property(getter, setter, doc=f"{flag.name} control bit.")


@register_header(Protocol.TCP)
class TCPHeader(TransportHeader):
    """
    TCP header view.

    header_length is data_offset * 4. Sequence and acknowledgment numbers
    are surfaced unsigned; setters also take negative 32-bit values.
    """

    name = "tcp"
    min_length = 20

    _FIELDS = ('src_port', 'dst_port', 'seq_num', 'ack_num', 'data_offset', 'flags',
               'window_size', 'checksum', 'urgent_pointer')

    @property
    def header_length(self) -> int:
        return self.data_offset * 4

    @property
    def seq_num(self) -> int:
        return self._get(4, 4)

    @seq_num.setter
    def seq_num(self, value: int) -> None:
        self._set(4, 4, _u32(value))

    @property
    def ack_num(self) -> int:
        return self._get(8, 4)

    @ack_num.setter
    def ack_num(self, value: int) -> None:
        self._set(8, 4, _u32(value))

    @property
    def data_offset(self) -> int:
        """Header length in 32-bit words."""
        return self._get(12, 1) >> 4

    @data_offset.setter
    def data_offset(self, words: int) -> None:
        if not 0 <= words <= 0xF:
            raise ValueError(f"Data offset must fit in 4 bits, got {words}")
        self._set(12, 1, (words << 4) | (self._get(12, 1) & 0x0F))

    def get_flag(self, flag: TCPFlag) -> bool:
        return self._get_bit(flag.offset, flag.bit)

    def set_flag(self, flag: TCPFlag, value: bool) -> None:
        self._set_bit(flag.offset, flag.bit, value)

    @property
    def flags(self) -> int:
        """All nine control bits, NS as bit 8."""
        return self._get(12, 2) & 0x01FF

    @flags.setter
    def flags(self, value: int) -> None:
        if not 0 <= value <= 0x01FF:
            raise ValueError(f"TCP flags must fit in 9 bits, got {value}")
        self._set(12, 2, (self._get(12, 2) & 0xFE00) | value)

    ns = _flag_property(TCPFlag.NS)
    cwr = _flag_property(TCPFlag.CWR)
    ece = _flag_property(TCPFlag.ECE)
    urg = _flag_property(TCPFlag.URG)
    ack = _flag_property(TCPFlag.ACK)
    psh = _flag_property(TCPFlag.PSH)
    rst = _flag_property(TCPFlag.RST)
    syn = _flag_property(TCPFlag.SYN)
    fin = _flag_property(TCPFlag.FIN)

    @property
    def window_size(self) -> int:
        return self._get(14, 2)

    @window_size.setter
    def window_size(self, value: int) -> None:
        self._set(14, 2, value)

    @property
    def checksum(self) -> int:
        return self._get(16, 2)

    @checksum.setter
    def checksum(self, value: int) -> None:
        self._set(16, 2, value)

    @property
    def urgent_pointer(self) -> int:
        return self._get(18, 2)

    @urgent_pointer.setter
    def urgent_pointer(self, value: int) -> None:
        self._set(18, 2, value)

    @property
    def options(self) -> bytes | None:
        """Option bytes in [20, header_length), None when data_offset is 5 or less."""
        return self._get_options(20)

    @options.setter
    def options(self, options: bytes) -> None:
        self._set_options(20, options)


@register_header(Protocol.UDP)
class UDPHeader(TransportHeader):
    """UDP header view. length covers header and data."""

    name = "udp"
    min_length = 8

    _FIELDS = ('src_port', 'dst_port', 'length', 'checksum')

    @property
    def header_length(self) -> int:
        return 8

    @property
    def length(self) -> int:
        return self._get(4, 2)

    @length.setter
    def length(self, value: int) -> None:
        self._set(4, 2, value)

    @property
    def checksum(self) -> int:
        return self._get(6, 2)

    @checksum.setter
    def checksum(self, value: int) -> None:
        self._set(6, 2, value)

    @property
    def data(self) -> bytes:
        """Datagram data in [8, length)."""
        return self._get_bytes(8, max(self.length - 8, 0))

    @data.setter
    def data(self, data: bytes) -> None:
        if 8 + len(data) > self.length:
            raise InvalidStateError(
                f"UDP length {self.length} cannot hold {len(data)} data bytes; update length first"
            )
        self._set_bytes(8, data)


def _u32(value: int) -> int:
    if -(1 << 31) <= value < 0:
        return value & 0xFFFFFFFF
    return value
