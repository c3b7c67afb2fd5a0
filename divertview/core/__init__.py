"""Core buffer, constant tables and the Packet facade."""

from divertview.core.buffer import ByteView
from divertview.core.enums import Protocol, Direction, CalcChecksumsOption, LOOPBACK_IF_IDX
from divertview.core.packet import Packet, PacketConfig, DivertAddress

__all__ = [
    'ByteView',
    'Protocol',
    'Direction',
    'CalcChecksumsOption',
    'LOOPBACK_IF_IDX',
    'Packet',
    'PacketConfig',
    'DivertAddress',
]
