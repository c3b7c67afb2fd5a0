"""Configuration and fixtures for pytest tests."""

import pytest
import sys
import os

# Add parent directory to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))


# 81-byte IPv4/TCP segment carrying a TLS application data record
IPV4_TCP_HEX = (
    "45000051476040008006f005c0a856a936f274fdd84201bb0876cfd0c19f9320501800ff8dba0000"
    "17030300240000000000000c2f53831a37ed3c3a632f47440594cab95283b558bf82cb7784344c3314"
)
IPV4_TCP_PAYLOAD_HEX = (
    "17030300240000000000000c2f53831a37ed3c3a632f47440594cab95283b558bf82cb7784344c3314"
)

# ICMPv4 echo request 192.168.43.9 -> 8.8.8.8
IPV4_ICMP_HEX = (
    "4500005426ef0000400157f9c0a82b09080808080800bbb3d73b000051a7d67d000451e4"
    "08090a0b0c0d0e0f101112131415161718191a1b1c1d1e1f202122232425262728292a2b"
    "2c2d2e2f3031323334353637"
)

# ICMPv4 echo reply, no ports
IPV4_ICMP_REPLY_HEX = (
    "4500003C5C8800007F011181C0A801010A00020F00005552000100096162636465666768"
    "696A6B6C6D6E6F7071727374757677616263646566676869"
)

# TCP FIN+ACK with zeroed IPv4 checksum and no payload
IPV4_TCP_FIN_HEX = (
    "4500002841734000800600000A00020F0A00020FF4162B678A5FC6E30139B9515011080564650000"
)

# DNS query over UDP/IPv4
IPV4_UDP_HEX = (
    "4500004281bf000040112191c0a82b09c0a82b01c9dd0035002ef268528e0100000100000000"
    "0000013801380138013807696e2d61646472046172706100000c0001"
)
IPV4_UDP_DATA_HEX = (
    "528e01000001000000000000013801380138013807696e2d61646472046172706100000c0001"
)

# DNS query over UDP/IPv6
IPV6_UDP_HEX = (
    "60000000002711403ffe050700000001020086fffe0580da3ffe0501481900000000000000000042"
    "095d0035002746b700060100000100000000000003777777057961686f6f03636f6d00000f0001"
)

# HTTP GET over TCP/IPv6 with a timestamp option
IPV6_TCP_HEX = (
    "600d684a007d0640fc000002000000020000000000000001fc000002000000010000000000000001"
    "a9a01f90021b638dba311e8e801800cfc92e00000101080a801da522801da522"
    "474554202f68656c6c6f2e74787420485454502f312e310d0a557365722d4167656e743a206375"
    "726c2f372e33382e300d0a486f73743a205b666330303a323a303a313a3a315d3a383038300d0a"
    "4163636570743a202a2f2a0d0a0d0a"
)

# ICMPv6 destination unreachable (port unreachable)
IPV6_ICMP_HEX = (
    "6000000000443a3d3ffe05010410000002c0dffffe47033e3ffe050700000001020086fffe0580da"
    "010413520000000060000000001411013ffe050700000001020086fffe0580da3ffe050104100000"
    "02c0dffffe47033ea07582a40014cf470a040000f9c8e7369d250b00"
)


@pytest.fixture
def ipv4_tcp_raw():
    """Provide the IPv4/TCP fixture as bytes."""
    return bytes.fromhex(IPV4_TCP_HEX)


@pytest.fixture
def ipv4_tcp_payload():
    return bytes.fromhex(IPV4_TCP_PAYLOAD_HEX)


@pytest.fixture
def ipv4_tcp_fin_raw():
    return bytes.fromhex(IPV4_TCP_FIN_HEX)


@pytest.fixture
def ipv4_icmp_raw():
    return bytes.fromhex(IPV4_ICMP_HEX)


@pytest.fixture
def ipv4_udp_raw():
    return bytes.fromhex(IPV4_UDP_HEX)


@pytest.fixture
def ipv4_udp_data():
    return bytes.fromhex(IPV4_UDP_DATA_HEX)


@pytest.fixture
def ipv4_icmp_reply_raw():
    return bytes.fromhex(IPV4_ICMP_REPLY_HEX)


@pytest.fixture
def ipv6_udp_raw():
    return bytes.fromhex(IPV6_UDP_HEX)


@pytest.fixture
def ipv6_tcp_raw():
    return bytes.fromhex(IPV6_TCP_HEX)


@pytest.fixture
def ipv6_icmp_raw():
    return bytes.fromhex(IPV6_ICMP_HEX)


@pytest.fixture
def tcp_packet(ipv4_tcp_raw):
    """Provide an outbound Packet over the IPv4/TCP fixture."""
    from divertview import Packet, Direction
    return Packet(ipv4_tcp_raw, (2, 0), Direction.OUTBOUND)


@pytest.fixture
def all_packet_hex():
    """Every fixture, keyed by the protocol pair it carries."""
    return {
        'ipv4/tcp': IPV4_TCP_HEX,
        'ipv4/tcp-fin': IPV4_TCP_FIN_HEX,
        'ipv4/udp': IPV4_UDP_HEX,
        'ipv4/icmp': IPV4_ICMP_HEX,
        'ipv4/icmp-reply': IPV4_ICMP_REPLY_HEX,
        'ipv6/tcp': IPV6_TCP_HEX,
        'ipv6/udp': IPV6_UDP_HEX,
        'ipv6/icmp': IPV6_ICMP_HEX,
    }
