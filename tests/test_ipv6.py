"""Test IPv6 header decoding and in-place editing."""

import socket

import pytest

from divertview.core.enums import Protocol
from divertview.exceptions import UnknownProtocolError
from divertview.headers import IPv6Header


@pytest.fixture
def buf(ipv6_tcp_raw):
    return bytearray(ipv6_tcp_raw)


@pytest.fixture
def ip(buf):
    return IPv6Header(buf, 0)


def test_decode_fields(ip):
    assert ip.version == 6
    assert ip.header_length == 40
    assert ip.traffic_class == 0
    assert ip.flow_label == 0x0D684A
    assert ip.payload_length == 125
    assert ip.next_header == Protocol.TCP
    assert ip.hop_limit == 64
    assert ip.src_addr == "fc00:2:0:2::1"
    assert ip.dst_addr == "fc00:2:0:1::1"


def test_matches_dpkt(ipv6_udp_raw):
    import dpkt

    ref = dpkt.ip6.IP6(ipv6_udp_raw)
    ip = IPv6Header(bytearray(ipv6_udp_raw), 0)
    assert ip.payload_length == ref.plen
    assert ip.next_header_number == ref.nxt
    assert ip.hop_limit == ref.hlim
    assert ip.src_addr_bytes == ref.src
    assert ip.dst_addr == socket.inet_ntop(socket.AF_INET6, ref.dst)
    assert ip.src_addr == "3ffe:507:0:1:200:86ff:fe05:80da"
    assert ip.dst_addr == "3ffe:501:4819::42"


def test_traffic_class_and_flow_label_do_not_overlap(ip, buf):
    ip.traffic_class = 0xAB
    assert ip.version == 6
    assert ip.flow_label == 0x0D684A
    assert bytes(buf[0:2]) == b'\x6a\xbd'

    ip.flow_label = 0xFFFFF
    assert ip.traffic_class == 0xAB
    assert ip.version == 6


@pytest.mark.parametrize("field,value", [
    ('payload_length', 0),
    ('payload_length', 65535),
    ('hop_limit', 255),
    ('next_header_number', 17),
    ('flow_label', 0),
    ('traffic_class', 0xFF),
])
def test_set_then_get(ip, field, value):
    setattr(ip, field, value)
    assert getattr(ip, field) == value


@pytest.mark.parametrize("field,value", [
    ('flow_label', 1 << 20),
    ('traffic_class', 256),
    ('version', 16),
    ('hop_limit', -1),
])
def test_out_of_domain_values(ip, buf, field, value):
    snapshot = bytes(buf)
    with pytest.raises(ValueError):
        setattr(ip, field, value)
    assert bytes(buf) == snapshot


def test_header_length_is_fixed(ip):
    ip.payload_length = 0
    assert ip.header_length == 40


def test_addresses(ip, buf):
    ip.src_addr = "2001:db8::1"
    assert bytes(buf[8:24]) == socket.inet_pton(socket.AF_INET6, "2001:db8::1")
    ip.dst_addr = "::ffff:10.0.0.1"
    assert ip.dst_addr == "::ffff:10.0.0.1"
    with pytest.raises(ValueError):
        ip.src_addr = "10.0.0.1"


def test_next_header_setter(ip):
    ip.next_header = Protocol.ICMPV6
    assert ip.next_header_number == 58
    with pytest.raises(UnknownProtocolError):
        ip.next_header = 250

    ip.next_header_number = 250
    with pytest.raises(UnknownProtocolError):
        ip.next_header
