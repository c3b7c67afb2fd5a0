"""Test hex codec and padding helpers."""

import pytest

from divertview.exceptions import MalformedInputError
from divertview.util import parse_hex_binary, print_hex_binary, zero_pad


def test_parse_and_print():
    data = parse_hex_binary("00ff10Ab")
    assert data == b'\x00\xff\x10\xab'
    assert print_hex_binary(data) == "00FF10AB"


def test_print_normalizes_case(all_packet_hex):
    for hex_str in all_packet_hex.values():
        assert print_hex_binary(parse_hex_binary(hex_str)) == hex_str.upper()


def test_empty_string():
    assert parse_hex_binary("") == b''
    assert print_hex_binary(b'') == ""


def test_print_accepts_bytearray():
    assert print_hex_binary(bytearray(b'\x0a\x0b')) == "0A0B"


@pytest.mark.parametrize("bad", ["abc", "0", "zz", "0g", "12 4", "0x12"])
def test_malformed_input(bad):
    with pytest.raises(MalformedInputError):
        parse_hex_binary(bad)


def test_malformed_input_is_value_error():
    with pytest.raises(ValueError):
        parse_hex_binary("f")


@pytest.mark.parametrize("data,size,expected", [
    (b'\x01\x02', 4, b'\x01\x02\x00\x00'),
    (b'\x01\x02\x03\x04\x05', 4, b'\x01\x02\x03\x04'),
    (b'', 2, b'\x00\x00'),
    (b'\x09', 1, b'\x09'),
])
def test_zero_pad(data, size, expected):
    assert zero_pad(data, size) == expected
