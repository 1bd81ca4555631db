"""Tests for frame building, parsing, and the hex marker constants."""

import pytest

from pyramid_led_mcp.errors import MalformedConstantError
from pyramid_led_mcp.protocol.framing import (
    END_MARKER,
    START_MARKER,
    Frame,
    build_frame,
    format_frame,
    hex_decode,
    parse_frame,
)


def test_markers():
    """Start and end markers decode to the fixed protocol bytes."""
    assert START_MARKER == b"\x5A\xFF"
    assert END_MARKER == b"\xA5"


def test_build_frame_layout():
    """Frame is start marker, opcode, payload, end marker."""
    frame = build_frame(0xE5, b"\x10")
    assert frame == bytes([0x5A, 0xFF, 0xE5, 0x10, 0xA5])


def test_build_frame_red():
    """SetColor with red plus four zero bytes is 12 bytes exactly."""
    frame = build_frame(0xCA, bytes([255, 0, 0, 0, 0, 0, 0, 0]))
    assert frame == bytes.fromhex("5AFFCAFF00000000000000A5")
    assert len(frame) == 12


def test_build_frame_no_payload():
    """Command-only frames carry just the opcode between the markers."""
    assert build_frame(0xBE) == bytes([0x5A, 0xFF, 0xBE, 0xA5])


def test_build_frame_does_not_check_length():
    """The codec passes any payload through unchanged."""
    frame = build_frame(0xCA, b"\x01\x02\x03")
    assert frame[3:-1] == b"\x01\x02\x03"


def test_roundtrip_parse():
    """Build a frame and parse it back."""
    parsed = parse_frame(build_frame(0xD3, bytes(range(8))))
    assert parsed is not None
    assert parsed.command == 0xD3
    assert parsed.payload == bytes(range(8))


def test_parse_empty_payload():
    parsed = parse_frame(build_frame(0xBE))
    assert parsed is not None
    assert parsed.command == 0xBE
    assert parsed.payload == b""


def test_parse_invalid_start_marker():
    """Frames with wrong start marker should return None."""
    assert parse_frame(bytes([0x5B, 0xFF, 0xCA, 0xA5])) is None


def test_parse_invalid_end_marker():
    assert parse_frame(bytes([0x5A, 0xFF, 0xCA, 0x00])) is None


def test_parse_too_short():
    assert parse_frame(b"\x5A\xFF\xA5") is None


def test_hex_decode():
    assert hex_decode("5AFF") == b"\x5A\xFF"
    assert hex_decode("a5") == b"\xA5"
    assert hex_decode("") == b""


def test_hex_decode_odd_length():
    with pytest.raises(MalformedConstantError):
        hex_decode("5AF")


def test_hex_decode_non_hex():
    with pytest.raises(MalformedConstantError):
        hex_decode("5AZZ")


def test_hex_decode_rejects_whitespace():
    """Whitespace is not accepted even though bytes.fromhex would skip it."""
    with pytest.raises(MalformedConstantError):
        hex_decode("5A F")


def test_format_frame():
    assert format_frame(build_frame(0xD6, b"\x00")) == "5AFFD600A5"


def test_frame_repr():
    """Frame repr should be readable."""
    r = repr(Frame(command=0xCA, payload=b"\xff"))
    assert "0xCA" in r
    assert "ff" in r
