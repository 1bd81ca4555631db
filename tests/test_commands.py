"""Tests for command builders."""

import pytest

from pyramid_led_mcp.errors import InvalidArgumentError, UnknownColorError
from pyramid_led_mcp.models.color import Color, RgbwValue
from pyramid_led_mcp.protocol.commands import (
    Command,
    build_command,
    build_flashing_period,
    build_mode,
    build_read_id,
    build_set_color,
    build_set_flashing_colors,
    build_set_id,
    period_to_steps,
    steps_to_period,
)
from pyramid_led_mcp.protocol.framing import parse_frame


def test_command_enum_values():
    """Opcodes match the controller documentation."""
    assert Command.SET_COLOR == 0xCA
    assert Command.CHANGE_FLASHING_COLORS == 0xD3
    assert Command.MODE == 0xD6
    assert Command.FLASHING_PERIOD == 0xE5
    assert Command.SET_ID == 0xAE
    assert Command.READ_ID == 0xBE


def test_build_command():
    assert build_command(Command.MODE, b"\x01") == bytes.fromhex("5AFFD601A5")


def test_build_set_color_red():
    """Red SetColor frame is byte-exact."""
    frame = build_set_color(RgbwValue.from_color(Color.RED))
    assert frame == bytes.fromhex("5AFFCAFF00000000000000A5")


def test_build_set_color_pads_with_zeros():
    """The second quadruple of a SetColor payload is always zero."""
    parsed = parse_frame(build_set_color(RgbwValue(10, 20, 30, 40)))
    assert parsed is not None
    assert parsed.command == Command.SET_COLOR
    assert parsed.payload == bytes([10, 20, 30, 40, 0, 0, 0, 0])


def test_build_set_flashing_colors():
    """Flashing colors payload is both quadruples back to back."""
    parsed = parse_frame(build_set_flashing_colors(Color.RED, Color.WHITE))
    assert parsed is not None
    assert parsed.command == Command.CHANGE_FLASHING_COLORS
    assert parsed.payload == bytes([255, 0, 0, 0, 0, 0, 0, 255])


def test_build_set_flashing_colors_unknown():
    with pytest.raises(UnknownColorError):
        build_set_flashing_colors(Color.RED, "purple")


def test_build_mode():
    assert build_mode(True) == bytes.fromhex("5AFFD601A5")
    assert build_mode(False) == bytes.fromhex("5AFFD600A5")


def test_build_flashing_period():
    parsed = parse_frame(build_flashing_period(37))
    assert parsed is not None
    assert parsed.command == Command.FLASHING_PERIOD
    assert parsed.payload == bytes([37])


def test_flashing_period_bounds():
    """Values that don't fit in a byte should raise."""
    with pytest.raises(InvalidArgumentError):
        build_flashing_period(256)
    with pytest.raises(InvalidArgumentError):
        build_flashing_period(-1)


def test_build_set_id():
    assert build_set_id(7) == bytes.fromhex("5AFFAE07A5")


def test_set_id_bounds():
    with pytest.raises(InvalidArgumentError):
        build_set_id(300)


def test_build_read_id_has_no_payload():
    assert build_read_id() == bytes.fromhex("5AFFBEA5")


def test_period_to_steps():
    assert period_to_steps(0) == 0
    assert period_to_steps(27) == 1
    assert period_to_steps(1000) == 37
    assert period_to_steps(100_000) == 255


def test_period_to_steps_negative():
    with pytest.raises(InvalidArgumentError):
        period_to_steps(-5)


def test_steps_to_period():
    assert steps_to_period(10) == 270
