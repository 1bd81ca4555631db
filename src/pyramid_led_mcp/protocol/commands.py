"""Opcode constants and high-level command builders.

Each command is identified by a single opcode byte. Only ReadID gets an
answer from the device, and that answer is a single unframed byte.
"""

from __future__ import annotations

from enum import IntEnum

from ..errors import InvalidArgumentError
from ..models.color import Color, RgbwValue, color_to_bytes
from .framing import build_frame


class Command(IntEnum):
    """Controller opcodes."""

    SET_COLOR = 0xCA
    CHANGE_FLASHING_COLORS = 0xD3
    MODE = 0xD6
    FLASHING_PERIOD = 0xE5
    SET_ID = 0xAE
    READ_ID = 0xBE


MODE_STATIC = 0x00
MODE_FLASHING = 0x01

COLOR_PAYLOAD_SIZE = 8
FLASHING_PERIOD_STEP_MS = 27  # approximate, device-internal


def _check_byte(name: str, value: int) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value <= 255:
        raise InvalidArgumentError(f"{name} must be an integer 0-255, got {value!r}")
    return value


def build_command(command: Command, payload: bytes = b"") -> bytes:
    """Build a single frame for a command."""
    return build_frame(command.value, payload)


def build_set_color(rgbw: RgbwValue) -> bytes:
    """Build a SetColor command.

    The payload carries the color followed by four zero bytes.
    """
    payload = rgbw.to_bytes().ljust(COLOR_PAYLOAD_SIZE, b"\x00")
    return build_command(Command.SET_COLOR, payload)


def build_set_flashing_colors(color1: Color, color2: Color) -> bytes:
    """Build a ChangeFlashingColors command for the two alternating colors."""
    payload = color_to_bytes(color1) + color_to_bytes(color2)
    return build_command(Command.CHANGE_FLASHING_COLORS, payload)


def build_mode(flashing: bool) -> bytes:
    """Build a Mode command switching between static and flashing."""
    mode = MODE_FLASHING if flashing else MODE_STATIC
    return build_command(Command.MODE, bytes([mode]))


def build_flashing_period(period: int) -> bytes:
    """Build a FlashingPeriod command.

    Args:
        period: Period in device steps (0-255), roughly 27 ms each.
    """
    _check_byte("Flashing period", period)
    return build_command(Command.FLASHING_PERIOD, bytes([period]))


def build_set_id(device_id: int) -> bytes:
    """Build a SetID command.

    Args:
        device_id: New device identifier (0-255).
    """
    _check_byte("Device ID", device_id)
    return build_command(Command.SET_ID, bytes([device_id]))


def build_read_id() -> bytes:
    """Build a ReadID command (opcode only, no payload)."""
    return build_command(Command.READ_ID)


def period_to_steps(period_ms: float) -> int:
    """Convert milliseconds to the nearest flashing period step, clamped to 0-255."""
    if period_ms < 0:
        raise InvalidArgumentError(f"Period must not be negative, got {period_ms}")
    steps = int(period_ms / FLASHING_PERIOD_STEP_MS + 0.5)
    return min(steps, 255)


def steps_to_period(steps: int) -> int:
    """Approximate length in milliseconds of a flashing period step count."""
    return _check_byte("Flashing period", steps) * FLASHING_PERIOD_STEP_MS
