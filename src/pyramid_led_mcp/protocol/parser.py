"""Response parsing and controller state snapshots."""

from __future__ import annotations

from dataclasses import dataclass

from ..models.color import RgbwValue

NO_RESPONSE = -1


def parse_read_id(data: bytes | None) -> int:
    """Decode the single unframed byte returned after a ReadID command.

    Returns:
        The device ID (0-255), or ``-1`` if the read timed out.
    """
    if not data:
        return NO_RESPONSE
    return data[0]


@dataclass
class ControllerState:
    """Locally tracked device state."""

    last_color: RgbwValue
    saved_color: RgbwValue
    flashing: bool

    def to_dict(self) -> dict:
        return {
            "last_color": self.last_color.to_dict(),
            "saved_color": self.saved_color.to_dict(),
            "flashing": self.flashing,
        }
