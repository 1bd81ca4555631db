"""Named colors and the four-channel RGBW value sent to the controller.

Channel model: every color is an RGBW quadruple. The controller drives a
dedicated white LED, so ``WHITE`` lights only the fourth channel and the
mixed colors leave it dark.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import ClassVar

from ..errors import InvalidArgumentError, OutOfRangeError, UnknownColorError

CHANNELS = 4


class Color(Enum):
    """Named colors mapped to their (red, green, blue, white) intensities."""

    RED = (255, 0, 0, 0)
    GREEN = (0, 255, 0, 0)
    BLUE = (0, 0, 255, 0)
    WHITE = (0, 0, 0, 255)
    YELLOW = (255, 255, 0, 0)
    ORANGE = (255, 165, 0, 0)
    CYAN = (0, 255, 255, 0)
    MAGENTA = (255, 0, 255, 0)
    OFF = (0, 0, 0, 0)

    @classmethod
    def from_name(cls, name: str) -> Color:
        """Look up a color by name, ignoring case."""
        try:
            return cls[name.strip().upper()]
        except (KeyError, AttributeError):
            raise UnknownColorError(
                f"Unknown color {name!r}. Valid: {[c.name.lower() for c in cls]}"
            ) from None


def color_to_bytes(color: Color) -> bytes:
    """Return the 4-byte RGBW quadruple for a named color."""
    if not isinstance(color, Color):
        raise UnknownColorError(f"Not a named color: {color!r}")
    return bytes(color.value)


def percent_to_byte(value: float) -> int:
    """Scale a 0-100 percentage to a 0-255 channel value.

    Rounds half up, so 50% becomes 128.
    """
    if not 0 <= value <= 100:
        raise OutOfRangeError(f"Percentage must be 0-100, got {value}")
    return int(value * 255 / 100 + 0.5)


@dataclass(frozen=True)
class RgbwValue:
    """Intensity of the red, green, blue and white channels (0-255 each)."""

    red: int = 0
    green: int = 0
    blue: int = 0
    white: int = 0

    OFF: ClassVar[RgbwValue]

    def __post_init__(self) -> None:
        for name in ("red", "green", "blue", "white"):
            value = getattr(self, name)
            if not isinstance(value, int) or not 0 <= value <= 255:
                raise InvalidArgumentError(
                    f"Channel '{name}' must be an integer 0-255, got {value!r}"
                )

    @classmethod
    def from_color(cls, color: Color) -> RgbwValue:
        return cls(*color_to_bytes(color))

    @classmethod
    def from_percent(
        cls,
        red: float = 0,
        green: float = 0,
        blue: float = 0,
        white: float = 0,
    ) -> RgbwValue:
        """Build a value from four 0-100 percentages."""
        return cls(*(percent_to_byte(v) for v in (red, green, blue, white)))

    @classmethod
    def from_bytes(cls, data: bytes) -> RgbwValue:
        """Build a value from exactly four raw bytes."""
        if len(data) != CHANNELS:
            raise InvalidArgumentError(
                f"RGBW data must be {CHANNELS} bytes, got {len(data)}"
            )
        return cls(*bytes(data))

    def to_bytes(self) -> bytes:
        return bytes([self.red, self.green, self.blue, self.white])

    def to_dict(self) -> dict[str, int]:
        return {
            "red": self.red,
            "green": self.green,
            "blue": self.blue,
            "white": self.white,
        }

    def __repr__(self) -> str:
        return (
            f"RgbwValue(r={self.red}, g={self.green}, "
            f"b={self.blue}, w={self.white})"
        )


RgbwValue.OFF = RgbwValue()
