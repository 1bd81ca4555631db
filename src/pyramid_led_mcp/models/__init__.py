"""Data models for colors and controller state."""

from .color import Color, RgbwValue, color_to_bytes, percent_to_byte
