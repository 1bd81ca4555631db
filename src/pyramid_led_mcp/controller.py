"""Stateful session over a single RGB light controller.

The session owns its serial connection for its whole lifetime and keeps
a local copy of what it last told the device: the current color, a saved
color for save/resume, and whether flashing mode is on.

A session is meant to be driven by one caller at a time. The internal
lock only keeps a single write and its state update together; it does
not make interleaved use from several threads meaningful.
"""

from __future__ import annotations

import logging
import threading

from .errors import TransportNotOpenError
from .models.color import Color, RgbwValue
from .protocol.commands import (
    build_flashing_period,
    build_mode,
    build_read_id,
    build_set_color,
    build_set_flashing_colors,
    build_set_id,
)
from .protocol.framing import format_frame
from .protocol.parser import ControllerState, parse_read_id
from .transport.serial_connection import SerialConnection

logger = logging.getLogger(__name__)


class RGBController:
    """Drives one controller over an exclusively owned serial connection.

    On construction the port is opened (if needed) and the device is put
    into a known state: flashing off, color off.

    Usage::

        with RGBController.from_port("/dev/ttyUSB0") as leds:
            leds.set_color(Color.GREEN)
            leds.save_color()
            leds.set_flashing_colors(Color.RED, Color.OFF)
            leds.start_flashing()
    """

    def __init__(self, connection: SerialConnection) -> None:
        self._connection = connection
        self._lock = threading.Lock()
        self._closed = False
        self._last_color = RgbwValue.OFF
        self._saved_color = RgbwValue.OFF
        self._flashing = False

        if not connection.connected:
            connection.open()
        try:
            self._send(build_mode(False))
            self._send(build_set_color(RgbwValue.OFF))
        except Exception:
            self.close()
            raise

    @classmethod
    def from_port(cls, port: str, **kwargs) -> RGBController:
        """Open ``port`` and start a session on it.

        Keyword arguments are passed to :class:`SerialConnection`.
        """
        return cls(SerialConnection(port, **kwargs))

    # ─── STATE ───────────────────────────────────────────────────────

    @property
    def last_color(self) -> RgbwValue:
        return self._last_color

    @property
    def saved_color(self) -> RgbwValue:
        return self._saved_color

    @property
    def flashing(self) -> bool:
        return self._flashing

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def connection(self) -> SerialConnection:
        return self._connection

    @property
    def state(self) -> ControllerState:
        return ControllerState(
            last_color=self._last_color,
            saved_color=self._saved_color,
            flashing=self._flashing,
        )

    # ─── COLOR ───────────────────────────────────────────────────────

    def set_color(self, color: Color) -> None:
        """Show a named color."""
        self._apply_color(RgbwValue.from_color(color))

    def set_color_rgbw(
        self, red: int = 0, green: int = 0, blue: int = 0, white: int = 0
    ) -> None:
        """Show a color given as four 0-255 channel values."""
        self._apply_color(RgbwValue(red, green, blue, white))

    def set_color_rgbw_percent(
        self,
        red: float = 0,
        green: float = 0,
        blue: float = 0,
        white: float = 0,
    ) -> None:
        """Show a color given as four 0-100 percentages."""
        rgbw = RgbwValue.from_percent(red, green, blue, white)
        self.set_color_rgbw(rgbw.red, rgbw.green, rgbw.blue, rgbw.white)

    def save_color(self) -> None:
        """Remember the current color so :meth:`resume_color` can restore it."""
        self._saved_color = self._last_color

    def resume_color(self) -> None:
        """Re-send the color stored by :meth:`save_color`."""
        saved = self._saved_color
        self.set_color_rgbw(saved.red, saved.green, saved.blue, saved.white)

    def _apply_color(self, rgbw: RgbwValue) -> None:
        frame = build_set_color(rgbw)
        with self._lock:
            self._send(frame)
            self._last_color = rgbw

    # ─── FLASHING ────────────────────────────────────────────────────

    def set_flashing(self, enabled: bool) -> None:
        """Switch flashing mode on or off.

        The Mode frame is sent even if the device is already in the
        requested mode.
        """
        enabled = bool(enabled)
        frame = build_mode(enabled)
        with self._lock:
            self._send(frame)
            self._flashing = enabled

    def start_flashing(self) -> None:
        self.set_flashing(True)

    def stop_flashing(self) -> None:
        self.set_flashing(False)

    def set_flashing_period(self, period: int) -> None:
        """Set how fast the flashing colors alternate.

        Args:
            period: Raw device steps (0-255), roughly 27 ms each.
        """
        frame = build_flashing_period(period)
        with self._lock:
            self._send(frame)

    def set_flashing_colors(self, color1: Color, color2: Color) -> None:
        """Choose the two colors alternated in flashing mode."""
        frame = build_set_flashing_colors(color1, color2)
        with self._lock:
            self._send(frame)

    # ─── DEVICE ID ───────────────────────────────────────────────────

    def set_id(self, device_id: int) -> None:
        frame = build_set_id(device_id)
        with self._lock:
            self._send(frame)

    def read_id(self) -> int:
        """Ask the device for its identifier.

        Returns:
            The ID (0-255), or -1 if the device did not answer within the
            connection's read timeout.
        """
        frame = build_read_id()
        with self._lock:
            self._send(frame)
            value = self._connection.read_byte()
        device_id = parse_read_id(None if value is None else bytes([value]))
        logger.debug("Read device ID: %d", device_id)
        return device_id

    # ─── LIFECYCLE ───────────────────────────────────────────────────

    def close(self) -> None:
        """Close the serial connection. Later calls do nothing."""
        if self._closed:
            return
        self._closed = True
        self._connection.close()

    def __enter__(self) -> RGBController:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def _send(self, frame: bytes) -> None:
        if self._closed:
            raise TransportNotOpenError("Controller session is closed")
        self._connection.write(frame)
        logger.debug("Sent frame: %s", format_frame(frame))
