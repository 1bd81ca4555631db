"""Transport layer: the serial port the controller hangs off."""

from .serial_connection import SerialConnection
