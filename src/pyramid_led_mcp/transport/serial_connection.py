"""Serial connection to the Pyramid RGB light controller.

The controller listens on a plain RS-232/USB-serial port at 9600 baud,
8 data bits, no parity, 1 stop bit. Communication is write-mostly; only
ReadID produces a single reply byte.
"""

from __future__ import annotations

import logging

import serial

from ..errors import TransportError, TransportNotOpenError, TransportTimeoutError

logger = logging.getLogger(__name__)

DEFAULT_BAUDRATE = 9600
READ_TIMEOUT_S = 1.0
WRITE_TIMEOUT_S = 1.0


class SerialConnection:
    """Manages the serial port the controller is attached to.

    Usage::

        with SerialConnection("/dev/ttyUSB0") as conn:
            conn.write(frame_bytes)
            reply = conn.read_byte()
    """

    def __init__(
        self,
        port: str,
        baudrate: int = DEFAULT_BAUDRATE,
        read_timeout: float = READ_TIMEOUT_S,
        write_timeout: float = WRITE_TIMEOUT_S,
    ) -> None:
        self._port = port
        self._baudrate = baudrate
        self._read_timeout = read_timeout
        self._write_timeout = write_timeout
        self._serial: serial.Serial | None = None

    @property
    def port(self) -> str:
        return self._port

    @property
    def baudrate(self) -> int:
        return self._baudrate

    @property
    def connected(self) -> bool:
        return self._serial is not None and self._serial.is_open

    def open(self) -> None:
        """Open the serial port. Does nothing if it is already open.

        Raises:
            TransportError: If the port cannot be opened.
        """
        if self.connected:
            return

        try:
            self._serial = serial.Serial(
                port=self._port,
                baudrate=self._baudrate,
                bytesize=serial.EIGHTBITS,
                parity=serial.PARITY_NONE,
                stopbits=serial.STOPBITS_ONE,
                timeout=self._read_timeout,
                write_timeout=self._write_timeout,
            )
        except serial.SerialException as e:
            raise TransportError(
                f"Could not open serial port {self._port} at {self._baudrate} baud: {e}"
            ) from e

        logger.info("Opened %s at %d baud", self._port, self._baudrate)

    def close(self) -> None:
        """Close the serial port. Safe to call more than once."""
        if self._serial is None:
            return

        try:
            self._serial.close()
        except serial.SerialException as e:
            logger.warning("Error closing %s: %s", self._port, e)
        finally:
            self._serial = None
            logger.info("Closed %s", self._port)

    def write(self, data: bytes) -> int:
        """Write a frame and wait until it has been transmitted.

        Returns:
            Number of bytes written.

        Raises:
            TransportNotOpenError: If the port is not open.
            TransportTimeoutError: If the write timed out.
            TransportError: On any other serial failure.
        """
        if not self.connected:
            raise TransportNotOpenError(f"Serial port {self._port} is not open")

        try:
            written = self._serial.write(data)
            self._serial.flush()
        except serial.SerialTimeoutException as e:
            raise TransportTimeoutError(f"Write to {self._port} timed out") from e
        except serial.SerialException as e:
            raise TransportError(f"Write to {self._port} failed: {e}") from e

        return written if written is not None else len(data)

    def read_byte(self) -> int | None:
        """Read a single byte, blocking up to the read timeout.

        Returns:
            The byte value, or None if the read timed out.

        Raises:
            TransportNotOpenError: If the port is not open.
            TransportError: On any other serial failure.
        """
        if not self.connected:
            raise TransportNotOpenError(f"Serial port {self._port} is not open")

        try:
            data = self._serial.read(1)
        except serial.SerialException as e:
            raise TransportError(f"Read from {self._port} failed: {e}") from e

        if not data:
            logger.debug("Read from %s timed out", self._port)
            return None
        return data[0]

    def __enter__(self) -> SerialConnection:
        self.open()
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def __repr__(self) -> str:
        state = "open" if self.connected else "closed"
        return f"SerialConnection(port={self._port!r}, baudrate={self._baudrate}, {state})"
