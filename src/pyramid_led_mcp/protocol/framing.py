"""Frame builder and parser for the controller's serial protocol.

Frame layout::

    +--------------+---------+------------------+------------+
    | Start marker | Opcode  |     Payload      | End marker |
    | 2 bytes      | 1 byte  | command-specific | 1 byte     |
    +--------------+---------+------------------+------------+

- Start marker: 0x5A 0xFF
- Payload: 8 bytes for color commands, 1 byte for mode/period/ID, none for ReadID
- End marker: 0xA5

There is no length field or checksum. The codec does not check payload
length against the opcode; builders in :mod:`.commands` do that.
"""

from __future__ import annotations

import string
from dataclasses import dataclass

from ..errors import MalformedConstantError


def hex_decode(text: str) -> bytes:
    """Decode a hex string such as ``"5AFF"`` into bytes.

    Raises:
        MalformedConstantError: On odd length or non-hex characters.
    """
    if len(text) % 2:
        raise MalformedConstantError(f"Hex string has odd length: {text!r}")
    if any(ch not in string.hexdigits for ch in text):
        raise MalformedConstantError(f"Hex string has non-hex characters: {text!r}")
    return bytes.fromhex(text)


START_MARKER = hex_decode("5AFF")
END_MARKER = hex_decode("A5")
MIN_FRAME_SIZE = len(START_MARKER) + 1 + len(END_MARKER)


@dataclass
class Frame:
    """A parsed protocol frame."""

    command: int
    payload: bytes

    def __repr__(self) -> str:
        return (
            f"Frame(command=0x{self.command:02X}, "
            f"payload={self.payload.hex(' ') if self.payload else '(empty)'})"
        )


def build_frame(command: int, payload: bytes = b"") -> bytes:
    """Wrap an opcode and its payload in start and end markers.

    Args:
        command: Single-byte opcode.
        payload: Command-specific payload bytes.

    Returns:
        The complete frame, ready to write to the serial port.
    """
    return START_MARKER + bytes([command]) + bytes(payload) + END_MARKER


def parse_frame(data: bytes) -> Frame | None:
    """Parse a complete frame back into opcode and payload.

    Returns:
        A ``Frame``, or ``None`` if the data is too short or a marker
        is missing.
    """
    if len(data) < MIN_FRAME_SIZE:
        return None
    if data[: len(START_MARKER)] != START_MARKER:
        return None
    if data[-len(END_MARKER) :] != END_MARKER:
        return None

    command = data[len(START_MARKER)]
    payload = bytes(data[len(START_MARKER) + 1 : -len(END_MARKER)])
    return Frame(command=command, payload=payload)


def format_frame(data: bytes) -> str:
    """Upper-case hex dump of a frame, e.g. ``5AFFD600A5``."""
    return bytes(data).hex().upper()
