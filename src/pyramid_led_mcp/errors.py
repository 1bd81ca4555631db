"""Exception types raised by the protocol, transport, and controller layers."""

from __future__ import annotations


class LedControllerError(Exception):
    """Base class for all errors raised by this package."""


class InvalidArgumentError(LedControllerError, ValueError):
    """An argument failed validation before anything was sent."""


class UnknownColorError(InvalidArgumentError):
    """The value is not one of the named colors."""


class OutOfRangeError(InvalidArgumentError):
    """A percentage fell outside 0-100."""


class MalformedConstantError(LedControllerError, ValueError):
    """A hex protocol constant could not be decoded."""


class TransportError(LedControllerError, OSError):
    """The serial transport failed."""


class TransportTimeoutError(TransportError, TimeoutError):
    """A write did not complete within the configured timeout."""


class TransportNotOpenError(TransportError, ConnectionError):
    """The serial port is closed or was never opened."""
