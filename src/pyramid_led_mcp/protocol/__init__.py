"""Protocol layer: frame markers, command builders, and response parsing."""

from .framing import build_frame, parse_frame
from .commands import Command, build_command
