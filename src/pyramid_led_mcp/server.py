"""MCP server entry point for the Pyramid RGB light controller.

Exposes tools, resources, and prompts via the Model Context Protocol
using the official Python MCP SDK with stdio transport.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from mcp.server.fastmcp import FastMCP

from .controller import RGBController
from .errors import InvalidArgumentError
from .models.color import Color
from .protocol.commands import (
    FLASHING_PERIOD_STEP_MS,
    period_to_steps,
    steps_to_period,
)
from .transport.serial_connection import (
    DEFAULT_BAUDRATE,
    READ_TIMEOUT_S,
    SerialConnection,
)

logger = logging.getLogger(__name__)

mcp = FastMCP(
    "pyramid-led",
    instructions="MCP server for the Pyramid RGB(W) indicator light controller",
)

# Global session state
_controller: RGBController | None = None


def _get_controller() -> RGBController:
    """Get the active controller session, raising if not connected."""
    if _controller is None or _controller.closed:
        raise RuntimeError(
            "Not connected to a controller. Use the 'connect' tool first."
        )
    return _controller


# ─── CONNECTION TOOLS ─────────────────────────────────────────────────

@mcp.tool()
def connect(
    port: str,
    baudrate: int = DEFAULT_BAUDRATE,
    read_timeout: float = READ_TIMEOUT_S,
) -> dict[str, Any]:
    """Open the serial port and reset the light controller.

    The controller is switched to static mode and turned off so the
    device and the tracked state agree.

    Args:
        port: Serial port name, e.g. COM4 or /dev/ttyUSB0.
        baudrate: Line speed (the controller uses 9600).
        read_timeout: Seconds to wait for the ReadID reply.
    """
    global _controller
    if _controller is not None and not _controller.closed:
        return {
            "connected": True,
            "message": "Already connected",
            "port": _controller.connection.port,
        }

    connection = SerialConnection(port, baudrate=baudrate, read_timeout=read_timeout)
    _controller = RGBController(connection)
    return {"connected": True, "port": port, "baudrate": baudrate}


@mcp.tool()
def disconnect() -> dict[str, bool]:
    """Close the serial connection to the controller."""
    global _controller
    if _controller is None:
        return {"disconnected": True}
    _controller.close()
    _controller = None
    return {"disconnected": True}


# ─── COLOR TOOLS ──────────────────────────────────────────────────────

@mcp.tool()
def set_color(color: str) -> dict[str, Any]:
    """Show a named color.

    Args:
        color: One of red, green, blue, white, yellow, orange, cyan, magenta, off.
    """
    try:
        named = Color.from_name(color)
    except InvalidArgumentError as e:
        return {"error": str(e)}

    controller = _get_controller()
    controller.set_color(named)
    return {"color": named.name.lower(), **controller.last_color.to_dict()}


@mcp.tool()
def set_color_rgbw(
    red: int = 0,
    green: int = 0,
    blue: int = 0,
    white: int = 0,
) -> dict[str, Any]:
    """Show a color from raw channel values.

    Args:
        red: Red intensity (0-255).
        green: Green intensity (0-255).
        blue: Blue intensity (0-255).
        white: White LED intensity (0-255).
    """
    controller = _get_controller()
    try:
        controller.set_color_rgbw(red, green, blue, white)
    except InvalidArgumentError as e:
        return {"error": str(e)}
    return controller.last_color.to_dict()


@mcp.tool()
def set_color_percent(
    red: float = 0,
    green: float = 0,
    blue: float = 0,
    white: float = 0,
) -> dict[str, Any]:
    """Show a color from channel percentages.

    Args:
        red: Red intensity (0-100).
        green: Green intensity (0-100).
        blue: Blue intensity (0-100).
        white: White LED intensity (0-100).
    """
    controller = _get_controller()
    try:
        controller.set_color_rgbw_percent(red, green, blue, white)
    except InvalidArgumentError as e:
        return {"error": str(e)}
    return controller.last_color.to_dict()


@mcp.tool()
def save_color() -> dict[str, Any]:
    """Remember the current color for a later resume_color."""
    controller = _get_controller()
    controller.save_color()
    return {"saved": controller.saved_color.to_dict()}


@mcp.tool()
def resume_color() -> dict[str, Any]:
    """Restore the color remembered by save_color."""
    controller = _get_controller()
    controller.resume_color()
    return {"resumed": controller.last_color.to_dict()}


# ─── FLASHING TOOLS ───────────────────────────────────────────────────

@mcp.tool()
def set_flashing(enabled: bool) -> dict[str, Any]:
    """Turn flashing mode on or off.

    Args:
        enabled: True to alternate between the flashing colors, False for static.
    """
    controller = _get_controller()
    controller.set_flashing(enabled)
    return {"flashing": controller.flashing}


@mcp.tool()
def set_flashing_period(
    period: int | None = None,
    period_ms: float | None = None,
) -> dict[str, Any]:
    """Set how fast the two flashing colors alternate.

    Give either the raw device value or an approximate duration.

    Args:
        period: Raw period in device steps (0-255), about 27 ms each.
        period_ms: Period in milliseconds, rounded to the nearest step.
    """
    if (period is None) == (period_ms is None):
        return {"error": "Give exactly one of 'period' or 'period_ms'"}

    try:
        steps = period if period is not None else period_to_steps(period_ms)
        controller = _get_controller()
        controller.set_flashing_period(steps)
    except InvalidArgumentError as e:
        return {"error": str(e)}

    return {"period": steps, "approx_ms": steps_to_period(steps)}


@mcp.tool()
def set_flashing_colors(color1: str, color2: str) -> dict[str, Any]:
    """Choose the two colors alternated in flashing mode.

    Args:
        color1: First named color.
        color2: Second named color.
    """
    try:
        first = Color.from_name(color1)
        second = Color.from_name(color2)
    except InvalidArgumentError as e:
        return {"error": str(e)}

    controller = _get_controller()
    controller.set_flashing_colors(first, second)
    return {"color1": first.name.lower(), "color2": second.name.lower()}


# ─── DEVICE ID TOOLS ──────────────────────────────────────────────────

@mcp.tool()
def set_device_id(device_id: int) -> dict[str, Any]:
    """Assign a new identifier to the controller.

    Args:
        device_id: Identifier (0-255).
    """
    controller = _get_controller()
    try:
        controller.set_id(device_id)
    except InvalidArgumentError as e:
        return {"error": str(e)}
    return {"device_id": device_id}


@mcp.tool()
def read_device_id() -> dict[str, Any]:
    """Read the controller's identifier.

    Returns -1 if the controller did not answer in time.
    """
    controller = _get_controller()
    device_id = controller.read_id()
    result: dict[str, Any] = {"device_id": device_id}
    if device_id < 0:
        result["message"] = "No response from controller"
    return result


@mcp.tool()
def get_state() -> dict[str, Any]:
    """Report the locally tracked color, saved color and flashing mode."""
    return _get_controller().state.to_dict()


# ─── MCP RESOURCES ───────────────────────────────────────────────────

@mcp.resource("pyramid://colors")
def resource_colors() -> str:
    """Named colors and their RGBW channel values."""
    return json.dumps({
        color.name.lower(): dict(zip(("red", "green", "blue", "white"), color.value))
        for color in Color
    })


@mcp.resource("pyramid://state")
def resource_state() -> str:
    """Current tracked controller state."""
    if _controller is None or _controller.closed:
        return json.dumps({"connected": False})
    return json.dumps({"connected": True, **_controller.state.to_dict()})


# ─── MCP PROMPTS ─────────────────────────────────────────────────────

@mcp.prompt()
def alert_signal(message: str) -> str:
    """Guide the AI through signalling an alert on the indicator light.

    Args:
        message: What the alert is about.
    """
    return f"""Signal this alert on the indicator light: {message}

Steps:
- Call save_color so the current color can be restored afterwards
- Pick two contrasting colors that suit the alert (e.g. red/off for errors,
  yellow/off for warnings) and call set_flashing_colors
- Call set_flashing_period; one step is about {FLASHING_PERIOD_STEP_MS} ms
- Call set_flashing with enabled=true
- When the alert is acknowledged, call set_flashing with enabled=false
  and then resume_color

Available colors: {', '.join(c.name.lower() for c in Color)}"""


# ─── ENTRY POINT ─────────────────────────────────────────────────────

def main():
    """Run the MCP server with stdio transport."""
    logging.basicConfig(level=logging.INFO)
    try:
        mcp.run(transport="stdio")
    finally:
        if _controller is not None:
            _controller.close()


if __name__ == "__main__":
    main()
