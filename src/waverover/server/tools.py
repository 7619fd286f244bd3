"""MCP tool definitions for the Wave Rover bridge.

Registers the six rover tools on a FastMCP server. Argument names and
shapes are part of the MCP contract seen by clients; FastMCP validates
them before the dispatcher is called, and any exception raised by the
dispatcher comes back to the client as an error result.
"""

import logging
from typing import Annotated

from mcp.server.fastmcp import FastMCP
from pydantic import Field

from waverover import __version__
from waverover.domain.models import Number
from waverover.rover.dispatcher import CommandDispatcher

logger = logging.getLogger(__name__)

SERVER_NAME = "Wave Rover"

SERVER_INSTRUCTIONS = (
    "WaveRover is a mobile robot platform designed for educational and research "
    "purposes. It uses a differential drive system which can drive by setting the "
    "speed of the left and right wheels, or you can specify a rotational and linear "
    "velocity. Call Connect with the rover's IP address first and use the returned "
    "ID with every other tool."
)

RoverId = Annotated[str, Field(description="Rover ID returned by Connect, e.g. 'rover1'")]

TOOL_NAMES = ("Connect", "Speed", "PWM", "cmd_vel", "Screen", "IMU")


def create_mcp_server(dispatcher: CommandDispatcher, host: str = "127.0.0.1") -> FastMCP:
    """Create a FastMCP server exposing the rover tools.

    Args:
        dispatcher: Dispatcher bound to the registry and link of the
                    owning server instance.
        host: Interface the hosting app listens on. FastMCP only turns on
              DNS-rebinding protection for loopback hosts.
    """
    mcp = FastMCP(SERVER_NAME, instructions=SERVER_INSTRUCTIONS, host=host)

    @mcp.tool(name="Connect", description="Connects to a rover by its IP address")
    async def connect(
        address: Annotated[str, Field(description="Rover host, optionally with port")],
    ) -> str:
        return await dispatcher.connect(address)

    @mcp.tool(name="Speed", description="Sets the speed of the left and right wheels")
    async def speed(id: RoverId, leftWheelSpeed: Number, rightWheelSpeed: Number) -> str:
        return await dispatcher.speed(id, leftWheelSpeed, rightWheelSpeed)

    @mcp.tool(name="PWM", description="Sets the raw PWM values for the left and right motors")
    async def pwm(id: RoverId, L: Number, R: Number) -> str:
        return await dispatcher.pwm(id, L, R)

    @mcp.tool(name="cmd_vel", description="Sets the linear and angular velocity of the rover")
    async def cmd_vel(
        id: RoverId,
        L: Annotated[Number, Field(description="Linear velocity")],
        R: Annotated[Number, Field(description="Angular velocity")],
    ) -> str:
        return await dispatcher.cmd_vel(id, L, R)

    @mcp.tool(name="Screen", description="Allows the user to write text to the rover's screen")
    async def screen(id: RoverId, lineNum: Number, Text: str) -> str:
        return await dispatcher.screen(id, lineNum, Text)

    @mcp.tool(name="IMU", description="Returns IMU data")
    async def imu(id: RoverId) -> str:
        return await dispatcher.imu(id)

    logger.debug("Registered MCP tools %s (server v%s)", ", ".join(TOOL_NAMES), __version__)
    return mcp
