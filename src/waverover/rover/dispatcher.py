"""Command dispatcher: one rover operation, one outbound request.

Each operation resolves the rover ID through the registry, builds the
matching ``T``-tagged command and hands it to the link. The returned
strings are what MCP clients see as the tool result.
"""

from __future__ import annotations

import logging

from waverover.domain.models import (
    ImuQuery,
    Number,
    PwmCommand,
    ScreenCommand,
    SpeedCommand,
    VelocityCommand,
)
from waverover.rover.base import RoverLink
from waverover.rover.registry import RoverRegistry

logger = logging.getLogger(__name__)


class CommandDispatcher:
    """Translates rover operations into commands on a :class:`RoverLink`.

    Failures propagate to the caller unchanged:

    - :class:`~waverover.rover.registry.UnknownRoverError` when the ID is
      not registered (no request is issued),
    - :class:`~waverover.rover.base.RoverLinkError` when the request fails.
    """

    def __init__(self, registry: RoverRegistry, link: RoverLink) -> None:
        self._registry = registry
        self._link = link

    @property
    def registry(self) -> RoverRegistry:
        return self._registry

    async def connect(self, address: str) -> str:
        """Register a rover address. No request is sent to the rover."""
        registration = self._registry.register(address)
        return f"Connected to: {address} with ID: {registration.rover_id}"

    async def speed(self, rover_id: str, left: Number, right: Number) -> str:
        """Set the left and right wheel speeds (``T=1``)."""
        address = self._registry.resolve(rover_id)
        await self._link.send(address, SpeedCommand(L=left, R=right))
        return f"Left wheel speed: {left}, Right wheel speed: {right}"

    async def pwm(self, rover_id: str, left: Number, right: Number) -> str:
        """Set the raw motor PWM values (``T=11``)."""
        address = self._registry.resolve(rover_id)
        await self._link.send(address, PwmCommand(L=left, R=right))
        return f"Left motor PWM: {left}, Right motor PWM: {right}"

    async def cmd_vel(self, rover_id: str, linear: Number, angular: Number) -> str:
        """Set linear and angular velocity (``T=13``, sent as ``X``/``Z``)."""
        address = self._registry.resolve(rover_id)
        await self._link.send(address, VelocityCommand(X=linear, Z=angular))
        return f"Velocity: {linear}, Rotation: {angular}"

    async def screen(self, rover_id: str, line_num: Number, text: str) -> str:
        """Write ``text`` on screen line ``line_num`` (``T=3``)."""
        address = self._registry.resolve(rover_id)
        await self._link.send(address, ScreenCommand(lineNum=line_num, Text=text))
        return f"Line Number: {line_num}, Text: {text}"

    async def imu(self, rover_id: str) -> str:
        """Read IMU data (``T=126``). Returns the rover's body verbatim."""
        address = self._registry.resolve(rover_id)
        body = await self._link.send(address, ImuQuery())
        logger.debug("IMU data from %s: %s", rover_id, body)
        return body
