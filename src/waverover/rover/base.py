"""Abstract base class for the outbound rover link.

The dispatcher talks to rovers only through this interface, so the HTTP
backend can be swapped for a fake in tests without touching anything
else.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod

from waverover.domain.models import RoverCommandBase

logger = logging.getLogger(__name__)


class RoverLink(ABC):
    """Abstract interface for delivering commands to a rover.

    Example usage::

        async with HttpRoverLink(timeout=5.0) as link:
            await link.send("192.168.4.1", SpeedCommand(L=0.5, R=0.5))
            imu = await link.send("192.168.4.1", ImuQuery())
    """

    @abstractmethod
    async def connect(self) -> None:
        """Acquire the resources needed to send commands.

        Must be called before :meth:`send`.
        """
        ...

    @abstractmethod
    async def disconnect(self) -> None:
        """Release resources. Safe to call multiple times."""
        ...

    @abstractmethod
    async def send(self, address: str, command: RoverCommandBase) -> str:
        """Deliver one command to the rover at ``address``.

        Exactly one request is issued; nothing is retried.

        Args:
            address: Host (optionally host:port) of the rover.
            command: The command to deliver.

        Returns:
            The response body as text.

        Raises:
            RoverLinkError: If the request fails or the rover rejects it.
        """
        ...

    async def __aenter__(self) -> RoverLink:
        """Async context manager entry -- connects the link."""
        await self.connect()
        return self

    async def __aexit__(self, exc_type: type | None, exc_val: Exception | None, exc_tb: object) -> None:
        """Async context manager exit -- disconnects the link."""
        await self.disconnect()


class RoverLinkError(Exception):
    """Raised when a command cannot be delivered to a rover."""

    def __init__(self, message: str, address: str = "") -> None:
        super().__init__(message)
        self.address = address
