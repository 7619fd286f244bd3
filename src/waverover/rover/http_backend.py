"""HTTP rover link.

Sends commands to the rover firmware as ``GET /js?json=<command>``.
"""

from __future__ import annotations

import logging

import httpx

from waverover.domain.models import RoverCommandBase, encode_command
from waverover.rover.base import RoverLink, RoverLinkError

logger = logging.getLogger(__name__)


class HttpRoverLink(RoverLink):
    """Delivers rover commands over plain HTTP with a bounded timeout.

    Any non-2xx status is treated as a failed delivery.
    """

    def __init__(
        self,
        timeout: float = 5.0,
        command_path: str = "/js",
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._timeout = timeout
        self._command_path = "/" + command_path.lstrip("/")
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    @property
    def is_connected(self) -> bool:
        return self._client is not None

    async def connect(self) -> None:
        """Create the shared HTTP client."""
        if self._client is not None:
            return
        self._client = httpx.AsyncClient(timeout=self._timeout, transport=self._transport)
        logger.info("Rover link ready (timeout=%ss)", self._timeout)

    async def disconnect(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None
            logger.info("Rover link closed")

    async def send(self, address: str, command: RoverCommandBase) -> str:
        """Send a command via HTTP GET and return the response body."""
        if self._client is None:
            raise RoverLinkError("Not connected: call connect() first", address=address)
        payload = encode_command(command)
        url = f"http://{address}{self._command_path}"
        try:
            resp = await self._client.get(url, params={"json": payload})
            resp.raise_for_status()
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            logger.warning("Command %s to %s failed: %s", payload, address, e)
            raise RoverLinkError(
                f"Request to rover at {address} failed: {e}", address=address
            ) from e
        logger.debug("Sent %s to %s (%d)", payload, address, resp.status_code)
        return resp.text
