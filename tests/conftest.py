"""Shared test fixtures for the waverover test suite.

Provides a stub rover (an ``httpx.MockTransport`` that records every
request), a registry, a link wired to the stub, and a dispatcher.
"""

from __future__ import annotations

import json
from typing import AsyncIterator

import httpx
import pytest
import pytest_asyncio

from waverover.rover.dispatcher import CommandDispatcher
from waverover.rover.http_backend import HttpRoverLink
from waverover.rover.registry import RoverRegistry


class StubRover:
    """Answers like the rover firmware and records what it was sent."""

    def __init__(self, body: str = '{"status":"ok"}', status_code: int = 200) -> None:
        self.body = body
        self.status_code = status_code
        self.requests: list[httpx.Request] = []

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return httpx.Response(self.status_code, text=self.body)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handle)

    @property
    def commands(self) -> list[dict]:
        """Decoded ``json`` query parameter of every request, in order."""
        return [json.loads(r.url.params["json"]) for r in self.requests]


# ---------------------------------------------------------------------------
# Rover Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def stub_rover() -> StubRover:
    """A stub rover replying 200 with a small JSON body."""
    return StubRover()


@pytest.fixture
def registry() -> RoverRegistry:
    """An empty registry."""
    return RoverRegistry()


@pytest_asyncio.fixture
async def link(stub_rover: StubRover) -> AsyncIterator[HttpRoverLink]:
    """A connected HttpRoverLink whose requests go to the stub rover."""
    rover_link = HttpRoverLink(timeout=1.0, transport=stub_rover.transport)
    await rover_link.connect()
    yield rover_link
    await rover_link.disconnect()


@pytest.fixture
def dispatcher(registry: RoverRegistry, link: HttpRoverLink) -> CommandDispatcher:
    """A dispatcher bound to the registry and the stub-backed link."""
    return CommandDispatcher(registry, link)
