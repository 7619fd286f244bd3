"""Rover registry, command dispatch and outbound link for waverover.

Public API:
    RoverRegistry -- In-memory table of ``roverN`` IDs to addresses
    CommandDispatcher -- Rover operations mapped onto link commands
    RoverLink -- Abstract base class for the outbound link
    HttpRoverLink -- HTTP backend talking to the rover firmware
"""

from waverover.rover.base import RoverLink, RoverLinkError
from waverover.rover.dispatcher import CommandDispatcher
from waverover.rover.registry import RoverRegistry, UnknownRoverError

__all__ = [
    "CommandDispatcher",
    "HttpRoverLink",
    "RoverLink",
    "RoverLinkError",
    "RoverRegistry",
    "UnknownRoverError",
]


def __getattr__(name: str) -> type:
    """Lazy import for the backend that requires httpx."""
    if name == "HttpRoverLink":
        from waverover.rover.http_backend import HttpRoverLink
        return HttpRoverLink
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
