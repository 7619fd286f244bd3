"""In-memory registry of connected rovers.

Maps ``roverN`` identifiers to the network address supplied at Connect
time. Entries are never updated or removed; the table lives as long as
the server instance that owns it.
"""

from __future__ import annotations

import itertools
import logging
import threading

from waverover.domain.models import RoverRegistration

logger = logging.getLogger(__name__)

ID_PREFIX = "rover"


class RoverRegistry:
    """Assigns sequential rover IDs and resolves them to addresses.

    Safe to use from the event loop and from worker threads: ID
    assignment and insertion happen under one lock, so concurrent
    registrations never share an identifier.
    """

    def __init__(self) -> None:
        self._rovers: dict[str, RoverRegistration] = {}
        self._counter = itertools.count(1)
        self._lock = threading.Lock()

    def register(self, address: str) -> RoverRegistration:
        """Register a rover address and return its new registration."""
        with self._lock:
            rover_id = f"{ID_PREFIX}{next(self._counter)}"
            registration = RoverRegistration(rover_id=rover_id, address=address)
            self._rovers[rover_id] = registration
        logger.info("Registered %s at %s", rover_id, address)
        return registration

    def get(self, rover_id: str) -> RoverRegistration:
        """Return the registration for ``rover_id``.

        Raises:
            UnknownRoverError: If no rover was registered under this ID.
        """
        try:
            return self._rovers[rover_id]
        except KeyError:
            raise UnknownRoverError(rover_id) from None

    def resolve(self, rover_id: str) -> str:
        """Return the address registered for ``rover_id``.

        Raises:
            UnknownRoverError: If no rover was registered under this ID.
        """
        return self.get(rover_id).address

    def registrations(self) -> list[RoverRegistration]:
        """All registrations, in registration order."""
        with self._lock:
            return list(self._rovers.values())

    def __len__(self) -> int:
        return len(self._rovers)

    def __contains__(self, rover_id: object) -> bool:
        return rover_id in self._rovers


class UnknownRoverError(Exception):
    """Raised when a rover ID has no registration."""

    def __init__(self, rover_id: str) -> None:
        super().__init__(f"Rover with ID {rover_id} not found")
        self.rover_id = rover_id
