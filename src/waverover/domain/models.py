"""Core domain models for the waverover system.

These models represent the data flowing through the bridge: rover
registrations held by the registry, and the ``T``-tagged JSON commands
sent to the rover firmware.
"""

from __future__ import annotations

from datetime import datetime
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, StrictFloat, StrictInt, TypeAdapter

# Integers stay integers and floats stay floats on the wire. Strings and
# booleans are rejected rather than coerced.
Number = Union[StrictInt, StrictFloat]


# ---------------------------------------------------------------------------
# Registry Models
# ---------------------------------------------------------------------------


class RoverRegistration(BaseModel):
    """A rover known to this server, addressed by its ``roverN`` ID."""

    model_config = ConfigDict(frozen=True)

    rover_id: str = Field(description="Sequential registration identifier, e.g. 'rover1'")
    address: str = Field(description="Host (optionally host:port) of the rover's HTTP endpoint")
    registered_at: datetime = Field(default_factory=datetime.now)


# ---------------------------------------------------------------------------
# Rover Command Models
# ---------------------------------------------------------------------------


class RoverCommandBase(BaseModel):
    """Base for all rover commands. ``T`` selects the firmware operation."""

    model_config = ConfigDict(frozen=True, extra="forbid")


class SpeedCommand(RoverCommandBase):
    """Set left and right wheel speeds."""

    T: Literal[1] = 1
    L: Number
    R: Number


class ScreenCommand(RoverCommandBase):
    """Write a line of text to the rover's OLED screen."""

    T: Literal[3] = 3
    lineNum: Number
    Text: str


class PwmCommand(RoverCommandBase):
    """Set raw PWM values for the left and right motors."""

    T: Literal[11] = 11
    L: Number
    R: Number


class VelocityCommand(RoverCommandBase):
    """Set linear (``X``) and angular (``Z``) velocity."""

    T: Literal[13] = 13
    X: Number
    Z: Number


class ImuQuery(RoverCommandBase):
    """Request IMU data. The rover answers with a JSON body."""

    T: Literal[126] = 126


RoverCommand = Annotated[
    Union[SpeedCommand, ScreenCommand, PwmCommand, VelocityCommand, ImuQuery],
    Field(discriminator="T"),
]

_command_adapter: TypeAdapter[RoverCommand] = TypeAdapter(RoverCommand)


def encode_command(command: RoverCommandBase) -> str:
    """Serialize a command to the compact JSON the firmware expects.

    ``T`` always comes first, e.g. ``{"T":1,"L":50,"R":-50}``.
    """
    return command.model_dump_json()


def decode_command(raw: str | bytes) -> RoverCommand:
    """Parse a JSON command back into its variant, selected by ``T``.

    Raises:
        pydantic.ValidationError: If ``T`` is unknown or a field is missing.
    """
    return _command_adapter.validate_json(raw)
