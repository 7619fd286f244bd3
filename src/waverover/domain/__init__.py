"""Domain models for waverover.

This package contains the rover registration record and the closed set
of ``T``-tagged rover commands with their JSON wire codec. All models
use Pydantic v2 for validation and serialization.
"""

from waverover.domain.models import (
    ImuQuery,
    PwmCommand,
    RoverCommand,
    RoverRegistration,
    ScreenCommand,
    SpeedCommand,
    VelocityCommand,
    decode_command,
    encode_command,
)

__all__ = [
    "ImuQuery",
    "PwmCommand",
    "RoverCommand",
    "RoverRegistration",
    "ScreenCommand",
    "SpeedCommand",
    "VelocityCommand",
    "decode_command",
    "encode_command",
]
