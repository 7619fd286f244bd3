"""waverover -- MCP bridge for Wave Rover robots.

This package exposes a small set of MCP tools (Connect, Speed, PWM,
cmd_vel, Screen, IMU) and translates each tool call into a single HTTP
request against the rover's onboard ``/js`` JSON command endpoint.
"""

__version__ = "1.0.0"
