"""Shared constants for the VPN client."""

from pathlib import Path

# Environment variables
ENV_EVENTS_FILE = "VPN_CLIENT_EVENTS_FILE"
ENV_UP_COMMAND = "VPN_CLIENT_UP_CMD"
ENV_DOWN_COMMAND = "VPN_CLIENT_DOWN_CMD"
ENV_COMMAND_TIMEOUT = "VPN_CLIENT_COMMAND_TIMEOUT"
ENV_FAILURE_RATE = "VPN_CLIENT_FAILURE_RATE"

# Defaults
DEFAULT_EVENTS_FILE = Path.home() / ".vpn-client" / "events.json"
DEFAULT_COMMAND_TIMEOUT = 60.0  # seconds
DEFAULT_FAILURE_RATE = 0.0

# Output
PROGRAM_NAME = "vpn-client"
COMMAND_NAMES = ("status", "up", "down", "history")
NO_EVENTS_MESSAGE = "No events found"
