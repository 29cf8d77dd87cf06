"""Custom exceptions for the VPN client."""

from pathlib import Path


class VPNClientError(Exception):
    """Base exception for VPN client errors."""
    pass


class EventLogError(VPNClientError):
    """Raised when the persisted event log cannot be read."""

    def __init__(self, path: Path, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Malformed event log {path}: {reason}")


class ConnectorError(VPNClientError):
    """Raised when a connector cannot attempt the transition at all."""
    pass


class ConfigurationError(VPNClientError):
    """Raised when there's an issue with client configuration"""
    pass
