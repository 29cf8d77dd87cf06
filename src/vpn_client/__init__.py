"""vpn-client: track a VPN tunnel's lifecycle through an append-only event log."""

__version__ = "0.1.0"
