"""Upstream data provider clients."""

from whalescope.clients.helius_client import HeliusClient

__all__ = [
    'HeliusClient',
]
