"""API route modules."""

from whalescope.api.routes import movements, signals, whales

__all__ = ["movements", "signals", "whales"]
