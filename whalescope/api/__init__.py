"""HTTP API for WhaleScope."""

from whalescope.api.app import create_application

__all__ = ["create_application"]
