"""Shared utilities for WhaleScope."""
