"""Whale tracker service for discovering whales and following their movements."""

from whalescope.services.whale_tracker.movements import MovementStore
from whalescope.services.whale_tracker.registry import WhaleRegistry
from whalescope.services.whale_tracker.tracker import WhaleTracker

__all__ = ["MovementStore", "WhaleRegistry", "WhaleTracker"]
