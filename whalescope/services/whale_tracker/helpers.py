"""Helper functions for whale tracking."""

import time

from whalescope.config import DEFAULT_WHALE_CONFIG, WhaleConfig
from whalescope.services.whale_tracker.models import Direction, TransactionType, WhaleMovement
from whalescope.utils.solana import format_address, format_usd, get_token_symbol

TYPE_MARKERS = {
    TransactionType.SWAP: "[swap]",
    TransactionType.TRANSFER: "[xfer]",
    TransactionType.STAKE: "[stake]",
    TransactionType.UNSTAKE: "[unstake]",
    TransactionType.UNKNOWN: "[?]",
}


def now_ms() -> int:
    """Current time in milliseconds since epoch."""
    return int(time.time() * 1000)


def is_whale(usd_value: float, config: WhaleConfig = DEFAULT_WHALE_CONFIG) -> bool:
    """Check whether holdings worth ``usd_value`` qualify a wallet as a whale.

    Args:
        usd_value: USD value of the holdings
        config: Whale thresholds

    Returns:
        True if the value reaches the minimum whale holdings (inclusive)
    """
    return usd_value >= config.min_whale_holdings_usd


def is_significant_movement(usd_value: float, config: WhaleConfig = DEFAULT_WHALE_CONFIG) -> bool:
    """Check whether a movement worth ``usd_value`` should be tracked.

    Args:
        usd_value: USD value of the movement
        config: Whale thresholds

    Returns:
        True if the value reaches the minimum movement value (inclusive)
    """
    return usd_value >= config.min_movement_usd


def format_movement(movement: WhaleMovement) -> str:
    """Format a movement as a one-line summary.

    Args:
        movement: Movement to format

    Returns:
        Human-readable string, e.g. ``IN [swap] 9WzD...AWWM swap $20.00K of SOL``
    """
    direction = "IN" if movement.direction == Direction.IN else "OUT"
    whale = format_address(movement.whale)
    token = get_token_symbol(movement.token_mint)
    value = format_usd(movement.usd_value)

    return f"{direction} {TYPE_MARKERS[movement.type]} {whale} {movement.type.value} {value} of {token}"
