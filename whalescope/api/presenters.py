"""Conversion of tracker results into API response shapes."""

from typing import Any, Dict

from whalescope.services.whale_tracker.models import (
    Direction,
    Pattern,
    PatternType,
    TransactionType,
    WhaleMovement,
    WhaleProfile,
)
from whalescope.utils.solana import format_amount, format_usd, get_token_symbol

# One significance point per $10k moved, capped at 100
SIGNIFICANCE_UNIT_USD = 10_000
MAX_SIGNIFICANCE = 100

MEGA_WHALE_USD = 100_000_000
LARGE_WHALE_USD = 25_000_000


def significance_score(usd_value: float) -> int:
    """Score a USD amount on the 0-100 significance scale."""
    return min(MAX_SIGNIFICANCE, int(usd_value // SIGNIFICANCE_UNIT_USD))


def movement_type(movement: WhaleMovement) -> str:
    """Map a movement to its API type.

    Swaps become ``buy``/``sell`` by direction; everything else becomes
    ``transfer_in``/``transfer_out``.
    """
    incoming = movement.direction == Direction.IN
    if movement.type == TransactionType.SWAP:
        return "buy" if incoming else "sell"
    return "transfer_in" if incoming else "transfer_out"


def present_movement(movement: WhaleMovement) -> Dict[str, Any]:
    """Convert a recorded movement to the API movement shape.

    Args:
        movement: Movement from the store

    Returns:
        API movement dictionary
    """
    return {
        "txHash": movement.signature,
        "slot": 0,  # the enhanced feed does not report slots
        "timestamp": movement.timestamp,
        "wallet": movement.whale,
        "tokenMint": movement.token_mint,
        "tokenSymbol": get_token_symbol(movement.token_mint),
        "type": movement_type(movement),
        "amount": movement.amount,
        "valueUsd": movement.usd_value,
        "significance": significance_score(movement.usd_value),
    }


def whale_tier(usd_value: float) -> str:
    if usd_value >= MEGA_WHALE_USD:
        return "mega"
    if usd_value >= LARGE_WHALE_USD:
        return "large"
    return "medium"


def present_profile(profile: WhaleProfile) -> Dict[str, Any]:
    """Convert a discovered whale profile to the API whale shape.

    Only the holding of the discovered token is known, so it makes up the
    whole portfolio.
    """
    symbol = get_token_symbol(profile.token_mint)
    return {
        "address": profile.address,
        "label": None,
        "totalValueUsd": profile.usd_value,
        "tokenCount": 1,
        "tier": whale_tier(profile.usd_value),
        "firstSeen": profile.first_seen,
        "lastActive": profile.last_activity,
        "tags": [],
        "behavior": profile.behavior.value,
        "topHoldings": [
            {
                "mint": profile.token_mint,
                "symbol": symbol,
                "name": symbol,
                "uiAmount": profile.holdings,
                "valueUsd": profile.usd_value,
                "portfolioPercent": 100,
            },
        ],
    }


def present_pattern(pattern: Pattern) -> Dict[str, Any]:
    """Convert a detected pattern to the API signal shape.

    Args:
        pattern: Accumulation or distribution pattern

    Returns:
        API signal dictionary; confidence is scaled to 0-100
    """
    symbol = get_token_symbol(pattern.token_mint)
    verb = "buys" if pattern.type == PatternType.ACCUMULATION else "sells"
    action = "accumulating" if pattern.type == PatternType.ACCUMULATION else "distributing"
    total_usd = format_usd(pattern.total_usd_value)

    return {
        "id": f"sig_{pattern.whale[:8]}_{pattern.type.value}_{pattern.end_time}",
        "type": pattern.type.value,
        "wallet": pattern.whale,
        "tokenMint": pattern.token_mint,
        "tokenSymbol": symbol,
        "strength": significance_score(pattern.total_usd_value),
        "confidence": round(pattern.confidence * 100),
        "description": f"Whale {action} {symbol}. {pattern.tx_count} separate {verb} totaling {total_usd}.",
        "detectedAt": pattern.end_time,
        "evidence": [
            {
                "type": "pattern",
                "description": f"{pattern.tx_count} {verb} between {pattern.start_time} and {pattern.end_time}",
            },
            {
                "type": "volume",
                "description": f"{format_amount(pattern.total_amount)} {symbol} worth {total_usd}",
            },
        ],
    }
