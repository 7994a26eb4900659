"""FastAPI dependency providers."""

import time
from typing import Any, Dict, Optional

from fastapi import Request

from whalescope.services.whale_tracker import WhaleTracker
from whalescope.utils.error_handling import NotFoundError
from whalescope.utils.solana import get_token_price


def get_tracker(request: Request) -> WhaleTracker:
    """Get the whale tracker owned by the application."""
    return request.app.state.tracker


def data_source(tracker: WhaleTracker) -> str:
    """Name the data source backing a response."""
    return "helius" if tracker.has_provider else "mock"


def response_meta(tracker: WhaleTracker) -> Dict[str, Any]:
    """Build the ``_meta`` block attached to responses."""
    return {"dataSource": data_source(tracker), "timestamp": int(time.time() * 1000)}


def resolve_token_price(token_mint: str, price: Optional[float] = None) -> float:
    """Pick the USD price used to value a token.

    Args:
        token_mint: Token mint address
        price: Explicit price from the request, preferred when given

    Returns:
        Token price in USD

    Raises:
        NotFoundError: If no price was given and the token is not priced
    """
    if price is not None:
        return price

    known = get_token_price(token_mint)
    if known is None:
        raise NotFoundError(
            f"No price known for token {token_mint}, pass one with the price parameter",
            {"tokenMint": token_mint},
        )
    return known
