"""
Whale and token API routes.

Whales are served from Helius discovery when a provider is configured and
from the sample directory otherwise.
"""

from typing import Any, Dict, List, Literal, Optional

import structlog
from fastapi import APIRouter, Depends, Path, Query

from whalescope.api.dependencies import get_tracker, resolve_token_price, response_meta
from whalescope.api.mock_data import (
    MOCK_WHALES,
    get_holding_value,
    get_movements_by_wallet,
    get_signals_by_wallet,
    get_whale_by_address,
    get_whales_by_token,
)
from whalescope.api.pagination import PageParams, page_params, paginate
from whalescope.api.presenters import present_movement, present_profile
from whalescope.api.schemas import TokenSummary, WhaleDetail, WhaleList
from whalescope.config import DAY_MS
from whalescope.services.whale_tracker import WhaleTracker
from whalescope.utils.error_handling import NotFoundError
from whalescope.utils.solana import get_token_symbol
from whalescope.utils.validation import validate_solana_address

logger = structlog.get_logger("whalescope.api.whales")

HOUR_MS = DAY_MS // 24

# Create routers for whale and token endpoints
router = APIRouter(prefix="/whales", tags=["whales"])
tokens_router = APIRouter(prefix="/tokens", tags=["tokens"])


@router.get("", response_model=WhaleList)
async def list_whales(
    pagination: PageParams = Depends(page_params),
    min_value: Optional[float] = Query(None, alias="minValue", description="Minimum portfolio value in USD"),
    tier: Optional[Literal["mega", "large", "medium"]] = Query(None, description="Filter by whale tier"),
    tag: Optional[str] = Query(None, description="Filter by tag"),
    sort_by: Literal["totalValueUsd", "lastActive", "tokenCount"] = Query("totalValueUsd", alias="sortBy"),
    sort_dir: Literal["asc", "desc"] = Query("desc", alias="sortDir"),
    tracker: WhaleTracker = Depends(get_tracker)
) -> Dict[str, Any]:
    """
    List top whales from the whale directory.

    Supports filtering by minimum value, tier and tag, and sorting by
    portfolio value, last activity or token count.
    """
    whales = list(MOCK_WHALES)

    if min_value is not None:
        whales = [w for w in whales if w["totalValueUsd"] >= min_value]
    if tier:
        whales = [w for w in whales if w["tier"] == tier]
    if tag:
        whales = [w for w in whales if tag in w["tags"]]

    whales.sort(key=lambda w: w[sort_by], reverse=sort_dir == "desc")

    page, meta = paginate(whales, pagination)
    return {"whales": page, "pagination": meta.model_dump(), "_meta": {**response_meta(tracker), "dataSource": "mock"}}


@router.get("/{address}", response_model=WhaleDetail)
async def get_whale(
    address: str = Path(..., description="Wallet address (base58)"),
    tracker: WhaleTracker = Depends(get_tracker)
) -> Dict[str, Any]:
    """
    Get details of a whale wallet.

    Combines the directory entry, tokens the wallet was discovered for,
    its recorded movements and its signals.
    """
    whale = get_whale_by_address(address)
    profiles = tracker.registry.find_profiles_by_address(address)

    if whale is None and not profiles:
        raise NotFoundError(f"Whale with address {address} not found", {"address": address})

    recent_movements = [present_movement(m) for m in tracker.movements.get_movements_by_whale(address, 10)]
    recent_movements.extend(get_movements_by_wallet(address))

    return {
        "whale": whale or present_profile(profiles[0]),
        "profiles": [p.to_dict() for p in profiles],
        "recentMovements": recent_movements[:10],
        "signals": get_signals_by_wallet(address)[:5],
        "_meta": response_meta(tracker),
    }


@router.get("/tokens/{mint}", response_model=WhaleList)
@tokens_router.get("/{mint}/whales", response_model=WhaleList)
async def get_token_whales(
    mint: str = Path(..., description="Token mint address"),
    price: Optional[float] = Query(None, gt=0, description="Token price in USD, defaults to the known price"),
    pagination: PageParams = Depends(page_params),
    tracker: WhaleTracker = Depends(get_tracker)
) -> Dict[str, Any]:
    """
    Get whales holding a specific token, largest holding first.
    """
    if tracker.has_provider:
        validate_solana_address(mint, "mint")
        token_price = resolve_token_price(mint, price)
        profiles = await tracker.discover_whales(mint, token_price)
        whales: List[Dict[str, Any]] = [present_profile(p) for p in profiles]
        logger.info("Discovered token whales", mint=mint, count=len(whales))
    else:
        whales = sorted(get_whales_by_token(mint), key=lambda w: get_holding_value(w, mint), reverse=True)

    page, meta = paginate(whales, pagination)
    return {"whales": page, "pagination": meta.model_dump(), "_meta": response_meta(tracker)}


@tokens_router.get("/{mint}/summary", response_model=TokenSummary)
async def get_token_summary(
    mint: str = Path(..., description="Token mint address"),
    window_hours: float = Query(24, gt=0, alias="windowHours", description="Trailing window in hours"),
    tracker: WhaleTracker = Depends(get_tracker)
) -> Dict[str, Any]:
    """
    Summarize whale activity for a token.

    Returns whale behavior counts, movement statistics and net flow over
    the trailing window.
    """
    window_ms = int(window_hours * HOUR_MS)

    return {
        "tokenMint": mint,
        "tokenSymbol": get_token_symbol(mint),
        "windowHours": window_hours,
        "whales": tracker.registry.get_whale_activity_summary(mint).to_dict(),
        "movements": tracker.movements.get_movement_stats(mint, window_ms).to_dict(),
        "netFlow": tracker.movements.get_net_flow(mint, window_ms).to_dict(),
        "_meta": response_meta(tracker),
    }
