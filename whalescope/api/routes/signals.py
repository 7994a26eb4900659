"""
Signal API routes.

Signals are accumulation, distribution and other notable whale activity.
Wallet signals come from live pattern detection when a token is given and
Helius is configured.
"""

from typing import Any, Dict, Literal, Optional

import structlog
from fastapi import APIRouter, Depends, Path, Query

from whalescope.api.dependencies import get_tracker, resolve_token_price, response_meta
from whalescope.api.mock_data import MOCK_SIGNALS, get_signals_by_wallet, get_whale_by_address
from whalescope.api.pagination import PageParams, page_params, paginate
from whalescope.api.presenters import present_pattern
from whalescope.api.schemas import SignalList, WalletSignals
from whalescope.services.whale_tracker import WhaleTracker
from whalescope.utils.validation import validate_solana_address

logger = structlog.get_logger("whalescope.api.signals")

SignalType = Literal["accumulation", "distribution", "new_position", "exit", "unusual_activity"]

# Create router for signal endpoints
router = APIRouter(prefix="/signals", tags=["signals"])


@router.get("", response_model=SignalList)
async def list_signals(
    pagination: PageParams = Depends(page_params),
    signal_type: Optional[SignalType] = Query(None, alias="type", description="Filter by signal type"),
    token_mint: Optional[str] = Query(None, alias="tokenMint", description="Filter by token mint"),
    min_strength: Optional[int] = Query(None, alias="minStrength", ge=0, le=100),
    from_ts: Optional[int] = Query(None, alias="from", description="From timestamp (unix ms)"),
    tracker: WhaleTracker = Depends(get_tracker)
) -> Dict[str, Any]:
    """
    List recent signals, most recently detected first.
    """
    signals = list(MOCK_SIGNALS)

    if signal_type:
        signals = [s for s in signals if s["type"] == signal_type]
    if token_mint:
        signals = [s for s in signals if s["tokenMint"] == token_mint]
    if min_strength is not None:
        signals = [s for s in signals if s["strength"] >= min_strength]
    if from_ts is not None:
        signals = [s for s in signals if s["detectedAt"] >= from_ts]

    signals.sort(key=lambda s: s["detectedAt"], reverse=True)

    page, meta = paginate(signals, pagination)
    return {"signals": page, "pagination": meta.model_dump(), "_meta": {**response_meta(tracker), "dataSource": "mock"}}


@router.get("/{address}", response_model=WalletSignals)
async def get_wallet_signals(
    address: str = Path(..., description="Wallet address (base58)"),
    token_mint: Optional[str] = Query(None, alias="tokenMint", description="Token to analyze live"),
    price: Optional[float] = Query(None, gt=0, description="Token price in USD, defaults to the known price"),
    signal_type: Optional[SignalType] = Query(None, alias="type", description="Filter by signal type"),
    pagination: PageParams = Depends(page_params),
    tracker: WhaleTracker = Depends(get_tracker)
) -> Dict[str, Any]:
    """
    Get signals for a whale wallet.

    With a token mint and a configured provider the wallet is analyzed
    live and detected patterns are returned as signals.
    """
    whale = get_whale_by_address(address)
    behavior = None

    if tracker.has_provider and token_mint:
        validate_solana_address(address)
        validate_solana_address(token_mint, "tokenMint")
        token_price = resolve_token_price(token_mint, price)

        analysis = await tracker.analyze_whale(address, token_mint, token_price)
        behavior = analysis.behavior.value
        signals = [present_pattern(p) for p in analysis.patterns]
        source = "helius"
        logger.info("Analyzed wallet", wallet=address, token_mint=token_mint, behavior=behavior)
    else:
        signals = get_signals_by_wallet(address)
        source = "mock"

    if signal_type:
        signals = [s for s in signals if s["type"] == signal_type]

    signals.sort(key=lambda s: s["detectedAt"], reverse=True)

    page, meta = paginate(signals, pagination)
    return {
        "wallet": address,
        "label": whale["label"] if whale else None,
        "behavior": behavior,
        "signals": page,
        "pagination": meta.model_dump(),
        "_meta": {**response_meta(tracker), "dataSource": source},
    }
