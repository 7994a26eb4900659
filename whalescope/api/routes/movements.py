"""
Movement API routes.

With Helius configured, each listing first polls recent activity of the
requested or known whales into the movement store, then serves the store.
Without it the sample movements are served.
"""

from typing import Any, Dict, List, Literal, Optional

import structlog
from fastapi import APIRouter, Depends, Path, Query

from whalescope.api.dependencies import data_source, get_tracker, response_meta
from whalescope.api.mock_data import MOCK_MOVEMENTS, MOCK_WHALES, get_movement_by_tx_hash, get_whale_by_address
from whalescope.api.pagination import PageParams, page_params, paginate
from whalescope.api.presenters import present_movement
from whalescope.api.schemas import MovementDetail, MovementList
from whalescope.config import DAY_MS
from whalescope.services.whale_tracker import WhaleTracker
from whalescope.utils.error_handling import HeliusAPIError, NotFoundError
from whalescope.utils.solana import TOKEN_PRICES
from whalescope.utils.validation import validate_solana_address

logger = structlog.get_logger("whalescope.api.movements")

# Constants
MAX_POLLED_WALLETS = 5
POLL_TX_LIMIT = 20
MAX_RELATED_MOVEMENTS = 5

# Create router for movement endpoints
router = APIRouter(prefix="/movements", tags=["movements"])


def _tracked_addresses(tracker: WhaleTracker) -> List[str]:
    addresses = tracker.registry.tracked_addresses()
    if not addresses:
        addresses = [w["address"] for w in MOCK_WHALES]
    return addresses[:MAX_POLLED_WALLETS]


async def _poll_movements(tracker: WhaleTracker, wallet: Optional[str], token_mint: Optional[str]) -> None:
    """Ingest recent activity of whales into the movement store.

    Provider failures for one wallet are logged and the wallet is skipped.
    """
    addresses = [validate_solana_address(wallet, "wallet")] if wallet else _tracked_addresses(tracker)
    token_prices = {
        mint: price for mint, price in TOKEN_PRICES.items()
        if token_mint is None or mint == token_mint
    }
    if not token_prices:
        logger.info("No price known for token, nothing to poll", token_mint=token_mint)
        return

    recorded = 0
    for address in addresses:
        try:
            movements = await tracker.ingest_wallet_activity(address, token_prices, POLL_TX_LIMIT)
        except HeliusAPIError as e:
            logger.warning("Failed to fetch wallet activity", wallet=address, error=e.message)
            continue
        recorded += len(movements)

    logger.info("Polled whale activity", wallets=len(addresses), recorded=recorded)


def _store_movements(tracker: WhaleTracker) -> List[Dict[str, Any]]:
    store = tracker.movements
    return [present_movement(m) for m in store.get_all_recent_movements(len(store))]


@router.get("", response_model=MovementList)
async def list_movements(
    pagination: PageParams = Depends(page_params),
    wallet: Optional[str] = Query(None, description="Filter by wallet address"),
    token_mint: Optional[str] = Query(None, alias="tokenMint", description="Filter by token mint"),
    movement_type: Optional[Literal["buy", "sell", "transfer_in", "transfer_out"]] = Query(None, alias="type"),
    min_value: Optional[float] = Query(None, alias="minValue", description="Minimum value in USD"),
    from_ts: Optional[int] = Query(None, alias="from", description="From timestamp (unix ms)"),
    to_ts: Optional[int] = Query(None, alias="to", description="To timestamp (unix ms)"),
    tracker: WhaleTracker = Depends(get_tracker)
) -> Dict[str, Any]:
    """
    List recent large movements, most recent first.
    """
    if tracker.has_provider:
        await _poll_movements(tracker, wallet, token_mint)
        movements = _store_movements(tracker)
    else:
        logger.debug("Serving mock movements, set HELIUS_API_KEY for live data")
        movements = list(MOCK_MOVEMENTS)

    if wallet:
        movements = [m for m in movements if m["wallet"] == wallet]
    if token_mint:
        movements = [m for m in movements if m["tokenMint"] == token_mint]
    if movement_type:
        movements = [m for m in movements if m["type"] == movement_type]
    if min_value is not None:
        movements = [m for m in movements if m["valueUsd"] >= min_value]
    if from_ts is not None:
        movements = [m for m in movements if m["timestamp"] >= from_ts]
    if to_ts is not None:
        movements = [m for m in movements if m["timestamp"] <= to_ts]

    movements.sort(key=lambda m: m["timestamp"], reverse=True)

    page, meta = paginate(movements, pagination)
    return {"movements": page, "pagination": meta.model_dump(), "_meta": response_meta(tracker)}


@router.get("/{txHash}", response_model=MovementDetail)
async def get_movement(
    tx_hash: str = Path(..., alias="txHash", description="Transaction signature"),
    tracker: WhaleTracker = Depends(get_tracker)
) -> Dict[str, Any]:
    """
    Get a movement with the whale behind it and related movements.

    Related movements share the wallet and token and happened within 24
    hours of it.
    """
    recorded = tracker.movements.find_by_signature(tx_hash)
    if recorded is not None:
        movement = present_movement(recorded)
        candidates = _store_movements(tracker)
        source = data_source(tracker)
    else:
        movement = get_movement_by_tx_hash(tx_hash)
        candidates = MOCK_MOVEMENTS
        source = "mock"

    if movement is None:
        raise NotFoundError(f"Movement with txHash {tx_hash} not found", {"txHash": tx_hash})

    related = [
        m for m in candidates
        if m["txHash"] != tx_hash
        and m["wallet"] == movement["wallet"]
        and m["tokenMint"] == movement["tokenMint"]
        and abs(m["timestamp"] - movement["timestamp"]) < DAY_MS
    ][:MAX_RELATED_MOVEMENTS]

    return {
        "movement": movement,
        "whale": get_whale_by_address(movement["wallet"]),
        "relatedMovements": related,
        "_meta": {**response_meta(tracker), "dataSource": source},
    }
