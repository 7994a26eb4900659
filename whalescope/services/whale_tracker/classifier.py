"""Classification of provider transactions into semantic types.

The enhanced transaction feed labels transactions with a free-form ``type``
and the program ``source`` that produced them. Those labels are matched
case-insensitively against keyword lists, first match wins:

1. swap: type mentions SWAP, or the source is a known DEX aggregator/AMM.
2. stake/unstake: type mentions STAKE, or the source is a liquid staking
   protocol. UNSTAKE or WITHDRAW in the type makes it an unstake.
3. transfer: type mentions TRANSFER, exactly one token transfer, or any
   native transfer.
4. unknown otherwise.
"""

import logging
from typing import List, Optional, Tuple

from whalescope.services.whale_tracker.models import (
    ParsedTransaction,
    RawTokenTransfer,
    RawTransaction,
    TokenAmount,
    TransactionType,
)
from whalescope.utils.solana import lamports_to_sol

logger = logging.getLogger(__name__)

SWAP_SOURCES = ("JUPITER", "RAYDIUM", "ORCA")
STAKE_SOURCES = ("MARINADE", "JITO")
UNSTAKE_KEYWORDS = ("UNSTAKE", "WITHDRAW")


def classify_transaction(tx: RawTransaction) -> TransactionType:
    """Classify a raw transaction.

    Args:
        tx: Provider transaction

    Returns:
        The semantic transaction type
    """
    type_label = (tx.type or "").upper()
    source = (tx.source or "").upper()

    if "SWAP" in type_label or any(s in source for s in SWAP_SOURCES):
        return TransactionType.SWAP

    if "STAKE" in type_label or any(s in source for s in STAKE_SOURCES):
        if any(k in type_label for k in UNSTAKE_KEYWORDS):
            return TransactionType.UNSTAKE
        return TransactionType.STAKE

    if (
        "TRANSFER" in type_label
        or len(tx.token_transfers) == 1
        or len(tx.native_transfers) > 0
    ):
        return TransactionType.TRANSFER

    return TransactionType.UNKNOWN


def categorize_transfers(
    transfers: List[RawTokenTransfer],
    wallet: str
) -> Tuple[List[RawTokenTransfer], List[RawTokenTransfer]]:
    """Split token transfers into those received and sent by a wallet.

    Transfers that involve neither side are dropped.

    Args:
        transfers: Token transfer legs in provider order
        wallet: Tracked wallet address

    Returns:
        Tuple of (incoming, outgoing) transfers, provider order preserved
    """
    incoming: List[RawTokenTransfer] = []
    outgoing: List[RawTokenTransfer] = []

    for transfer in transfers:
        if transfer.to_user_account == wallet:
            incoming.append(transfer)
        elif transfer.from_user_account == wallet:
            outgoing.append(transfer)

    return incoming, outgoing


def _to_token_amount(transfer: RawTokenTransfer) -> TokenAmount:
    # Transfer legs carry no decimals metadata, amounts are already display units
    return TokenAmount(
        mint=transfer.mint,
        amount=transfer.token_amount,
        decimals=0,
        ui_amount=transfer.token_amount,
    )


def parse_transaction(tx: RawTransaction, tracked_wallet: str) -> ParsedTransaction:
    """Parse a raw transaction relative to the wallet being tracked.

    For swaps, ``token_in`` is the first leg the wallet sent and
    ``token_out`` the first leg it received. Legs are picked by list
    position, not by amount. For transfers the first incoming leg wins,
    falling back to the first outgoing one.

    Args:
        tx: Provider transaction
        tracked_wallet: Wallet whose point of view decides leg direction

    Returns:
        Parsed transaction
    """
    tx_type = classify_transaction(tx)

    token_in: Optional[TokenAmount] = None
    token_out: Optional[TokenAmount] = None
    transfer: Optional[TokenAmount] = None

    if tx.token_transfers:
        incoming, outgoing = categorize_transfers(tx.token_transfers, tracked_wallet)

        if tx_type == TransactionType.SWAP and incoming and outgoing:
            token_in = _to_token_amount(outgoing[0])
            token_out = _to_token_amount(incoming[0])
        elif tx_type == TransactionType.TRANSFER:
            leg = incoming[0] if incoming else (outgoing[0] if outgoing else None)
            if leg is not None:
                transfer = _to_token_amount(leg)

    parsed = ParsedTransaction(
        signature=tx.signature,
        timestamp=tx.timestamp,
        type=tx_type,
        source=tx.source or "unknown",
        fee=lamports_to_sol(tx.fee),
        success=True,  # the enhanced feed only returns confirmed transactions
        token_in=token_in,
        token_out=token_out,
        transfer=transfer,
    )
    logger.debug(f"Parsed {tx.signature[:8]} as {tx_type.value} for {tracked_wallet[:8]}")
    return parsed
