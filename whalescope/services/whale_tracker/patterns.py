"""Behavior analysis and trade pattern detection for whale wallets."""

import logging
import math
from typing import Callable, List, Optional

from whalescope.config import DEFAULT_WHALE_CONFIG, WhaleConfig
from whalescope.services.whale_tracker.helpers import now_ms
from whalescope.services.whale_tracker.models import (
    ParsedTransaction,
    Pattern,
    PatternType,
    TokenAmount,
    TransactionType,
    WhaleBehavior,
)

logger = logging.getLogger(__name__)

# Constants
ACCUMULATION_BUY_RATIO = 0.7
DISTRIBUTION_BUY_RATIO = 0.3


def _in_window(transactions: List[ParsedTransaction], config: WhaleConfig) -> List[ParsedTransaction]:
    # Parsed timestamps are seconds, the window is milliseconds
    window_start = now_ms() - config.pattern_window_ms
    return [tx for tx in transactions if tx.timestamp * 1000 >= window_start]


def _calculate_confidence(amounts: List[float]) -> float:
    """Score how consistent a series of trade sizes is.

    Confidence is ``1 - CV`` where CV is the population standard deviation
    over the mean, clamped to [0, 1]. A zero mean or a non-finite CV gives 0.

    Args:
        amounts: Trade sizes in token units

    Returns:
        Confidence between 0 and 1
    """
    if not amounts:
        return 0.0

    mean = sum(amounts) / len(amounts)
    if mean == 0:
        return 0.0

    variance = sum((a - mean) ** 2 for a in amounts) / len(amounts)
    cv = math.sqrt(variance) / mean
    if not math.isfinite(cv):
        return 0.0

    return max(0.0, min(1.0, 1.0 - cv))


def analyze_whale_behavior(
    wallet_address: str,
    token_mint: str,
    transactions: List[ParsedTransaction],
    config: WhaleConfig = DEFAULT_WHALE_CONFIG
) -> WhaleBehavior:
    """Classify a whale's recent behavior for one token.

    Swaps receiving the token count as buys and swaps sending it as sells;
    a single swap may count as both. Plain transfers of the token count
    as buys.

    Args:
        wallet_address: Whale wallet address
        token_mint: Token to analyze
        transactions: Parsed transactions of the wallet
        config: Whale thresholds

    Returns:
        Accumulating when at least 70% of trades are buys, distributing at
        30% or less, holding otherwise or when there is too little activity
    """
    recent = _in_window(transactions, config)
    if len(recent) < config.min_pattern_tx_count:
        return WhaleBehavior.HOLDING

    buy_count = 0
    sell_count = 0

    for tx in recent:
        if tx.type == TransactionType.SWAP:
            if tx.token_out is not None and tx.token_out.mint == token_mint:
                buy_count += 1
            if tx.token_in is not None and tx.token_in.mint == token_mint:
                sell_count += 1
        elif tx.type == TransactionType.TRANSFER and tx.transfer is not None and tx.transfer.mint == token_mint:
            buy_count += 1

    total = buy_count + sell_count
    if total < config.min_pattern_tx_count:
        return WhaleBehavior.HOLDING

    buy_ratio = buy_count / total
    logger.debug(
        f"{wallet_address[:8]} on {token_mint[:8]}: {buy_count} buys, {sell_count} sells"
    )

    if buy_ratio >= ACCUMULATION_BUY_RATIO:
        return WhaleBehavior.ACCUMULATING
    if buy_ratio <= DISTRIBUTION_BUY_RATIO:
        return WhaleBehavior.DISTRIBUTING
    return WhaleBehavior.HOLDING


def _detect_pattern(
    pattern_type: PatternType,
    leg: Callable[[ParsedTransaction], Optional[TokenAmount]],
    wallet_address: str,
    token_mint: str,
    transactions: List[ParsedTransaction],
    token_price: float,
    config: WhaleConfig
) -> Optional[Pattern]:
    trades = []
    for tx in _in_window(transactions, config):
        if tx.type != TransactionType.SWAP:
            continue
        amount = leg(tx)
        if amount is not None and amount.mint == token_mint:
            trades.append((tx, amount.ui_amount))

    if len(trades) < config.min_pattern_tx_count:
        return None

    amounts = [amount for _, amount in trades]
    total_amount = sum(amounts)
    total_usd_value = total_amount * token_price

    if total_usd_value < config.min_movement_usd * config.min_pattern_tx_count:
        return None

    timestamps = [tx.timestamp for tx, _ in trades]
    pattern = Pattern(
        whale=wallet_address,
        token_mint=token_mint,
        type=pattern_type,
        tx_count=len(trades),
        total_amount=total_amount,
        total_usd_value=total_usd_value,
        start_time=min(timestamps) * 1000,
        end_time=max(timestamps) * 1000,
        confidence=_calculate_confidence(amounts),
    )
    logger.info(
        f"Detected {pattern_type.value} by {wallet_address[:8]} on {token_mint[:8]}: "
        f"{pattern.tx_count} trades, ${total_usd_value:,.2f}, confidence {pattern.confidence:.2f}"
    )
    return pattern


def detect_accumulation_pattern(
    wallet_address: str,
    token_mint: str,
    transactions: List[ParsedTransaction],
    token_price: float,
    config: WhaleConfig = DEFAULT_WHALE_CONFIG
) -> Optional[Pattern]:
    """Detect repeated buys of a token inside the pattern window.

    Args:
        wallet_address: Whale wallet address
        token_mint: Token to analyze
        transactions: Parsed transactions of the wallet
        token_price: Current token price in USD
        config: Whale thresholds

    Returns:
        Accumulation pattern, or None when there are too few buys or their
        total value is below ``min_movement_usd * min_pattern_tx_count``
    """
    return _detect_pattern(
        PatternType.ACCUMULATION,
        lambda tx: tx.token_out,
        wallet_address,
        token_mint,
        transactions,
        token_price,
        config,
    )


def detect_distribution_pattern(
    wallet_address: str,
    token_mint: str,
    transactions: List[ParsedTransaction],
    token_price: float,
    config: WhaleConfig = DEFAULT_WHALE_CONFIG
) -> Optional[Pattern]:
    """Detect repeated sells of a token inside the pattern window.

    Same rules as :func:`detect_accumulation_pattern` applied to the
    sent leg of each swap.
    """
    return _detect_pattern(
        PatternType.DISTRIBUTION,
        lambda tx: tx.token_in,
        wallet_address,
        token_mint,
        transactions,
        token_price,
        config,
    )
