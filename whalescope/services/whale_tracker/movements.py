"""Whale movement recording and queries.

Movements are kept newest-first in two views: one global list across all
tokens and one list per token mint. Both are bounded by count and by age
and are pruned after every insertion.
"""

import logging
import uuid
from collections import deque
from itertools import islice
from typing import Deque, Dict, Iterable, List, Optional

from whalescope.config import DAY_MS, DEFAULT_WHALE_CONFIG, WhaleConfig
from whalescope.services.whale_tracker.helpers import format_movement, is_significant_movement, now_ms
from whalescope.services.whale_tracker.models import (
    Direction,
    MovementStats,
    NetFlow,
    ParsedTransaction,
    Sentiment,
    TransactionType,
    WhaleMovement,
)

logger = logging.getLogger(__name__)

# Constants
MAX_MOVEMENTS_PER_TOKEN = 1000
MAX_MOVEMENT_AGE_MS = 7 * DAY_MS
GLOBAL_CAP_FACTOR = 10
SENTIMENT_THRESHOLD_USD = 10_000


def generate_movement_id() -> str:
    """Generate a unique movement id."""
    return uuid.uuid4().hex


def create_movement(
    tx: ParsedTransaction,
    whale: str,
    token_mint: str,
    token_price: float,
    config: WhaleConfig = DEFAULT_WHALE_CONFIG
) -> Optional[WhaleMovement]:
    """Create a movement record from a parsed transaction.

    Plain transfers are always recorded as outgoing: the parsed transfer
    leg does not say which side the whale was on.

    Args:
        tx: Parsed transaction
        whale: Whale wallet address
        token_mint: Token mint being tracked
        token_price: Current token price in USD
        config: Whale thresholds

    Returns:
        The movement, or None if the transaction does not touch the token
        or is below the significance threshold
    """
    if tx.type == TransactionType.SWAP:
        if tx.token_out is not None and tx.token_out.mint == token_mint:
            amount = tx.token_out.ui_amount
            direction = Direction.IN
        elif tx.token_in is not None and tx.token_in.mint == token_mint:
            amount = tx.token_in.ui_amount
            direction = Direction.OUT
        else:
            return None
    elif tx.type == TransactionType.TRANSFER and tx.transfer is not None and tx.transfer.mint == token_mint:
        amount = tx.transfer.ui_amount
        direction = Direction.OUT
    elif tx.type in (TransactionType.STAKE, TransactionType.UNSTAKE):
        direction = Direction.OUT if tx.type == TransactionType.STAKE else Direction.IN
        amount = tx.token_in.ui_amount if tx.token_in is not None else 0.0
    else:
        return None

    usd_value = amount * token_price
    if not is_significant_movement(usd_value, config):
        return None

    return WhaleMovement(
        id=generate_movement_id(),
        timestamp=tx.timestamp * 1000,
        whale=whale,
        type=tx.type,
        token_mint=token_mint,
        amount=amount,
        usd_value=usd_value,
        signature=tx.signature,
        direction=direction,
    )


class MovementStore:
    """Bounded, age-pruned in-memory store of whale movements."""

    def __init__(
        self,
        max_movements_per_token: int = MAX_MOVEMENTS_PER_TOKEN,
        max_movement_age_ms: int = MAX_MOVEMENT_AGE_MS
    ):
        """Initialize an empty store.

        Args:
            max_movements_per_token: Cap on each per-token list. The global
                list is capped at ten times this value.
            max_movement_age_ms: Entries older than this are pruned
        """
        self.max_movements_per_token = max_movements_per_token
        self.max_movement_age_ms = max_movement_age_ms
        self._recent: Deque[WhaleMovement] = deque()
        self._by_token: Dict[str, Deque[WhaleMovement]] = {}

    def __len__(self) -> int:
        return len(self._recent)

    def record_movement(self, movement: WhaleMovement) -> None:
        """Record a movement at the head of the global and token lists."""
        self._recent.appendleft(movement)
        self._by_token.setdefault(movement.token_mint, deque()).appendleft(movement)
        self._prune()

    def process_transactions(
        self,
        transactions: Iterable[ParsedTransaction],
        whale: str,
        token_mint: str,
        token_price: float,
        config: WhaleConfig = DEFAULT_WHALE_CONFIG
    ) -> List[WhaleMovement]:
        """Extract and record significant movements from a batch.

        Args:
            transactions: Parsed transactions, recorded in this order
            whale: Whale wallet address
            token_mint: Token to track
            token_price: Current token price in USD
            config: Whale thresholds

        Returns:
            Recorded movements in input order
        """
        recorded: List[WhaleMovement] = []

        for tx in transactions:
            movement = create_movement(tx, whale, token_mint, token_price, config)
            if movement:
                self.record_movement(movement)
                recorded.append(movement)
                logger.debug(f"Movement {format_movement(movement)}")

        if recorded:
            logger.debug(f"Recorded {len(recorded)} movements of {token_mint[:8]} for {whale[:8]}")
        return recorded

    def _prune(self) -> None:
        cutoff = now_ms() - self.max_movement_age_ms
        global_cap = self.max_movements_per_token * GLOBAL_CAP_FACTOR

        # Insertion order is not timestamp order, stale entries can sit anywhere
        if any(m.timestamp < cutoff for m in self._recent):
            self._recent = deque(m for m in self._recent if m.timestamp >= cutoff)
        while len(self._recent) > global_cap:
            self._recent.pop()

        for token in list(self._by_token):
            movements = self._by_token[token]
            if any(m.timestamp < cutoff for m in movements):
                movements = deque(m for m in movements if m.timestamp >= cutoff)
                self._by_token[token] = movements
            while len(movements) > self.max_movements_per_token:
                movements.pop()

            if not movements:
                del self._by_token[token]

    def get_movements_by_token(self, token_mint: str, limit: int = 50) -> List[WhaleMovement]:
        """Get the most recent movements for a token, newest first."""
        return list(islice(self._by_token.get(token_mint, ()), max(0, limit)))

    def get_movements_by_whale(self, whale_address: str, limit: int = 50) -> List[WhaleMovement]:
        """Get the most recent movements for a whale, newest first."""
        return list(islice((m for m in self._recent if m.whale == whale_address), max(0, limit)))

    def get_all_recent_movements(self, limit: int = 100) -> List[WhaleMovement]:
        """Get the most recent movements across all tokens."""
        return list(islice(self._recent, max(0, limit)))

    def get_movements_by_type(self, tx_type: TransactionType, limit: int = 50) -> List[WhaleMovement]:
        """Get the most recent movements of one transaction type."""
        return list(islice((m for m in self._recent if m.type == tx_type), max(0, limit)))

    def get_large_movements(self, min_usd: float, limit: int = 50) -> List[WhaleMovement]:
        """Get the most recent movements worth at least ``min_usd``."""
        return list(islice((m for m in self._recent if m.usd_value >= min_usd), max(0, limit)))

    def find_by_signature(self, signature: str) -> Optional[WhaleMovement]:
        """Return the newest movement recorded for a transaction signature."""
        return next((m for m in self._recent if m.signature == signature), None)

    def has_movement(self, signature: str, whale: str, token_mint: str) -> bool:
        """Check whether a transaction was already recorded for a whale and token."""
        return any(
            m.signature == signature and m.whale == whale
            for m in self._by_token.get(token_mint, ())
        )

    def _window(self, token_mint: str, window_ms: int) -> List[WhaleMovement]:
        cutoff = now_ms() - window_ms
        return [m for m in self._by_token.get(token_mint, ()) if m.timestamp >= cutoff]

    def get_movement_stats(self, token_mint: str, window_ms: int = DAY_MS) -> MovementStats:
        """Calculate movement statistics for a token.

        Args:
            token_mint: Token mint address
            window_ms: Trailing time window in milliseconds

        Returns:
            Statistics over the movements inside the window
        """
        movements = self._window(token_mint, window_ms)

        inflows = [m for m in movements if m.direction == Direction.IN]
        outflows = [m for m in movements if m.direction == Direction.OUT]

        inflow_volume_usd = sum(m.usd_value for m in inflows)
        outflow_volume_usd = sum(m.usd_value for m in outflows)
        total_volume_usd = inflow_volume_usd + outflow_volume_usd

        largest: Optional[WhaleMovement] = None
        for m in movements:
            if largest is None or m.usd_value > largest.usd_value:
                largest = m

        return MovementStats(
            total_movements=len(movements),
            total_volume_usd=total_volume_usd,
            inflows=len(inflows),
            outflows=len(outflows),
            inflow_volume_usd=inflow_volume_usd,
            outflow_volume_usd=outflow_volume_usd,
            largest_movement=largest,
            average_movement_usd=total_volume_usd / len(movements) if movements else 0.0,
            swaps=sum(1 for m in movements if m.type == TransactionType.SWAP),
            transfers=sum(1 for m in movements if m.type == TransactionType.TRANSFER),
            stakes=sum(
                1 for m in movements
                if m.type in (TransactionType.STAKE, TransactionType.UNSTAKE)
            ),
        )

    def get_net_flow(self, token_mint: str, window_ms: int = DAY_MS) -> NetFlow:
        """Get net flow for a token (inflows minus outflows).

        Args:
            token_mint: Token mint address
            window_ms: Trailing time window in milliseconds

        Returns:
            Net USD flow, net signed amount and the resulting sentiment
        """
        stats = self.get_movement_stats(token_mint, window_ms)
        net_flow_usd = stats.inflow_volume_usd - stats.outflow_volume_usd

        net_flow_amount = sum(
            m.amount if m.direction == Direction.IN else -m.amount
            for m in self._window(token_mint, window_ms)
        )

        if net_flow_usd > SENTIMENT_THRESHOLD_USD:
            sentiment = Sentiment.BULLISH
        elif net_flow_usd < -SENTIMENT_THRESHOLD_USD:
            sentiment = Sentiment.BEARISH
        else:
            sentiment = Sentiment.NEUTRAL

        return NetFlow(net_flow_usd=net_flow_usd, net_flow_amount=net_flow_amount, sentiment=sentiment)

    def clear(self) -> None:
        """Remove every stored movement."""
        self._recent.clear()
        self._by_token.clear()
