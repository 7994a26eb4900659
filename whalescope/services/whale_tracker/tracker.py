"""Whale tracker: binds the registry, movement store and detectors to Helius."""

import logging
from typing import TYPE_CHECKING, Dict, List, Optional

from whalescope.config import DEFAULT_WHALE_CONFIG, WhaleConfig
from whalescope.services.whale_tracker.classifier import parse_transaction
from whalescope.services.whale_tracker.helpers import is_whale, now_ms
from whalescope.services.whale_tracker.models import (
    ParsedTransaction,
    Pattern,
    WhaleAnalysis,
    WhaleBehavior,
    WhaleMovement,
    WhaleProfile,
)
from whalescope.services.whale_tracker.movements import MovementStore
from whalescope.services.whale_tracker.patterns import (
    analyze_whale_behavior,
    detect_accumulation_pattern,
    detect_distribution_pattern,
)
from whalescope.services.whale_tracker.registry import WhaleRegistry
from whalescope.utils.error_handling import ConfigurationError

if TYPE_CHECKING:
    from whalescope.clients.helius_client import HeliusClient

logger = logging.getLogger(__name__)

# Constants
TOP_HOLDERS_LIMIT = 100
ANALYSIS_TX_LIMIT = 100


class WhaleTracker:
    """Discovers whales, analyzes their trading and records their movements.

    Provider errors raised by the client propagate to the caller unchanged.
    """

    def __init__(
        self,
        client: Optional["HeliusClient"] = None,
        registry: Optional[WhaleRegistry] = None,
        movements: Optional[MovementStore] = None,
        config: Optional[WhaleConfig] = None
    ):
        """Initialize the tracker.

        Args:
            client: Helius client. Without one only in-memory queries work.
            registry: Whale registry, a fresh one by default
            movements: Movement store, a fresh one by default
            config: Default whale thresholds
        """
        self.client = client
        self.registry = registry if registry is not None else WhaleRegistry()
        self.movements = movements if movements is not None else MovementStore()
        self.config = config or DEFAULT_WHALE_CONFIG

    @property
    def has_provider(self) -> bool:
        """Check whether a provider client is attached."""
        return self.client is not None

    def _require_client(self) -> "HeliusClient":
        if self.client is None:
            raise ConfigurationError("No Helius client configured, set HELIUS_API_KEY")
        return self.client

    async def discover_whales(
        self,
        token_mint: str,
        token_price: float,
        config: Optional[WhaleConfig] = None
    ) -> List[WhaleProfile]:
        """Discover and register the whales holding a token.

        Args:
            token_mint: Token mint address
            token_price: Current token price in USD
            config: Whale thresholds, the tracker default when omitted

        Returns:
            Whale profiles in provider order
        """
        config = config or self.config
        client = self._require_client()

        holders = await client.get_largest_token_holders(token_mint, TOP_HOLDERS_LIMIT)
        now = now_ms()

        whales: List[WhaleProfile] = []
        for holder in holders:
            usd_value = holder.ui_amount * token_price
            if not is_whale(usd_value, config):
                continue

            profile = WhaleProfile(
                address=holder.address,
                token_mint=token_mint,
                holdings=holder.ui_amount,
                usd_value=usd_value,
                first_seen=now,
                last_activity=now,
                behavior=WhaleBehavior.UNKNOWN,
                recent_tx_count=0,
            )
            self.registry.register(profile)
            whales.append(profile)

        logger.info(f"Discovered {len(whales)} whales out of {len(holders)} holders for {token_mint}")
        return whales

    async def _fetch_parsed(self, wallet_address: str, limit: int) -> List[ParsedTransaction]:
        client = self._require_client()
        raw_transactions = await client.get_recent_transactions(wallet_address, limit)
        return [parse_transaction(tx, wallet_address) for tx in raw_transactions]

    async def analyze_whale(
        self,
        wallet_address: str,
        token_mint: str,
        token_price: float,
        config: Optional[WhaleConfig] = None
    ) -> WhaleAnalysis:
        """Analyze a whale's recent trading of a token.

        Fetches the wallet's recent transactions, caches them, classifies
        the behavior and runs both pattern detectors. A registered profile
        for the wallet and token is updated with the result.

        Args:
            wallet_address: Whale wallet address
            token_mint: Token to analyze
            token_price: Current token price in USD
            config: Whale thresholds, the tracker default when omitted

        Returns:
            Behavior and any detected patterns, accumulation first
        """
        config = config or self.config

        transactions = await self._fetch_parsed(wallet_address, ANALYSIS_TX_LIMIT)
        self.registry.cache_transactions(wallet_address, transactions)

        behavior = analyze_whale_behavior(wallet_address, token_mint, transactions, config)

        patterns: List[Pattern] = []
        for detect in (detect_accumulation_pattern, detect_distribution_pattern):
            pattern = detect(wallet_address, token_mint, transactions, token_price, config)
            if pattern:
                patterns.append(pattern)

        self.registry.update_whale_profile(
            token_mint,
            wallet_address,
            behavior=behavior,
            recent_tx_count=len(transactions),
        )

        logger.info(
            f"Analyzed {wallet_address[:8]} on {token_mint[:8]}: {behavior.value}, "
            f"{len(patterns)} patterns from {len(transactions)} transactions"
        )
        return WhaleAnalysis(behavior=behavior, patterns=patterns)

    async def ingest_wallet_activity(
        self,
        wallet_address: str,
        token_prices: Dict[str, float],
        limit: int = 20
    ) -> List[WhaleMovement]:
        """Record the significant movements in a wallet's recent activity.

        Transactions already recorded for the same wallet and token are
        skipped, so repeated polling does not duplicate movements.

        Args:
            wallet_address: Wallet to poll
            token_prices: USD price per token mint to track
            limit: Number of recent transactions to fetch

        Returns:
            Newly recorded movements
        """
        transactions = await self._fetch_parsed(wallet_address, limit)

        recorded: List[WhaleMovement] = []
        for token_mint, token_price in token_prices.items():
            fresh = [
                tx for tx in transactions
                if not self.movements.has_movement(tx.signature, wallet_address, token_mint)
            ]
            recorded.extend(
                self.movements.process_transactions(
                    fresh, wallet_address, token_mint, token_price, self.config
                )
            )

        logger.debug(f"Ingested {len(recorded)} movements for {wallet_address[:8]}")
        return recorded

    def clear(self) -> None:
        """Reset the registry and the movement store."""
        self.registry.clear_whale_registry()
        self.movements.clear()
