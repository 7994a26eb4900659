"""Registry of discovered whales and their cached transaction history."""

import logging
from dataclasses import fields
from typing import Any, Dict, List, Optional

from whalescope.services.whale_tracker.helpers import now_ms
from whalescope.services.whale_tracker.models import (
    ActivitySummary,
    ParsedTransaction,
    WhaleBehavior,
    WhaleProfile,
)

logger = logging.getLogger(__name__)

PROFILE_FIELDS = frozenset(f.name for f in fields(WhaleProfile))


class WhaleRegistry:
    """Whale profiles keyed by token mint, then wallet address."""

    def __init__(self):
        self._profiles: Dict[str, Dict[str, WhaleProfile]] = {}
        self._transactions: Dict[str, List[ParsedTransaction]] = {}

    def register(self, profile: WhaleProfile) -> None:
        """Add or replace the profile of a whale for its token."""
        self._profiles.setdefault(profile.token_mint, {})[profile.address] = profile

    def get_tracked_whales(self, token_mint: str) -> List[WhaleProfile]:
        """Get every whale tracked for a token, in registration order."""
        return list(self._profiles.get(token_mint, {}).values())

    def get_whale_profile(self, token_mint: str, wallet_address: str) -> Optional[WhaleProfile]:
        return self._profiles.get(token_mint, {}).get(wallet_address)

    def find_profiles_by_address(self, wallet_address: str) -> List[WhaleProfile]:
        """Get the profiles of a wallet across all tracked tokens."""
        return [
            profiles[wallet_address]
            for profiles in self._profiles.values()
            if wallet_address in profiles
        ]

    def tracked_addresses(self) -> List[str]:
        """Get every tracked wallet address once, in registration order."""
        seen: Dict[str, None] = {}
        for profiles in self._profiles.values():
            for address in profiles:
                seen.setdefault(address, None)
        return list(seen)

    def update_whale_profile(self, token_mint: str, wallet_address: str, **update: Any) -> None:
        """Merge fields into a whale profile.

        Missing profiles are ignored. ``last_activity`` is always refreshed
        to the current time, overriding any value in ``update``.

        Args:
            token_mint: Token mint address
            wallet_address: Whale wallet address
            **update: Profile fields to overwrite
        """
        profile = self.get_whale_profile(token_mint, wallet_address)
        if profile is None:
            logger.debug(f"No profile for {wallet_address[:8]} on {token_mint[:8]}, skipping update")
            return

        for name, value in update.items():
            if name not in PROFILE_FIELDS:
                raise AttributeError(f"WhaleProfile has no field '{name}'")
            setattr(profile, name, value)
        profile.last_activity = now_ms()

    def get_whale_activity_summary(self, token_mint: str) -> ActivitySummary:
        """Summarize tracked whales for a token by behavior.

        Args:
            token_mint: Token mint address

        Returns:
            Whale counts per behavior and total holdings in USD
        """
        whales = self.get_tracked_whales(token_mint)
        return ActivitySummary(
            total_whales=len(whales),
            accumulating=sum(1 for w in whales if w.behavior == WhaleBehavior.ACCUMULATING),
            distributing=sum(1 for w in whales if w.behavior == WhaleBehavior.DISTRIBUTING),
            holding=sum(1 for w in whales if w.behavior == WhaleBehavior.HOLDING),
            total_holdings_usd=sum(w.usd_value for w in whales),
        )

    def cache_transactions(self, wallet_address: str, transactions: List[ParsedTransaction]) -> None:
        """Store the latest parsed transactions of a wallet, replacing any earlier set."""
        self._transactions[wallet_address] = list(transactions)

    def get_cached_transactions(self, wallet_address: str) -> List[ParsedTransaction]:
        return list(self._transactions.get(wallet_address, []))

    def clear_whale_registry(self) -> None:
        """Remove every profile and cached transaction."""
        self._profiles.clear()
        self._transactions.clear()
