"""Unit tests for the whale registry."""

from unittest.mock import patch

import pytest

from whalescope.services.whale_tracker.models import WhaleBehavior, WhaleProfile
from tests.fixtures.common import COUNTERPARTY, SOL_MINT, USDC_MINT, WALLET, make_swap


def make_profile(address=WALLET, token_mint=SOL_MINT, usd_value=300_000.0, behavior=WhaleBehavior.UNKNOWN):
    return WhaleProfile(
        address=address,
        token_mint=token_mint,
        holdings=usd_value / 150,
        usd_value=usd_value,
        first_seen=1_700_000_000_000,
        last_activity=1_700_000_000_000,
        behavior=behavior,
    )


def test_get_tracked_whales_is_idempotent(whale_registry):
    whale_registry.register(make_profile())
    whale_registry.register(make_profile(address=COUNTERPARTY))

    first = whale_registry.get_tracked_whales(SOL_MINT)
    second = whale_registry.get_tracked_whales(SOL_MINT)

    assert first == second
    assert [w.address for w in first] == [WALLET, COUNTERPARTY]


def test_unknown_token_has_no_whales(whale_registry):
    assert whale_registry.get_tracked_whales(USDC_MINT) == []
    assert whale_registry.get_whale_profile(USDC_MINT, WALLET) is None


def test_register_replaces_existing_profile(whale_registry):
    whale_registry.register(make_profile(usd_value=200_000))
    whale_registry.register(make_profile(usd_value=400_000))

    assert len(whale_registry.get_tracked_whales(SOL_MINT)) == 1
    assert whale_registry.get_whale_profile(SOL_MINT, WALLET).usd_value == 400_000


def test_find_profiles_by_address(whale_registry):
    whale_registry.register(make_profile())
    whale_registry.register(make_profile(token_mint=USDC_MINT))
    whale_registry.register(make_profile(address=COUNTERPARTY))

    profiles = whale_registry.find_profiles_by_address(WALLET)

    assert {p.token_mint for p in profiles} == {SOL_MINT, USDC_MINT}
    assert whale_registry.tracked_addresses() == [WALLET, COUNTERPARTY]


def test_update_merges_fields_and_refreshes_activity(whale_registry):
    whale_registry.register(make_profile())

    with patch("whalescope.services.whale_tracker.registry.now_ms", return_value=1_800_000_000_000):
        whale_registry.update_whale_profile(
            SOL_MINT, WALLET, behavior=WhaleBehavior.ACCUMULATING, recent_tx_count=12)

    profile = whale_registry.get_whale_profile(SOL_MINT, WALLET)
    assert profile.behavior == WhaleBehavior.ACCUMULATING
    assert profile.recent_tx_count == 12
    assert profile.last_activity == 1_800_000_000_000
    assert profile.first_seen == 1_700_000_000_000


def test_update_missing_profile_is_ignored(whale_registry):
    whale_registry.update_whale_profile(SOL_MINT, WALLET, recent_tx_count=1)

    assert whale_registry.get_tracked_whales(SOL_MINT) == []


def test_update_rejects_unknown_fields(whale_registry):
    whale_registry.register(make_profile())

    with pytest.raises(AttributeError):
        whale_registry.update_whale_profile(SOL_MINT, WALLET, nickname="whale")


def test_update_rejects_method_names(whale_registry):
    whale_registry.register(make_profile())

    with pytest.raises(AttributeError):
        whale_registry.update_whale_profile(SOL_MINT, WALLET, to_dict=1)

    assert whale_registry.get_whale_profile(SOL_MINT, WALLET).to_dict()["address"] == WALLET


def test_activity_summary(whale_registry):
    whale_registry.register(make_profile(behavior=WhaleBehavior.ACCUMULATING))
    whale_registry.register(make_profile(address=COUNTERPARTY, behavior=WhaleBehavior.HOLDING, usd_value=100_000))

    summary = whale_registry.get_whale_activity_summary(SOL_MINT)

    assert summary.total_whales == 2
    assert summary.accumulating == 1
    assert summary.distributing == 0
    assert summary.holding == 1
    assert summary.total_holdings_usd == 400_000
    assert summary.to_dict()["totalWhales"] == 2


def test_transaction_cache_overwrites(whale_registry):
    whale_registry.cache_transactions(WALLET, [make_swap("a", mint_out=SOL_MINT, amount_out=1)])
    whale_registry.cache_transactions(WALLET, [make_swap("b", mint_out=SOL_MINT, amount_out=1)])

    assert [tx.signature for tx in whale_registry.get_cached_transactions(WALLET)] == ["b"]
    assert whale_registry.get_cached_transactions(COUNTERPARTY) == []


def test_clear_whale_registry(whale_registry):
    whale_registry.register(make_profile())
    whale_registry.cache_transactions(WALLET, [make_swap("a", mint_out=SOL_MINT, amount_out=1)])

    whale_registry.clear_whale_registry()

    assert whale_registry.get_tracked_whales(SOL_MINT) == []
    assert whale_registry.get_cached_transactions(WALLET) == []
