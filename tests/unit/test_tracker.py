"""Unit tests for the whale tracker.

This module tests discovery, analysis and ingestion against a mocked
Helius client.
"""

import pytest

from whalescope.services.whale_tracker import WhaleTracker
from whalescope.services.whale_tracker.models import PatternType, WhaleBehavior
from whalescope.utils.error_handling import ConfigurationError, HeliusAPIError
from tests.fixtures.common import COUNTERPARTY, POOL, SOL_MINT, USDC_MINT, WALLET, make_raw_swap


@pytest.mark.asyncio
async def test_discover_whales(tracker, mock_helius_client):
    """Test that only holders above the whale threshold are registered."""
    whales = await tracker.discover_whales(SOL_MINT, 150.0)

    mock_helius_client.get_largest_token_holders.assert_called_once_with(SOL_MINT, 100)
    assert [w.address for w in whales] == [WALLET, COUNTERPARTY]
    assert whales[0].usd_value == 300_000
    assert whales[0].behavior == WhaleBehavior.UNKNOWN
    assert whales[0].first_seen == whales[0].last_activity
    assert tracker.registry.get_whale_profile(SOL_MINT, POOL) is None
    assert len(tracker.registry.get_tracked_whales(SOL_MINT)) == 2


@pytest.mark.asyncio
async def test_analyze_whale_detects_accumulation(tracker, mock_helius_client, pattern_config):
    """Test the full analysis flow from raw transactions to patterns."""
    mock_helius_client.get_recent_transactions.return_value = [
        make_raw_swap(f"sig-{i}", mint_out=SOL_MINT, amount_out=amount)
        for i, amount in enumerate([100, 105, 95])
    ]
    await tracker.discover_whales(SOL_MINT, 150.0)

    analysis = await tracker.analyze_whale(WALLET, SOL_MINT, 10.0, pattern_config)

    mock_helius_client.get_recent_transactions.assert_called_once_with(WALLET, 100)
    assert analysis.behavior == WhaleBehavior.ACCUMULATING
    assert len(analysis.patterns) == 1
    assert analysis.patterns[0].type == PatternType.ACCUMULATION
    assert analysis.patterns[0].confidence > 0.9

    profile = tracker.registry.get_whale_profile(SOL_MINT, WALLET)
    assert profile.behavior == WhaleBehavior.ACCUMULATING
    assert profile.recent_tx_count == 3
    assert len(tracker.registry.get_cached_transactions(WALLET)) == 3


@pytest.mark.asyncio
async def test_analyze_whale_without_activity(tracker):
    analysis = await tracker.analyze_whale(WALLET, SOL_MINT, 150.0)

    assert analysis.behavior == WhaleBehavior.HOLDING
    assert analysis.patterns == []


@pytest.mark.asyncio
async def test_provider_errors_propagate(tracker, mock_helius_client):
    mock_helius_client.get_recent_transactions.side_effect = HeliusAPIError("boom", http_status=503)

    with pytest.raises(HeliusAPIError):
        await tracker.analyze_whale(WALLET, SOL_MINT, 150.0)


@pytest.mark.asyncio
async def test_ingest_wallet_activity_skips_recorded_transactions(tracker, mock_helius_client):
    """Test that polling the same activity twice records it once."""
    mock_helius_client.get_recent_transactions.return_value = [
        make_raw_swap("buy-sol", mint_out=SOL_MINT, amount_out=100, mint_in=USDC_MINT, amount_in=15_000),
    ]
    prices = {SOL_MINT: 150.0, USDC_MINT: 1.0}

    first = await tracker.ingest_wallet_activity(WALLET, prices)
    second = await tracker.ingest_wallet_activity(WALLET, prices)

    mock_helius_client.get_recent_transactions.assert_called_with(WALLET, 20)
    assert {(m.token_mint, m.direction.value) for m in first} == {(SOL_MINT, "in"), (USDC_MINT, "out")}
    assert second == []
    assert len(tracker.movements) == 2


@pytest.mark.asyncio
async def test_operations_without_client_raise_configuration_error():
    tracker = WhaleTracker()

    with pytest.raises(ConfigurationError):
        await tracker.discover_whales(SOL_MINT, 150.0)
    with pytest.raises(ConfigurationError):
        await tracker.analyze_whale(WALLET, SOL_MINT, 150.0)
    assert tracker.has_provider is False


@pytest.mark.asyncio
async def test_clear(tracker):
    await tracker.discover_whales(SOL_MINT, 150.0)

    tracker.clear()

    assert tracker.registry.get_tracked_whales(SOL_MINT) == []
    assert len(tracker.movements) == 0
