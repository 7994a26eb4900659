"""Unit tests for whale behavior analysis and pattern detection."""

import pytest

from whalescope.config import DAY_MS, WhaleConfig
from whalescope.services.whale_tracker.models import PatternType, WhaleBehavior
from whalescope.services.whale_tracker.patterns import (
    _calculate_confidence,
    analyze_whale_behavior,
    detect_accumulation_pattern,
    detect_distribution_pattern,
)
from tests.fixtures.common import JUP_MINT, SOL_MINT, USDC_MINT, WALLET, make_swap, make_transfer, now_seconds

PRICE = 10.0


def buys(*amounts, mint=SOL_MINT):
    return [make_swap(f"buy-{i}", mint_out=mint, amount_out=a) for i, a in enumerate(amounts)]


def sells(*amounts, mint=SOL_MINT):
    return [
        make_swap(f"sell-{i}", mint_out=USDC_MINT, amount_out=1.0, mint_in=mint, amount_in=a)
        for i, a in enumerate(amounts)
    ]


class TestAnalyzeWhaleBehavior:

    def test_too_few_transactions_is_holding(self):
        assert analyze_whale_behavior(WALLET, SOL_MINT, buys(100, 100)) == WhaleBehavior.HOLDING

    def test_mostly_buys_is_accumulating(self):
        txs = buys(100, 100, 100) + sells(100)

        assert analyze_whale_behavior(WALLET, SOL_MINT, txs) == WhaleBehavior.ACCUMULATING

    def test_mostly_sells_is_distributing(self):
        txs = sells(100, 100, 100) + buys(100)

        assert analyze_whale_behavior(WALLET, SOL_MINT, txs) == WhaleBehavior.DISTRIBUTING

    def test_mixed_trading_is_holding(self):
        txs = buys(100, 100) + sells(100, 100)

        assert analyze_whale_behavior(WALLET, SOL_MINT, txs) == WhaleBehavior.HOLDING

    def test_transfers_count_as_buys(self):
        txs = [make_transfer(f"xfer-{i}", SOL_MINT, 10) for i in range(3)]

        assert analyze_whale_behavior(WALLET, SOL_MINT, txs) == WhaleBehavior.ACCUMULATING

    def test_trades_of_other_tokens_do_not_count(self):
        txs = buys(100, 100, 100, mint=JUP_MINT)

        assert analyze_whale_behavior(WALLET, SOL_MINT, txs) == WhaleBehavior.HOLDING

    def test_old_transactions_are_outside_window(self):
        old = now_seconds() - 2 * DAY_MS // 1000
        txs = [make_swap(f"old-{i}", mint_out=SOL_MINT, amount_out=100, timestamp=old) for i in range(3)]

        assert analyze_whale_behavior(WALLET, SOL_MINT, txs) == WhaleBehavior.HOLDING


class TestDetectPatterns:

    def test_consistent_buys_give_high_confidence(self, pattern_config):
        pattern = detect_accumulation_pattern(WALLET, SOL_MINT, buys(100, 105, 95), PRICE, pattern_config)

        assert pattern is not None
        assert pattern.type == PatternType.ACCUMULATION
        assert pattern.tx_count == 3
        assert pattern.total_amount == 300
        assert pattern.total_usd_value == 3_000
        assert pattern.confidence > 0.9
        assert pattern.start_time <= pattern.end_time

    def test_outlier_collapses_confidence(self, pattern_config):
        pattern = detect_accumulation_pattern(WALLET, SOL_MINT, buys(100, 10_000, 95), PRICE, pattern_config)

        assert pattern.confidence < 0.5

    def test_confidence_is_clamped_to_zero(self, pattern_config):
        pattern = detect_accumulation_pattern(WALLET, SOL_MINT, buys(1, 1, 1_000), PRICE, pattern_config)

        assert pattern.confidence == 0.0

    def test_requires_minimum_buys(self, pattern_config):
        assert detect_accumulation_pattern(WALLET, SOL_MINT, buys(1_000, 1_000), PRICE, pattern_config) is None

    def test_requires_minimum_total_value(self, pattern_config):
        # 3 buys must total at least 3 x $1,000
        assert detect_accumulation_pattern(WALLET, SOL_MINT, buys(99, 100, 100), PRICE, pattern_config) is None

    def test_window_bounds_in_milliseconds(self, pattern_config):
        base = now_seconds() - 3600
        txs = [
            make_swap(f"buy-{i}", mint_out=SOL_MINT, amount_out=100, timestamp=base + i * 60)
            for i in range(3)
        ]

        pattern = detect_accumulation_pattern(WALLET, SOL_MINT, txs, PRICE, pattern_config)

        assert pattern.start_time == base * 1000
        assert pattern.end_time == (base + 120) * 1000
        assert pattern.confidence == pytest.approx(1.0)

    def test_distribution_uses_sent_leg(self, pattern_config):
        pattern = detect_distribution_pattern(WALLET, SOL_MINT, sells(100, 100, 100), PRICE, pattern_config)

        assert pattern.type == PatternType.DISTRIBUTION
        assert pattern.total_amount == 300
        assert detect_accumulation_pattern(WALLET, SOL_MINT, sells(100, 100, 100), PRICE, pattern_config) is None

    def test_default_thresholds(self):
        # 3 x 100 SOL at $150 clears the default $30k pattern minimum
        pattern = detect_accumulation_pattern(WALLET, SOL_MINT, buys(100, 100, 100), 150.0, WhaleConfig())

        assert pattern.total_usd_value == 45_000


class TestConfidence:

    @pytest.mark.parametrize("amounts", [[], [0, 0, 0], [1, -1]])
    def test_degenerate_amounts_give_zero(self, amounts):
        assert _calculate_confidence(amounts) == 0.0

    def test_identical_amounts_give_one(self):
        assert _calculate_confidence([5, 5, 5]) == 1.0

    def test_confidence_in_unit_interval(self):
        assert 0.0 <= _calculate_confidence([1, 2, 3, 50]) <= 1.0
