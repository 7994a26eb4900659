"""Unit tests for whale qualification and formatting helpers."""

from whalescope.config import DEFAULT_WHALE_CONFIG, WhaleConfig
from whalescope.services.whale_tracker.helpers import (
    format_movement,
    is_significant_movement,
    is_whale,
)
from whalescope.services.whale_tracker.models import Direction, TransactionType
from whalescope.utils.solana import format_address, format_usd, get_token_symbol, lamports_to_sol
from tests.fixtures.common import SOL_MINT, WALLET, make_movement


def test_significant_movement_threshold_is_inclusive():
    assert is_significant_movement(10_000) is True
    assert is_significant_movement(9_999.99) is False


def test_whale_threshold_is_inclusive():
    assert is_whale(100_000) is True
    assert is_whale(99_999) is False


def test_thresholds_follow_config():
    config = WhaleConfig(min_whale_holdings_usd=50, min_movement_usd=5)

    assert is_whale(50, config) is True
    assert is_significant_movement(4, config) is False
    assert DEFAULT_WHALE_CONFIG.min_pattern_tx_count == 3


def test_format_movement():
    movement = make_movement(whale=WALLET, token_mint=SOL_MINT, usd_value=20_000, direction=Direction.IN)

    assert format_movement(movement) == "IN [swap] 9WzD...AWWM swap $20.00K of SOL"


def test_format_movement_outgoing_transfer():
    movement = make_movement(direction=Direction.OUT, tx_type=TransactionType.TRANSFER, usd_value=1_500_000)

    assert format_movement(movement).startswith("OUT [xfer]")
    assert "$1.50M" in format_movement(movement)


def test_solana_formatting():
    assert lamports_to_sol(5000) == 0.000005
    assert format_address("short") == "short"
    assert format_usd(500) == "$500.00"
    assert get_token_symbol(SOL_MINT) == "SOL"
    assert get_token_symbol(WALLET) == "9WzD...AWWM"
