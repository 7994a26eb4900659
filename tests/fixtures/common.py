"""Common test fixtures for WhaleScope tests.

This module provides fixtures and factories that can be reused across
different test modules.
"""

import time
import uuid
from typing import Optional
from unittest.mock import AsyncMock

import pytest

from whalescope.clients.helius_client import HeliusClient
from whalescope.config import WhaleConfig
from whalescope.services.whale_tracker import MovementStore, WhaleRegistry, WhaleTracker
from whalescope.services.whale_tracker.models import (
    Direction,
    ParsedTransaction,
    RawTokenTransfer,
    RawTransaction,
    TokenAmount,
    TokenHolder,
    TransactionType,
    WhaleMovement,
)
from whalescope.utils.solana import TOKEN_MINTS

WALLET = "9WzDXwBbmkg8ZTbNMqUxvQRAyrZzDsGYdLVL9zYtAWWM"
COUNTERPARTY = "CuieVDEDtLo7FypA9SbLM9saXFdb1dsshEkyErMqkRQq"
POOL = "5Q544fKrFoe6tsEbD7S8EmxGTJYAKtTVhAW5Q5pge4j1"
SOL_MINT = TOKEN_MINTS["SOL"]
USDC_MINT = TOKEN_MINTS["USDC"]
JUP_MINT = TOKEN_MINTS["JUP"]


def now_seconds() -> int:
    return int(time.time())


def make_swap(
    signature: str,
    mint_out: str,
    amount_out: float,
    mint_in: str = USDC_MINT,
    amount_in: float = 1.0,
    timestamp: Optional[int] = None
) -> ParsedTransaction:
    """Build a parsed swap: ``amount_in`` of ``mint_in`` sent, ``amount_out`` of ``mint_out`` received."""
    return ParsedTransaction(
        signature=signature,
        timestamp=timestamp if timestamp is not None else now_seconds() - 60,
        type=TransactionType.SWAP,
        source="JUPITER",
        fee=0.000005,
        token_in=TokenAmount(mint=mint_in, amount=amount_in, decimals=0, ui_amount=amount_in),
        token_out=TokenAmount(mint=mint_out, amount=amount_out, decimals=0, ui_amount=amount_out),
    )


def make_transfer(
    signature: str,
    mint: str,
    amount: float,
    timestamp: Optional[int] = None
) -> ParsedTransaction:
    return ParsedTransaction(
        signature=signature,
        timestamp=timestamp if timestamp is not None else now_seconds() - 60,
        type=TransactionType.TRANSFER,
        source="SYSTEM_PROGRAM",
        fee=0.000005,
        transfer=TokenAmount(mint=mint, amount=amount, decimals=0, ui_amount=amount),
    )


def make_movement(
    timestamp: Optional[int] = None,
    whale: str = WALLET,
    token_mint: str = SOL_MINT,
    usd_value: float = 20_000,
    direction: Direction = Direction.IN,
    tx_type: TransactionType = TransactionType.SWAP,
    signature: Optional[str] = None
) -> WhaleMovement:
    """Build a movement; ``timestamp`` is in milliseconds and defaults to now."""
    return WhaleMovement(
        id=uuid.uuid4().hex,
        timestamp=timestamp if timestamp is not None else int(time.time() * 1000),
        whale=whale,
        type=tx_type,
        token_mint=token_mint,
        amount=usd_value / 100,
        usd_value=usd_value,
        signature=signature or uuid.uuid4().hex,
        direction=direction,
    )


def make_raw_swap(
    signature: str,
    wallet: str = WALLET,
    mint_out: str = SOL_MINT,
    amount_out: float = 100.0,
    mint_in: str = USDC_MINT,
    amount_in: float = 15_000.0,
    timestamp: Optional[int] = None
) -> RawTransaction:
    """Build a provider swap where ``wallet`` trades ``mint_in`` for ``mint_out`` on Jupiter."""
    return RawTransaction(
        signature=signature,
        timestamp=timestamp if timestamp is not None else now_seconds() - 60,
        fee=5000,
        type="SWAP",
        source="JUPITER",
        fee_payer=wallet,
        token_transfers=[
            RawTokenTransfer(mint=mint_in, from_user_account=wallet, to_user_account=POOL, token_amount=amount_in),
            RawTokenTransfer(mint=mint_out, from_user_account=POOL, to_user_account=wallet, token_amount=amount_out),
        ],
    )


@pytest.fixture
def mock_helius_client():
    """Create a mock Helius client."""
    client = AsyncMock(spec=HeliusClient)

    # Common mock responses
    client.get_largest_token_holders.return_value = [
        TokenHolder(address=WALLET, amount=2_000_000_000_000, decimals=9, ui_amount=2_000.0),
        TokenHolder(address=COUNTERPARTY, amount=1_000_000_000_000, decimals=9, ui_amount=1_000.0),
        TokenHolder(address=POOL, amount=100_000_000_000, decimals=9, ui_amount=100.0),
    ]
    client.get_recent_transactions.return_value = []

    return client


@pytest.fixture
def movement_store():
    """Create an empty movement store."""
    return MovementStore()


@pytest.fixture
def whale_registry():
    """Create an empty whale registry."""
    return WhaleRegistry()


@pytest.fixture
def tracker(mock_helius_client, whale_registry, movement_store):
    """Create a whale tracker bound to the mock Helius client."""
    return WhaleTracker(
        client=mock_helius_client,
        registry=whale_registry,
        movements=movement_store,
    )


@pytest.fixture
def offline_tracker():
    """Create a whale tracker without a provider."""
    return WhaleTracker()


@pytest.fixture
def pattern_config():
    """Thresholds small enough for hand-sized trade fixtures."""
    return WhaleConfig(min_movement_usd=1_000, min_pattern_tx_count=3)


@pytest.fixture
def sample_helius_transaction():
    """Create a sample enhanced transaction payload as returned by Helius."""
    return {
        "signature": "4sGjMW1sUnHzSxGspuhpqLDx6wiyjNtZAMdL4VZHirAn7qzJZ5m9fy9DNexhZaTrpXo4ZE4VHqmMxmESAYsvQnEr",
        "timestamp": now_seconds() - 120,
        "fee": 5000,
        "feePayer": WALLET,
        "type": "SWAP",
        "source": "JUPITER",
        "tokenTransfers": [
            {
                "mint": USDC_MINT,
                "fromUserAccount": WALLET,
                "toUserAccount": POOL,
                "tokenAmount": 15_000.0,
            },
            {
                "mint": SOL_MINT,
                "fromUserAccount": POOL,
                "toUserAccount": WALLET,
                "tokenAmount": 100.0,
            },
        ],
        "nativeTransfers": [],
    }
