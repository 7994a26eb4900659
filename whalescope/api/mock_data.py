"""Sample whales, movements and signals served when Helius is not configured.

Timestamps are relative to import time, in milliseconds since epoch.
"""

from typing import Any, Dict, List, Optional

from whalescope.config import DAY_MS
from whalescope.services.whale_tracker.helpers import now_ms
from whalescope.utils.solana import TOKEN_MINTS

HOUR_MS = 60 * 60 * 1000
MINUTE_MS = 60 * 1000

_NOW = now_ms()

SOL = TOKEN_MINTS["SOL"]
USDC = TOKEN_MINTS["USDC"]
BONK = TOKEN_MINTS["BONK"]
JUP = TOKEN_MINTS["JUP"]

RAYDIUM_AUTHORITY = "5Q544fKrFoe6tsEbD7S8EmxGTJYAKtTVhAW5Q5pge4j1"
WHALE_ONE = "9WzDXwBbmkg8ZTbNMqUxvQRAyrZzDsGYdLVL9zYtAWWM"
MEMECOIN_DEGEN = "CuieVDEDtLo7FypA9SbLM9saXFdb1dsshEkyErMqkRQq"
INSTITUTION_ALPHA = "HN7cABqLq46Es1jh92dQQisAq662SmxELLLsHHe4YWrH"
NEW_MONEY = "Fz6LxeUg5qjesYX3BdmtTwfAFREZvqsS5PHWWF5iRbj5"

MOCK_WHALES: List[Dict[str, Any]] = [
    {
        "address": RAYDIUM_AUTHORITY,
        "label": "Raydium Authority",
        "totalValueUsd": 125_000_000,
        "tokenCount": 15,
        "tier": "mega",
        "firstSeen": _NOW - 365 * DAY_MS,
        "lastActive": _NOW - 2 * HOUR_MS,
        "tags": ["dex", "raydium", "liquidity"],
        "topHoldings": [
            {
                "mint": SOL,
                "symbol": "SOL",
                "name": "Wrapped SOL",
                "amount": "500000000000000",
                "uiAmount": 500_000,
                "valueUsd": 75_000_000,
                "portfolioPercent": 60,
            },
            {
                "mint": USDC,
                "symbol": "USDC",
                "name": "USD Coin",
                "amount": "25000000000000",
                "uiAmount": 25_000_000,
                "valueUsd": 25_000_000,
                "portfolioPercent": 20,
            },
        ],
    },
    {
        "address": WHALE_ONE,
        "label": "Unknown Whale #1",
        "totalValueUsd": 45_000_000,
        "tokenCount": 8,
        "tier": "large",
        "firstSeen": _NOW - 180 * DAY_MS,
        "lastActive": _NOW - 30 * MINUTE_MS,
        "tags": ["trader", "defi"],
        "topHoldings": [
            {
                "mint": SOL,
                "symbol": "SOL",
                "name": "Wrapped SOL",
                "amount": "200000000000000",
                "uiAmount": 200_000,
                "valueUsd": 30_000_000,
                "portfolioPercent": 66.7,
            },
        ],
    },
    {
        "address": MEMECOIN_DEGEN,
        "label": "Memecoin Degen",
        "totalValueUsd": 8_500_000,
        "tokenCount": 25,
        "tier": "medium",
        "firstSeen": _NOW - 90 * DAY_MS,
        "lastActive": _NOW - 5 * MINUTE_MS,
        "tags": ["memecoin", "degen", "active"],
        "topHoldings": [
            {
                "mint": BONK,
                "symbol": "BONK",
                "name": "Bonk",
                "amount": "50000000000000000",
                "uiAmount": 50_000_000_000,
                "valueUsd": 1_500_000,
                "portfolioPercent": 17.6,
            },
        ],
    },
    {
        "address": INSTITUTION_ALPHA,
        "label": "Institution Alpha",
        "totalValueUsd": 250_000_000,
        "tokenCount": 5,
        "tier": "mega",
        "firstSeen": _NOW - 400 * DAY_MS,
        "lastActive": _NOW - 6 * HOUR_MS,
        "tags": ["institution", "long-term", "sol-maximalist"],
        "topHoldings": [
            {
                "mint": SOL,
                "symbol": "SOL",
                "name": "Wrapped SOL",
                "amount": "1500000000000000",
                "uiAmount": 1_500_000,
                "valueUsd": 225_000_000,
                "portfolioPercent": 90,
            },
        ],
    },
    {
        "address": NEW_MONEY,
        "label": None,
        "totalValueUsd": 12_000_000,
        "tokenCount": 12,
        "tier": "medium",
        "firstSeen": _NOW - 60 * DAY_MS,
        "lastActive": _NOW - 15 * MINUTE_MS,
        "tags": ["new-money", "active"],
        "topHoldings": [
            {
                "mint": JUP,
                "symbol": "JUP",
                "name": "Jupiter",
                "amount": "10000000000000",
                "uiAmount": 10_000_000,
                "valueUsd": 8_000_000,
                "portfolioPercent": 66.7,
            },
        ],
    },
]

MOCK_MOVEMENTS: List[Dict[str, Any]] = [
    {
        "txHash": "5UfDuX7hXvhbwQuQhKsYs1xKJ8VqM1R4uKiVXhWnfLVo7VdvPyGxWKYNTGPVsKUmvKAqJjBvVqYpYi3u7YQBHQJN",
        "slot": 245_000_000,
        "timestamp": _NOW - 5 * MINUTE_MS,
        "wallet": WHALE_ONE,
        "tokenMint": SOL,
        "tokenSymbol": "SOL",
        "type": "buy",
        "amount": 50_000,
        "valueUsd": 7_500_000,
        "significance": 95,
        "protocol": "Jupiter",
    },
    {
        "txHash": "3KfDuX7hXvhbwQuQhKsYs1xKJ8VqM1R4uKiVXhWnfLVo7VdvPyGxWKYNTGPVsKUmvKAqJjBvVqYpYi3u7YQBHQJM",
        "slot": 244_999_500,
        "timestamp": _NOW - 15 * MINUTE_MS,
        "wallet": MEMECOIN_DEGEN,
        "tokenMint": BONK,
        "tokenSymbol": "BONK",
        "type": "buy",
        "amount": 10_000_000_000,
        "valueUsd": 300_000,
        "significance": 72,
        "protocol": "Raydium",
    },
    {
        "txHash": "2JfDuX7hXvhbwQuQhKsYs1xKJ8VqM1R4uKiVXhWnfLVo7VdvPyGxWKYNTGPVsKUmvKAqJjBvVqYpYi3u7YQBHQJL",
        "slot": 244_998_000,
        "timestamp": _NOW - 30 * MINUTE_MS,
        "wallet": INSTITUTION_ALPHA,
        "tokenMint": SOL,
        "tokenSymbol": "SOL",
        "type": "transfer_in",
        "amount": 100_000,
        "valueUsd": 15_000_000,
        "significance": 98,
    },
    {
        "txHash": "1HfDuX7hXvhbwQuQhKsYs1xKJ8VqM1R4uKiVXhWnfLVo7VdvPyGxWKYNTGPVsKUmvKAqJjBvVqYpYi3u7YQBHQJK",
        "slot": 244_995_000,
        "timestamp": _NOW - HOUR_MS,
        "wallet": NEW_MONEY,
        "tokenMint": JUP,
        "tokenSymbol": "JUP",
        "type": "buy",
        "amount": 2_000_000,
        "valueUsd": 1_600_000,
        "significance": 85,
        "protocol": "Jupiter",
    },
    {
        "txHash": "8GfDuX7hXvhbwQuQhKsYs1xKJ8VqM1R4uKiVXhWnfLVo7VdvPyGxWKYNTGPVsKUmvKAqJjBvVqYpYi3u7YQBHQJI",
        "slot": 244_990_000,
        "timestamp": _NOW - 2 * HOUR_MS,
        "wallet": RAYDIUM_AUTHORITY,
        "tokenMint": USDC,
        "tokenSymbol": "USDC",
        "type": "sell",
        "amount": 5_000_000,
        "valueUsd": 5_000_000,
        "significance": 88,
        "protocol": "Raydium",
    },
]

MOCK_SIGNALS: List[Dict[str, Any]] = [
    {
        "id": "sig_001",
        "type": "accumulation",
        "wallet": WHALE_ONE,
        "tokenMint": SOL,
        "tokenSymbol": "SOL",
        "strength": 92,
        "confidence": 87,
        "description": "Large whale accumulating SOL aggressively over past 24h. 3 separate buys totaling $15M.",
        "detectedAt": _NOW - 10 * MINUTE_MS,
        "evidence": [
            {
                "type": "transaction",
                "description": "Buy $7.5M SOL via Jupiter",
                "reference": MOCK_MOVEMENTS[0]["txHash"],
            },
            {"type": "pattern", "description": "DCA pattern detected - buys at regular intervals"},
            {"type": "timing", "description": "Buying during low volume periods to minimize slippage"},
        ],
    },
    {
        "id": "sig_002",
        "type": "new_position",
        "wallet": MEMECOIN_DEGEN,
        "tokenMint": BONK,
        "tokenSymbol": "BONK",
        "strength": 68,
        "confidence": 91,
        "description": "Known memecoin trader opened new BONK position worth $300K.",
        "detectedAt": _NOW - 20 * MINUTE_MS,
        "evidence": [
            {
                "type": "transaction",
                "description": "First BONK purchase by this wallet",
                "reference": MOCK_MOVEMENTS[1]["txHash"],
            },
            {"type": "pattern", "description": "Wallet has 78% win rate on memecoin trades"},
        ],
    },
    {
        "id": "sig_003",
        "type": "unusual_activity",
        "wallet": INSTITUTION_ALPHA,
        "tokenMint": SOL,
        "tokenSymbol": "SOL",
        "strength": 96,
        "confidence": 95,
        "description": (
            "Mega whale received 100K SOL ($15M) from unknown source. "
            "Possible OTC deal or exchange withdrawal."
        ),
        "detectedAt": _NOW - 35 * MINUTE_MS,
        "evidence": [
            {
                "type": "transaction",
                "description": "Large transfer from unlabeled wallet",
                "reference": MOCK_MOVEMENTS[2]["txHash"],
            },
            {"type": "volume", "description": "Transfer represents 0.05% of daily SOL volume"},
        ],
    },
    {
        "id": "sig_004",
        "type": "accumulation",
        "wallet": NEW_MONEY,
        "tokenMint": JUP,
        "tokenSymbol": "JUP",
        "strength": 78,
        "confidence": 82,
        "description": "Active trader building large JUP position. 5 buys in past 48h totaling $4M.",
        "detectedAt": _NOW - 65 * MINUTE_MS,
        "evidence": [
            {"type": "pattern", "description": "Consistent buying regardless of short-term price action"},
            {"type": "volume", "description": "Represents 2% of JUP daily volume"},
        ],
    },
    {
        "id": "sig_005",
        "type": "distribution",
        "wallet": RAYDIUM_AUTHORITY,
        "tokenMint": USDC,
        "tokenSymbol": "USDC",
        "strength": 65,
        "confidence": 75,
        "description": (
            "Raydium authority selling USDC for SOL. "
            "Could indicate protocol rebalancing or bullish SOL sentiment."
        ),
        "detectedAt": _NOW - 125 * MINUTE_MS,
        "evidence": [
            {
                "type": "transaction",
                "description": "$5M USDC sold via Raydium",
                "reference": MOCK_MOVEMENTS[4]["txHash"],
            },
        ],
    },
]


def get_whale_by_address(address: str) -> Optional[Dict[str, Any]]:
    return next((w for w in MOCK_WHALES if w["address"] == address), None)


def get_movements_by_wallet(wallet: str) -> List[Dict[str, Any]]:
    return [m for m in MOCK_MOVEMENTS if m["wallet"] == wallet]


def get_movement_by_tx_hash(tx_hash: str) -> Optional[Dict[str, Any]]:
    return next((m for m in MOCK_MOVEMENTS if m["txHash"] == tx_hash), None)


def get_signals_by_wallet(wallet: str) -> List[Dict[str, Any]]:
    return [s for s in MOCK_SIGNALS if s["wallet"] == wallet]


def get_whales_by_token(token_mint: str) -> List[Dict[str, Any]]:
    """Get sample whales with the token among their top holdings."""
    return [
        w for w in MOCK_WHALES
        if any(h["mint"] == token_mint for h in w["topHoldings"])
    ]


def get_holding_value(whale: Dict[str, Any], token_mint: str) -> float:
    """USD value of a sample whale's holding of a token, 0 when absent."""
    holding = next((h for h in whale["topHoldings"] if h["mint"] == token_mint), None)
    return holding["valueUsd"] if holding else 0
