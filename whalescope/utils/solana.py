"""Solana helpers: unit conversion, well-known mints and display formatting."""

from typing import Dict, Optional

LAMPORTS_PER_SOL = 1_000_000_000

TOKEN_MINTS: Dict[str, str] = {
    "SOL": "So11111111111111111111111111111111111111112",   # Wrapped SOL
    "USDC": "EPjFWdd5AufqSSqeM2qN1xzybapC8G4wEGGkZwyTDt1v",
    "USDT": "Es9vMFrzaCERmJfrF4H2FYD4KCoNkY11McCe8BenwNYB",
    "BONK": "DezXAZ8z7PnrnRJjz3wXBoRgixCa6xjnB7YaB1pPB263",
    "JUP": "JUPyiwrYJFskUPiHa7hkeR8VUtAeFoSYbKedZNsDvCN",
    "RAY": "4k3Dyjzvzp8eMZWUXbBCjEvwSkkk59S5iCNLY3QrkX6R",
    "mSOL": "mSoLzYCxHdYgdzU16g5QSh3i5K3z3KZK7ytfqcJm7So",  # Marinade staked SOL
    "jitoSOL": "J1toso1uCk3RLmjorhTtrVwY9HJ7X8V9yYac6Y7kGCPn",
    "PYTH": "HZ1JovNiVvGrGNiiYvEozEVgZ58xaU3RKwX8eACQBCt3",
    "W": "85VBFQZC9TZkfaptBWjvUw7YbZjy52A6mjtPGjstQAmQ",
}

# Reverse lookup: mint -> symbol
TOKEN_SYMBOLS: Dict[str, str] = {mint: symbol for symbol, mint in TOKEN_MINTS.items()}

# Static USD prices. There is no pricing engine; callers supply prices
# from this table or explicitly.
TOKEN_PRICES: Dict[str, float] = {
    TOKEN_MINTS["SOL"]: 150.0,
    TOKEN_MINTS["USDC"]: 1.0,
    TOKEN_MINTS["JUP"]: 0.80,
    TOKEN_MINTS["BONK"]: 0.00003,
}


def lamports_to_sol(lamports: int) -> float:
    """Convert lamports to SOL."""
    return lamports / LAMPORTS_PER_SOL


def format_address(address: str, chars: int = 4) -> str:
    """Shorten an address for display, e.g. ``7xKX...4Hn9``.

    Args:
        address: Full address string
        chars: Number of characters to keep on each end

    Returns:
        Shortened address, or the address itself when already short
    """
    if not address or len(address) <= chars * 2 + 3:
        return address
    return f"{address[:chars]}...{address[-chars:]}"


def get_token_symbol(mint: str) -> str:
    """Return the known symbol for a mint, or its shortened address."""
    return TOKEN_SYMBOLS.get(mint) or format_address(mint, 4)


def get_token_price(mint: str) -> Optional[float]:
    """Look up the static USD price of a mint, None when unknown."""
    return TOKEN_PRICES.get(mint)


def format_amount(value: float, decimals: int = 2) -> str:
    """Format a number with K/M suffixes."""
    if value >= 1_000_000:
        return f"{value / 1_000_000:.{decimals}f}M"
    if value >= 1_000:
        return f"{value / 1_000:.{decimals}f}K"
    return f"{value:.{decimals}f}"


def format_usd(value: float) -> str:
    """Format a USD value, e.g. ``$1.50M`` or ``$500.00K``."""
    return f"${format_amount(value)}"
