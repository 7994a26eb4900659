"""Validation utilities for WhaleScope.

This module provides utilities for validating Solana-specific data.
"""

import re

from whalescope.utils.error_handling import ValidationError

# Solana public key validation pattern (base58 format)
PUBKEY_PATTERN = re.compile(r"^[1-9A-HJ-NP-Za-km-z]{32,44}$")


def validate_public_key(pubkey: str) -> bool:
    """Validate a Solana public key.

    Args:
        pubkey: The public key to validate

    Returns:
        True if the public key is valid, False otherwise
    """
    if not pubkey or not isinstance(pubkey, str):
        return False
    return bool(PUBKEY_PATTERN.match(pubkey))


def validate_solana_address(address: str, field_name: str = "address") -> str:
    """Validate a Solana address and raise an exception if invalid.

    Args:
        address: The address to validate
        field_name: Name of the field for the error message

    Returns:
        The address, unchanged

    Raises:
        ValidationError: If the address is invalid
    """
    if not validate_public_key(address):
        raise ValidationError(
            f"Invalid Solana {field_name}: {address}",
            details={"field": field_name, "value": address}
        )
    return address
