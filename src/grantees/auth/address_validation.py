"""
EVM wallet address format validation.

Avalanche C-Chain uses Ethereum-style addresses: ``0x`` followed by 40 hex
digits. Mixed-case (EIP-55 checksummed) input is accepted as-is; comparisons
are case-insensitive.
"""

from __future__ import annotations

import re

_ADDRESS_RE = re.compile(r"^0x[0-9a-fA-F]{40}$")
_TX_HASH_RE = re.compile(r"^0x[0-9a-fA-F]{64}$")


def validate_wallet_address(address: str | None) -> str:
    """
    Validate an EVM wallet address.

    Returns:
        The address, stripped of surrounding whitespace.

    Raises:
        ValueError: If the address is missing or malformed.
    """
    if not address or not isinstance(address, str):
        msg = "Address must be a non-empty string"
        raise ValueError(msg)
    address = address.strip()
    if not _ADDRESS_RE.match(address):
        msg = f"Unsupported address format: {address[:12]}..."
        raise ValueError(msg)
    return address


def is_valid_wallet_address(address: str | None) -> bool:
    """Boolean form of validate_wallet_address."""
    try:
        validate_wallet_address(address)
    except ValueError:
        return False
    return True


def same_address(a: str | None, b: str | None) -> bool:
    """Case-insensitive address comparison; None never matches."""
    if not a or not b:
        return False
    return a.lower() == b.lower()


def is_valid_tx_hash(tx_hash: str | None) -> bool:
    """True for a 32-byte hex transaction hash with 0x prefix."""
    return bool(tx_hash) and bool(_TX_HASH_RE.match(tx_hash or ""))


def normalize_tx_hash(tx_hash: str) -> str:
    """Canonical ledger form of a transaction hash: hex hashes are lowercased."""
    tx_hash = tx_hash.strip()
    lowered = tx_hash.lower()
    if _TX_HASH_RE.match(lowered):
        return lowered
    return tx_hash
