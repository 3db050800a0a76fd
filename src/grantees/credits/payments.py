"""
Payment verification for credit purchases.

Two verifiers exist:

- ``DemoPaymentVerifier`` trusts the caller. A purchase without a tx_hash
  gets a synthetic ``demo_<millis>_<hex>`` hash so the ledger stays unique.
- ``AvalanchePaymentVerifier`` looks the transaction up on the Avalanche
  C-Chain over JSON-RPC. It only accepts a mined, successful transfer from the
  buyer's wallet to the treasury that covers the package price.

The mode is selected with ``GRANTEES_PAYMENT_MODE``.
"""

from __future__ import annotations

import secrets
import time
from abc import ABC, abstractmethod
from typing import Any

import httpx
import structlog

from grantees.auth.address_validation import is_valid_tx_hash, normalize_tx_hash, same_address
from grantees.config import get_settings
from grantees.credits.exceptions import (
    MissingTransactionHashError,
    PaymentProviderError,
    PaymentVerificationError,
)
from grantees.credits.packages import CreditPackage

logger = structlog.get_logger()


class PaymentVerifier(ABC):
    """Confirms that a purchase has been paid for before credits are added."""

    @abstractmethod
    async def resolve_tx_hash(self, tx_hash: str | None) -> str:
        """Return the tx_hash to record on the ledger, or raise if one is required."""
        ...

    @abstractmethod
    async def verify(self, tx_hash: str, wallet_address: str, package: CreditPackage) -> None:
        """Raise PaymentVerificationError / PaymentProviderError unless paid."""
        ...


class DemoPaymentVerifier(PaymentVerifier):
    """No on-chain check. Development and demo deployments only."""

    async def resolve_tx_hash(self, tx_hash: str | None) -> str:
        if tx_hash:
            return normalize_tx_hash(tx_hash)
        return f"demo_{int(time.time() * 1000)}_{secrets.token_hex(4)}"

    async def verify(self, tx_hash: str, wallet_address: str, package: CreditPackage) -> None:
        logger.info("payment_unverified_demo", tx_hash=tx_hash, wallet=wallet_address, package=package.name)


class AvalanchePaymentVerifier(PaymentVerifier):
    """Verify native AVAX transfers on the C-Chain."""

    def __init__(
        self,
        rpc_url: str,
        treasury_address: str,
        chain_id: int,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.rpc_url = rpc_url
        self.treasury_address = treasury_address
        self.chain_id = chain_id
        self.timeout = timeout
        self._transport = transport

    async def resolve_tx_hash(self, tx_hash: str | None) -> str:
        if not tx_hash:
            raise MissingTransactionHashError
        return normalize_tx_hash(tx_hash)

    async def _rpc(self, client: httpx.AsyncClient, method: str, params: list[Any]) -> Any:  # noqa: ANN401
        try:
            response = await client.post(
                self.rpc_url,
                json={"jsonrpc": "2.0", "id": 1, "method": method, "params": params},
            )
            response.raise_for_status()
            body = response.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.warning("payment_rpc_failed", method=method, error=str(e))
            raise PaymentProviderError from e
        if body.get("error"):
            logger.warning("payment_rpc_error", method=method, error=body["error"])
            raise PaymentProviderError
        return body.get("result")

    async def verify(self, tx_hash: str, wallet_address: str, package: CreditPackage) -> None:
        if not is_valid_tx_hash(tx_hash):
            raise PaymentVerificationError("malformed transaction hash")

        async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
            tx = await self._rpc(client, "eth_getTransactionByHash", [tx_hash])
            if tx is None:
                raise PaymentVerificationError("transaction not found")
            receipt = await self._rpc(client, "eth_getTransactionReceipt", [tx_hash])

        if receipt is None:
            raise PaymentVerificationError("transaction not mined")
        if receipt.get("status") != "0x1":
            raise PaymentVerificationError("transaction failed")
        chain_id = tx.get("chainId")
        if chain_id is not None and int(chain_id, 16) != self.chain_id:
            raise PaymentVerificationError("wrong chain")
        if not same_address(tx.get("from"), wallet_address):
            raise PaymentVerificationError("sender does not match wallet")
        if not same_address(tx.get("to"), self.treasury_address):
            raise PaymentVerificationError("recipient is not the treasury")
        if int(tx.get("value") or "0x0", 16) < package.price_wei:
            raise PaymentVerificationError("amount below package price")

        logger.info("payment_verified", tx_hash=tx_hash, wallet=wallet_address, package=package.name)


def _create_verifier() -> PaymentVerifier:
    """Create the verifier for the configured payment mode."""
    settings = get_settings()
    mode = settings.payment_mode.lower()

    if mode == "demo":
        return DemoPaymentVerifier()
    if mode == "onchain":
        if not settings.treasury_address:
            msg = "GRANTEES_TREASURY_ADDRESS must be set for onchain payments"
            raise ValueError(msg)
        return AvalanchePaymentVerifier(
            rpc_url=settings.avalanche_rpc_url,
            treasury_address=settings.treasury_address,
            chain_id=settings.avalanche_chain_id,
            timeout=settings.payment_rpc_timeout_seconds,
        )
    msg = f"Unsupported payment mode: {mode}"
    raise ValueError(msg)


# Module-level singleton
_verifier: PaymentVerifier | None = None


def get_payment_verifier() -> PaymentVerifier:
    """Get or create the payment verifier singleton."""
    global _verifier  # noqa: PLW0603
    if _verifier is None:
        _verifier = _create_verifier()
    return _verifier


def reset_payment_verifier() -> None:
    """Reset the verifier singleton (for testing)."""
    global _verifier  # noqa: PLW0603
    _verifier = None
