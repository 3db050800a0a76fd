"""Credit package table.

Prices are quoted off-chain in AVAX; the credit amount is what a purchase adds
to the balance.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

WEI_PER_AVAX = Decimal(10) ** 18


@dataclass(frozen=True)
class CreditPackage:
    """A purchasable bundle of credits."""

    name: str
    credits: int
    avax_price: Decimal

    @property
    def price_wei(self) -> int:
        return int(self.avax_price * WEI_PER_AVAX)

    def to_dict(self) -> dict[str, object]:
        return {"name": self.name, "credits": self.credits, "avaxPrice": float(self.avax_price)}


PACKAGES: dict[str, CreditPackage] = {
    "starter": CreditPackage("starter", 100, Decimal("0.5")),
    "pro": CreditPackage("pro", 500, Decimal("2.0")),
    "enterprise": CreditPackage("enterprise", 2000, Decimal("7.0")),
}

DEFAULT_PACKAGE = "starter"


def get_package(name: str) -> CreditPackage | None:
    """Look up a package by name. Returns None for unknown names."""
    return PACKAGES.get(name)
