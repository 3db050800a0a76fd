"""Catalog types: grants, builder opportunities, and their vocabularies."""

from __future__ import annotations

from datetime import date
from typing import Literal, get_args

from pydantic import BaseModel, Field

GrantStatus = Literal["open", "upcoming", "closed"]
GrantType = Literal["microgrant", "dev-grant", "dao-funding", "accelerator", "research", "community"]
Ecosystem = Literal[
    "ethereum",
    "avalanche",
    "solana",
    "polkadot",
    "polygon",
    "arbitrum",
    "optimism",
    "base",
    "celo",
    "near",
    "cosmos",
    "other",
]
BuilderNiche = Literal[
    "defi",
    "fintech",
    "gaming",
    "infra",
    "ai-crypto",
    "social",
    "public-goods",
    "enterprise",
    "nft",
    "dao-tooling",
]
ProjectMaturity = Literal["idea", "mvp", "live", "scaling"]
BuilderRole = Literal["solo-dev", "founder", "dao-member", "team"]
OpportunityType = Literal["hackathon", "fellowship", "accelerator", "residency", "conference"]

ECOSYSTEMS: tuple[str, ...] = get_args(Ecosystem)
NICHES: tuple[str, ...] = get_args(BuilderNiche)
MATURITY_LEVELS: tuple[str, ...] = get_args(ProjectMaturity)
ROLES: tuple[str, ...] = get_args(BuilderRole)
GRANT_STATUSES: tuple[str, ...] = get_args(GrantStatus)
OPPORTUNITY_TYPES: tuple[str, ...] = get_args(OpportunityType)

ECOSYSTEM_LABELS: dict[str, str] = {
    "ethereum": "Ethereum",
    "avalanche": "Avalanche",
    "solana": "Solana",
    "polkadot": "Polkadot",
    "polygon": "Polygon",
    "arbitrum": "Arbitrum",
    "optimism": "Optimism",
    "base": "Base",
    "celo": "Celo",
    "near": "NEAR",
    "cosmos": "Cosmos",
    "other": "Other",
}

NICHE_LABELS: dict[str, str] = {
    "defi": "DeFi",
    "fintech": "Fintech",
    "gaming": "Gaming",
    "infra": "Infrastructure",
    "ai-crypto": "AI x Crypto",
    "social": "Social",
    "public-goods": "Public Goods",
    "enterprise": "Enterprise",
    "nft": "NFTs",
    "dao-tooling": "DAO Tooling",
}

OPPORTUNITY_TYPE_LABELS: dict[str, str] = {
    "hackathon": "Hackathon",
    "fellowship": "Fellowship",
    "accelerator": "Accelerator",
    "residency": "Residency",
    "conference": "Conference",
}


class Grant(BaseModel):
    """A funding program listing."""

    id: str
    name: str
    organization: str
    description: str
    ecosystem: Ecosystem
    type: GrantType
    focus_areas: list[BuilderNiche] = Field(default_factory=list)
    eligibility_rules: list[str] = Field(default_factory=list)
    funding_min: int
    funding_max: int
    deadline: date | None = None  # None = rolling
    application_url: str
    status: GrantStatus
    region: list[str] | None = None
    project_maturity_required: list[ProjectMaturity] | None = None


class Opportunity(BaseModel):
    """A builder program: hackathon, fellowship, accelerator, residency, conference."""

    id: str
    name: str
    organization: str
    description: str
    opportunity_type: OpportunityType
    ecosystem: Ecosystem
    focus_areas: list[BuilderNiche] = Field(default_factory=list)
    eligibility_rules: list[str] = Field(default_factory=list)
    funding_min: int = 0
    funding_max: int = 0
    deadline: date | None = None
    status: GrantStatus = "open"
    is_remote: bool = False
    event_location: str | None = None
    event_start_date: date | None = None
    travel_coverage: bool = False
    visa_support_provided: bool = False
    residency_duration: str | None = None
    equity_required: bool = False
    external_application_url: str
