"""Static catalog entries.

The directory ships a curated, read-only list; there is no ingestion pipeline.
"""

from __future__ import annotations

from datetime import date

from grantees.catalog.models import Grant, Opportunity

GRANTS: tuple[Grant, ...] = (
    Grant(
        id="avalanche-retro9000",
        name="Retro9000",
        organization="Avalanche Foundation",
        description="Retroactive funding for builders deploying L1s and tooling on Avalanche.",
        ecosystem="avalanche",
        type="dev-grant",
        focus_areas=["infra", "defi"],
        eligibility_rules=["Project deployed on an Avalanche L1 or the C-Chain", "Open-source repository"],
        funding_min=5_000,
        funding_max=100_000,
        deadline=None,
        application_url="https://retro9000.avax.network",
        status="open",
        project_maturity_required=["mvp", "live", "scaling"],
    ),
    Grant(
        id="ethereum-esp-small-grants",
        name="Ecosystem Support Program: Small Grants",
        organization="Ethereum Foundation",
        description="Small grants for open-source tooling, research and community work that strengthens Ethereum.",
        ecosystem="ethereum",
        type="microgrant",
        focus_areas=["public-goods", "infra"],
        eligibility_rules=["Work must be open source", "No token launch required"],
        funding_min=1_000,
        funding_max=30_000,
        deadline=None,
        application_url="https://esp.ethereum.foundation/applicants",
        status="open",
    ),
    Grant(
        id="optimism-retro-funding",
        name="Retro Funding",
        organization="Optimism Collective",
        description="Rewards projects that have already delivered impact to the Superchain.",
        ecosystem="optimism",
        type="dao-funding",
        focus_areas=["public-goods", "dao-tooling", "infra"],
        eligibility_rules=["Demonstrated onchain impact", "Registered project attestation"],
        funding_min=10_000,
        funding_max=500_000,
        deadline=date(2026, 12, 15),
        application_url="https://retrofunding.optimism.io",
        status="upcoming",
        project_maturity_required=["live", "scaling"],
    ),
    Grant(
        id="solana-foundation-grants",
        name="Solana Foundation Grants",
        organization="Solana Foundation",
        description="Milestone-based grants for public goods, developer tooling and consumer apps on Solana.",
        ecosystem="solana",
        type="dev-grant",
        focus_areas=["infra", "social", "gaming"],
        eligibility_rules=["Milestone plan with deliverables", "Public code repository"],
        funding_min=5_000,
        funding_max=250_000,
        deadline=None,
        application_url="https://solana.org/grants",
        status="open",
    ),
    Grant(
        id="polygon-community-grants",
        name="Community Grants Program",
        organization="Polygon Labs",
        description="Community-allocated grants for applications building on Polygon PoS and the AggLayer.",
        ecosystem="polygon",
        type="community",
        focus_areas=["defi", "nft", "gaming", "enterprise"],
        eligibility_rules=["Deployed or deploying on Polygon"],
        funding_min=5_000,
        funding_max=100_000,
        deadline=date(2026, 3, 31),
        application_url="https://polygon.technology/grants",
        status="closed",
    ),
    Grant(
        id="celo-prezenti",
        name="Prezenti Grants",
        organization="Celo Foundation",
        description="Funding for mobile-first financial tools and regenerative finance on Celo.",
        ecosystem="celo",
        type="microgrant",
        focus_areas=["fintech", "public-goods"],
        eligibility_rules=["Mobile-first product", "Focus on emerging markets"],
        funding_min=2_500,
        funding_max=25_000,
        deadline=None,
        application_url="https://celo.org/grants",
        status="open",
        region=["Africa", "LATAM", "Southeast Asia"],
        project_maturity_required=["idea", "mvp"],
    ),
    Grant(
        id="near-ai-research",
        name="AI Research Grants",
        organization="NEAR Foundation",
        description="Research funding at the intersection of user-owned AI and blockchain infrastructure.",
        ecosystem="near",
        type="research",
        focus_areas=["ai-crypto", "infra"],
        eligibility_rules=["Research proposal with published outputs"],
        funding_min=10_000,
        funding_max=150_000,
        deadline=date(2026, 11, 30),
        application_url="https://near.org/grants",
        status="open",
    ),
    Grant(
        id="arbitrum-questbook",
        name="Domain Allocator Grants",
        organization="Arbitrum DAO",
        description="DAO-run domain allocators funding developer tooling, gaming and education on Arbitrum.",
        ecosystem="arbitrum",
        type="dao-funding",
        focus_areas=["gaming", "dao-tooling", "defi"],
        eligibility_rules=["Proposal reviewed by a domain allocator"],
        funding_min=5_000,
        funding_max=50_000,
        deadline=None,
        application_url="https://arbitrum.questbook.app",
        status="open",
    ),
)

OPPORTUNITIES: tuple[Opportunity, ...] = (
    Opportunity(
        id="ethglobal-online",
        name="ETHGlobal Online",
        organization="ETHGlobal",
        description="A month-long online hackathon with sponsor prizes across the Ethereum ecosystem.",
        opportunity_type="hackathon",
        ecosystem="ethereum",
        focus_areas=["defi", "infra", "social"],
        eligibility_rules=["Teams of up to 5"],
        funding_min=0,
        funding_max=10_000,
        deadline=date(2026, 11, 1),
        is_remote=True,
        external_application_url="https://ethglobal.com/events",
    ),
    Opportunity(
        id="avalanche-team1-fellowship",
        name="Team1 Builder Fellowship",
        organization="Avalanche Team1",
        description="A paid fellowship for builders shipping consumer apps on Avalanche.",
        opportunity_type="fellowship",
        ecosystem="avalanche",
        focus_areas=["gaming", "social"],
        eligibility_rules=["Full-time commitment for 12 weeks"],
        funding_min=5_000,
        funding_max=15_000,
        is_remote=True,
        external_application_url="https://team1.network",
    ),
    Opportunity(
        id="alliance-dao",
        name="Alliance Accelerator",
        organization="Alliance DAO",
        description="Crypto-native accelerator with mentorship, investor access and demo day.",
        opportunity_type="accelerator",
        ecosystem="other",
        focus_areas=["defi", "infra", "ai-crypto"],
        eligibility_rules=["Founding team working full time"],
        funding_min=250_000,
        funding_max=500_000,
        event_location="New York, USA",
        equity_required=True,
        external_application_url="https://alliance.xyz",
    ),
    Opportunity(
        id="zuzalu-residency",
        name="Builder Residency",
        organization="Zuzalu",
        description="A pop-up residency for builders working on public goods and coordination tools.",
        opportunity_type="residency",
        ecosystem="ethereum",
        focus_areas=["public-goods", "dao-tooling"],
        eligibility_rules=["Application and short interview"],
        event_location="Chiang Mai, Thailand",
        residency_duration="4 weeks",
        travel_coverage=True,
        visa_support_provided=True,
        external_application_url="https://zuzalu.city",
    ),
    Opportunity(
        id="breakpoint",
        name="Breakpoint Scholars",
        organization="Solana Foundation",
        description="Conference scholarships with travel coverage for student and early-career builders.",
        opportunity_type="conference",
        ecosystem="solana",
        focus_areas=["infra", "fintech"],
        eligibility_rules=["Students or builders with under two years of experience"],
        event_location="Abu Dhabi, UAE",
        event_start_date=date(2026, 12, 11),
        travel_coverage=True,
        status="upcoming",
        external_application_url="https://solana.com/breakpoint",
    ),
    Opportunity(
        id="polkadot-blockchain-academy",
        name="Polkadot Blockchain Academy",
        organization="Web3 Foundation",
        description="An intensive program on Substrate and protocol engineering with full scholarships.",
        opportunity_type="fellowship",
        ecosystem="polkadot",
        focus_areas=["infra"],
        eligibility_rules=["Strong Rust background"],
        event_location="Lucerne, Switzerland",
        travel_coverage=True,
        visa_support_provided=True,
        status="closed",
        external_application_url="https://polkadot.academy",
    ),
)
