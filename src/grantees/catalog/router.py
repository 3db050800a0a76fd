"""Catalog endpoints: grants and builder opportunities. Public, read-only."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, Query

from grantees.catalog.data import GRANTS, OPPORTUNITIES
from grantees.catalog.filters import (
    DEFAULT_GRANT_STATUSES,
    GrantFilter,
    OpportunityFilter,
    category_counts,
    filter_grants,
    filter_opportunities,
)
from grantees.catalog.models import NICHE_LABELS, Grant, Opportunity
from grantees.catalog.schemas import CategoryResponse, GrantListResponse, OpportunityListResponse

router = APIRouter(prefix="/api/v1", tags=["Catalog"])


@router.get("/grants", response_model=GrantListResponse)
async def list_grants(
    search: str | None = Query(None, max_length=200),
    ecosystem: list[str] = Query(default=[]),
    niche: list[str] = Query(default=[]),
    status: list[str] = Query(default=list(DEFAULT_GRANT_STATUSES)),
) -> GrantListResponse:
    """Filter the grant directory. Repeat a parameter to select several values."""
    criteria = GrantFilter(search=search, ecosystems=ecosystem, niches=niche, statuses=status)
    grants = filter_grants(GRANTS, criteria)
    return GrantListResponse(grants=grants, total=len(grants), active_filters=criteria.active_filter_count)


@router.get("/grants/categories", response_model=list[CategoryResponse])
async def list_grant_categories() -> list[CategoryResponse]:
    """Open grant counts per builder niche."""
    return [
        CategoryResponse(niche=niche, label=NICHE_LABELS[niche], count=count)
        for niche, count in category_counts(GRANTS).items()
    ]


@router.get("/grants/{grant_id}", response_model=Grant)
async def get_grant(grant_id: str) -> Grant:
    for grant in GRANTS:
        if grant.id == grant_id:
            return grant
    raise HTTPException(status_code=404, detail="Grant not found")


@router.get("/opportunities", response_model=OpportunityListResponse)
async def list_opportunities(
    search: str | None = Query(None, max_length=200),
    type: list[str] = Query(default=[]),  # noqa: A002
    ecosystem: list[str] = Query(default=[]),
    remote_only: bool = Query(False),
) -> OpportunityListResponse:
    """Filter hackathons, fellowships, accelerators, residencies and conferences."""
    criteria = OpportunityFilter(search=search, types=type, ecosystems=ecosystem, remote_only=remote_only)
    opportunities = filter_opportunities(OPPORTUNITIES, criteria)
    return OpportunityListResponse(opportunities=opportunities, total=len(opportunities))


@router.get("/opportunities/{opportunity_id}", response_model=Opportunity)
async def get_opportunity(opportunity_id: str) -> Opportunity:
    for opportunity in OPPORTUNITIES:
        if opportunity.id == opportunity_id:
            return opportunity
    raise HTTPException(status_code=404, detail="Opportunity not found")
