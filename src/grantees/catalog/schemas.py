"""Catalog response models."""

from __future__ import annotations

from pydantic import BaseModel

from grantees.catalog.models import Grant, Opportunity


class GrantListResponse(BaseModel):
    grants: list[Grant]
    total: int
    active_filters: int


class CategoryResponse(BaseModel):
    niche: str
    label: str
    count: int


class OpportunityListResponse(BaseModel):
    opportunities: list[Opportunity]
    total: int
