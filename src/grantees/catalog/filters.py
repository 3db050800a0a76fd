"""Catalog filtering.

Empty filter collections impose no constraint. Search is a case-insensitive
substring match over name, organization and description.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from grantees.catalog.models import NICHES, Grant, Opportunity

DEFAULT_GRANT_STATUSES: tuple[str, ...] = ("open",)


def _matches_search(query: str | None, *fields: str) -> bool:
    if not query:
        return True
    needle = query.lower()
    return any(needle in value.lower() for value in fields)


@dataclass
class GrantFilter:
    search: str | None = None
    ecosystems: Sequence[str] = ()
    niches: Sequence[str] = ()
    statuses: Sequence[str] = DEFAULT_GRANT_STATUSES

    def matches(self, grant: Grant) -> bool:
        if not _matches_search(self.search, grant.name, grant.organization, grant.description):
            return False
        if self.ecosystems and grant.ecosystem not in self.ecosystems:
            return False
        if self.niches and not any(area in self.niches for area in grant.focus_areas):
            return False
        if self.statuses and grant.status not in self.statuses:
            return False
        return True

    @property
    def active_filter_count(self) -> int:
        """Selected filters, not counting the default open-only status."""
        count = len(self.ecosystems) + len(self.niches)
        if list(self.statuses) != list(DEFAULT_GRANT_STATUSES):
            count += len(self.statuses)
        return count


@dataclass
class OpportunityFilter:
    search: str | None = None
    types: Sequence[str] = ()
    ecosystems: Sequence[str] = ()
    remote_only: bool = False

    def matches(self, opportunity: Opportunity) -> bool:
        if not _matches_search(self.search, opportunity.name, opportunity.description, opportunity.organization):
            return False
        if self.types and opportunity.opportunity_type not in self.types:
            return False
        if self.ecosystems and opportunity.ecosystem not in self.ecosystems:
            return False
        if self.remote_only and not opportunity.is_remote:
            return False
        return True


def filter_grants(grants: Iterable[Grant], criteria: GrantFilter) -> list[Grant]:
    """Grants matching every criterion, in catalog order."""
    return [g for g in grants if criteria.matches(g)]


def filter_opportunities(opportunities: Iterable[Opportunity], criteria: OpportunityFilter) -> list[Opportunity]:
    """Opportunities matching every criterion, in catalog order."""
    return [o for o in opportunities if criteria.matches(o)]


def category_counts(grants: Iterable[Grant]) -> dict[str, int]:
    """Open grants per niche, for every niche (zero included)."""
    counts = dict.fromkeys(NICHES, 0)
    for grant in grants:
        if grant.status != "open":
            continue
        for niche in set(grant.focus_areas):
            counts[niche] += 1
    return counts
