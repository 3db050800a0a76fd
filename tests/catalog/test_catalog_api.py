"""Tests for the public catalog endpoints."""

from __future__ import annotations

from httpx import AsyncClient


class TestGrantsApi:
    async def test_list_defaults_to_open(self, client: AsyncClient):
        response = await client.get("/api/v1/grants")
        assert response.status_code == 200
        data = response.json()
        assert data["total"] == len(data["grants"])
        assert data["active_filters"] == 0
        assert {g["status"] for g in data["grants"]} == {"open"}

    async def test_repeated_query_params(self, client: AsyncClient):
        response = await client.get("/api/v1/grants", params=[("ecosystem", "solana"), ("ecosystem", "celo")])
        ids = {g["id"] for g in response.json()["grants"]}
        assert ids == {"solana-foundation-grants", "celo-prezenti"}

    async def test_status_override(self, client: AsyncClient):
        response = await client.get("/api/v1/grants", params={"status": "closed"})
        assert [g["id"] for g in response.json()["grants"]] == ["polygon-community-grants"]

    async def test_search(self, client: AsyncClient):
        response = await client.get("/api/v1/grants", params={"search": "retro"})
        assert {g["id"] for g in response.json()["grants"]} == {"avalanche-retro9000"}

    async def test_rolling_deadline_is_null(self, client: AsyncClient):
        response = await client.get("/api/v1/grants/avalanche-retro9000")
        assert response.status_code == 200
        assert response.json()["deadline"] is None

    async def test_grant_detail_not_found(self, client: AsyncClient):
        response = await client.get("/api/v1/grants/nope")
        assert response.status_code == 404
        assert response.json() == {"detail": "Grant not found"}

    async def test_categories(self, client: AsyncClient):
        response = await client.get("/api/v1/grants/categories")
        assert response.status_code == 200
        by_niche = {c["niche"]: c for c in response.json()}
        assert by_niche["defi"]["label"] == "DeFi"
        assert by_niche["enterprise"]["count"] == 0


class TestOpportunitiesApi:
    async def test_list_all(self, client: AsyncClient):
        response = await client.get("/api/v1/opportunities")
        assert response.status_code == 200
        assert response.json()["total"] == 6

    async def test_type_and_remote(self, client: AsyncClient):
        response = await client.get("/api/v1/opportunities", params={"type": "hackathon", "remote_only": "true"})
        assert [o["id"] for o in response.json()["opportunities"]] == ["ethglobal-online"]

    async def test_detail(self, client: AsyncClient):
        response = await client.get("/api/v1/opportunities/zuzalu-residency")
        assert response.status_code == 200
        data = response.json()
        assert data["opportunity_type"] == "residency"
        assert data["visa_support_provided"] is True

    async def test_detail_not_found(self, client: AsyncClient):
        response = await client.get("/api/v1/opportunities/nope")
        assert response.status_code == 404
        assert response.json() == {"detail": "Opportunity not found"}
