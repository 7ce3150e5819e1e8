"""Tests for property CRUD endpoints."""

import uuid

import pytest
from httpx import AsyncClient

pytestmark = pytest.mark.asyncio


class TestCreateProperty:
    async def test_create_success(self, client: AsyncClient) -> None:
        response = await client.post(
            "/api/v1/properties",
            json={"name": "Sea View Studio", "location": "Porto", "description": "Top floor"},
        )
        assert response.status_code == 201
        data = response.json()
        assert data["name"] == "Sea View Studio"
        assert data["location"] == "Porto"
        assert "id" in data
        assert "created_at" in data

    async def test_create_minimal(self, client: AsyncClient) -> None:
        response = await client.post("/api/v1/properties", json={"name": "Annex"})
        assert response.status_code == 201
        assert response.json()["location"] is None

    async def test_create_missing_name(self, client: AsyncClient) -> None:
        response = await client.post("/api/v1/properties", json={"location": "Porto"})
        assert response.status_code == 422

    async def test_create_empty_name(self, client: AsyncClient) -> None:
        response = await client.post("/api/v1/properties", json={"name": ""})
        assert response.status_code == 422


class TestListProperties:
    async def test_list(self, client: AsyncClient, test_property: dict, other_property: dict) -> None:
        response = await client.get("/api/v1/properties")
        assert response.status_code == 200
        data = response.json()
        assert data["total"] == 2
        assert {p["name"] for p in data["items"]} == {"Harbour Loft", "Pine Cabin"}

    async def test_list_pagination(self, client: AsyncClient, test_property: dict, other_property: dict) -> None:
        response = await client.get("/api/v1/properties", params={"skip": 0, "limit": 1})
        data = response.json()
        assert data["total"] == 2
        assert len(data["items"]) == 1

    async def test_list_empty(self, client: AsyncClient) -> None:
        response = await client.get("/api/v1/properties")
        assert response.json() == {"items": [], "total": 0}


class TestGetProperty:
    async def test_get(self, client: AsyncClient, test_property: dict) -> None:
        response = await client.get(f"/api/v1/properties/{test_property['id']}")
        assert response.status_code == 200
        assert response.json()["name"] == "Harbour Loft"

    async def test_get_not_found(self, client: AsyncClient) -> None:
        response = await client.get(f"/api/v1/properties/{uuid.uuid4()}")
        assert response.status_code == 404
        assert response.json()["detail"] == "Property not found"


class TestDeleteProperty:
    async def test_delete_removes_calendar(
        self,
        client: AsyncClient,
        test_property: dict,
        create_booking,
    ) -> None:
        pid = test_property["id"]
        booking = await create_booking(pid, "2024-03-10", "2024-03-12")
        blocked = await client.post(
            "/api/v1/blocked-ranges",
            json={"property_id": pid, "start_date": "2024-03-20", "end_date": "2024-03-21"},
        )
        assert blocked.status_code == 201

        response = await client.delete(f"/api/v1/properties/{pid}")
        assert response.status_code == 200
        assert response.json()["message"] == "Property deleted"

        assert (await client.get(f"/api/v1/properties/{pid}")).status_code == 404
        assert (await client.get(f"/api/v1/bookings/{booking['id']}")).status_code == 404
        assert (await client.get("/api/v1/blocked-ranges")).json()["total"] == 0

    async def test_delete_not_found(self, client: AsyncClient) -> None:
        response = await client.delete(f"/api/v1/properties/{uuid.uuid4()}")
        assert response.status_code == 404


class TestHealth:
    async def test_health(self, client: AsyncClient) -> None:
        response = await client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    async def test_root(self, client: AsyncClient) -> None:
        response = await client.get("/")
        assert response.json()["docs"] == "/docs"
