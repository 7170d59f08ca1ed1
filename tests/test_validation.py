"""Tests for the validation error shape and validate-before-write."""
import pytest
from httpx import AsyncClient


@pytest.mark.asyncio
async def test_validation_error_shape(admin_client: AsyncClient):
    response = await admin_client.post(
        "/api/buildings",
        json={"name": "X", "address": "Y", "totalFlats": -1, "monthlyFee": "10.00"},
    )
    assert response.status_code == 400
    body = response.json()
    assert body["message"] == "Validation failed"
    assert body["errors"] == [
        {"field": "totalFlats", "message": body["errors"][0]["message"]}
    ]
    assert body["errors"][0]["message"]


@pytest.mark.asyncio
async def test_every_invalid_field_reported(admin_client: AsyncClient):
    response = await admin_client.post("/api/buildings", json={"totalFlats": "many"})
    fields = {e["field"] for e in response.json()["errors"]}
    assert fields == {"name", "address", "totalFlats", "monthlyFee"}


@pytest.mark.asyncio
async def test_money_message_is_readable(admin_client: AsyncClient):
    response = await admin_client.post(
        "/api/buildings",
        json={"name": "X", "address": "Y", "totalFlats": 1, "monthlyFee": "-1"},
    )
    assert response.json()["errors"] == [
        {"field": "monthlyFee", "message": "must not be negative"}
    ]


@pytest.mark.asyncio
async def test_invalid_update_leaves_record_unchanged(admin_client: AsyncClient, storage):
    building = (
        await admin_client.post(
            "/api/buildings",
            json={"name": "X", "address": "Y", "totalFlats": 1, "monthlyFee": "10.00"},
        )
    ).json()

    response = await admin_client.put(
        f"/api/buildings/{building['id']}",
        json={"name": "Renamed", "monthlyFee": "not money"},
    )
    assert response.status_code == 400
    assert storage.get_building(building["id"]).name == "X"


@pytest.mark.asyncio
async def test_snake_case_input_also_accepted(admin_client: AsyncClient):
    response = await admin_client.post(
        "/api/buildings",
        json={"name": "X", "address": "Y", "total_flats": 1, "monthly_fee": "10"},
    )
    assert response.status_code == 201
    assert response.json()["totalFlats"] == 1


@pytest.mark.asyncio
async def test_malformed_json_is_400(admin_client: AsyncClient):
    response = await admin_client.post(
        "/api/buildings",
        content=b"{not json",
        headers={"Content-Type": "application/json"},
    )
    assert response.status_code == 400
    assert response.json()["message"] == "Validation failed"
