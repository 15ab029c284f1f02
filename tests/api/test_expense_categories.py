"""Tests for expense category endpoints."""

import datetime as dt

import pytest

TODAY = dt.date.today().isoformat()


@pytest.fixture
async def tolls_id(async_client) -> str:
    response = await async_client.post("/api/expense-categories", json={"name": "Tolls"})
    assert response.status_code == 201
    return response.json()["id"]


async def _book_expense(async_client, category: str) -> str:
    vehicle = await async_client.post("/api/vehicles", json={"vehicle_number": "DXB-C-1"})
    response = await async_client.post(
        "/api/vehicle-transactions",
        json={
            "vehicle_id": vehicle.json()["id"],
            "transaction_type": "expense",
            "amount": "40",
            "date": TODAY,
            "category": category,
        },
    )
    assert response.status_code == 201
    return response.json()["id"]


class TestExpenseCategories:
    async def test_predefined_listed_first(self, async_client, tolls_id):
        data = (await async_client.get("/api/expense-categories")).json()

        assert len(data) == 8
        assert [c["is_custom"] for c in data] == [False] * 7 + [True]
        assert data[-1] == {
            "id": tolls_id,
            "name": "Tolls",
            "is_custom": True,
            "created_at": data[-1]["created_at"],
        }

    async def test_get_and_rename(self, async_client, tolls_id):
        response = await async_client.put(f"/api/expense-categories/{tolls_id}", json={"name": "Road Tolls"})

        assert response.status_code == 200
        assert (await async_client.get(f"/api/expense-categories/{tolls_id}")).json()["name"] == "Road Tolls"

    async def test_duplicate_name_any_case(self, async_client):
        response = await async_client.post("/api/expense-categories", json={"name": "fuel"})

        assert response.status_code == 400
        assert response.json()["error_code"] == "DUPLICATE_KEY"
        assert response.json()["message"] == 'Expense Category name "fuel" already exists'

    async def test_blank_name(self, async_client):
        response = await async_client.post("/api/expense-categories", json={"name": " "})

        assert response.status_code == 400
        assert response.json()["error_code"] == "VALIDATION_ERROR"

    async def test_predefined_cannot_be_deleted(self, async_client):
        response = await async_client.delete("/api/expense-categories/cat_fuel")

        assert response.status_code == 409
        assert response.json()["error_code"] == "BLOCKED_DELETE"
        assert response.json()["message"] == 'Cannot delete predefined Expense Category "Fuel"'

    async def test_used_category_cannot_be_deleted(self, async_client, tolls_id):
        transaction_id = await _book_expense(async_client, "Tolls")

        response = await async_client.delete(f"/api/expense-categories/{tolls_id}")

        assert response.status_code == 409
        assert response.json()["message"] == (
            f"Cannot delete Expense Category as it is referenced in Vehicle Transaction {transaction_id}"
        )
        assert (await async_client.get(f"/api/expense-categories/{tolls_id}")).status_code == 200

    async def test_unused_category_deleted(self, async_client, tolls_id):
        assert (await async_client.delete(f"/api/expense-categories/{tolls_id}")).status_code == 204
        assert (await async_client.get(f"/api/expense-categories/{tolls_id}")).status_code == 404
