"""Tests for customer, vendor, employee and payslip endpoints."""

import pytest


@pytest.fixture
async def employee_id(async_client) -> str:
    response = await async_client.post(
        "/api/employees",
        json={"name": "Omar", "role": "Driver", "salary": "3000", "overtime_rate": "25"},
    )
    assert response.status_code == 201
    return response.json()["id"]


class TestDirectory:
    async def test_customer_crud(self, async_client):
        customer_id = (await async_client.post("/api/customers", json={"name": "Sara"})).json()["id"]

        response = await async_client.put(f"/api/customers/{customer_id}", json={"email": "s@example.com"})
        assert response.json()["name"] == "Sara"
        assert response.json()["email"] == "s@example.com"

        assert (await async_client.delete(f"/api/customers/{customer_id}")).status_code == 204
        assert (await async_client.get(f"/api/customers/{customer_id}")).status_code == 404

    async def test_vendor_on_purchase_order(self, async_client):
        vendor_id = (await async_client.post("/api/vendors", json={"name": "Fuel Co"})).json()["id"]
        await async_client.post(
            "/api/purchase-orders",
            json={"number": "PO-1", "date": "2025-03-01", "vendor_id": vendor_id},
        )

        response = await async_client.delete(f"/api/vendors/{vendor_id}")

        assert response.status_code == 409
        assert response.json()["message"] == "Cannot delete Vendor as it is referenced in Purchase Order PO-1"

    async def test_missing_name(self, async_client):
        assert (await async_client.post("/api/vendors", json={})).status_code == 422


class TestPayslips:
    async def test_create_computes_pay(self, async_client, employee_id):
        response = await async_client.post(
            "/api/payslips",
            json={
                "employee_id": employee_id,
                "month": "2025-02",
                "base_salary": "3000",
                "overtime_hours": "10",
                "overtime_rate": "25",
                "deductions": "100",
                "net_pay": "1",
            },
        )

        assert response.status_code == 201
        assert response.json()["overtime_pay"] == 250.0
        assert response.json()["net_pay"] == 3150.0

    async def test_by_month(self, async_client, employee_id):
        for month in ("2025-01", "2025-02"):
            await async_client.post("/api/payslips", json={"employee_id": employee_id, "month": month})

        rows = (await async_client.get("/api/payslips/month/2025-02")).json()

        assert [p["month"] for p in rows] == ["2025-02"]

    async def test_bad_month(self, async_client):
        response = await async_client.get("/api/payslips/month/2025-13")

        assert response.status_code == 400
        assert response.json()["error_code"] == "VALIDATION_ERROR"

    async def test_unknown_employee(self, async_client):
        response = await async_client.post("/api/payslips", json={"employee_id": "ghost", "month": "2025-02"})

        assert response.status_code == 400
        assert response.json()["error_code"] == "MISSING_REFERENCE"

    async def test_employee_with_payslip_not_deleted(self, async_client, employee_id):
        await async_client.post("/api/payslips", json={"employee_id": employee_id, "month": "2025-02"})

        response = await async_client.delete(f"/api/employees/{employee_id}")

        assert response.status_code == 409
        assert "Payslip 2025-02" in response.json()["message"]
