"""
Payment processing and dashboard counters.
"""
from decimal import Decimal

import pytest

from conftest import pizza_order, set_stock


async def _place(client, **overrides) -> int:
    r = await client.post("/api/orders", json=pizza_order(**overrides))
    assert r.status_code == 201, r.text
    return r.json()["orderId"]


@pytest.mark.asyncio
async def test_completed_payment_updates_payment_and_order(client, staff_headers):
    order_id = await _place(client, payment_method="card")

    r = await client.post(
        f"/api/payments/{order_id}/process",
        json={"transaction_id": "txn_123", "status": "completed"},
        headers=staff_headers,
    )
    assert r.status_code == 200, r.text

    detail = (await client.get(f"/api/orders/{order_id}", headers=staff_headers)).json()
    assert detail["payment_status"] == "completed"
    assert detail["payment"]["status"] == "completed"
    assert detail["payment"]["transaction_id"] == "txn_123"


@pytest.mark.asyncio
async def test_processing_needs_authentication_and_an_existing_payment(client, customer_headers):
    r = await client.post("/api/payments/1/process", json={"status": "completed"})
    assert r.status_code == 401

    r = await client.post("/api/payments/999/process", json={"status": "completed"}, headers=customer_headers)
    assert r.status_code == 404


@pytest.mark.asyncio
async def test_payment_status_must_be_known(client, customer_headers):
    order_id = await _place(client)
    r = await client.post(f"/api/payments/{order_id}/process", json={"status": "refunded"}, headers=customer_headers)
    assert r.status_code == 400


@pytest.mark.asyncio
async def test_list_payments_carries_customer_contact(client, admin_headers):
    order_id = await _place(client, customer_name="Ravi", customer_phone="98765", payment_method="upi")

    r = await client.get("/api/payments", headers=admin_headers)

    assert r.status_code == 200
    [payment] = r.json()
    assert payment["order_id"] == order_id
    assert payment["customer_name"] == "Ravi"
    assert payment["customer_phone"] == "98765"
    assert payment["payment_method"] == "upi"
    assert payment["status"] == "pending"
    assert Decimal(payment["amount"]) == Decimal("500")


@pytest.mark.asyncio
async def test_dashboard_counters(client, db, staff_headers):
    paid = await _place(client)
    await _place(client, quantity=1, total_amount="250")
    await client.post(
        f"/api/payments/{paid}/process",
        json={"transaction_id": "txn_1", "status": "completed"},
        headers=staff_headers,
    )
    await client.put(f"/api/orders/{paid}/status", json={"status": "preparing"}, headers=staff_headers)
    await set_stock(db, "Chocolate", "1")

    r = await client.get("/api/dashboard", headers=staff_headers)

    assert r.status_code == 200
    body = r.json()
    assert body["totalOrders"] == 2
    assert Decimal(body["totalRevenue"]) == Decimal("500")
    assert body["pendingOrders"] == 1
    assert body["menuItems"] == 4
    assert body["lowStock"] == 1
    assert body["todayOrders"] == 2


@pytest.mark.asyncio
async def test_dashboard_on_empty_order_book(client, customer_headers):
    r = await client.get("/api/dashboard", headers=customer_headers)

    assert r.status_code == 200
    body = r.json()
    assert body["totalOrders"] == 0
    assert Decimal(body["totalRevenue"]) == Decimal("0")
    assert body["lowStock"] == 0
