"""
Staff-side order views and status transitions.
"""
from decimal import Decimal

import pytest

from conftest import pizza_order


async def _place(client, **overrides) -> int:
    r = await client.post("/api/orders", json=pizza_order(**overrides))
    assert r.status_code == 201, r.text
    return r.json()["orderId"]


@pytest.mark.asyncio
async def test_list_orders_newest_first_with_item_summary(client, staff_headers):
    first = await _place(client)
    second = await _place(
        client,
        items=[
            {"menu_item_id": 2, "quantity": 1, "price": "150"},
            {"menu_item_id": 4, "quantity": 2, "price": "80"},
        ],
        total_amount="310",
    )

    r = await client.get("/api/orders", headers=staff_headers)

    assert r.status_code == 200
    orders = r.json()
    assert [o["id"] for o in orders] == [second, first]
    assert orders[0]["items"] == "Caesar Salad (1), Mango Lassi (2)"
    assert orders[1]["items"] == "Margherita Pizza (2)"
    assert orders[1]["status"] == "pending"
    assert orders[1]["payment_status"] == "pending"


@pytest.mark.asyncio
async def test_order_detail_includes_items_and_payment(client, staff_headers):
    order_id = await _place(client, payment_method="cash", customer_email="a@example.com")

    r = await client.get(f"/api/orders/{order_id}", headers=staff_headers)

    assert r.status_code == 200
    body = r.json()
    assert body["customer_email"] == "a@example.com"
    assert Decimal(body["total_amount"]) == Decimal("500")
    assert [(i["menu_item_id"], i["quantity"], Decimal(i["price"])) for i in body["items"]] == [
        (1, 2, Decimal("250"))
    ]
    assert body["payment"]["status"] == "pending"
    assert body["payment"]["payment_method"] == "cash"
    assert Decimal(body["payment"]["amount"]) == Decimal("500")


@pytest.mark.asyncio
async def test_missing_order_is_404(client, staff_headers):
    r = await client.get("/api/orders/999", headers=staff_headers)
    assert r.status_code == 404
    r = await client.put("/api/orders/999/status", json={"status": "preparing"}, headers=staff_headers)
    assert r.status_code == 404


@pytest.mark.asyncio
async def test_order_walks_through_kitchen_states(client, staff_headers):
    order_id = await _place(client)

    for status in ("preparing", "ready", "delivered"):
        r = await client.put(f"/api/orders/{order_id}/status", json={"status": status}, headers=staff_headers)
        assert r.status_code == 200, (status, r.text)

    detail = (await client.get(f"/api/orders/{order_id}", headers=staff_headers)).json()
    assert detail["status"] == "delivered"

    r = await client.put(f"/api/orders/{order_id}/status", json={"status": "cancelled"}, headers=staff_headers)
    assert r.status_code == 400


@pytest.mark.asyncio
@pytest.mark.parametrize("target", ["ready", "delivered", "pending"])
async def test_pending_order_cannot_skip_ahead(client, staff_headers, target):
    order_id = await _place(client)

    r = await client.put(f"/api/orders/{order_id}/status", json={"status": target}, headers=staff_headers)

    assert r.status_code == 400
    assert "Cannot move order from 'pending'" in r.json()["error"]


@pytest.mark.asyncio
async def test_cancelled_order_is_terminal(client, staff_headers):
    order_id = await _place(client)
    r = await client.put(f"/api/orders/{order_id}/status", json={"status": "cancelled"}, headers=staff_headers)
    assert r.status_code == 200

    r = await client.put(f"/api/orders/{order_id}/status", json={"status": "preparing"}, headers=staff_headers)
    assert r.status_code == 400


@pytest.mark.asyncio
async def test_unknown_status_is_rejected(client, staff_headers):
    order_id = await _place(client)
    r = await client.put(f"/api/orders/{order_id}/status", json={"status": "eaten"}, headers=staff_headers)
    assert r.status_code == 400
    assert "status" in r.json()["error"]
