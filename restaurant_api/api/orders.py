"""
Restaurant API — Order routes

POST /api/orders is public (customers check out without an account);
everything else is for staff.
"""
import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from restaurant_api.api.deps import get_notifier, require_roles
from restaurant_api.core.exceptions import (
    InsufficientInventoryError,
    OrderValidationError,
    TransactionError,
)
from restaurant_api.core.notifier import Notifier
from restaurant_api.core.permissions import STAFF_ROLES
from restaurant_api.db.database import get_db
from restaurant_api.models import MenuItem, Order, OrderItem, OrderStatus
from restaurant_api.schemas.common import MessageResponse
from restaurant_api.schemas.order import (
    OrderCreate,
    OrderCreatedResponse,
    OrderDetail,
    OrderStatusUpdate,
    OrderSummary,
)
from restaurant_api.services.order_placement import place_order

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/orders", tags=["orders"])

# ── Status transitions ────────────────────────────────────────────────────────
ALLOWED_TRANSITIONS: dict[OrderStatus, set[OrderStatus]] = {
    OrderStatus.PENDING: {OrderStatus.PREPARING, OrderStatus.CANCELLED},
    OrderStatus.PREPARING: {OrderStatus.READY, OrderStatus.CANCELLED},
    OrderStatus.READY: {OrderStatus.DELIVERED, OrderStatus.CANCELLED},
    OrderStatus.DELIVERED: set(),
    OrderStatus.CANCELLED: set(),
}


@router.post("", response_model=OrderCreatedResponse, status_code=status.HTTP_201_CREATED)
async def create_order(
    payload: OrderCreate,
    db: AsyncSession = Depends(get_db),
    notifier: Notifier = Depends(get_notifier),
):
    """Place an order: order + items + inventory deduction + pending payment, all or nothing."""
    try:
        order = await place_order(db, payload, notifier)
    except OrderValidationError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))
    except InsufficientInventoryError as exc:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(exc))
    except TransactionError as exc:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(exc))

    return OrderCreatedResponse(message="Order created successfully", orderId=order.id)


@router.get(
    "",
    response_model=list[OrderSummary],
    dependencies=[Depends(require_roles(*STAFF_ROLES))],
)
async def list_orders(db: AsyncSession = Depends(get_db)):
    """All orders, newest first, each with a one-line item summary."""
    orders = (
        await db.execute(select(Order).order_by(Order.created_at.desc(), Order.id.desc()))
    ).scalars().all()

    lines = await db.execute(
        select(OrderItem.order_id, MenuItem.name, OrderItem.quantity)
        .join(MenuItem, MenuItem.id == OrderItem.menu_item_id)
        .order_by(OrderItem.id)
    )
    summaries: dict[int, list[str]] = {}
    for order_id, name, quantity in lines:
        summaries.setdefault(order_id, []).append(f"{name} ({quantity})")

    return [
        OrderSummary(
            id=o.id,
            customer_name=o.customer_name,
            customer_phone=o.customer_phone,
            customer_email=o.customer_email,
            total_amount=o.total_amount,
            status=o.status,
            payment_status=o.payment_status,
            payment_method=o.payment_method,
            created_at=o.created_at,
            items=", ".join(summaries[o.id]) if o.id in summaries else None,
        )
        for o in orders
    ]


@router.get(
    "/{order_id}",
    response_model=OrderDetail,
    dependencies=[Depends(require_roles(*STAFF_ROLES))],
)
async def get_order(order_id: int, db: AsyncSession = Depends(get_db)):
    result = await db.execute(
        select(Order)
        .where(Order.id == order_id)
        .options(selectinload(Order.items), selectinload(Order.payment))
    )
    order = result.scalar_one_or_none()
    if order is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Order not found")
    return order


@router.put(
    "/{order_id}/status",
    response_model=MessageResponse,
    dependencies=[Depends(require_roles(*STAFF_ROLES))],
)
async def update_order_status(order_id: int, payload: OrderStatusUpdate, db: AsyncSession = Depends(get_db)):
    order = await db.get(Order, order_id)
    if order is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Order not found")

    current = order.status
    if payload.status not in ALLOWED_TRANSITIONS[current]:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Cannot move order from '{current.value}' to '{payload.status.value}'",
        )

    order.status = payload.status
    await db.commit()
    logger.info("Order %s: %s → %s", order_id, current.value, payload.status.value)
    return MessageResponse(message="Order status updated successfully")
