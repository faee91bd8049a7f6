"""
Restaurant API — Dashboard counters
"""
from datetime import datetime, time, timezone
from decimal import Decimal

from fastapi import APIRouter, Depends
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from restaurant_api.api.deps import require_roles
from restaurant_api.db.database import get_db
from restaurant_api.models import InventoryItem, MenuItem, Order, OrderStatus, PaymentStatus
from restaurant_api.schemas.payment import DashboardResponse

router = APIRouter(prefix="/api/dashboard", tags=["dashboard"])


@router.get("", response_model=DashboardResponse, dependencies=[Depends(require_roles())])
async def dashboard(db: AsyncSession = Depends(get_db)):
    start_of_day = datetime.combine(datetime.now(tz=timezone.utc).date(), time.min, tzinfo=timezone.utc)

    total_orders = await db.scalar(select(func.count(Order.id)))
    revenue = await db.scalar(
        select(func.sum(Order.total_amount)).where(Order.payment_status == PaymentStatus.COMPLETED)
    )
    pending = await db.scalar(select(func.count(Order.id)).where(Order.status == OrderStatus.PENDING))
    menu_items = await db.scalar(select(func.count(MenuItem.id)).where(MenuItem.available.is_(True)))
    low_stock = await db.scalar(
        select(func.count(InventoryItem.id)).where(InventoryItem.quantity <= InventoryItem.min_quantity)
    )
    today = await db.scalar(select(func.count(Order.id)).where(Order.created_at >= start_of_day))

    return DashboardResponse(
        totalOrders=total_orders or 0,
        totalRevenue=Decimal(revenue or 0),
        pendingOrders=pending or 0,
        menuItems=menu_items or 0,
        lowStock=low_stock or 0,
        todayOrders=today or 0,
    )
