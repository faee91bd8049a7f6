"""
Restaurant API — Payment schemas
"""
from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, Field

from restaurant_api.models.order import PaymentStatus


class PaymentProcessRequest(BaseModel):
    transaction_id: str | None = Field(None, max_length=100)
    status: PaymentStatus


class PaymentResponse(BaseModel):
    id: int
    order_id: int
    amount: Decimal
    payment_method: str
    transaction_id: str | None
    status: PaymentStatus
    created_at: datetime | None
    customer_name: str
    customer_phone: str


class DashboardResponse(BaseModel):
    totalOrders: int
    totalRevenue: Decimal
    pendingOrders: int
    menuItems: int
    lowStock: int
    todayOrders: int
