"""
Restaurant API — Order schemas
"""
from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, EmailStr, Field

from restaurant_api.models.order import OrderStatus, PaymentStatus


class OrderItemRequest(BaseModel):
    menu_item_id: int = Field(..., ge=1, examples=[1])
    quantity: int = Field(..., ge=1, examples=[2])
    price: Decimal = Field(..., ge=0, max_digits=10, decimal_places=2, examples=["250.00"])


class OrderCreate(BaseModel):
    customer_name: str = Field(..., min_length=1, max_length=100)
    customer_phone: str = Field(..., min_length=1, max_length=20)
    customer_email: EmailStr | None = None
    items: list[OrderItemRequest] = Field(..., min_length=1)
    total_amount: Decimal = Field(..., ge=0, max_digits=10, decimal_places=2)
    payment_method: str = Field("", max_length=50)


class OrderCreatedResponse(BaseModel):
    message: str
    orderId: int


class OrderStatusUpdate(BaseModel):
    status: OrderStatus


class OrderItemResponse(BaseModel):
    id: int
    menu_item_id: int
    quantity: int
    price: Decimal

    model_config = {"from_attributes": True}


class OrderPaymentResponse(BaseModel):
    id: int
    amount: Decimal
    payment_method: str
    transaction_id: str | None
    status: PaymentStatus

    model_config = {"from_attributes": True}


class OrderSummary(BaseModel):
    id: int
    customer_name: str
    customer_phone: str
    customer_email: str | None
    total_amount: Decimal
    status: OrderStatus
    payment_status: PaymentStatus
    payment_method: str | None
    created_at: datetime | None
    items: str | None  # "Margherita Pizza (2), Mango Lassi (1)"


class OrderDetail(BaseModel):
    id: int
    customer_name: str
    customer_phone: str
    customer_email: str | None
    total_amount: Decimal
    status: OrderStatus
    payment_status: PaymentStatus
    payment_method: str | None
    created_at: datetime | None
    updated_at: datetime | None
    items: list[OrderItemResponse]
    payment: OrderPaymentResponse | None

    model_config = {"from_attributes": True}
