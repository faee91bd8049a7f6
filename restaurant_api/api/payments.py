"""
Restaurant API — Payment routes
"""
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from restaurant_api.api.deps import require_roles
from restaurant_api.core.exceptions import TransactionError
from restaurant_api.core.permissions import STAFF_ROLES
from restaurant_api.db.database import get_db
from restaurant_api.models import Order, Payment
from restaurant_api.schemas.common import MessageResponse
from restaurant_api.schemas.payment import PaymentProcessRequest, PaymentResponse
from restaurant_api.services.payments import PaymentNotFoundError, process_payment

router = APIRouter(prefix="/api/payments", tags=["payments"])


@router.get(
    "",
    response_model=list[PaymentResponse],
    dependencies=[Depends(require_roles(*STAFF_ROLES))],
)
async def list_payments(db: AsyncSession = Depends(get_db)):
    result = await db.execute(
        select(Payment, Order.customer_name, Order.customer_phone)
        .join(Order, Order.id == Payment.order_id)
        .order_by(Payment.created_at.desc(), Payment.id.desc())
    )
    return [
        PaymentResponse(
            id=p.id,
            order_id=p.order_id,
            amount=p.amount,
            payment_method=p.payment_method,
            transaction_id=p.transaction_id,
            status=p.status,
            created_at=p.created_at,
            customer_name=customer_name,
            customer_phone=customer_phone,
        )
        for p, customer_name, customer_phone in result
    ]


@router.post(
    "/{order_id}/process",
    response_model=MessageResponse,
    dependencies=[Depends(require_roles())],
)
async def process(order_id: int, payload: PaymentProcessRequest, db: AsyncSession = Depends(get_db)):
    """Record the outcome of a payment attempt for an order."""
    try:
        await process_payment(db, order_id, payload.transaction_id, payload.status)
    except PaymentNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))
    except TransactionError as exc:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(exc))
    return MessageResponse(message="Payment processed successfully")
