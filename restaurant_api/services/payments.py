"""
Restaurant API — Payment processing

The payment row and the order's payment_status change together or not at all.
"""
import logging

from sqlalchemy import update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from restaurant_api.core.exceptions import TransactionError
from restaurant_api.models import Order, Payment, PaymentStatus

logger = logging.getLogger(__name__)


class PaymentNotFoundError(Exception):
    pass


async def process_payment(
    session: AsyncSession,
    order_id: int,
    transaction_id: str | None,
    payment_status: PaymentStatus,
) -> None:
    try:
        async with session.begin():
            result = await session.execute(
                update(Payment)
                .where(Payment.order_id == order_id)
                .values(transaction_id=transaction_id, status=payment_status)
                .execution_options(synchronize_session=False)
            )
            if result.rowcount == 0:
                raise PaymentNotFoundError(f"No payment recorded for order #{order_id}")

            await session.execute(
                update(Order)
                .where(Order.id == order_id)
                .values(payment_status=payment_status)
                .execution_options(synchronize_session=False)
            )
    except (SQLAlchemyError, OSError) as exc:
        logger.exception("Payment update for order %s failed", order_id)
        raise TransactionError("Failed to update payment") from exc

    logger.info("Order %s payment marked %s", order_id, payment_status.value)
