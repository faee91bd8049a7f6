"""
Restaurant API — Order placement (single unit of work)

  1. INSERT order (status=pending, payment_status=pending)
  2. bulk INSERT order_items with the caller's per-line prices
  3. per line, per ingredient mapping:
       UPDATE inventory SET quantity = quantity - :required
       WHERE id = :id AND quantity >= :required
     0 rows affected → InsufficientInventoryError, whole transaction rolled back
  4. INSERT payment (status=pending)
  5. COMMIT
  6. confirmation email, after commit only; failures are logged

The guarded UPDATE is evaluated by the database in one statement, so two
concurrent orders racing for the last unit of an ingredient cannot both win.
"""
import logging
from decimal import Decimal

from sqlalchemy import insert, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from restaurant_api.core.config import get_settings
from restaurant_api.core.exceptions import (
    InsufficientInventoryError,
    NotificationError,
    OrderValidationError,
    TransactionError,
)
from restaurant_api.core.notifier import Notifier
from restaurant_api.models import (
    InventoryItem,
    MenuInventoryMapping,
    Order,
    OrderItem,
    OrderStatus,
    Payment,
    PaymentStatus,
)
from restaurant_api.schemas.order import OrderCreate, OrderItemRequest

settings = get_settings()
logger = logging.getLogger(__name__)


def lines_total(items: list[OrderItemRequest]) -> Decimal:
    return sum((line.price * line.quantity for line in items), Decimal("0"))


def check_order_total(payload: OrderCreate) -> None:
    """Reject a request whose total disagrees with its lines. Runs before any store access."""
    if not payload.items:
        raise OrderValidationError("Order must contain at least one item")
    if not settings.ENFORCE_ORDER_TOTAL:
        return
    expected = lines_total(payload.items)
    if expected != payload.total_amount:
        raise OrderValidationError(
            f"total_amount {payload.total_amount} does not match items total {expected}"
        )


async def _deduct_inventory(session: AsyncSession, line: OrderItemRequest) -> None:
    mappings = (
        await session.execute(
            select(MenuInventoryMapping)
            .where(MenuInventoryMapping.menu_item_id == line.menu_item_id)
            .order_by(MenuInventoryMapping.id)
        )
    ).scalars().all()

    for mapping in mappings:
        required = mapping.quantity_required * line.quantity
        result = await session.execute(
            update(InventoryItem)
            .where(
                InventoryItem.id == mapping.inventory_item_id,
                InventoryItem.quantity >= required,
            )
            .values(quantity=InventoryItem.quantity - required)
            .execution_options(synchronize_session=False)
        )
        if result.rowcount == 0:
            item_name = await session.scalar(
                select(InventoryItem.item_name).where(InventoryItem.id == mapping.inventory_item_id)
            )
            raise InsufficientInventoryError(
                menu_item_id=line.menu_item_id,
                inventory_item_id=mapping.inventory_item_id,
                item_name=item_name,
                required=required,
            )


async def place_order(session: AsyncSession, payload: OrderCreate, notifier: Notifier) -> Order:
    """
    Persist an order, its items, the inventory it consumes and a pending
    payment, atomically. Returns the committed Order.
    """
    check_order_total(payload)

    try:
        async with session.begin():
            order = Order(
                customer_name=payload.customer_name,
                customer_phone=payload.customer_phone,
                customer_email=payload.customer_email,
                total_amount=payload.total_amount,
                status=OrderStatus.PENDING,
                payment_status=PaymentStatus.PENDING,
                payment_method=payload.payment_method,
            )
            session.add(order)
            await session.flush()

            await session.execute(
                insert(OrderItem),
                [
                    {
                        "order_id": order.id,
                        "menu_item_id": line.menu_item_id,
                        "quantity": line.quantity,
                        "price": line.price,
                    }
                    for line in payload.items
                ],
            )

            for line in payload.items:
                await _deduct_inventory(session, line)

            session.add(
                Payment(
                    order_id=order.id,
                    amount=payload.total_amount,
                    payment_method=payload.payment_method,
                    status=PaymentStatus.PENDING,
                )
            )
    except InsufficientInventoryError as exc:
        logger.warning("Order for %s rejected: %s", payload.customer_phone, exc)
        raise
    except (SQLAlchemyError, OSError) as exc:
        logger.exception("Order transaction failed")
        raise TransactionError("Transaction failed") from exc

    logger.info("Order %s committed (%d items, total %s)", order.id, len(payload.items), payload.total_amount)

    if payload.customer_email:
        await send_order_confirmation(notifier, order, payload)

    return order


async def send_order_confirmation(notifier: Notifier, order: Order, payload: OrderCreate) -> None:
    items = ", ".join(f"item #{line.menu_item_id} x {line.quantity}" for line in payload.items)
    body = (
        f"Dear {payload.customer_name},\n\n"
        f"Your order #{order.id} has been placed successfully.\n"
        f"Total: {settings.CURRENCY_SYMBOL}{payload.total_amount}\n"
        f"Items: {items}\n\n"
        "Thank you for choosing us!"
    )
    try:
        await notifier.send(payload.customer_email, f"Order #{order.id} Confirmation", body)
    except NotificationError as exc:
        logger.warning("Order %s confirmation email failed: %s", order.id, exc)
    except Exception as exc:
        # the order is committed; nothing here may change that
        logger.warning("Order %s confirmation email failed unexpectedly: %s", order.id, exc)
