"""
Restaurant API — Order placement errors

OrderValidationError        → 400, raised before any store access
InsufficientInventoryError  → 500, transaction rolled back
TransactionError            → 500, transaction rolled back
NotificationError           → logged only, never reaches the caller
"""
from decimal import Decimal


class OrderError(Exception):
    pass


class OrderValidationError(OrderError):
    pass


class InsufficientInventoryError(OrderError):
    def __init__(
        self,
        menu_item_id: int,
        inventory_item_id: int,
        item_name: str | None,
        required: Decimal,
    ):
        label = item_name or f"inventory item #{inventory_item_id}"
        super().__init__(
            f"Insufficient inventory: '{label}' cannot cover {required} "
            f"for menu item #{menu_item_id}"
        )
        self.menu_item_id = menu_item_id
        self.inventory_item_id = inventory_item_id
        self.item_name = item_name
        self.required = required


class TransactionError(OrderError):
    pass


class NotificationError(Exception):
    pass
