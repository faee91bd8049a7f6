from restaurant_api.models.user import User
from restaurant_api.models.menu import MenuCategory, MenuItem
from restaurant_api.models.inventory import InventoryItem, MenuInventoryMapping
from restaurant_api.models.order import Order, OrderItem, OrderStatus, PaymentStatus
from restaurant_api.models.payment import Payment

__all__ = [
    "User",
    "MenuCategory",
    "MenuItem",
    "InventoryItem",
    "MenuInventoryMapping",
    "Order",
    "OrderItem",
    "OrderStatus",
    "PaymentStatus",
    "Payment",
]
