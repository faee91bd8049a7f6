"""
Restaurant API — Sample data

    restaurant-api-seed            (or: python -m restaurant_api.db.seed)

Creates the tables, then inserts an admin account, a four-item menu, the
ingredient stock and the menu → ingredient mappings. Skipped when the menu
already has items.
"""
import asyncio
import logging
from decimal import Decimal

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from restaurant_api.core.config import get_settings
from restaurant_api.core.permissions import Role
from restaurant_api.core.security import hash_password
from restaurant_api.db.database import Database
from restaurant_api.models import InventoryItem, MenuCategory, MenuInventoryMapping, MenuItem, User

logger = logging.getLogger(__name__)

ADMIN_USERNAME = "admin"
ADMIN_PASSWORD = "admin123"

MENU = [
    ("Margherita Pizza", "Classic pizza with tomato and mozzarella", "250.00", MenuCategory.MAIN),
    ("Caesar Salad", "Fresh romaine with Caesar dressing", "150.00", MenuCategory.APPETIZER),
    ("Chocolate Lava Cake", "Warm cake with molten chocolate center", "120.00", MenuCategory.DESSERT),
    ("Mango Lassi", "Creamy mango yogurt drink", "80.00", MenuCategory.BEVERAGE),
]

# name, quantity, unit, min_quantity, cost_per_unit, supplier
INVENTORY = [
    ("Flour", "50.00", "kg", "10.00", "20.00", "Local Supplier"),
    ("Mozzarella Cheese", "20.00", "kg", "5.00", "150.00", "Dairy Co"),
    ("Tomato", "30.00", "kg", "10.00", "30.00", "Farm Fresh"),
    ("Romaine Lettuce", "15.00", "kg", "5.00", "50.00", "Farm Fresh"),
    ("Chocolate", "10.00", "kg", "2.00", "200.00", "Sweet Imports"),
    ("Mango Pulp", "25.00", "liters", "5.00", "100.00", "Fruit Co"),
]

# menu name, ingredient name, quantity per unit
MAPPINGS = [
    ("Margherita Pizza", "Flour", "0.2"),
    ("Margherita Pizza", "Mozzarella Cheese", "0.1"),
    ("Margherita Pizza", "Tomato", "0.1"),
    ("Caesar Salad", "Romaine Lettuce", "0.2"),
    ("Chocolate Lava Cake", "Chocolate", "0.1"),
    ("Mango Lassi", "Mango Pulp", "0.3"),
]


async def seed_sample_data(session: AsyncSession, with_admin: bool = True) -> bool:
    """Insert the sample rows. Returns False when the menu was already populated."""
    async with session.begin():
        if await session.scalar(select(func.count(MenuItem.id))):
            return False

        if with_admin:
            session.add(
                User(
                    username=ADMIN_USERNAME,
                    email="admin@example.com",
                    hashed_password=hash_password(ADMIN_PASSWORD),
                    role=Role.ADMIN,
                )
            )

        menu = {
            name: MenuItem(name=name, description=description, price=Decimal(price), category=category)
            for name, description, price, category in MENU
        }
        stock = {
            name: InventoryItem(
                item_name=name,
                quantity=Decimal(quantity),
                unit=unit,
                min_quantity=Decimal(min_quantity),
                cost_per_unit=Decimal(cost),
                supplier=supplier,
            )
            for name, quantity, unit, min_quantity, cost, supplier in INVENTORY
        }
        session.add_all(list(menu.values()) + list(stock.values()))
        await session.flush()

        session.add_all(
            MenuInventoryMapping(
                menu_item_id=menu[menu_name].id,
                inventory_item_id=stock[ingredient].id,
                quantity_required=Decimal(required),
            )
            for menu_name, ingredient, required in MAPPINGS
        )
    return True


async def _run():
    db = Database(get_settings().database_url)
    try:
        await db.create_all()
        async with db.session() as session:
            inserted = await seed_sample_data(session)
        if inserted:
            logger.info("Sample data inserted (admin login: %s / %s)", ADMIN_USERNAME, ADMIN_PASSWORD)
        else:
            logger.info("Menu already populated, nothing to do")
    finally:
        await db.dispose()


def main():
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    asyncio.run(_run())


if __name__ == "__main__":
    main()
