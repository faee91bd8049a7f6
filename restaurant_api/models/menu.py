"""
Restaurant API — Menu model
"""
from datetime import datetime
from decimal import Decimal
from enum import Enum as PyEnum

from sqlalchemy import String, Text, Numeric, Boolean, DateTime, Enum, func
from sqlalchemy.orm import Mapped, mapped_column

from restaurant_api.db.database import Base


class MenuCategory(str, PyEnum):
    APPETIZER = "appetizer"
    MAIN = "main"
    DESSERT = "dessert"
    BEVERAGE = "beverage"


class MenuItem(Base):
    __tablename__ = "menu_items"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    price: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    category: Mapped[MenuCategory] = mapped_column(
        Enum(MenuCategory, name="menu_category", values_callable=lambda e: [m.value for m in e]),
        nullable=False,
    )
    image_url: Mapped[str | None] = mapped_column(String(255), nullable=True)
    available: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
