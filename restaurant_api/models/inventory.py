"""
Restaurant API — Inventory models

`inventory.quantity` is only ever decremented through a guarded UPDATE
(see services.order_placement); it must not go below zero.
"""
from datetime import datetime
from decimal import Decimal

from sqlalchemy import String, Numeric, DateTime, ForeignKey, CheckConstraint, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from restaurant_api.db.database import Base


class InventoryItem(Base):
    __tablename__ = "inventory"
    __table_args__ = (CheckConstraint("quantity >= 0", name="ck_inventory_quantity_non_negative"),)

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    item_name: Mapped[str] = mapped_column(String(100), nullable=False)
    quantity: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    unit: Mapped[str] = mapped_column(String(20), nullable=False)
    min_quantity: Mapped[Decimal] = mapped_column(Numeric(10, 2), default=Decimal("10"), nullable=False)
    cost_per_unit: Mapped[Decimal] = mapped_column(Numeric(10, 2), default=Decimal("0"), nullable=False)
    supplier: Mapped[str | None] = mapped_column(String(100), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )


class MenuInventoryMapping(Base):
    """How much of one inventory item a single unit of a menu item consumes."""
    __tablename__ = "menu_inventory_mapping"
    __table_args__ = (CheckConstraint("quantity_required > 0", name="ck_mapping_quantity_required_positive"),)

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    menu_item_id: Mapped[int] = mapped_column(ForeignKey("menu_items.id"), index=True, nullable=False)
    inventory_item_id: Mapped[int] = mapped_column(ForeignKey("inventory.id"), nullable=False)
    quantity_required: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)

    inventory_item: Mapped[InventoryItem] = relationship()
