"""
Restaurant API — Inventory schemas
"""
from decimal import Decimal

from pydantic import BaseModel, Field


class InventoryItemCreate(BaseModel):
    item_name: str = Field(..., min_length=1, max_length=100, examples=["Flour"])
    quantity: Decimal = Field(..., ge=0, max_digits=10, decimal_places=2)
    unit: str = Field(..., min_length=1, max_length=20, examples=["kg"])
    min_quantity: Decimal = Field(Decimal("10"), ge=0, max_digits=10, decimal_places=2)
    cost_per_unit: Decimal = Field(Decimal("0"), ge=0, max_digits=10, decimal_places=2)
    supplier: str | None = Field(None, max_length=100)


class InventoryItemUpdate(BaseModel):
    """Manual restock / correction. Every mutable field is listed explicitly."""
    item_name: str = Field(..., min_length=1, max_length=100)
    quantity: Decimal = Field(..., ge=0, max_digits=10, decimal_places=2)
    unit: str = Field(..., min_length=1, max_length=20)
    min_quantity: Decimal = Field(Decimal("10"), ge=0, max_digits=10, decimal_places=2)
    cost_per_unit: Decimal = Field(Decimal("0"), ge=0, max_digits=10, decimal_places=2)
    supplier: str | None = Field(None, max_length=100)


class InventoryItemResponse(BaseModel):
    id: int
    item_name: str
    quantity: Decimal
    unit: str
    min_quantity: Decimal
    cost_per_unit: Decimal
    supplier: str | None

    model_config = {"from_attributes": True}
