"""
Restaurant API — Menu schemas
"""
from decimal import Decimal

from pydantic import BaseModel, Field

from restaurant_api.models.menu import MenuCategory


class MenuItemCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100, examples=["Margherita Pizza"])
    description: str | None = None
    price: Decimal = Field(..., ge=0, max_digits=10, decimal_places=2)
    category: MenuCategory
    image_url: str | None = Field(None, max_length=255)


class MenuItemUpdate(BaseModel):
    """Every mutable menu field; a PUT replaces all of them."""
    name: str = Field(..., min_length=1, max_length=100)
    description: str | None = None
    price: Decimal = Field(..., ge=0, max_digits=10, decimal_places=2)
    category: MenuCategory
    image_url: str | None = Field(None, max_length=255)
    available: bool = True


class MenuItemResponse(BaseModel):
    id: int
    name: str
    description: str | None
    price: Decimal
    category: MenuCategory
    image_url: str | None
    available: bool

    model_config = {"from_attributes": True}
