"""
Restaurant API — Inventory routes (staff only)
"""
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from restaurant_api.api.deps import require_roles
from restaurant_api.core.permissions import STAFF_ROLES
from restaurant_api.db.database import get_db
from restaurant_api.models import InventoryItem
from restaurant_api.schemas.common import CreatedResponse, MessageResponse
from restaurant_api.schemas.inventory import (
    InventoryItemCreate,
    InventoryItemResponse,
    InventoryItemUpdate,
)

router = APIRouter(
    prefix="/api/inventory",
    tags=["inventory"],
    dependencies=[Depends(require_roles(*STAFF_ROLES))],
)


async def _get_or_404(db: AsyncSession, inventory_id: int) -> InventoryItem:
    item = await db.get(InventoryItem, inventory_id)
    if item is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Inventory item not found")
    return item


@router.get("", response_model=list[InventoryItemResponse])
async def list_inventory(db: AsyncSession = Depends(get_db)):
    result = await db.execute(select(InventoryItem).order_by(InventoryItem.item_name))
    return result.scalars().all()


@router.post("", response_model=CreatedResponse, status_code=status.HTTP_201_CREATED)
async def create_inventory_item(payload: InventoryItemCreate, db: AsyncSession = Depends(get_db)):
    item = InventoryItem(
        item_name=payload.item_name,
        quantity=payload.quantity,
        unit=payload.unit,
        min_quantity=payload.min_quantity,
        cost_per_unit=payload.cost_per_unit,
        supplier=payload.supplier,
    )
    db.add(item)
    await db.commit()
    return CreatedResponse(message="Inventory item added successfully", id=item.id)


@router.put("/{inventory_id}", response_model=MessageResponse)
async def update_inventory_item(
    inventory_id: int, payload: InventoryItemUpdate, db: AsyncSession = Depends(get_db)
):
    item = await _get_or_404(db, inventory_id)
    item.item_name = payload.item_name
    item.quantity = payload.quantity
    item.unit = payload.unit
    item.min_quantity = payload.min_quantity
    item.cost_per_unit = payload.cost_per_unit
    item.supplier = payload.supplier
    await db.commit()
    return MessageResponse(message="Inventory item updated successfully")


@router.delete("/{inventory_id}", response_model=MessageResponse)
async def delete_inventory_item(inventory_id: int, db: AsyncSession = Depends(get_db)):
    item = await _get_or_404(db, inventory_id)
    await db.delete(item)
    try:
        await db.commit()
    except IntegrityError:
        await db.rollback()
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Inventory item is still mapped to menu items",
        )
    return MessageResponse(message="Inventory item deleted successfully")
