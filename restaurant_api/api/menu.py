"""
Restaurant API — Menu routes
"""
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from restaurant_api.api.deps import require_roles
from restaurant_api.core.permissions import STAFF_ROLES
from restaurant_api.db.database import get_db
from restaurant_api.models import MenuItem
from restaurant_api.schemas.common import CreatedResponse, MessageResponse
from restaurant_api.schemas.menu import MenuItemCreate, MenuItemResponse, MenuItemUpdate

router = APIRouter(prefix="/api/menu", tags=["menu"])


async def _get_or_404(db: AsyncSession, menu_item_id: int) -> MenuItem:
    item = await db.get(MenuItem, menu_item_id)
    if item is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Menu item not found")
    return item


@router.get("", response_model=list[MenuItemResponse])
async def list_menu(db: AsyncSession = Depends(get_db)):
    """Available items only, grouped by category."""
    result = await db.execute(
        select(MenuItem).where(MenuItem.available.is_(True)).order_by(MenuItem.category, MenuItem.name)
    )
    return result.scalars().all()


@router.get("/{menu_item_id}", response_model=MenuItemResponse)
async def get_menu_item(menu_item_id: int, db: AsyncSession = Depends(get_db)):
    return await _get_or_404(db, menu_item_id)


@router.post(
    "",
    response_model=CreatedResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_roles(*STAFF_ROLES))],
)
async def create_menu_item(payload: MenuItemCreate, db: AsyncSession = Depends(get_db)):
    item = MenuItem(
        name=payload.name,
        description=payload.description,
        price=payload.price,
        category=payload.category,
        image_url=payload.image_url,
        available=True,
    )
    db.add(item)
    await db.commit()
    return CreatedResponse(message="Menu item added successfully", id=item.id)


@router.put(
    "/{menu_item_id}",
    response_model=MessageResponse,
    dependencies=[Depends(require_roles(*STAFF_ROLES))],
)
async def update_menu_item(menu_item_id: int, payload: MenuItemUpdate, db: AsyncSession = Depends(get_db)):
    item = await _get_or_404(db, menu_item_id)
    item.name = payload.name
    item.description = payload.description
    item.price = payload.price
    item.category = payload.category
    item.image_url = payload.image_url
    item.available = payload.available
    await db.commit()
    return MessageResponse(message="Menu item updated successfully")


@router.delete(
    "/{menu_item_id}",
    response_model=MessageResponse,
    dependencies=[Depends(require_roles(*STAFF_ROLES))],
)
async def delete_menu_item(menu_item_id: int, db: AsyncSession = Depends(get_db)):
    item = await _get_or_404(db, menu_item_id)
    await db.delete(item)
    try:
        await db.commit()
    except IntegrityError:
        # still referenced by past orders or ingredient mappings
        await db.rollback()
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Menu item is referenced by orders; mark it unavailable instead",
        )
    return MessageResponse(message="Menu item deleted successfully")
