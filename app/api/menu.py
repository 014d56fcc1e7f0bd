"""
Food Ordering API — Menu routes
"""
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_current_subject, require_admin
from app.core.security import Subject
from app.db.database import get_db
from app.db.menu_ops import list_menu, seed_menu
from app.schemas.common import ApiResponse
from app.schemas.menu import MenuItemOut, SeedResult

router = APIRouter(prefix="/menu", tags=["menu"])


@router.get("", response_model=ApiResponse[list[MenuItemOut]])
async def get_menu(
    subject: Subject = Depends(get_current_subject),
    db: AsyncSession = Depends(get_db),
):
    """All menu items, or the built-in default menu if nothing has been seeded."""
    return ApiResponse[list[MenuItemOut]](data=await list_menu(db))


@router.post("/seed", response_model=ApiResponse[SeedResult])
async def post_seed_menu(
    subject: Subject = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    """Upsert the demo menu. Admin only."""
    result = await seed_menu(db)
    return ApiResponse[SeedResult](data=result, message="Menu seeded successfully")
