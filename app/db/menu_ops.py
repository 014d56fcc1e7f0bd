"""
Food Ordering API — Menu reads and the seed upsert
"""
import logging
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.errors import InternalError
from app.core.optimistic_lock import StaleDataError, with_optimistic_retry
from app.models.menu import MenuItem
from app.schemas.menu import MenuItemOut, SeedResult

logger = logging.getLogger(__name__)

# Served when the menu table is empty so clients always have something to render.
DEFAULT_MENU: list[dict] = [
    {
        "id": "1",
        "name": "Burger",
        "description": "Juicy beef burger with fresh vegetables",
        "price": 12.99,
        "image_url": "https://images.unsplash.com/photo-1568901346375-23c9450c58cd?w=400",
    },
    {
        "id": "2",
        "name": "Pizza",
        "description": "Classic Italian pizza with mozzarella and tomato sauce",
        "price": 15.99,
        "image_url": "https://images.unsplash.com/photo-1565299624946-b28f40a0ae38?w=400",
    },
    {
        "id": "3",
        "name": "Sushi",
        "description": "Fresh salmon sushi rolls with wasabi and ginger",
        "price": 18.99,
        "image_url": "https://images.unsplash.com/photo-1579871494447-9811cf80d66c?w=400",
    },
    {
        "id": "4",
        "name": "Pasta",
        "description": "Creamy carbonara pasta with crispy bacon",
        "price": 14.99,
        "image_url": "https://images.unsplash.com/photo-1612874742237-6526221588e3?w=400",
    },
    {
        "id": "5",
        "name": "Salad",
        "description": "Fresh garden salad with grilled chicken",
        "price": 10.99,
        "image_url": "https://images.unsplash.com/photo-1546793665-c74683f339c1?w=400",
    },
    {
        "id": "6",
        "name": "Tacos",
        "description": "Authentic Mexican tacos with seasoned beef",
        "price": 11.99,
        "image_url": "https://images.unsplash.com/photo-1565299585323-38d6b0865b47?w=400",
    },
]

# Demo data written by POST /menu/seed, upserted by id.
SEED_MENU: list[dict] = [
    {**item, "category": category}
    for item, category in zip(DEFAULT_MENU, ["burgers", "pizza", "japanese", "pasta", "salads", "mexican"])
] + [
    {
        "id": "7",
        "name": "Ramen",
        "description": "Rich tonkotsu broth with chashu pork and soft egg",
        "price": 16.49,
        "image_url": "https://images.unsplash.com/photo-1569718212165-3a8278d5f624?w=400",
        "category": "japanese",
    },
    {
        "id": "8",
        "name": "Cheesecake",
        "description": "New York style cheesecake with berry compote",
        "price": 7.99,
        "image_url": "https://images.unsplash.com/photo-1533134242443-d4fd215305ad?w=400",
        "category": "desserts",
    },
]


async def list_menu(db: AsyncSession) -> list[MenuItemOut]:
    try:
        result = await db.execute(select(MenuItem).order_by(MenuItem.id))
        items = result.scalars().all()
    except SQLAlchemyError as exc:
        logger.exception("Error fetching menu")
        raise InternalError("Failed to fetch menu items") from exc

    if not items:
        return [MenuItemOut(**item) for item in DEFAULT_MENU]
    return [MenuItemOut.model_validate(item) for item in items]


@with_optimistic_retry()
async def _upsert_menu(db: AsyncSession, entries: list[dict]) -> None:
    for entry in entries:
        await db.merge(MenuItem(**entry))
    try:
        await db.commit()
    except IntegrityError:
        # A concurrent seed inserted one of the ids first
        await db.rollback()
        raise StaleDataError("Menu item inserted concurrently.")


async def seed_menu(db: AsyncSession) -> SeedResult:
    """Upsert SEED_MENU in one transaction. Re-running yields the same final state."""
    try:
        await _upsert_menu(db, SEED_MENU)
    except (StaleDataError, SQLAlchemyError) as exc:
        await db.rollback()
        logger.exception("Error seeding menu")
        raise InternalError("Failed to seed menu") from exc

    ids = [entry["id"] for entry in SEED_MENU]
    logger.info("Menu seeded with %d items", len(ids))
    return SeedResult(seeded=len(ids), ids=ids)
