"""
Food Ordering API — Menu schemas
"""
from pydantic import Field
from app.schemas.common import CamelModel


class MenuItemOut(CamelModel):
    id: str
    name: str
    description: str
    price: float = Field(..., ge=0)
    image_url: str
    category: str | None = None


class SeedResult(CamelModel):
    seeded: int
    ids: list[str]
