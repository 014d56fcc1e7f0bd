"""
Food Ordering API — Profile schemas
"""
from datetime import datetime
from pydantic import EmailStr, Field, field_validator
from app.schemas.common import CamelModel


class ProfileRequest(CamelModel):
    name: str = Field(..., max_length=255, examples=["Jane Doe"])
    email: EmailStr | None = None

    @field_validator("name")
    @classmethod
    def name_must_not_be_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("name is required")
        return v


class ProfileOut(CamelModel):
    user_id: str
    name: str
    email: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
