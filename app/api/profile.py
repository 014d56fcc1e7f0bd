"""
Food Ordering API — Profile routes
"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_current_subject
from app.core.security import Subject
from app.db.database import get_db
from app.db.profile_ops import get_profile, upsert_profile
from app.schemas.common import ApiResponse
from app.schemas.profile import ProfileOut, ProfileRequest

router = APIRouter(prefix="/profile", tags=["profile"])


@router.post("", response_model=ApiResponse[ProfileOut], status_code=status.HTTP_201_CREATED)
async def save_profile(
    payload: ProfileRequest,
    subject: Subject = Depends(get_current_subject),
    db: AsyncSession = Depends(get_db),
):
    profile = await upsert_profile(db, subject, payload)
    return ApiResponse[ProfileOut](data=profile, message="Profile saved successfully")


@router.get("", response_model=ApiResponse[ProfileOut])
async def read_profile(
    subject: Subject = Depends(get_current_subject),
    db: AsyncSession = Depends(get_db),
):
    return ApiResponse[ProfileOut](data=await get_profile(db, subject.uid))
