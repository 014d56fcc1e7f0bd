"""
Food Ordering API — User profile upsert and lookup
"""
import logging
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.errors import InternalError, NotFoundError
from app.core.optimistic_lock import StaleDataError, with_optimistic_retry
from app.core.security import Subject
from app.db.database import utcnow
from app.models.profile import UserProfile
from app.schemas.profile import ProfileOut, ProfileRequest

logger = logging.getLogger(__name__)


@with_optimistic_retry()
async def _upsert(db: AsyncSession, subject: Subject, payload: ProfileRequest) -> UserProfile:
    result = await db.execute(select(UserProfile).where(UserProfile.user_id == subject.uid))
    profile: UserProfile | None = result.scalar_one_or_none()

    if profile is None:
        profile = UserProfile(user_id=subject.uid, name=payload.name, email=payload.email or subject.email)
        db.add(profile)
    else:
        profile.name = payload.name
        if payload.email:
            profile.email = payload.email
        elif not profile.email:
            profile.email = subject.email
        profile.updated_at = utcnow()

    try:
        await db.commit()
    except IntegrityError:
        # First-time profile created by a concurrent request; retry as an update
        await db.rollback()
        raise StaleDataError(f"Profile {subject.uid} created concurrently.")
    return profile


async def upsert_profile(db: AsyncSession, subject: Subject, payload: ProfileRequest) -> ProfileOut:
    try:
        profile = await _upsert(db, subject, payload)
    except (StaleDataError, SQLAlchemyError) as exc:
        await db.rollback()
        logger.exception("Error saving profile for user %s", subject.uid)
        raise InternalError("Failed to save profile") from exc
    return ProfileOut.model_validate(profile)


async def get_profile(db: AsyncSession, user_id: str) -> ProfileOut:
    try:
        result = await db.execute(select(UserProfile).where(UserProfile.user_id == user_id))
        profile = result.scalar_one_or_none()
    except SQLAlchemyError as exc:
        logger.exception("Error fetching profile for user %s", user_id)
        raise InternalError("Failed to fetch profile") from exc

    if profile is None:
        raise NotFoundError("Profile not found")
    return ProfileOut.model_validate(profile)
