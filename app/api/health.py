"""
Food Ordering API — Health endpoint
"""
from fastapi import APIRouter

from app.core.config import get_settings
from app.db.database import utcnow
from app.schemas.common import ApiResponse
from app.schemas.health import HealthData

router = APIRouter(tags=["health"])


@router.get("/health", response_model=ApiResponse[HealthData])
async def health_check():
    """Liveness only: no dependency checks, never fails."""
    settings = get_settings()
    return ApiResponse[HealthData](
        message="Server is running",
        data=HealthData(
            status="healthy",
            service=settings.SERVICE_NAME,
            version=settings.SERVICE_VERSION,
            timestamp=utcnow(),
        ),
    )
