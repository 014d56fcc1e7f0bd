"""
Food Ordering API — Shared route dependencies

Every protected route composes the same steps: the router has already
matched path and verb (405 otherwise), then the bearer header is verified
here before the body is validated or the database is touched.
"""
import logging
from fastapi import Depends, Request

from app.core.errors import AuthError, ForbiddenError
from app.core.security import Subject, verify_bearer

logger = logging.getLogger(__name__)


async def get_current_subject(request: Request) -> Subject:
    try:
        return verify_bearer(request.headers.get("Authorization"))
    except AuthError:
        logger.warning("Rejected credential on %s %s", request.method, request.url.path)
        raise


async def require_admin(subject: Subject = Depends(get_current_subject)) -> Subject:
    if not subject.is_admin:
        logger.warning("Non-admin user %s attempted an admin operation", subject.uid)
        raise ForbiddenError("Forbidden: admin privileges required")
    return subject
