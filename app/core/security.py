"""
Food Ordering API — Identity verification

Tokens are issued by an external identity provider; this module only
verifies them. Verification is split into pure steps so every protected
route runs the same pipeline:

    header --parse_bearer--> token --decode_token--> claims --subject_from_claims--> Subject
"""
from typing import Any

from jose import jwt, JWTError
from pydantic import BaseModel

from app.core.config import get_settings
from app.core.errors import AuthError

BEARER_PREFIX = "Bearer "


class Subject(BaseModel):
    """The verified caller."""
    uid: str
    email: str | None = None
    is_admin: bool = False


def parse_bearer(auth_header: str | None) -> str:
    if not auth_header or not auth_header.startswith(BEARER_PREFIX):
        raise AuthError("Unauthorized: Missing or invalid Authorization header")
    token = auth_header[len(BEARER_PREFIX):].strip()
    if not token:
        raise AuthError("Unauthorized: Missing or invalid Authorization header")
    return token


def decode_token(token: str) -> dict[str, Any]:
    """Decode and validate a JWT. Raises JWTError on failure."""
    settings = get_settings()
    options = {"verify_aud": settings.JWT_AUDIENCE is not None}
    return jwt.decode(
        token,
        settings.JWT_SECRET_KEY,
        algorithms=[settings.JWT_ALGORITHM],
        audience=settings.JWT_AUDIENCE,
        issuer=settings.JWT_ISSUER,
        options=options,
    )


def subject_from_claims(claims: dict[str, Any]) -> Subject:
    uid = claims.get("sub") or claims.get("uid")
    if not uid:
        raise AuthError("Unauthorized: Invalid or expired token")
    return Subject(
        uid=str(uid),
        email=claims.get("email") or None,
        is_admin=claims.get("is_admin") is True,
    )


def verify_bearer(auth_header: str | None) -> Subject:
    token = parse_bearer(auth_header)
    try:
        claims = decode_token(token)
    except JWTError as exc:
        raise AuthError("Unauthorized: Invalid or expired token") from exc
    return subject_from_claims(claims)
