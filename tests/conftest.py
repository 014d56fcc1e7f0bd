"""
Shared fixtures: a throwaway SQLite database, an in-process HTTP client
and JWT minting with the test secret.
"""
import os
import tempfile
from datetime import datetime, timedelta, timezone

TEST_SECRET = "test-secret-do-not-use"
_DB_PATH = os.path.join(tempfile.gettempdir(), f"food_ordering_test_{os.getpid()}.db")

# Must be set before app.core.config.get_settings() is first called
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_DB_PATH}"
os.environ["JWT_SECRET_KEY"] = TEST_SECRET
os.environ["METRICS_ENABLED"] = "false"
os.environ["OPT_LOCK_MAX_RETRIES"] = "500"
os.environ["OPT_LOCK_BASE_DELAY_MS"] = "1"
os.environ["OPT_LOCK_MAX_DELAY_MS"] = "20"
os.environ["OPT_LOCK_JITTER_MS"] = "5"

import httpx
import pytest
import pytest_asyncio
from jose import jwt
from sqlalchemy import func, select

from app.main import app
from app.db.database import Base, SessionLocal, engine
from app.models.counter import Counter


# ─── Tokens ────────────────────────────────────────────────────────────────────
def make_token(
    sub: str | None = "user-1",
    email: str | None = "user1@example.com",
    is_admin: bool = False,
    secret: str = TEST_SECRET,
    expires_in: int = 3600,
) -> str:
    claims = {"exp": datetime.now(tz=timezone.utc) + timedelta(seconds=expires_in)}
    if sub is not None:
        claims["sub"] = sub
    if email is not None:
        claims["email"] = email
    if is_admin:
        claims["is_admin"] = True
    return jwt.encode(claims, secret, algorithm="HS256")


def auth_headers(**kwargs) -> dict[str, str]:
    return {"Authorization": f"Bearer {make_token(**kwargs)}"}


# ─── DB helpers ────────────────────────────────────────────────────────────────
async def count_rows(model) -> int:
    async with SessionLocal() as session:
        return await session.scalar(select(func.count()).select_from(model))


async def counter_value(name: str = "queue") -> int | None:
    async with SessionLocal() as session:
        return await session.scalar(select(Counter.value).where(Counter.name == name))


# ─── Fixtures ──────────────────────────────────────────────────────────────────
@pytest_asyncio.fixture
async def database():
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)
    yield
    # Pooled connections belong to this test's event loop
    await engine.dispose()


@pytest_asyncio.fixture
async def client(database):
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


@pytest.fixture(scope="session", autouse=True)
def _remove_test_database():
    yield
    if os.path.exists(_DB_PATH):
        os.remove(_DB_PATH)
