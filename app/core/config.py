"""
Food Ordering API — Configuration
All settings are read from environment variables (or .env file).
"""
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # ── Service ──────────────────────────────────────────────
    SERVICE_NAME: str = "food-ordering-api"
    SERVICE_VERSION: str = "1.0.0"
    DEBUG: bool = False
    HOST: str = "0.0.0.0"
    PORT: int = 8080
    LOG_LEVEL: str = "INFO"

    # ── JWT (tokens are issued elsewhere, only verified here) ─
    JWT_SECRET_KEY: str = "CHANGE_ME_IN_PRODUCTION"
    JWT_ALGORITHM: str = "HS256"
    JWT_AUDIENCE: str | None = None
    JWT_ISSUER: str | None = None

    # ── PostgreSQL ────────────────────────────────────────────
    POSTGRES_HOST: str = "orders-db"
    POSTGRES_PORT: int = 5432
    POSTGRES_DB: str = "food_ordering"
    POSTGRES_USER: str = "food_user"
    POSTGRES_PASSWORD: str = "food_pass"
    DATABASE_URL: str | None = None  # overrides the POSTGRES_* parts when set
    DB_ECHO: bool = False

    @property
    def database_url(self) -> str:
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return (
            f"postgresql+asyncpg://{self.POSTGRES_USER}:{self.POSTGRES_PASSWORD}"
            f"@{self.POSTGRES_HOST}:{self.POSTGRES_PORT}/{self.POSTGRES_DB}"
        )

    # ── Queue numbers (optimistic locking retry) ──────────────
    QUEUE_COUNTER_NAME: str = "queue"
    OPT_LOCK_MAX_RETRIES: int = 10
    OPT_LOCK_BASE_DELAY_MS: int = 20      # base exponential backoff delay in ms
    OPT_LOCK_MAX_DELAY_MS: int = 1000     # max backoff cap in ms
    OPT_LOCK_JITTER_MS: int = 50          # random jitter range in ms

    # ── Orders ────────────────────────────────────────────────
    ORDER_HISTORY_LIMIT: int = 20

    # ── CORS ──────────────────────────────────────────────────
    CORS_ALLOW_ORIGIN: str = "*"
    CORS_ALLOW_METHODS: str = "GET, POST, OPTIONS"
    CORS_ALLOW_HEADERS: str = "Content-Type, Authorization"

    # ── Observability ─────────────────────────────────────────
    METRICS_ENABLED: bool = True


@lru_cache()
def get_settings() -> Settings:
    return Settings()
