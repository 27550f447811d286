# textile_shop/core/config.py
from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Centralized application settings loaded from environment.

    Required env vars (.env):
      - DATABASE_URL (Supabase Postgres connection string)
      - SUPABASE_JWT_SECRET (JWT signing secret from Supabase project settings)

    Optional:
      - CORS_ORIGINS (JSON list)
      - LOG_LEVEL
      - CURRENCY (display hint only, prices are stored without currency)
    """

    PROJECT_NAME: str = "Textile Shop API"
    API_V1_STR: str = "/api/v1"

    # Supabase Postgres
    DATABASE_URL: str

    # JWT verification (backend-side)
    SUPABASE_JWT_SECRET: str
    SUPABASE_JWT_ALG: str = "HS256"

    CORS_ORIGINS: list[str] = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
        "https://best-textile.vercel.app",
    ]

    LOG_LEVEL: str = "INFO"
    CURRENCY: str = "EUR"

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


@lru_cache
def get_settings() -> Settings:
    """
    Cached settings loader.
    Ensures we don't re-parse .env on every import / request.
    """
    return Settings()
