# storefront/core/config.py
from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Centralized application settings loaded from environment.

    Required env vars (.env):
      - SUPABASE_URL
      - SUPABASE_KEY (anon key)
      - DATABASE_URL (Supabase Postgres connection string)
      - SUPABASE_JWT_SECRET (JWT signing secret from Supabase project settings)

    Optional:
      - SUPABASE_SERVICE_ROLE_KEY (only used for admin Supabase client)
      - STORAGE_BUCKET, WHATSAPP_NUMBER, CURRENCY_LABEL, CART_COOKIE_* ...
    """

    PROJECT_NAME: str = "Luxury Storefront API"
    API_V1_STR: str = "/api/v1"

    # Supabase / DB config
    SUPABASE_URL: str
    SUPABASE_KEY: str
    DATABASE_URL: str

    # JWT verification (backend-side)
    SUPABASE_JWT_SECRET: str
    SUPABASE_JWT_ALG: str = "HS256"

    # Service role key bypasses RLS (backend only)
    SUPABASE_SERVICE_ROLE_KEY: str | None = None

    # Object storage bucket holding product images
    STORAGE_BUCKET: str = "images"

    # Storefront presentation
    WHATSAPP_NUMBER: str = "254722240558"
    CURRENCY_LABEL: str = "KSH"
    PLACEHOLDER_IMAGE_URL: str = (
        "https://images.pexels.com/photos/1190829/pexels-photo-1190829.jpeg"
        "?auto=compress&cs=tinysrgb&w=800"
    )

    # Client-side cart cookie
    CART_COOKIE_NAME: str = "cart"
    CART_COOKIE_MAX_AGE: int = 60 * 60 * 24 * 30

    CORS_ORIGINS: list[str] = [
        "http://localhost:5173",
        "http://127.0.0.1:5173",
        "http://localhost:3000",
    ]

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


@lru_cache
def get_settings() -> Settings:
    """
    Cached settings loader.
    Ensures we don't re-parse .env on every import / request.
    """
    return Settings()
