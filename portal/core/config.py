# portal/core/config.py
from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Centralized application settings loaded from environment.

    Required env vars (.env):
      - SUPABASE_URL
      - SUPABASE_KEY (anon key, same one the static pages use)
      - SUPABASE_JWT_SECRET (JWT signing secret from Supabase project settings)

    Optional:
      - EMAILJS_* (notifications are skipped when not configured)
      - SITE_URL (public origin of the static site)
    """

    PROJECT_NAME: str = "Stranger Danger Coffee Portal"
    API_V1_STR: str = "/api/v1"

    # Supabase config
    SUPABASE_URL: str
    SUPABASE_KEY: str

    # JWT verification (backend-side)
    SUPABASE_JWT_SECRET: str
    SUPABASE_JWT_ALG: str = "HS256"

    # Public origin of the static site (reset links, admin link in emails)
    SITE_URL: str = "http://localhost:8000"
    CORS_ORIGINS: list[str] = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
        "http://localhost:8888",
    ]

    # EmailJS
    EMAILJS_API_URL: str = "https://api.emailjs.com/api/v1.0/email/send"
    EMAILJS_SERVICE_ID: str | None = None
    EMAILJS_USER_ID: str | None = None
    EMAILJS_REQUEST_TEMPLATE_ID: str | None = None
    EMAILJS_ONBOARDING_TEMPLATE_ID: str | None = None

    TEAM_EMAIL: str = "team@strangerdangercoffee.com"
    TEAM_NAME: str = "Stranger Danger Coffee Team"

    # Dashboard / UI behaviour
    REQUEST_HISTORY_LIMIT: int = 10
    SUCCESS_BANNER_SECONDS: int = 5
    MIN_PASSWORD_LENGTH: int = 6

    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


@lru_cache
def get_settings() -> Settings:
    """
    Cached settings loader.
    Ensures we don't re-parse .env on every import / request.
    """
    return Settings()
