# krishi_jyothi/core/config.py
from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Centralized application settings loaded from environment.

    Everything has a default so the demo runs without a .env file.
    In production you should at least set:
      - SESSION_SECRET (signs browser session tokens)
      - DATABASE_URL (defaults to a local SQLite file)
    """

    PROJECT_NAME: str = "Krishi Jyothi API"
    API_V1_STR: str = "/api/v1"

    DATABASE_URL: str = "sqlite:///./krishi_jyothi.db"

    # Browser session tokens (scope of the key-value store)
    SESSION_SECRET: str = "change-me-krishi-jyothi"
    SESSION_ALG: str = "HS256"
    SESSION_TTL_DAYS: int = 30

    # Simulated latency of login/signup, in seconds
    AUTH_DELAY_SECONDS: float = 1.0

    # Keys inside a session's key-value store
    USER_STORAGE_KEY: str = "krishijyothi_user"
    CART_STORAGE_KEY: str = "krishijyothi_cart"

    # When True, signed-up users are added to the login catalog
    REGISTER_ON_SIGNUP: bool = True

    SEED_DEMO_DATA: bool = True

    CORS_ORIGINS: list[str] = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ]

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


@lru_cache
def get_settings() -> Settings:
    """
    Cached settings loader.
    Ensures we don't re-parse .env on every import / request.
    """
    return Settings()
