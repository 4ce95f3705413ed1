"""
Application Settings
Load from environment variables
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings from environment"""

    # ======================
    # Application
    # ======================
    APP_ENV: str = "development"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"
    API_HOST: str = "0.0.0.0"
    API_PORT: int = 8000
    CORS_ORIGINS: list[str] = ["http://localhost:3000", "http://127.0.0.1:3000"]

    # ======================
    # Calendar
    # ======================
    # Deal delivery days and "today" are counted in this timezone
    TIMEZONE: str = "America/Chicago"

    # ======================
    # Coaching
    # ======================
    DEFAULT_MONTHLY_GOAL: int = Field(default=12, ge=1)

    # ======================
    # Pydantic v2 config
    # ======================
    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="forbid",
    )


settings = Settings()
