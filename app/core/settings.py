# app/core/settings.py
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional


class Settings(BaseSettings):
    APP_NAME: str = "sales-kpi-api"

    # --- Dataset ---
    DATA_DIR: str = "./data"
    CSV_DELIMITER: str = ","
    LOAD_ON_STARTUP: bool = True

    # --- HTTP ---
    ALLOWED_ORIGINS: list[str] = ["http://localhost:3000"]
    RELOAD_RATE_LIMIT: str = "10/minute"

    # --- Report defaults ---
    DEFAULT_LIMIT: int = 10
    MIN_LIMIT: int = 1
    MAX_LIMIT: int = 50
    MIN_YEAR: int = 2000
    MAX_YEAR: int = 2100

    LOG_LEVEL: str = "INFO"
    SENTRY_DSN: Optional[str] = None

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


settings = Settings()  # reads .env
