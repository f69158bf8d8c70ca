from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    environment: str = "dev"

    database_url: str = "sqlite:///./expense_tracker.db"
    sqlite_busy_timeout_seconds: float = 15.0

    expense_categories: list[str] = ["Food", "Transport", "Utilities", "Entertainment", "Other"]
    enforce_categories: bool = True
    all_categories_sentinel: str = "All"

    currency_code: str = "INR"
    currency_minor_digits: int = 2

    store_max_attempts: int = 3
    store_retry_backoff_seconds: float = 0.05


settings = Settings()
