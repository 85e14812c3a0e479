"""
Application settings module.

Manages all configuration via environment variables using pydantic-settings.
"""

from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict


class TelegramSettings(BaseSettings):
    """Telegram alert settings."""

    model_config = SettingsConfigDict(env_file=".env", env_prefix="TELEGRAM_", extra="ignore")

    bot_token: str = ""
    chat_id: str = ""  # TELEGRAM_CHAT_ID, target for MUST BUY alerts


class CrawlerSettings(BaseSettings):
    """Crawler settings."""

    base_url: str = "https://www.halooglasi.com"
    listing_path: str = "nekretnine/prodaja-kuca"

    # HTTP request timeout in seconds
    request_timeout: float = 15.0

    # Politeness delays in seconds
    page_delay_seconds: float = 0.8   # Between pages of one area
    area_delay_seconds: float = 0.5   # Between areas

    # Re-crawl interval in minutes
    refresh_minutes: int = 5
    run_on_startup: bool = True

    model_config = SettingsConfigDict(env_file=".env", env_prefix="CRAWLER_", extra="ignore")


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    log_level: str = "INFO"
    cors_origins: str = "*"  # Comma-separated

    telegram: TelegramSettings = TelegramSettings()
    crawler: CrawlerSettings = CrawlerSettings()


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
