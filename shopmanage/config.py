"""Settings for the catalog client, loaded from the environment."""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment"""

    model_config = SettingsConfigDict(
        env_prefix="SHOPMANAGE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Remote catalog
    base_url: str = "https://dummyjson.com"
    page_limit: int = 10
    timeout: float = 10.0

    # The catalog answers a successful delete with exactly this status
    delete_success_status: int = 200

    log_level: str = "INFO"


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()
