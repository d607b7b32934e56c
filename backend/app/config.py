"""Application configuration using pydantic-settings."""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    # Application
    app_name: str = "stockchart"
    app_env: str = "development"
    debug: bool = True
    log_level: str = "INFO"
    log_json: bool = False

    # Comma-separated list; "*" allows any origin
    cors_origins: str = "*"

    # Yahoo Finance chart API (public endpoint, no key required)
    yahoo_base_url: str = "https://query1.finance.yahoo.com"
    yahoo_user_agent: str = "Mozilla/5.0 (compatible; stockchart/1.0)"
    upstream_timeout: float = 10.0

    @property
    def cors_origin_list(self) -> list[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]


@lru_cache
def get_settings() -> Settings:
    return Settings()
