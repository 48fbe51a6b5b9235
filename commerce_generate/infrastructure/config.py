"""Application configuration.

Loads settings from environment variables with sensible defaults.
"""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # API
    api_version: str = "0.1.0"
    debug: bool = False
    host: str = "127.0.0.1"
    port: int = 8000

    # Database
    database_url: str = "sqlite+aiosqlite:///./commerce_generate.db"

    # Authentication (stands in for the "administer devel_generate" permission)
    generate_api_key: str = "dev-api-key-change-in-production"

    # Languages
    default_language: str = "en"
    languages: dict[str, str] = {"en": "English"}

    # Generator defaults
    default_num: int = 50
    default_title_length: int = 10
    default_num_variations: int = 1
    default_price_min: int = 10
    default_price_max: int = 1000
    default_currency: str = "USD"

    # Logging
    log_level: str = "INFO"

    class Config:
        """Pydantic configuration."""

        env_file = ".env"
        env_file_encoding = "utf-8"


settings = Settings()
