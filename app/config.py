"""
Configuration management.
Simple .env based config, overridable per environment.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    # Server
    host: str = "0.0.0.0"
    port: int = 8080

    # Security
    session_secret: str = "change-me-in-production-use-random-string"

    # Shopify Admin REST API
    shopify_api_version: str = "2023-04"
    shopify_timeout: float = 60.0
    shopify_connect_timeout: float = 10.0

    # Catalog listing
    products_page_size: int = 20
    product_fields: str = "id,title,status,vendor,variants,images"

    # Bulk discount (1 = one product at a time)
    discount_max_concurrency: int = 1

    # Logging
    log_level: str = "INFO"


# Global settings instance
settings = Settings()
