"""Application configuration.

Loads settings from environment variables with sensible defaults.
"""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # API
    api_version: str = "0.1.0"
    debug: bool = False

    # Storefront
    store_domain: str = "infinitopiercing.com"
    store_name: str = "Infinito Piercing"
    store_tagline: str = "Joyería de alta calidad para tus perforaciones"
    catalog_year: int = 2025

    # Fetching
    page_size: int = 250  # Shopify max
    max_pages: int = 100
    page_number_fallback: bool = True
    request_timeout: float = 30.0

    # Catalog
    cache_ttl_seconds: float = 15 * 60
    default_collection: str = "nariz"

    # Desktop shell
    host: str = "127.0.0.1"
    port: int = 3000
    port_attempts: int = 10
    reclaim_port: bool = False
    open_browser: bool = True
    heartbeat_enabled: bool = True
    heartbeat_timeout_seconds: float = 30.0

    # Logging
    log_level: str = "INFO"
    log_json: bool = False

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }

    @property
    def store_base_url(self) -> str:
        """Base URL of the storefront."""
        domain = self.store_domain.rstrip("/")
        if domain.startswith(("http://", "https://")):
            return domain
        return f"https://{domain}"


settings = Settings()
