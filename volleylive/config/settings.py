import logging
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    """Application settings loaded from environment variables or .env file."""

    # Live API Configuration
    api_base_url: str = Field(
        "https://volleyball.ronesse.no",
        description="Base URL of the live volleyball API (no trailing slash).",
    )
    api_token: Optional[str] = Field(
        None, description="Optional bearer token for the live API."
    )
    request_timeout_seconds: float = Field(
        30.0, gt=0, description="Timeout for a single HTTP request."
    )

    # Polling
    poll_interval_seconds: float = Field(
        5.0, gt=0, description="Seconds between two live snapshot polls."
    )
    reference_page_limit: int = Field(
        1000,
        ge=1,
        description="Page size used when fetching the teams/players collections.",
    )

    # Classification
    home_federation_country: str = Field(
        "Norge",
        description="Exact team country literal that marks the tracked federation.",
    )
    home_federation_demonym: str = Field(
        "nor",
        description="Substring matched (case-insensitive) in player nationality.",
    )

    # Presentation helpers
    image_cache_max_entries: int = Field(
        512, ge=1, description="Maximum URLs remembered by the image status cache."
    )

    # Logging Configuration
    log_level: str = Field(
        "INFO", description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)."
    )

    # Pydantic Settings Configuration
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )


def load_settings() -> AppSettings:
    """Loads and validates application settings."""
    try:
        settings = AppSettings()
        log_level_upper = settings.log_level.upper()
        # Validate log_level even if loaded from .env
        if log_level_upper not in ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]:
            logging.warning(
                f"Invalid LOG_LEVEL '{settings.log_level}' found in .env or default. Using INFO."
            )
            settings.log_level = "INFO"
        else:
            settings.log_level = log_level_upper
        settings.api_base_url = settings.api_base_url.rstrip("/")
        return settings
    except Exception as e:
        logging.exception(f"Error loading application settings: {e}")
        raise SystemExit("Failed to load application settings. Exiting.")


settings: AppSettings = load_settings()
