"""
API configuration settings.
"""

from pydantic_settings import BaseSettings


class APIConfig(BaseSettings):
    """API configuration settings."""

    # API Settings
    api_title: str = "Personal Library Catalog API"
    api_version: str = "1.0.0"
    api_description: str = "Catalog of owned books backed by Google Books metadata"

    # Server Settings
    host: str = "0.0.0.0"
    port: int = 8000
    debug: bool = False

    # Error reporting: collapse every add-by-id failure to 400 unless enabled
    error_status_detail: bool = False

    # CORS Settings
    cors_origins: list = ["*"]
    cors_allow_credentials: bool = True
    cors_allow_methods: list = ["*"]
    cors_allow_headers: list = ["*"]

    # Logging
    log_level: str = "INFO"

    model_config = {
        "env_file": ".env",
        "extra": "ignore"
    }


# Global config instance
config = APIConfig()
