"""
Configuration management using environment variables.
Handles store, provider and logging settings with proper validation and defaults.
"""

from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class LibraryConfig(BaseSettings):
    """
    Configuration class for the catalog service.
    Uses pydantic BaseSettings for environment variable management.
    """

    # MongoDB Configuration
    mongodb_url: str = Field(default="mongodb://localhost:27017")
    mongodb_database: str = Field(default="personal_library")
    mongodb_collection: str = Field(default="books")

    # Google Books Configuration
    google_books_base_url: str = Field(default="https://www.googleapis.com/books/v1")
    google_books_api_key: Optional[str] = Field(default=None)
    google_books_lookup: str = Field(default="search")
    search_page_size: int = Field(default=10)
    request_timeout: float = Field(default=10.0)

    # Logging Configuration
    log_level: str = Field(default="INFO")
    log_format: str = Field(default="json")
    log_file: Optional[str] = Field(default=None)

    # Development/Testing
    debug: bool = Field(default=False)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("google_books_base_url")
    @classmethod
    def validate_base_url(cls, v):
        """Strip the trailing slash so paths can be appended."""
        if not v.startswith(("http://", "https://")):
            raise ValueError("google_books_base_url must be an http(s) URL")
        return v.rstrip("/")

    @field_validator("google_books_lookup")
    @classmethod
    def validate_lookup(cls, v):
        """Ensure lookup strategy is known."""
        valid_strategies = ["search", "direct"]
        if v.lower() not in valid_strategies:
            raise ValueError(f"google_books_lookup must be one of: {valid_strategies}")
        return v.lower()

    @field_validator("search_page_size")
    @classmethod
    def validate_page_size(cls, v):
        """Google Books caps maxResults at 40."""
        if v < 1 or v > 40:
            raise ValueError("search_page_size must be between 1 and 40")
        return v

    @field_validator("request_timeout")
    @classmethod
    def validate_timeout(cls, v):
        if v <= 0 or v > 300:
            raise ValueError("request_timeout must be between 0 and 300 seconds")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v):
        """Ensure log level is valid."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"log_level must be one of: {valid_levels}")
        return v.upper()

    @field_validator("log_format")
    @classmethod
    def validate_log_format(cls, v):
        """Ensure log format is valid."""
        valid_formats = ["json", "console"]
        if v.lower() not in valid_formats:
            raise ValueError(f"log_format must be one of: {valid_formats}")
        return v.lower()

    def get_log_file_path(self) -> Optional[Path]:
        """Get log file path as Path object."""
        if self.log_file:
            return Path(self.log_file)
        return None

    def uses_direct_lookup(self) -> bool:
        return self.google_books_lookup == "direct"

    def get_user_agent(self) -> str:
        """Get user agent string for provider requests."""
        return "PersonalLibrary-Catalog/1.0"

    def get_headers(self) -> dict:
        """Get default headers for HTTP requests."""
        return {
            "User-Agent": self.get_user_agent(),
            "Accept": "application/json",
        }


# Global configuration instance
config = LibraryConfig()
