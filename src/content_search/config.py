"""Centralized configuration for content-search using Pydantic Settings."""

from pathlib import Path
from typing import Literal

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Strictly typed configuration loaded from environment variables.

    Variables are prefixed with ``CONTENT_SEARCH_`` (for example
    ``CONTENT_SEARCH_CONTENT_DIR``) and validated at startup.
    """

    model_config = SettingsConfigDict(
        env_prefix="CONTENT_SEARCH_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        validate_default=True,
        extra="ignore",  # Ignore extra env vars not defined in model
    )

    # Content settings
    content_dir: Path = Field(default=Path("content"), description="Root directory holding <locale>/ content trees")
    default_locale: str = Field(default="en", min_length=2, description="Base locale used when none is requested")
    locales: str = Field(default="en,de", description="Comma-separated locales indexed at startup")

    # Search settings
    search_max_limit: int = Field(default=100, ge=1, description="Upper bound accepted for the limit parameter")
    suggestion_limit: int = Field(default=5, ge=1, description="Default number of autocomplete suggestions")
    suggestion_max_limit: int = Field(default=20, ge=1, description="Upper bound for suggestion limit")
    suggestion_min_length: int = Field(default=2, ge=1, description="Minimum query length for suggestions")
    did_you_mean_min_length: int = Field(default=3, ge=1, description="Minimum query length for corrections")
    trending_searches: str = Field(
        default="",
        description="Comma-separated curated queries shown when the search box is empty (empty: built-in list)",
    )

    # Server settings
    host: str = Field(default="127.0.0.1", description="HTTP server host")
    port: int = Field(default=8080, ge=1, le=65535, description="HTTP server port")

    # Logging
    log_level: Literal["debug", "info", "warning", "error", "critical"] = Field(
        default="info", description="Logging level"
    )
    log_json: bool = Field(default=True, description="Emit structured JSON logs")
    access_log: bool = Field(default=False, description="Keep uvicorn access logs at INFO")

    @model_validator(mode="after")
    def _check_default_locale(self) -> "Settings":
        if self.default_locale not in self.get_locales():
            raise ValueError(
                f"CONTENT_SEARCH_DEFAULT_LOCALE={self.default_locale!r} must be one of "
                f"CONTENT_SEARCH_LOCALES ({self.locales!r})"
            )
        return self

    def get_locales(self) -> list[str]:
        """Get the list of indexed locales (comma-separated)."""
        if not self.locales:
            return []
        return [locale.strip() for locale in self.locales.split(",") if locale.strip()]

    def get_trending_searches(self) -> list[str]:
        """Get the curated trending queries in configured order."""
        if not self.trending_searches:
            return []
        return [query.strip() for query in self.trending_searches.split(",") if query.strip()]
