"""Application configuration using Pydantic Settings."""

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from catalog.models import YearMonth
from core.exceptions import ConfigurationError

# Default path to the bundled dataset (relative to project root)
DEFAULT_CATALOG_PATH = Path(__file__).parent.parent / "data" / "books.json"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Catalog Configuration
    catalog_path: Path = Field(
        default=DEFAULT_CATALOG_PATH, description="Path to the bundled JSON book catalog"
    )

    @property
    def resolved_catalog_path(self) -> Path:
        """Get the catalog path, handling empty env var case."""
        if not str(self.catalog_path) or str(self.catalog_path) == ".":
            return DEFAULT_CATALOG_PATH
        return self.catalog_path

    # Browsing Configuration
    page_size: int = Field(default=10, ge=1, description="Number of books per list page")
    initial_month: str | None = Field(
        None, description="Reference month (YYYY-MM) for new sessions; defaults to today"
    )
    selection_policy: Literal["clear", "keep"] = Field(
        default="clear", description="What happens to the selected book when the month changes"
    )
    selection_zoom: int | None = Field(
        None, description="Zoom level for viewport moves; unset keeps the current zoom"
    )

    @field_validator("initial_month", mode="before")
    @classmethod
    def parse_initial_month(cls, v):
        if v is None or not str(v).strip():
            return None
        try:
            return YearMonth.parse(str(v)).key()
        except ConfigurationError as e:
            raise ValueError(e.message) from e

    page_title: str = Field(
        default="ISAW Library New Titles Map", description="Heading shown on the page"
    )

    # Map Configuration
    default_lat: float = Field(default=37.58, description="Latitude of the home view")
    default_lng: float = Field(default=58.20, description="Longitude of the home view")
    default_zoom: int = Field(default=3, description="Zoom level of the home view")
    tile_url: str = Field(
        default="https://{s}.tile.openstreetmap.org/{z}/{x}/{y}.png",
        description="Tile layer URL template",
    )
    tile_attribution: str = Field(
        default=(
            '&copy; <a href="https://www.openstreetmap.org/copyright">OpenStreetMap</a> '
            "contributors"
        ),
        description="Tile layer attribution HTML",
    )
    marker_icon_url: str = Field(
        default="https://unpkg.com/leaflet@1.9.4/dist/images/marker-icon.png",
        description="Marker icon image URL",
    )
    marker_shadow_url: str = Field(
        default="https://unpkg.com/leaflet@1.9.4/dist/images/marker-shadow.png",
        description="Marker shadow image URL",
    )

    # Session Store Configuration
    session_ttl: int = Field(
        default=3600, description="Idle TTL in seconds for browse sessions (default: 1 hour)"
    )
    session_cache_maxsize: int = Field(
        default=1000, description="Maximum number of browse sessions kept in memory"
    )

    # Application Configuration
    host: str = Field(default="0.0.0.0", description="Host to bind the server to")
    port: int = Field(default=8000, description="Port to run the server on")
    log_level: str = Field(default="INFO", description="Logging level")

    # Feature Flags
    enable_telemetry: bool = Field(default=True, description="Enable PostHog telemetry")

    # PostHog Configuration
    posthog_api_key: str | None = Field(None, description="PostHog API key for telemetry")
    posthog_host: str = Field(default="https://us.i.posthog.com", description="PostHog host URL")

    # Sentry Configuration
    sentry_dsn: str | None = Field(None, description="Sentry DSN for error tracking")

    # Application Metadata
    app_name: str = Field(default="New-Titles-Map", description="Application name")
    app_version: str = Field(default="0.1.0", description="Application version")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
