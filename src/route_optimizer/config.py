"""Application configuration and settings management."""

from typing import Any, Optional

import json
from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

GOOGLE_GEOCODING_URL = "https://maps.googleapis.com/maps/api/geocode/json"


class Settings(BaseSettings):
    """Runtime configuration loaded from environment variables or defaults."""

    model_config = SettingsConfigDict(
        env_prefix="ROUTEOPT_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
        populate_by_name=True,
    )

    app_name: str = "Route Optimization API"
    api_prefix: str = "/api"
    google_maps_api_key: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices(
            "ROUTEOPT_GOOGLE_MAPS_API_KEY",
            "GOOGLE_MAPS_API_KEY",
            "NEXT_PUBLIC_GOOGLE_MAPS_API_KEY",
        ),
        description="API key for the Google Geocoding service.",
    )
    geocoding_base_url: str = Field(
        default=GOOGLE_GEOCODING_URL,
        description="Geocoding endpoint returning Google-style JSON (status, results[].geometry.location).",
    )
    geocoding_timeout_seconds: float = Field(default=10.0, gt=0.0)
    geocoding_max_parallel_requests: int = Field(default=21, ge=1)
    max_route_addresses: int = Field(
        default=20,
        ge=1,
        le=20,
        description="Maximum number of destination addresses accepted per optimization request.",
    )
    frontend_allowed_origins: tuple[str, ...] = Field(
        default=(
            "http://localhost:3000",
            "http://127.0.0.1:3000",
        ),
        description="Permitted web origins for browser clients (CORS).",
    )

    @field_validator("google_maps_api_key", mode="before")
    @classmethod
    def _blank_key_is_missing(cls, value: Any) -> Optional[str]:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("frontend_allowed_origins", mode="before")
    @classmethod
    def _parse_str_tuple_from_env(cls, value: Any) -> tuple[str, ...]:
        """Parse string tuple from environment variable (comma-separated or JSON array)."""
        if isinstance(value, tuple):
            return value
        if isinstance(value, list):
            return tuple(str(item) for item in value)
        if isinstance(value, str):
            # Try JSON first
            try:
                parsed = json.loads(value)
                if isinstance(parsed, list):
                    return tuple(str(item) for item in parsed)
            except (json.JSONDecodeError, TypeError):
                pass
            if "," in value:
                return tuple(item.strip() for item in value.split(",") if item.strip())
            if value.strip():
                return (value.strip(),)
        return tuple()


settings = Settings()
