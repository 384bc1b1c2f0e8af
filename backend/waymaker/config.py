"""
Application Configuration

Uses Pydantic Settings for type-safe configuration.
"""

from pathlib import Path
from typing import List, Optional
from pydantic_settings import BaseSettings
from pydantic import Field, field_validator, ConfigDict

# Package root: backend/waymaker/
PACKAGE_ROOT = Path(__file__).parent
# Content directory: backend/waymaker/content/
CONTENT_DIR = PACKAGE_ROOT / "content"


class Settings(BaseSettings):
    """Application settings with validation."""

    # === Core ===
    debug: bool = Field(default=False, description="Enable debug mode")
    log_level: str = Field(default="INFO", description="Logging level")

    # === CORS ===
    cors_origins: List[str] = Field(
        default_factory=lambda: ["http://localhost:5173", "http://localhost:3000"],
        description="Allowed CORS origins"
    )

    # === Routing API (OpenRouteService) ===
    ors_api_key: Optional[str] = Field(
        default=None,
        description="OpenRouteService API key"
    )
    ors_base_url: str = Field(
        default="https://api.openrouteservice.org",
        description="OpenRouteService base URL"
    )
    ors_timeout: float = Field(default=30.0, description="Routing request timeout (s)")
    ors_request_elevation: bool = Field(
        default=True,
        description="Ask the routing service for 3D geometry and ascent/descent"
    )

    # === Elevation API ===
    elevation_api_url: str = Field(
        default="https://api.open-elevation.com/api/v1/lookup",
        description="Elevation API endpoint"
    )
    elevation_timeout: float = Field(default=30.0)

    # === POI API (Overpass) ===
    overpass_api_url: str = Field(
        default="https://overpass-api.de/api/interpreter",
        description="Overpass API endpoint"
    )
    overpass_timeout: float = Field(default=10.0)
    overpass_max_retries: int = Field(default=2)
    overpass_retry_delay: float = Field(default=1.0)
    refuge_radius_km: float = Field(default=2.0)
    water_radius_km: float = Field(default=1.0)
    enriched_poi_radius_km: float = Field(default=3.0)

    # === Place search (Nominatim) ===
    geocoding_api_url: str = Field(
        default="https://nominatim.openstreetmap.org",
        description="Nominatim base URL"
    )
    geocoding_timeout: float = Field(default=10.0)
    geocoding_user_agent: str = Field(
        default="WayMaker/0.1",
        description="User-Agent required by the Nominatim usage policy"
    )
    geocoding_min_query_length: int = Field(default=3)
    geocoding_max_results: int = Field(default=5)

    # === GPX ===
    gpx_max_points: int = Field(
        default=20,
        description="Max waypoints kept when importing a GPX track"
    )
    gpx_max_upload_mb: int = Field(default=20)
    gpx_creator: str = Field(default="WayMaker")

    # === Planning ===
    default_pace_min_per_km: float = Field(
        default=15.0,
        description="Walking pace used when the route carries no duration"
    )

    @field_validator('cors_origins', mode='before')
    @classmethod
    def parse_cors_origins(cls, v):
        """Parse CORS origins from comma-separated string."""
        if isinstance(v, str):
            return [origin.strip() for origin in v.split(',')]
        return v

    @field_validator('ors_api_key')
    @classmethod
    def drop_placeholder_key(cls, v: Optional[str]) -> Optional[str]:
        """Treat the sample .env value as unset."""
        if v is None or v.strip() in ("", "your_api_key_here"):
            return None
        return v.strip()

    model_config = ConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )


# Global settings instance
settings = Settings()
