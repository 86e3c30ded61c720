"""
Configuration settings for waysnap
"""

from dataclasses import dataclass, field
from typing import Optional, Tuple
import os

from dotenv import load_dotenv


@dataclass
class APIConfig:
    """API endpoints and configuration"""
    # OSM editing API, 'map' call returns everything inside a bbox as XML
    osm_api_url: str = "https://www.openstreetmap.org/api/0.6/map"

    # Request settings
    request_timeout: int = 30
    max_retries: int = 3
    retry_delay: float = 1.0
    min_request_interval: float = 1.0  # Seconds between requests

    # User agent for API requests (required by the OSM usage policy)
    user_agent: str = "waysnap/1.0"


@dataclass
class QueryConfig:
    """Defaults for a nearest way query"""
    # left, bottom, right, top (min_lon, min_lat, max_lon, max_lat)
    bbox: Tuple[float, float, float, float] = (10.29072, 63.39981, 10.29426, 63.40265)

    # Viewer position used when none is given
    default_lat: Optional[float] = 63.4015
    default_lon: Optional[float] = 10.2935

    # Decimal places used when displaying distances
    distance_precision: int = 2


@dataclass
class PipelineConfig:
    """Pipeline configuration"""
    # Raw OSM payloads are cached here when set
    cache_dir: Optional[str] = None

    # Output settings
    output_dir: str = "output"

    api: APIConfig = field(default_factory=APIConfig)
    query: QueryConfig = field(default_factory=QueryConfig)


def load_config() -> PipelineConfig:
    """
    Build configuration from defaults and environment

    Reads a .env file if present, then applies WAYSNAP_OSM_API_URL,
    WAYSNAP_USER_AGENT and WAYSNAP_CACHE_DIR overrides.
    """
    load_dotenv(override=False)  # Don't override existing env vars

    cfg = PipelineConfig()
    if os.getenv("WAYSNAP_OSM_API_URL"):
        cfg.api.osm_api_url = os.environ["WAYSNAP_OSM_API_URL"]
    if os.getenv("WAYSNAP_USER_AGENT"):
        cfg.api.user_agent = os.environ["WAYSNAP_USER_AGENT"]
    if os.getenv("WAYSNAP_CACHE_DIR"):
        cfg.cache_dir = os.environ["WAYSNAP_CACHE_DIR"]
    return cfg


# Global config instance
config = load_config()


def get_config() -> PipelineConfig:
    """Get global configuration"""
    return config


def validate_config(config: PipelineConfig) -> None:
    """
    Validate that all required configuration values are set.
    Raises ValueError if any required value is missing or invalid.
    """
    errors = []

    if config.api is None:
        errors.append("api configuration is required but not set")
    else:
        if not config.api.osm_api_url:
            errors.append("api.osm_api_url is required but not set")
        if config.api.max_retries < 1:
            errors.append(f"api.max_retries must be at least 1, got {config.api.max_retries}")
        if config.api.request_timeout <= 0:
            errors.append(f"api.request_timeout must be positive, got {config.api.request_timeout}")
        if not config.api.user_agent:
            errors.append("api.user_agent is required but not set")

    if config.query is None:
        errors.append("query configuration is required but not set")
    else:
        if len(config.query.bbox) != 4:
            errors.append(f"query.bbox must have 4 values, got {len(config.query.bbox)}")
        else:
            left, bottom, right, top = config.query.bbox
            if left >= right or bottom >= top:
                errors.append(f"query.bbox must be left,bottom,right,top with left<right and bottom<top, got {config.query.bbox}")
            if not (-90 <= bottom <= 90 and -90 <= top <= 90):
                errors.append(f"query.bbox latitudes must be within [-90, 90], got {bottom}, {top}")
            if not (-180 <= left <= 180 and -180 <= right <= 180):
                errors.append(f"query.bbox longitudes must be within [-180, 180], got {left}, {right}")
        if (config.query.default_lat is None) != (config.query.default_lon is None):
            errors.append("query.default_lat and query.default_lon must be set together")
        if config.query.distance_precision < 0:
            errors.append(f"query.distance_precision must not be negative, got {config.query.distance_precision}")

    if errors:
        error_msg = "Configuration validation failed:\n" + "\n".join(f"  - {e}" for e in errors)
        raise ValueError(error_msg)
