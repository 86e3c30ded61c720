"""
OSM API client

Handles communication with the OSM API 0.6 'map' call including:
- Rate limiting
- Retry logic
- Error handling
"""

import time
import requests
from typing import Optional, Sequence
from loguru import logger

from ...config import APIConfig, get_config


def format_bbox(bbox: Sequence[float]) -> str:
    """Format (left, bottom, right, top) as the API's bbox parameter"""
    return ",".join(f"{value:.7f}".rstrip("0").rstrip(".") for value in bbox)


class OSMAPIClient:
    """Client for the OSM API map call"""

    def __init__(self, api_config: Optional[APIConfig] = None):
        self.api_config = api_config or get_config().api
        self.map_url = self.api_config.osm_api_url
        self.timeout = self.api_config.request_timeout
        self._last_request_time = 0.0
        self._min_request_interval = self.api_config.min_request_interval

    def _rate_limit(self):
        """Ensure we don't exceed rate limits"""
        elapsed = time.time() - self._last_request_time
        if elapsed < self._min_request_interval:
            time.sleep(self._min_request_interval - elapsed)
        self._last_request_time = time.time()

    def fetch_map(self, bbox: Sequence[float], retry_delay: Optional[float] = None) -> str:
        """
        Fetch the raw OSM XML for a bounding box with retry logic

        Args:
            bbox: (left, bottom, right, top) in degrees
            retry_delay: Initial delay between retries (increases with attempts)

        Returns:
            XML response text

        Raises:
            RuntimeError: If the request fails after all retries
        """
        self._rate_limit()

        delay = self.api_config.retry_delay if retry_delay is None else retry_delay
        max_retries = self.api_config.max_retries
        headers = {"User-Agent": self.api_config.user_agent}
        params = {"bbox": format_bbox(bbox)}

        for attempt in range(max_retries):
            try:
                response = requests.get(
                    self.map_url,
                    params=params,
                    headers=headers,
                    timeout=self.timeout
                )
                response.raise_for_status()
                return response.text
            except requests.exceptions.Timeout:
                wait_time = delay * (attempt + 1)
                logger.warning(f"OSM API timeout (attempt {attempt + 1}/{max_retries}). Retrying in {wait_time}s...")
                if attempt < max_retries - 1:
                    time.sleep(wait_time)
                else:
                    logger.error(f"OSM API failed: timeout after {max_retries} attempts")
                    raise RuntimeError(f"OSM API timeout after {max_retries} attempts")
            except requests.exceptions.HTTPError as e:
                status = e.response.status_code if e.response is not None else None
                if status in [429, 503, 504] and attempt < max_retries - 1:
                    wait_time = delay * (attempt + 1)
                    logger.warning(f"OSM API {status} (attempt {attempt + 1}/{max_retries}). Retrying in {wait_time}s...")
                    time.sleep(wait_time)
                else:
                    # 400 means the bbox is too large or invalid, retrying won't help
                    logger.error(f"OSM API failed: HTTP {status}")
                    raise RuntimeError(f"OSM API HTTP error {status}") from e
            except requests.exceptions.RequestException as e:
                logger.warning(f"OSM API request failed (attempt {attempt + 1}): {e}")
                if attempt < max_retries - 1:
                    time.sleep(delay * (attempt + 1))
                else:
                    logger.error(f"OSM API failed: request exception after {max_retries} attempts: {e}")
                    raise RuntimeError(f"OSM API request failed after {max_retries} attempts: {e}") from e

        raise RuntimeError("OSM API request was not attempted (max_retries < 1)")
