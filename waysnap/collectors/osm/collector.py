"""
Main OSM Collector

Orchestrates fetching, caching and parsing of OSM data into a document
"""

import json
import os
from typing import Optional, Sequence
from loguru import logger

from .api_client import OSMAPIClient
from .cache import OSMCache
from .models import OSMDocument
from .parser import OSMResponseParser
from ...config import PipelineConfig, get_config


class OSMCollector:
    """
    Collect a road network document from OpenStreetMap

    Supports caching raw responses to disk for debugging and reuse.
    """

    def __init__(self, config: Optional[PipelineConfig] = None, cache_dir: Optional[str] = None):
        self.config = config or get_config()
        self.api_client = OSMAPIClient(self.config.api)
        self.cache = OSMCache(cache_dir if cache_dir is not None else self.config.cache_dir)
        self.parser = OSMResponseParser()

    def fetch_document(self, bbox: Optional[Sequence[float]] = None) -> OSMDocument:
        """
        Fetch all nodes and ways inside a bounding box

        Args:
            bbox: (left, bottom, right, top), defaults to the configured bbox

        Returns:
            OSMDocument snapshot

        Raises:
            RuntimeError: If the OSM API cannot be reached after all retries
            ValueError: If the response cannot be parsed
        """
        bbox = tuple(bbox) if bbox is not None else self.config.query.bbox

        # Check cache first
        cache_path = self.cache.get_cache_path(bbox)
        if cache_path:
            cached_data = self.cache.load(cache_path)
            if cached_data:
                return self.parser.parse_xml(cached_data)

        logger.info(f"Fetching OSM map data for bbox {bbox}")
        payload = self.api_client.fetch_map(bbox)

        document = self.parser.parse_xml(payload)

        # Only cache payloads that parsed
        if cache_path:
            self.cache.save(cache_path, payload)

        logger.info(f"OSM map results: {len(document.nodes)} nodes, {len(document.ways)} ways")
        return document

    def load_document(self, path: str) -> OSMDocument:
        """
        Load a document from a local .osm (XML) or .json file

        Raises:
            FileNotFoundError: If the file doesn't exist
            ValueError: If the file cannot be parsed
        """
        if not os.path.exists(path):
            raise FileNotFoundError(f"OSM file not found: {path}")

        with open(path, "r", encoding="utf-8") as f:
            if path.lower().endswith(".json"):
                try:
                    data = json.load(f)
                except json.JSONDecodeError as e:
                    raise ValueError(f"Failed to parse OSM JSON {path}: {e}") from e
                document = self.parser.parse_elements(data)
            else:
                document = self.parser.parse_xml(f.read())

        logger.info(f"Loaded {path}: {len(document.nodes)} nodes, {len(document.ways)} ways")
        return document
