"""
OpenStreetMap data collection module

Modular OSM data collector with separate components for:
- API client: OSM API 0.6 communication
- Models: Data structures (Coordinate, OSMNode, OSMWay, OSMDocument)
- Parser: Response parsing
- Cache: Caching functionality
- Collector: Main orchestrator class
"""

from .models import Coordinate, OSMNode, OSMWay, OSMDocument, Tag
from .collector import OSMCollector

__all__ = [
    "Coordinate",
    "OSMNode",
    "OSMWay",
    "OSMDocument",
    "Tag",
    "OSMCollector",
]
