"""
Data collectors for waysnap

- OSMCollector: Nodes and ways from the OpenStreetMap API
"""

from .osm import OSMCollector

__all__ = [
    "OSMCollector",
]
