"""
OSM data models

Data classes for representing OSM nodes, ways and the document that owns them.
Ways hold node ids only; coordinates are resolved through the document index.
"""

from types import MappingProxyType
from typing import List, Mapping, Optional, Tuple
from dataclasses import dataclass, field

from ...errors import EmptyWay, MissingNodeReference


@dataclass(frozen=True)
class Coordinate:
    """A WGS84 position in decimal degrees"""
    lat: float
    lon: float

    def to_lon_lat(self) -> List[float]:
        """Get as [lon, lat] (GeoJSON order)"""
        return [self.lon, self.lat]


@dataclass(frozen=True)
class OSMNode:
    """Represents an OSM node (point)"""
    id: int
    coordinate: Coordinate


@dataclass(frozen=True)
class Tag:
    """A key/value pair declared on a way"""
    key: str
    value: str


@dataclass(frozen=True)
class OSMWay:
    """Represents an OSM way (polyline of node references)"""
    id: int
    node_refs: Tuple[int, ...] = ()
    tags: Tuple[Tag, ...] = ()

    def get_tag(self, key: str, default: Optional[str] = None) -> Optional[str]:
        """Get the value of the first tag with this key"""
        for tag in self.tags:
            if tag.key == key:
                return tag.value
        return default

    def tag_lines(self) -> List[str]:
        """Tags rendered as 'key = value' lines, in declaration order"""
        return [f"{tag.key} = {tag.value}" for tag in self.tags]


@dataclass(frozen=True)
class OSMDocument:
    """
    Immutable snapshot of the nodes and ways of one fetch

    Nodes and ways keep their insertion order. Node lookup goes through
    an id index built once at construction.
    """
    nodes: Tuple[OSMNode, ...] = ()
    ways: Tuple[OSMWay, ...] = ()
    _index: Mapping[int, OSMNode] = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        # Accept any iterable but store tuples
        object.__setattr__(self, "nodes", tuple(self.nodes))
        object.__setattr__(self, "ways", tuple(self.ways))

        index = {}
        for node in self.nodes:
            if node.id in index:
                raise ValueError(f"Duplicate node id {node.id} in document")
            index[node.id] = node

        way_ids = set()
        for way in self.ways:
            if way.id in way_ids:
                raise ValueError(f"Duplicate way id {way.id} in document")
            way_ids.add(way.id)

        object.__setattr__(self, "_index", MappingProxyType(index))

    def get_node(self, node_id: int) -> Optional[OSMNode]:
        """Look up a node by id, None if the document does not have it"""
        return self._index.get(node_id)

    def resolve(self, way: OSMWay) -> List[Coordinate]:
        """
        Resolve a way's node references into coordinates

        Args:
            way: Way whose node_refs should be resolved

        Returns:
            Coordinates in node order

        Raises:
            EmptyWay: If the way has no node references
            MissingNodeReference: On the first id not present in the document
        """
        if not way.node_refs:
            raise EmptyWay(way.id)

        coords = []
        for node_id in way.node_refs:
            node = self._index.get(node_id)
            if node is None:
                raise MissingNodeReference(way.id, node_id)
            coords.append(node.coordinate)
        return coords
