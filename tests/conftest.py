"""
Shared pytest fixtures for waysnap tests.

Coordinates come from a small road network in Trondheim (the default bbox).
"""

import pytest

from waysnap.collectors.osm.models import Coordinate, OSMDocument, OSMNode, OSMWay, Tag


N1 = Coordinate(lat=63.39981, lon=10.29072)
N2 = Coordinate(lat=63.40265, lon=10.29426)
QUERY = Coordinate(lat=63.4015, lon=10.2935)


@pytest.fixture
def query_position() -> Coordinate:
    return QUERY


@pytest.fixture
def single_segment_document() -> OSMDocument:
    """One way with the two corner nodes of the default bbox"""
    return OSMDocument(
        nodes=(OSMNode(id=1, coordinate=N1), OSMNode(id=2, coordinate=N2)),
        ways=(OSMWay(id=100, node_refs=(1, 2), tags=(Tag("highway", "footway"),)),),
    )


@pytest.fixture
def two_way_document() -> OSMDocument:
    """A near way through the query area and a far way about 1.5 km away"""
    return OSMDocument(
        nodes=(
            OSMNode(id=1, coordinate=N1),
            OSMNode(id=2, coordinate=N2),
            OSMNode(id=3, coordinate=Coordinate(lat=63.4100, lon=10.3200)),
            OSMNode(id=4, coordinate=Coordinate(lat=63.4110, lon=10.3220)),
        ),
        ways=(
            OSMWay(id=200, node_refs=(3, 4), tags=(Tag("highway", "residential"), Tag("name", "Far Road"))),
            OSMWay(id=100, node_refs=(1, 2), tags=(Tag("highway", "footway"), Tag("name", "Near Path"))),
        ),
    )


@pytest.fixture
def osm_xml() -> str:
    """Trimmed OSM API 0.6 map response"""
    return """<?xml version="1.0" encoding="UTF-8"?>
<osm version="0.6" generator="CGImap 0.8.10" copyright="OpenStreetMap and contributors">
 <bounds minlat="63.3998100" minlon="10.2907200" maxlat="63.4026500" maxlon="10.2942600"/>
 <node id="1" visible="true" version="3" lat="63.3998100" lon="10.2907200"/>
 <node id="2" visible="true" version="1" lat="63.4010000" lon="10.2920000"/>
 <node id="3" visible="true" version="2" lat="63.4026500" lon="10.2942600">
  <tag k="highway" v="crossing"/>
 </node>
 <way id="100" visible="true" version="5">
  <nd ref="1"/>
  <nd ref="2"/>
  <nd ref="3"/>
  <tag k="highway" v="footway"/>
  <tag k="surface" v="asphalt"/>
 </way>
 <way id="101" visible="true" version="1">
  <nd ref="3"/>
  <tag k="barrier" v="gate"/>
 </way>
 <relation id="9" visible="true" version="1">
  <member type="way" ref="100" role=""/>
 </relation>
</osm>
"""
