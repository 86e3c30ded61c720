"""Tests for OSM response parsing."""

import pytest

from waysnap.collectors.osm.models import Coordinate, Tag
from waysnap.collectors.osm.parser import OSMResponseParser


class TestParseXml:
    def test_nodes_and_ways(self, osm_xml):
        doc = OSMResponseParser.parse_xml(osm_xml)

        assert [n.id for n in doc.nodes] == [1, 2, 3]
        assert doc.get_node(3).coordinate == Coordinate(63.40265, 10.29426)
        assert [w.id for w in doc.ways] == [100, 101]

    def test_way_refs_and_tags_keep_order(self, osm_xml):
        way = OSMResponseParser.parse_xml(osm_xml).ways[0]
        assert way.node_refs == (1, 2, 3)
        assert way.tags == (Tag("highway", "footway"), Tag("surface", "asphalt"))

    def test_accepts_bytes(self, osm_xml):
        doc = OSMResponseParser.parse_xml(osm_xml.encode("utf-8"))
        assert len(doc.ways) == 2

    def test_malformed_xml(self):
        with pytest.raises(ValueError, match="Failed to parse OSM XML"):
            OSMResponseParser.parse_xml("<osm><node id='1'")

    def test_wrong_root(self):
        with pytest.raises(ValueError, match="Expected <osm>"):
            OSMResponseParser.parse_xml("<html></html>")

    def test_node_without_coordinates(self):
        with pytest.raises(ValueError, match="Malformed OSM element"):
            OSMResponseParser.parse_xml('<osm><node id="1" lat="63.4"/></osm>')

    def test_empty_map(self):
        doc = OSMResponseParser.parse_xml('<osm version="0.6"></osm>')
        assert doc.nodes == ()
        assert doc.ways == ()


class TestParseElements:
    def test_nodes_and_ways(self):
        data = {
            "elements": [
                {"type": "node", "id": 1, "lat": 63.39981, "lon": 10.29072},
                {"type": "node", "id": 2, "lat": 63.40265, "lon": 10.29426},
                {"type": "way", "id": 100, "nodes": [1, 2], "tags": {"highway": "footway", "lit": "yes"}},
                {"type": "relation", "id": 9, "members": []},
            ]
        }
        doc = OSMResponseParser.parse_elements(data)

        assert [n.id for n in doc.nodes] == [1, 2]
        assert doc.ways[0].node_refs == (1, 2)
        assert doc.ways[0].tag_lines() == ["highway = footway", "lit = yes"]

    def test_missing_elements_key(self):
        doc = OSMResponseParser.parse_elements({})
        assert doc.ways == ()

    def test_malformed_element(self):
        with pytest.raises(ValueError, match="Malformed OSM element"):
            OSMResponseParser.parse_elements({"elements": [{"type": "node", "id": 1}]})
