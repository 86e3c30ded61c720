"""Tests for the OSM document model."""

import dataclasses

import pytest

from waysnap.analysis import EmptyWay, MissingNodeReference
from waysnap.collectors.osm.models import Coordinate, OSMDocument, OSMNode, OSMWay, Tag


class TestCoordinate:
    def test_is_immutable(self):
        coord = Coordinate(63.4, 10.29)
        with pytest.raises(dataclasses.FrozenInstanceError):
            coord.lat = 0.0

    def test_geojson_order(self):
        assert Coordinate(63.4, 10.29).to_lon_lat() == [10.29, 63.4]


class TestOSMWay:
    way = OSMWay(
        id=7,
        node_refs=(1, 2),
        tags=(Tag("highway", "footway"), Tag("name", "Gangsti"), Tag("name", "Other")),
    )

    def test_get_tag_first_match(self):
        assert self.way.get_tag("name") == "Gangsti"

    def test_get_tag_default(self):
        assert self.way.get_tag("surface") is None
        assert self.way.get_tag("surface", "unknown") == "unknown"

    def test_tag_lines(self):
        assert self.way.tag_lines() == ["highway = footway", "name = Gangsti", "name = Other"]


class TestOSMDocument:
    def test_empty_document(self):
        doc = OSMDocument()
        assert doc.nodes == ()
        assert doc.ways == ()
        assert doc.get_node(1) is None

    def test_lists_are_stored_as_tuples(self):
        doc = OSMDocument(nodes=[OSMNode(1, Coordinate(0.0, 0.0))], ways=[OSMWay(5, (1,))])
        assert isinstance(doc.nodes, tuple)
        assert isinstance(doc.ways, tuple)

    def test_index_lookup(self):
        node = OSMNode(42, Coordinate(63.4, 10.29))
        doc = OSMDocument(nodes=(node,))
        assert doc.get_node(42) is node

    def test_shared_nodes_resolve_for_each_way(self):
        nodes = (OSMNode(1, Coordinate(0.0, 0.0)), OSMNode(2, Coordinate(0.0, 1.0)))
        ways = (OSMWay(10, (1, 2)), OSMWay(11, (2, 1)))
        doc = OSMDocument(nodes=nodes, ways=ways)
        assert doc.resolve(ways[0]) == [Coordinate(0.0, 0.0), Coordinate(0.0, 1.0)]
        assert doc.resolve(ways[1]) == [Coordinate(0.0, 1.0), Coordinate(0.0, 0.0)]

    def test_resolve_missing_node(self):
        doc = OSMDocument(nodes=(OSMNode(1, Coordinate(0.0, 0.0)),), ways=(OSMWay(10, (1, 3)),))
        with pytest.raises(MissingNodeReference, match="missing node 3"):
            doc.resolve(doc.ways[0])

    def test_resolve_empty_way(self):
        doc = OSMDocument(ways=(OSMWay(10),))
        with pytest.raises(EmptyWay):
            doc.resolve(doc.ways[0])

    def test_duplicate_node_id_rejected(self):
        with pytest.raises(ValueError, match="Duplicate node id 1"):
            OSMDocument(nodes=(OSMNode(1, Coordinate(0.0, 0.0)), OSMNode(1, Coordinate(1.0, 1.0))))

    def test_duplicate_way_id_rejected(self):
        with pytest.raises(ValueError, match="Duplicate way id 3"):
            OSMDocument(ways=(OSMWay(3), OSMWay(3)))

    def test_index_is_read_only(self):
        doc = OSMDocument(nodes=(OSMNode(1, Coordinate(0.0, 0.0)),))
        with pytest.raises(TypeError):
            doc._index[2] = OSMNode(2, Coordinate(1.0, 1.0))
