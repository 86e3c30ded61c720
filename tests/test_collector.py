"""Tests for the OSM collector and its cache."""

import json
from unittest.mock import patch

import pytest

from waysnap.collectors.osm.cache import OSMCache
from waysnap.collectors.osm.collector import OSMCollector
from waysnap.config import PipelineConfig

BBOX = (10.29072, 63.39981, 10.29426, 63.40265)


class TestOSMCache:
    def test_disabled_without_directory(self):
        cache = OSMCache(None)
        assert cache.get_cache_path(BBOX) is None

    def test_path_depends_on_bbox(self, tmp_path):
        cache = OSMCache(str(tmp_path))
        first = cache.get_cache_path(BBOX)
        second = cache.get_cache_path((0.0, 0.0, 1.0, 1.0))
        assert first != second
        assert first.endswith(".osm")

    def test_save_and_load(self, tmp_path):
        cache = OSMCache(str(tmp_path / "nested"))
        path = cache.get_cache_path(BBOX)
        cache.save(path, "<osm/>")
        assert cache.load(path) == "<osm/>"

    def test_load_missing(self, tmp_path):
        cache = OSMCache(str(tmp_path))
        assert cache.load(str(tmp_path / "nope.osm")) is None


class TestOSMCollector:
    def test_fetch_parses_and_caches(self, tmp_path, osm_xml):
        collector = OSMCollector(config=PipelineConfig(), cache_dir=str(tmp_path))

        with patch.object(collector.api_client, "fetch_map", return_value=osm_xml) as mock_fetch:
            first = collector.fetch_document(BBOX)
            second = collector.fetch_document(BBOX)

        # Second call is served from the cache
        assert mock_fetch.call_count == 1
        assert [w.id for w in first.ways] == [w.id for w in second.ways] == [100, 101]

    def test_fetch_uses_configured_bbox(self, osm_xml):
        config = PipelineConfig()
        collector = OSMCollector(config=config, cache_dir="")

        with patch.object(collector.api_client, "fetch_map", return_value=osm_xml) as mock_fetch:
            collector.fetch_document()

        mock_fetch.assert_called_once_with(config.query.bbox)

    def test_unparseable_payload_is_not_cached(self, tmp_path):
        collector = OSMCollector(config=PipelineConfig(), cache_dir=str(tmp_path))

        with patch.object(collector.api_client, "fetch_map", return_value="<html>"):
            with pytest.raises(ValueError):
                collector.fetch_document(BBOX)

        assert list(tmp_path.iterdir()) == []

    def test_load_xml_file(self, tmp_path, osm_xml):
        path = tmp_path / "map.osm"
        path.write_text(osm_xml, encoding="utf-8")

        doc = OSMCollector(config=PipelineConfig()).load_document(str(path))
        assert len(doc.nodes) == 3

    def test_load_json_file(self, tmp_path):
        path = tmp_path / "map.json"
        path.write_text(json.dumps({"elements": [
            {"type": "node", "id": 1, "lat": 63.4, "lon": 10.29},
            {"type": "way", "id": 2, "nodes": [1], "tags": {}},
        ]}), encoding="utf-8")

        doc = OSMCollector(config=PipelineConfig()).load_document(str(path))
        assert doc.ways[0].node_refs == (1,)

    def test_load_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            OSMCollector(config=PipelineConfig()).load_document(str(tmp_path / "missing.osm"))
