"""
Main Pipeline Orchestrator for nearest way queries

  1. Input: query position (lat/lon) and a bbox or local OSM file
  2. Fetch OSM map data (OSM API 0.6, cached)
  3. Build the immutable node/way document
  4. Compute the nearest point of every way
  5. Pick the nearest way
  6. Assemble the report (JSON or text)
"""

import json
import os
from datetime import datetime, timezone
from typing import List, Optional, Sequence
from loguru import logger

from .config import get_config, PipelineConfig
from .models import GeoJSONPoint, NearestWaySummary, NetworkReport, WayReport, WayTag
from .collectors import OSMCollector
from .collectors.osm.models import Coordinate, OSMDocument
from .analysis import nearest_points, nearest_way, rank_nearest


class NearestWayPipeline:
    """
    Pipeline to report the nearest way to a position

    Usage:
        pipeline = NearestWayPipeline()
        report = pipeline.run(lat=63.4015, lon=10.2935)
        print(pipeline.render_text(report))
        pipeline.save(report, "output/report.json")
    """

    def __init__(self, config: Optional[PipelineConfig] = None, cache_dir: Optional[str] = None):
        self.config = config or get_config()
        self.osm_collector = OSMCollector(config=self.config, cache_dir=cache_dir)

    def run(
        self,
        lat: Optional[float] = None,
        lon: Optional[float] = None,
        bbox: Optional[Sequence[float]] = None,
        input_path: Optional[str] = None
    ) -> NetworkReport:
        """
        Run fetch, query and report assembly

        Args:
            lat: Query latitude (default from config)
            lon: Query longitude (default from config)
            bbox: (left, bottom, right, top) to fetch (default from config)
            input_path: Read the document from this .osm/.json file instead of the API

        Returns:
            NetworkReport for the position
        """
        if lat is None and lon is None:
            lat, lon = self.config.query.default_lat, self.config.query.default_lon
        if (lat is None) != (lon is None):
            raise ValueError("lat and lon must be given together")

        position = Coordinate(lat=lat, lon=lon) if lat is not None else None

        if input_path:
            document = self.osm_collector.load_document(input_path)
            source = input_path
            bbox = None
        else:
            bbox = tuple(bbox) if bbox is not None else self.config.query.bbox
            document = self.osm_collector.fetch_document(bbox)
            source = self.config.api.osm_api_url

        return self.build_report(document, position, source=source, bbox=bbox)

    def build_report(
        self,
        document: OSMDocument,
        position: Optional[Coordinate],
        source: str = "memory",
        bbox: Optional[Sequence[float]] = None
    ) -> NetworkReport:
        """Query the document and assemble the report"""
        if position is not None:
            logger.info(f"Querying {len(document.ways)} ways for position ({position.lat}, {position.lon})")
        else:
            logger.info(f"No position set, listing {len(document.ways)} ways without distances")

        scanned = nearest_points(document, position)
        per_way = {entry.way.id: entry for entry in scanned}

        way_reports: List[WayReport] = []
        for way in document.ways:
            report = WayReport(
                way_id=way.id,
                name=way.get_tag("name"),
                tags=[WayTag(key=t.key, value=t.value) for t in way.tags],
                node_count=len(way.node_refs),
            )
            entry = per_way.get(way.id)
            if entry is not None and entry.ok:
                report.distance_m = entry.nearest.distance_m
                report.nearest_point = GeoJSONPoint(coordinates=entry.nearest.point.to_lon_lat())
                report.segment_index = entry.nearest.segment_index
                report.cross_track_m = entry.nearest.cross_track_m
            elif entry is not None:
                report.error = str(entry.error)
            way_reports.append(report)

        result = nearest_way(document, None) if position is None else rank_nearest(scanned)
        summary = None
        if result.ok:
            summary = NearestWaySummary(
                way_id=result.way.id,
                name=result.way.get_tag("name"),
                distance_m=result.nearest.distance_m,
                nearest_point=GeoJSONPoint(coordinates=result.nearest.point.to_lon_lat()),
            )
            logger.info(f"Nearest way: {result.way.id} at {result.nearest.distance_m:.2f}m")
        else:
            logger.warning(f"No nearest way: {result.error}")

        return NetworkReport(
            position=GeoJSONPoint(coordinates=position.to_lon_lat()) if position else None,
            bbox=list(bbox) if bbox is not None else None,
            source=source,
            node_count=len(document.nodes),
            way_count=len(document.ways),
            ways=way_reports,
            nearest_way=summary,
            nearest_way_error=None if result.ok else str(result.error),
            failed_way_ids=[entry.way.id for entry in result.failures],
            generated_at=datetime.now(timezone.utc).isoformat(),
        )

    def render_text(self, report: NetworkReport) -> str:
        """
        Render the report the way the map page lists ways:
        id, 'Distance = <value>' when known, then one 'key = value' line per tag
        """
        precision = self.config.query.distance_precision
        lines: List[str] = []

        for way in report.ways:
            lines.append(str(way.way_id))
            if way.distance_m is not None:
                lines.append(f"Distance = {way.distance_m:.{precision}f}")
            elif way.error:
                lines.append(f"Error = {way.error}")
            for tag in way.tags:
                lines.append(f"  {tag.key} = {tag.value}")
            lines.append("")

        if report.nearest_way is not None:
            lines.append(f"Nearest way = {report.nearest_way.way_id} "
                         f"({report.nearest_way.distance_m:.{precision}f} m)")
        elif report.nearest_way_error:
            lines.append(f"Nearest way = none ({report.nearest_way_error})")

        return "\n".join(lines)

    def save(self, report: NetworkReport, output_path: str) -> str:
        """Save report to JSON file"""
        os.makedirs(os.path.dirname(output_path) or ".", exist_ok=True)

        with open(output_path, "w", encoding="utf-8") as f:
            json.dump(report.model_dump(), f, indent=2, ensure_ascii=False)

        logger.info(f"Saved report to {output_path}")
        return output_path
