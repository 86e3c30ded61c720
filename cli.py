#!/usr/bin/env python
"""
Command-line interface for waysnap

Usage:
    python cli.py nearest --lat 63.4015 --lon 10.2935 --output report.json
    python cli.py report --input map.osm
    python cli.py batch --input positions.csv --output ./reports/
"""

import os
import sys
import json
import csv
import argparse
import re
from dataclasses import replace

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from loguru import logger
from waysnap.config import get_config, validate_config
from waysnap.collectors.osm.models import Coordinate
from waysnap.pipeline import NearestWayPipeline


def setup_logging(verbose: bool = False):
    """Configure logging"""
    logger.remove()
    level = "DEBUG" if verbose else "INFO"
    logger.add(
        sys.stderr,
        format="<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{message}</cyan>",
        level=level
    )


def parse_bbox(value: str):
    """Parse 'left,bottom,right,top' into a tuple of floats"""
    parts = value.split(",")
    if len(parts) != 4:
        raise argparse.ArgumentTypeError(f"bbox needs 4 comma separated values, got {value!r}")
    try:
        return tuple(float(p) for p in parts)
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"invalid bbox {value!r}: {e}")


def _slug(name: str) -> str:
    """Filesystem-safe lowercase name, no path separators or dots"""
    return re.sub(r"[^a-z0-9_-]+", "_", name.strip().lower()).strip("_") or "position"


def _build_pipeline(args) -> NearestWayPipeline:
    config = get_config()
    if args.bbox:
        config = replace(config, query=replace(config.query, bbox=args.bbox))
    validate_config(config)
    cache_dir = "" if args.no_cache else args.cache_dir
    return NearestWayPipeline(config=config, cache_dir=cache_dir)


def cmd_nearest(args):
    """Find the nearest way to a position"""
    setup_logging(args.verbose)

    try:
        pipeline = _build_pipeline(args)
        report = pipeline.run(lat=args.lat, lon=args.lon, input_path=args.input)
    except (RuntimeError, ValueError, FileNotFoundError) as e:
        logger.error(f"Failed to query nearest way: {e}")
        return 1

    if args.output:
        pipeline.save(report, args.output)

    if report.nearest_way is None:
        logger.error(f"No nearest way: {report.nearest_way_error}")
        return 1

    summary = {
        "way_id": report.nearest_way.way_id,
        "name": report.nearest_way.name,
        "distance_m": round(report.nearest_way.distance_m, pipeline.config.query.distance_precision),
        "nearest_point": report.nearest_way.nearest_point.coordinates,
        "failed_way_ids": report.failed_way_ids,
    }
    print(json.dumps(summary, indent=2))
    return 0


def cmd_report(args):
    """Print every way with its tags and distance"""
    setup_logging(args.verbose)

    try:
        pipeline = _build_pipeline(args)
        report = pipeline.run(lat=args.lat, lon=args.lon, input_path=args.input)
    except (RuntimeError, ValueError, FileNotFoundError) as e:
        logger.error(f"Failed to build report: {e}")
        return 1

    print(pipeline.render_text(report))
    return 0


def cmd_batch(args):
    """Query nearest ways for multiple positions from CSV"""
    setup_logging(args.verbose)

    if not os.path.exists(args.input):
        logger.error(f"Input file not found: {args.input}")
        return 1

    # Read positions from CSV
    positions = []
    with open(args.input, "r", newline="", encoding="utf-8") as f:
        reader = csv.DictReader(f)
        for row in reader:
            try:
                positions.append({
                    "name": row.get("name", ""),
                    "lat": float(row["lat"]),
                    "lon": float(row["lon"]),
                })
            except (KeyError, ValueError) as e:
                logger.warning(f"Skipping invalid row: {e}")

    if not positions:
        logger.error("No valid positions found in CSV")
        return 1

    logger.info(f"Processing {len(positions)} positions...")
    os.makedirs(args.output, exist_ok=True)

    try:
        pipeline = _build_pipeline(args)
        if args.osm:
            document = pipeline.osm_collector.load_document(args.osm)
            source = args.osm
        else:
            document = pipeline.osm_collector.fetch_document(pipeline.config.query.bbox)
            source = pipeline.config.api.osm_api_url
    except (RuntimeError, ValueError, FileNotFoundError) as e:
        logger.error(f"Failed to load OSM data: {e}")
        return 1

    # One document, many positions
    success = 0
    failed = 0
    for i, pos in enumerate(positions, 1):
        name = pos.get("name") or f"position_{i:03d}"
        logger.info(f"[{i}/{len(positions)}] {name}: ({pos['lat']}, {pos['lon']})")

        report = pipeline.build_report(
            document,
            Coordinate(lat=pos["lat"], lon=pos["lon"]),
            source=source,
            bbox=None if args.osm else pipeline.config.query.bbox,
        )
        filename = f"{i:03d}_{_slug(name)}.json"
        pipeline.save(report, os.path.join(args.output, filename))

        if report.nearest_way is not None:
            logger.info(f"  ✓ way {report.nearest_way.way_id} at {report.nearest_way.distance_m:.2f}m")
            success += 1
        else:
            logger.error(f"  ✗ {report.nearest_way_error}")
            failed += 1

    logger.info(f"\nComplete: {success} succeeded, {failed} failed")
    return 0 if failed == 0 else 1


def _add_source_args(sub):
    sub.add_argument("--bbox", type=parse_bbox, help="left,bottom,right,top (default from config)")
    sub.add_argument("--cache-dir", help="Cache raw OSM responses in this directory")
    sub.add_argument("--no-cache", action="store_true", help="Disable the response cache")


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="waysnap - nearest way on an OpenStreetMap network",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  Nearest way for a position (fetches the default bbox):
    python cli.py nearest --lat 63.4015 --lon 10.2935

  List ways with distances from a local file:
    python cli.py report --input map.osm --lat 63.4015 --lon 10.2935

  Batch query from CSV:
    python cli.py batch --input positions.csv --output ./reports/
        """
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose output")

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # Nearest command
    nearest_parser = subparsers.add_parser("nearest", help="Find the nearest way to a position")
    nearest_parser.add_argument("--lat", type=float, help="Latitude (default from config)")
    nearest_parser.add_argument("--lon", type=float, help="Longitude (default from config)")
    nearest_parser.add_argument("--input", "-i", help="Local .osm or .json file instead of the API")
    nearest_parser.add_argument("--output", "-o", help="Save full report as JSON")
    _add_source_args(nearest_parser)
    nearest_parser.set_defaults(func=cmd_nearest)

    # Report command
    report_parser = subparsers.add_parser("report", help="List ways with tags and distances")
    report_parser.add_argument("--lat", type=float, help="Latitude (default from config)")
    report_parser.add_argument("--lon", type=float, help="Longitude (default from config)")
    report_parser.add_argument("--input", "-i", help="Local .osm or .json file instead of the API")
    _add_source_args(report_parser)
    report_parser.set_defaults(func=cmd_report)

    # Batch command
    batch_parser = subparsers.add_parser("batch", help="Batch query from CSV file")
    batch_parser.add_argument("--input", "-i", required=True, help="Input CSV file (columns: name,lat,lon)")
    batch_parser.add_argument("--output", "-o", default="output", help="Output directory")
    batch_parser.add_argument("--osm", help="Local .osm or .json file instead of the API")
    _add_source_args(batch_parser)
    batch_parser.set_defaults(func=cmd_batch)

    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
